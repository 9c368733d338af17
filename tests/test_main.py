"""CLI smoke tests."""

import uuid

from egot_tracker import main as cli
from egot_tracker.facts import resolver
from egot_tracker.facts.classifier import AwardType
from egot_tracker.facts.models import NewAward, NewCelebrity
from egot_tracker.oscars import service as oscar_service
from egot_tracker.store import celebrities as store
from egot_tracker.store import oscars as oscar_store
from egot_tracker.store.db import session_scope


def test_no_command_prints_help(capsys):
    assert cli.main([]) == 0
    assert "usage: egot-tracker" in capsys.readouterr().out


def test_search_from_store(engine, offline, capsys):
    with session_scope() as session:
        store.create_with_awards(
            session,
            NewCelebrity(name="Rita Moreno", slug="rita-moreno"),
            [NewAward(type=AwardType.OSCAR, year=1962, category="Best Supporting Actress", work="West Side Story")],
        )

    assert cli.main(["--search", "rita moreno"]) == 0

    out = capsys.readouterr().out
    assert "Rita Moreno (rita-moreno)" in out
    assert "West Side Story" in out


def test_search_not_found(engine, upstream):
    assert cli.main(["--search", "Xyzzy Plugh"]) == 1


def test_missing_nomination_file(engine):
    assert cli.main(["--setup-oscar-race", "--year", "1999"]) == 1


def _seed_race():
    with session_scope() as session:
        ceremony = oscar_store.create_ceremony(session, 2025, ceremony_name="97th Academy Awards")
        category = oscar_store.create_category(session, ceremony.id, "Best Actor", 0)
        brody = oscar_store.create_nominee(session, category.id, "Adrien Brody", 0)
        chalamet = oscar_store.create_nominee(session, category.id, "Timothée Chalamet", 1)
    return category.id, brody.id, chalamet.id


def test_set_winner(engine, capsys):
    category_id, brody, _ = _seed_race()

    code = cli.main(["--set-winner", str(category_id), str(brody), "--year", "2025"])

    assert code == 0
    assert "Adrien Brody" in capsys.readouterr().out
    category = oscar_service.get_ceremony(2025).categories[0]
    assert category.winner_announced
    assert [n.is_winner for n in category.nominees] == [True, False]


def test_set_winner_wrong_year(engine):
    category_id, brody, _ = _seed_race()

    assert cli.main(["--set-winner", str(category_id), str(brody), "--year", "2024"]) == 1
    assert not oscar_service.get_ceremony(2025).categories[0].winner_announced


def test_delete_oscar_race(engine):
    _seed_race()

    assert cli.main(["--delete-oscar-race", "--year", "2025"]) == 0
    assert oscar_service.get_all_years() == []
    assert cli.main(["--delete-oscar-race", "--year", "2025"]) == 1


def test_show_celebrity_by_id(engine, offline, capsys):
    with session_scope() as session:
        saved = store.create_with_awards(
            session, NewCelebrity(name="Rita Moreno", slug="rita-moreno"), []
        )

    assert cli.main(["--celebrity-id", str(saved.id)]) == 0
    assert "Rita Moreno (rita-moreno)" in capsys.readouterr().out
    assert cli.main(["--celebrity-id", str(uuid.uuid4())]) == 1


def test_preview_does_not_save(engine, meryl, capsys):
    assert cli.main(["--preview", "Meryl Streep"]) == 0

    out = capsys.readouterr().out
    assert "Meryl Streep (meryl-streep)  [not saved]" in out
    assert "The Iron Lady" in out
    assert resolver.autocomplete("meryl") == []
