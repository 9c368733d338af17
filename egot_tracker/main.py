from __future__ import annotations

import argparse
import uuid
from typing import List, Sequence, Union

from .config.settings import settings
from .errors import CeremonyNotFound, EgotError, NotFound
from .facts import resolver
from .facts.models import NewAward
from .facts.populate import populate_celebrities
from .facts.wikidata import fetch_celebrity
from .oscars import service as oscar_service
from .oscars.nominations import load_nominations
from .oscars.setup import setup_oscar_race
from .store.db import init_db
from .store.models import AwardRecord, CelebrityRecord, CelebrityWithEGOTProgress
from .utils.deadline import Deadline
from .utils.logger import get_logger
from .utils.roster import load_roster

log = get_logger("main")


# ---------------------------------------------------------------------
# HELPERS
# ---------------------------------------------------------------------


def _print_celebrities(rows: Sequence[CelebrityRecord]) -> None:
    if not rows:
        print("(none)")
    for c in rows:
        if isinstance(c, CelebrityWithEGOTProgress):
            print(f"{c.name:<35} {c.egot_win_count}/4  {', '.join(c.won_awards)}")
        else:
            print(f"{c.name:<35} {c.slug}")


def _print_awards(awards: Sequence[Union[AwardRecord, NewAward]]) -> None:
    for a in awards:
        work = f" - {a.work}" if a.work else ""
        print(f"  {a.year or '????'}  {a.type.value:<7} {a.category}{work}")


# ---------------------------------------------------------------------
# LOOKUPS
# ---------------------------------------------------------------------


def run_search(name: str) -> int:
    try:
        result = resolver.search_celebrity(name)
    except NotFound:
        log.info(f"Celebrity not found: {name}")
        return 1
    except EgotError as e:
        log.error(f"Lookup failed for {name}: {e}")
        return 1

    print(f"{result.name} ({result.slug})")
    _print_awards(result.awards)
    return 0


def run_show_celebrity(celebrity_id: uuid.UUID) -> int:
    try:
        result = resolver.get_celebrity(celebrity_id)
    except NotFound as e:
        log.info(str(e))
        return 1

    print(f"{result.name} ({result.slug})")
    _print_awards(result.awards)
    return 0


def run_preview(name: str) -> int:
    """Fetch from Wikidata/Wikipedia without touching the store."""
    try:
        celebrity, awards = fetch_celebrity(name, Deadline(settings.request_deadline))
    except EgotError as e:
        log.info(f"Celebrity not found: {name} ({e})")
        return 1

    print(f"{celebrity.name} ({celebrity.slug})  [not saved]")
    _print_awards(awards)
    return 0


# ---------------------------------------------------------------------
# SEED WORKFLOWS
# ---------------------------------------------------------------------


def run_populate() -> int:
    names = load_roster(settings.roster_file)
    report = populate_celebrities(names)
    return 0 if report.failed == 0 else 2


def run_setup_oscar_race(year: int, reset: bool) -> int:
    path = settings.nominations_file(year)
    try:
        nominations = load_nominations(path)
    except FileNotFoundError:
        log.error(f"No nomination data available for {year} ({path.as_posix()})")
        return 1

    try:
        report = setup_oscar_race(year, nominations, reset=reset)
    except EgotError as e:
        log.error(str(e))
        return 1

    log.info(f"✅ {report.ceremony_name} ready")
    return 0


def run_show_oscar_race(year: int) -> int:
    try:
        ceremony = oscar_service.get_ceremony(year)
    except CeremonyNotFound as e:
        log.info(str(e))
        return 1

    print(ceremony.ceremony_name or str(ceremony.year))
    for category in ceremony.categories:
        print(f"\n{category.name} [{category.id}]")
        for n in category.nominees:
            mark = "🏆" if n.is_winner else "  "
            print(f"  {mark} {n.name:<40} {n.work_title or ''} [{n.id}]")
    return 0


def run_set_winner(year: int, category_id: uuid.UUID, nominee_id: uuid.UUID) -> int:
    try:
        winner = oscar_service.set_winner(year, category_id, nominee_id)
    except NotFound as e:
        log.error(str(e))
        return 1

    print(f"🏆 {winner.name} [{winner.id}]")
    return 0


def run_delete_oscar_race(year: int) -> int:
    if not oscar_service.delete_ceremony(year):
        log.info(f"No Oscar ceremony tracked for {year}")
        return 1
    return 0


# ---------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="egot-tracker")

    parser.add_argument("--init-db", action="store_true", help="Create database tables")
    parser.add_argument("--search", metavar="NAME", help="Resolve a celebrity (cache-aside)")
    parser.add_argument(
        "--celebrity-id", type=uuid.UUID, metavar="ID", help="Show a stored celebrity"
    )
    parser.add_argument(
        "--preview", metavar="NAME", help="Fetch from Wikidata/Wikipedia without saving"
    )
    parser.add_argument("--autocomplete", metavar="QUERY", help="Stored names containing QUERY")
    parser.add_argument("--close-to-egot", action="store_true", help="3 of 4 EGOT wins")
    parser.add_argument("--egot-winners", action="store_true", help="All 4 EGOT wins")
    parser.add_argument("--no-awards", action="store_true", help="Celebrities without awards")
    parser.add_argument("--limit", type=int, default=None, help="Result count limit")

    parser.add_argument("--populate", action="store_true", help="Resolve the whole roster")
    parser.add_argument(
        "--setup-oscar-race", action="store_true", help="Seed an Oscar ceremony"
    )
    parser.add_argument("--oscar-race", action="store_true", help="Show an Oscar ceremony")
    parser.add_argument("--oscar-years", action="store_true", help="List tracked ceremonies")
    parser.add_argument(
        "--set-winner",
        nargs=2,
        type=uuid.UUID,
        metavar=("CATEGORY_ID", "NOMINEE_ID"),
        help="Announce the winner of a category",
    )
    parser.add_argument(
        "--delete-oscar-race", action="store_true", help="Delete an Oscar ceremony"
    )
    parser.add_argument("--year", type=int, default=2025, help="Oscar ceremony year")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete existing ceremony data for this year before creating",
    )

    args = parser.parse_args(argv)

    commands = (
        args.init_db, args.search, args.celebrity_id, args.preview,
        args.autocomplete, args.close_to_egot, args.egot_winners, args.no_awards,
        args.populate, args.setup_oscar_race, args.oscar_race, args.oscar_years,
        args.set_winner, args.delete_oscar_race,
    )
    if not any(commands):
        parser.print_help()
        return 0

    init_db()
    if args.init_db:
        return 0

    if args.search:
        return run_search(args.search)

    if args.celebrity_id:
        return run_show_celebrity(args.celebrity_id)

    if args.preview:
        return run_preview(args.preview)

    if args.autocomplete:
        _print_celebrities(resolver.autocomplete(args.autocomplete, args.limit))
        return 0

    if args.close_to_egot:
        _print_celebrities(resolver.get_close_to_egot(args.limit))
        return 0

    if args.egot_winners:
        _print_celebrities(resolver.get_egot_winners(args.limit))
        return 0

    if args.no_awards:
        _print_celebrities(resolver.get_no_awards(args.limit))
        return 0

    if args.populate:
        return run_populate()

    if args.setup_oscar_race:
        return run_setup_oscar_race(args.year, args.reset)

    if args.oscar_race:
        return run_show_oscar_race(args.year)

    if args.oscar_years:
        print("\n".join(str(y) for y in oscar_service.get_all_years()) or "(none)")
        return 0

    if args.set_winner:
        category_id, nominee_id = args.set_winner
        return run_set_winner(args.year, category_id, nominee_id)

    if args.delete_oscar_race:
        return run_delete_oscar_race(args.year)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
