"""Tests for award label classification and slugs."""

import pytest

from egot_tracker.facts.classifier import AwardType, classify_award
from egot_tracker.utils.slug import slugify


class TestClassifyAward:
    @pytest.mark.parametrize(
        "label, expected",
        [
            ("Primetime Emmy Award for Outstanding Lead Actress", AwardType.EMMY),
            ("Grammy Award for Album of the Year", AwardType.GRAMMY),
            ("Academy Award for Best Actress", AwardType.OSCAR),
            ("Honorary Oscar", AwardType.OSCAR),
            ("Tony Award for Best Musical", AwardType.TONY),
            ("DAYTIME EMMY AWARD", AwardType.EMMY),
            ("academy award for best picture", AwardType.OSCAR),
        ],
    )
    def test_known_labels(self, label, expected):
        assert classify_award(label) == expected

    def test_unrelated_label_is_none(self):
        assert classify_award("Kennedy Center Honors") is None
        assert classify_award("Golden Globe Award for Best Actor") is None
        assert classify_award("") is None

    def test_emmy_wins_over_tony(self):
        """A label matching several rules resolves in Emmy, Grammy, Oscar, Tony order."""
        assert classify_award("Tony and Emmy joint citation") == AwardType.EMMY

    def test_grammy_wins_over_oscar(self):
        assert classify_award("Grammy for an Oscar-winning score") == AwardType.GRAMMY

    def test_award_type_values(self):
        assert [t.value for t in AwardType] == ["Emmy", "Grammy", "Oscar", "Tony"]


class TestSlugify:
    @pytest.mark.parametrize(
        "name, slug",
        [
            ("Mikey Madison", "mikey-madison"),
            ("J.K. Simmons", "jk-simmons"),
            ("Zoe Saldaña", "zoe-saldaa"),
            ("Lupita Nyong'o", "lupita-nyongo"),
            ("Lin-Manuel Miranda", "lin-manuel-miranda"),
            ("September 5", "september-"),
            ("", ""),
        ],
    )
    def test_examples(self, name, slug):
        assert slugify(name) == slug

    def test_deterministic(self):
        assert slugify("Robert Downey Jr.") == slugify("Robert Downey Jr.")
