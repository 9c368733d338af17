from __future__ import annotations

from enum import Enum
from typing import Optional


class AwardType(str, Enum):
    EMMY = "Emmy"
    GRAMMY = "Grammy"
    OSCAR = "Oscar"
    TONY = "Tony"


# Checked in this order; a label matching several rules gets the first.
_RULES = (
    (AwardType.EMMY, ("emmy",)),
    (AwardType.GRAMMY, ("grammy",)),
    (AwardType.OSCAR, ("academy award", "oscar")),
    (AwardType.TONY, ("tony",)),
)


def classify_award(label: str) -> Optional[AwardType]:
    """
    Map a free-text award label ("Academy Award for Best Actress") to one
    of the four EGOT types, or None when it is some other award.
    """
    name = (label or "").lower()
    for award_type, keywords in _RULES:
        if any(k in name for k in keywords):
            return award_type
    return None
