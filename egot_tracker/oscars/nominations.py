from __future__ import annotations

from pathlib import Path
from typing import List

from pydantic import BaseModel, Field, TypeAdapter

from ..utils.filesystem import read_json


class NomineeInfo(BaseModel):
    name: str
    work_title: str = ""
    is_person: bool = False  # person (actor, director) vs. work (film, song)


class OscarNomination(BaseModel):
    category: str
    nominees: List[NomineeInfo] = Field(default_factory=list)


_nominations = TypeAdapter(List[OscarNomination])


def load_nominations(path: Path) -> List[OscarNomination]:
    """
    Nomination file layout:
    [
      {"category": "Best Actress",
       "nominees": [{"name": "Mikey Madison", "work_title": "Anora", "is_person": true}]}
    ]
    """
    data = read_json(path)
    if data is None:
        raise FileNotFoundError(f"No nomination data at {path.as_posix()}")
    return _nominations.validate_python(data)


def ceremony_name(year: int) -> str:
    """2025 -> "97th Academy Awards" (the 1st was held in 1929)."""
    number = year - 1928
    if number % 10 == 1 and number % 100 != 11:
        suffix = "st"
    elif number % 10 == 2 and number % 100 != 12:
        suffix = "nd"
    elif number % 10 == 3 and number % 100 != 13:
        suffix = "rd"
    else:
        suffix = "th"
    return f"{number}{suffix} Academy Awards"
