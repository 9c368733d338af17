from __future__ import annotations

from pathlib import Path
from typing import List

from .filesystem import read_json


def load_roster(path: Path) -> List[str]:
    """
    Load the celebrity roster used by the population workflow.
    Must be a JSON array of strings; blanks and repeats are dropped,
    first occurrence wins.
    """
    data = read_json(path, default=[])
    if not isinstance(data, list):
        raise ValueError(f"{path.as_posix()} must be a JSON array of strings")

    names: List[str] = []
    seen = set()
    for x in data:
        name = str(x).strip()
        if not name or name.lower() in seen:
            continue
        seen.add(name.lower())
        names.append(name)
    return names
