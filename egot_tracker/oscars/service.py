from __future__ import annotations

import uuid
from typing import List

from ..store import oscars as store
from ..store.db import session_scope
from ..store.models import OscarCeremonyFull, OscarNomineeRecord


def get_ceremony(year: int) -> OscarCeremonyFull:
    with session_scope() as session:
        return store.get_full_ceremony(session, year)


def get_all_years() -> List[int]:
    with session_scope() as session:
        return store.get_all_ceremony_years(session)


def set_winner(year: int, category_id: uuid.UUID, nominee_id: uuid.UUID) -> OscarNomineeRecord:
    # One transaction for clear + set + flag
    with session_scope() as session:
        return store.set_nominee_as_winner(session, year, category_id, nominee_id)


def delete_ceremony(year: int) -> bool:
    with session_scope() as session:
        return store.delete_ceremony(session, year)
