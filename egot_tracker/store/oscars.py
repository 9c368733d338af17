from __future__ import annotations

import uuid
from datetime import date
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from ..errors import CeremonyExists, CeremonyNotFound, NomineeNotFound
from ..utils.logger import get_logger

from .models import (
    OscarCategoryRecord,
    OscarCeremonyFull,
    OscarCeremonyRecord,
    OscarNomineeRecord,
)
from .tables import OscarCategory, OscarCeremony, OscarNominee

log = get_logger("store.oscars")


# ---------------------------------------------------------------------
# CEREMONIES
# ---------------------------------------------------------------------


def create_ceremony(
    session: Session,
    year: int,
    ceremony_name: Optional[str] = None,
    ceremony_date: Optional[date] = None,
    is_complete: bool = False,
) -> OscarCeremonyRecord:
    row = OscarCeremony(
        year=year,
        ceremony_name=ceremony_name,
        ceremony_date=ceremony_date,
        is_complete=is_complete,
    )
    try:
        with session.begin_nested():
            session.add(row)
            session.flush()
    except IntegrityError as e:
        raise CeremonyExists(f"Ceremony for {year} already exists") from e
    return OscarCeremonyRecord.model_validate(row)


def _ceremony_row(session: Session, year: int) -> Optional[OscarCeremony]:
    stmt = select(OscarCeremony).where(OscarCeremony.year == year)
    return session.execute(stmt).scalar_one_or_none()


def get_ceremony_by_year(session: Session, year: int) -> OscarCeremonyRecord:
    row = _ceremony_row(session, year)
    if row is None:
        raise CeremonyNotFound(f"No Oscar ceremony tracked for {year}")
    return OscarCeremonyRecord.model_validate(row)


def get_all_ceremony_years(session: Session) -> List[int]:
    stmt = select(OscarCeremony.year).order_by(OscarCeremony.year.desc())
    return list(session.execute(stmt).scalars())


def get_full_ceremony(session: Session, year: int) -> OscarCeremonyFull:
    stmt = (
        select(OscarCeremony)
        .where(OscarCeremony.year == year)
        .options(selectinload(OscarCeremony.categories).selectinload(OscarCategory.nominees))
    )
    row = session.execute(stmt).scalar_one_or_none()
    if row is None:
        raise CeremonyNotFound(f"No Oscar ceremony tracked for {year}")
    return OscarCeremonyFull.model_validate(row)


def delete_ceremony(session: Session, year: int) -> bool:
    """
    Removes the ceremony with its categories and nominees. Linked
    celebrities stay.
    """
    row = _ceremony_row(session, year)
    if row is None:
        return False
    session.delete(row)
    session.flush()
    log.info(f"Deleted Oscar ceremony {year}")
    return True


# ---------------------------------------------------------------------
# CATEGORIES / NOMINEES
# ---------------------------------------------------------------------


def create_category(
    session: Session,
    ceremony_id: uuid.UUID,
    name: str,
    display_order: int,
    winner_announced: bool = False,
) -> OscarCategoryRecord:
    row = OscarCategory(
        ceremony_id=ceremony_id,
        name=name,
        display_order=display_order,
        winner_announced=winner_announced,
    )
    session.add(row)
    session.flush()
    return OscarCategoryRecord.model_validate(row)


def create_nominee(
    session: Session,
    category_id: uuid.UUID,
    name: str,
    display_order: int,
    work_title: Optional[str] = None,
    photo_url: Optional[str] = None,
    celebrity_id: Optional[uuid.UUID] = None,
    is_winner: bool = False,
) -> OscarNomineeRecord:
    row = OscarNominee(
        category_id=category_id,
        celebrity_id=celebrity_id,
        name=name,
        photo_url=photo_url,
        work_title=work_title,
        is_winner=is_winner,
        display_order=display_order,
    )
    session.add(row)
    session.flush()
    return OscarNomineeRecord.model_validate(row)


def set_nominee_as_winner(
    session: Session, year: int, category_id: uuid.UUID, nominee_id: uuid.UUID
) -> OscarNomineeRecord:
    """
    Clear the category's current winner, mark the nominee, flag the
    category. All three statements run in the caller's transaction with the
    category row locked, so readers never see two winners.
    """
    stmt = (
        select(OscarCategory)
        .join(OscarCeremony, OscarCeremony.id == OscarCategory.ceremony_id)
        .where(OscarCategory.id == category_id, OscarCeremony.year == year)
        .with_for_update(of=OscarCategory)
    )
    category = session.execute(stmt).scalar_one_or_none()
    if category is None:
        raise NomineeNotFound(f"Category {category_id} not found in {year} ceremony")

    nominee = session.get(OscarNominee, nominee_id)
    if nominee is None or nominee.category_id != category.id:
        raise NomineeNotFound(f"Nominee {nominee_id} not found in category {category_id}")

    session.execute(
        update(OscarNominee)
        .where(OscarNominee.category_id == category.id)
        .values(is_winner=False)
    )
    session.execute(
        update(OscarNominee).where(OscarNominee.id == nominee.id).values(is_winner=True)
    )
    category.winner_announced = True
    session.flush()
    session.refresh(nominee)

    log.info(f"Winner set: {nominee.name} ({category.name}, {year})")
    return OscarNomineeRecord.model_validate(nominee)
