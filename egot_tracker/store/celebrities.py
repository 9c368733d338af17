from __future__ import annotations

import uuid
from typing import Dict, List, Optional, Set

from sqlalchemy import distinct, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..config.settings import settings
from ..errors import CelebrityNotFound, PersistenceError
from ..facts.models import NewAward, NewCelebrity
from ..utils.logger import get_logger
from ..utils.slug import slugify

from .models import AwardRecord, CelebrityRecord, CelebrityWithAwards, CelebrityWithEGOTProgress
from .tables import Award, Celebrity

log = get_logger("store.celebrities")


def _limit(limit: Optional[int], default: int) -> int:
    if limit is None or limit <= 0:
        return default
    return limit


# ---------------------------------------------------------------------
# LOOKUPS
# ---------------------------------------------------------------------


def _row_by_name(session: Session, name: str) -> Optional[Celebrity]:
    stmt = select(Celebrity).where(func.lower(Celebrity.name) == func.lower(name.strip()))
    return session.execute(stmt).scalar_one_or_none()


def find_by_name(session: Session, name: str) -> CelebrityRecord:
    row = _row_by_name(session, name)
    if row is None:
        raise CelebrityNotFound(f"Celebrity not found: {name}")
    return CelebrityRecord.model_validate(row)


def find_by_id(session: Session, celebrity_id: uuid.UUID) -> CelebrityRecord:
    row = session.get(Celebrity, celebrity_id)
    if row is None:
        raise CelebrityNotFound(f"Celebrity not found: {celebrity_id}")
    return CelebrityRecord.model_validate(row)


def find_awards(session: Session, celebrity_id: uuid.UUID) -> List[AwardRecord]:
    stmt = (
        select(Award)
        .where(Award.celebrity_id == celebrity_id)
        .order_by(Award.year.desc(), Award.type)
    )
    return [AwardRecord.model_validate(a) for a in session.execute(stmt).scalars()]


def find_with_awards(session: Session, name: str) -> CelebrityWithAwards:
    celebrity = find_by_name(session, name)
    return CelebrityWithAwards(
        **celebrity.model_dump(), awards=find_awards(session, celebrity.id)
    )


def search(session: Session, query: str, limit: Optional[int] = None) -> List[CelebrityRecord]:
    """Case-insensitive substring match on name, alphabetical."""
    stmt = (
        select(Celebrity)
        .where(func.lower(Celebrity.name).contains(query.strip().lower(), autoescape=True))
        .order_by(Celebrity.name)
        .limit(_limit(limit, settings.default_search_limit))
    )
    return [CelebrityRecord.model_validate(c) for c in session.execute(stmt).scalars()]


# ---------------------------------------------------------------------
# AGGREGATES
# ---------------------------------------------------------------------


def _won_types(session: Session, celebrity_ids: List[uuid.UUID]) -> Dict[uuid.UUID, Set[str]]:
    stmt = (
        select(Award.celebrity_id, Award.type)
        .where(
            Award.celebrity_id.in_(celebrity_ids),
            Award.is_winner.is_(True),
            Award.is_upcoming.is_(False),
        )
        .distinct()
    )
    won: Dict[uuid.UUID, Set[str]] = {}
    for celebrity_id, award_type in session.execute(stmt):
        won.setdefault(celebrity_id, set()).add(award_type)
    return won


def _find_by_win_count(
    session: Session, distinct_types: int, limit: Optional[int]
) -> List[CelebrityWithEGOTProgress]:
    """
    Celebrities with exactly `distinct_types` different EGOT types among
    their winning, non-upcoming awards. Repeat wins of a type count once.
    """
    win_count = func.count(distinct(Award.type))
    stmt = (
        select(Celebrity, win_count.label("egot_win_count"))
        .join(Award, Award.celebrity_id == Celebrity.id)
        .where(Award.is_winner.is_(True), Award.is_upcoming.is_(False))
        .group_by(Celebrity.id)
        .having(win_count == distinct_types)
        .order_by(Celebrity.name)
        .limit(_limit(limit, settings.default_list_limit))
    )
    rows = session.execute(stmt).all()
    if not rows:
        return []

    won = _won_types(session, [c.id for c, _ in rows])
    return [
        CelebrityWithEGOTProgress(
            **CelebrityRecord.model_validate(c).model_dump(),
            egot_win_count=count,
            won_awards=sorted(won.get(c.id, set())),
        )
        for c, count in rows
    ]


def find_close_to_egot(session: Session, limit: Optional[int] = None) -> List[CelebrityWithEGOTProgress]:
    return _find_by_win_count(session, 3, limit)


def find_egot_winners(session: Session, limit: Optional[int] = None) -> List[CelebrityWithEGOTProgress]:
    return _find_by_win_count(session, 4, limit)


def find_no_awards(session: Session, limit: Optional[int] = None) -> List[CelebrityRecord]:
    """Celebrities without a single award row, stalest first."""
    stmt = (
        select(Celebrity)
        .outerjoin(Award, Award.celebrity_id == Celebrity.id)
        .where(Award.id.is_(None))
        .order_by(Celebrity.last_updated.asc())
        .limit(_limit(limit, settings.default_list_limit))
    )
    return [CelebrityRecord.model_validate(c) for c in session.execute(stmt).scalars()]


# ---------------------------------------------------------------------
# WRITES
# ---------------------------------------------------------------------
# Inserts run in a SAVEPOINT; a name conflict undoes only the insert.


def _insert(session: Session, row: Celebrity) -> bool:
    """
    Flush a new celebrity. False when the normalized name already exists
    (another writer won the race).
    """
    try:
        with session.begin_nested():
            session.add(row)
            session.flush()
    except IntegrityError as e:
        log.info(f"Celebrity '{row.name}' already exists, re-reading ({e.orig})")
        return False
    except SQLAlchemyError as e:
        raise PersistenceError(f"Failed to save celebrity {row.name}: {e}") from e
    return True


def create_with_awards(
    session: Session, celebrity: NewCelebrity, awards: List[NewAward]
) -> CelebrityWithAwards:
    """
    Insert a celebrity and its awards in the session's transaction. If the
    name is taken, the existing celebrity (with its stored awards) is
    returned instead and nothing is written.
    """
    row = Celebrity(
        name=celebrity.name.strip(),
        slug=celebrity.slug or slugify(celebrity.name),
        photo_url=celebrity.photo_url,
        summary=celebrity.summary,
        awards=[
            Award(
                type=a.type.value,
                year=a.year,
                work=a.work,
                category=a.category,
                is_winner=a.is_winner,
                ceremony_date=a.ceremony_date,
                is_upcoming=a.is_upcoming,
            )
            for a in awards
        ],
    )

    if not _insert(session, row):
        try:
            return find_with_awards(session, celebrity.name)
        except CelebrityNotFound as e:
            raise PersistenceError(f"Failed to save celebrity {celebrity.name}") from e

    return CelebrityWithAwards(
        **CelebrityRecord.model_validate(row).model_dump(),
        awards=find_awards(session, row.id),
    )


def find_or_create(
    session: Session,
    name: str,
    photo_url: Optional[str] = None,
    summary: Optional[str] = None,
) -> CelebrityRecord:
    existing = _row_by_name(session, name)
    if existing is not None:
        return CelebrityRecord.model_validate(existing)

    row = Celebrity(
        name=name.strip(),
        slug=slugify(name),
        photo_url=photo_url or None,
        summary=summary or None,
    )
    if not _insert(session, row):
        try:
            return find_by_name(session, name)
        except CelebrityNotFound as e:
            raise PersistenceError(f"Failed to save celebrity {name}") from e
    return CelebrityRecord.model_validate(row)
