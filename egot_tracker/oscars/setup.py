from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from ..config.settings import settings
from ..errors import CeremonyExists, EgotError
from ..facts.models import PageSummary
from ..facts.wikipedia import fetch_film_summary, fetch_person_summary
from ..store import celebrities as celebrity_store
from ..store import oscars as store
from ..store.db import session_scope
from ..utils.deadline import Deadline
from ..utils.logger import get_logger

from .nominations import NomineeInfo, OscarNomination, ceremony_name

log = get_logger("oscar_setup")


@dataclass
class SetupReport:
    ceremony_name: str
    categories: int = 0
    nominees: int = 0
    celebrities_linked: int = 0


def _prepare_ceremony(year: int, reset: bool) -> uuid.UUID:
    with session_scope() as session:
        if year in store.get_all_ceremony_years(session):
            if not reset:
                raise CeremonyExists(
                    f"Ceremony for {year} already exists. Use --reset to recreate."
                )
            log.info(f"Deleting existing ceremony data for {year}...")
            store.delete_ceremony(session, year)

        ceremony = store.create_ceremony(session, year, ceremony_name=ceremony_name(year))
        log.info(f"Created ceremony: {ceremony.ceremony_name}")
        return ceremony.id


def _lookup(info: NomineeInfo, film_year: int) -> Optional[PageSummary]:
    deadline = Deadline(settings.request_deadline)
    try:
        if info.is_person:
            return fetch_person_summary(info.name, deadline)
        return fetch_film_summary(info.name, deadline, film_year=film_year)
    except EgotError as e:
        kind = "" if info.is_person else "film "
        log.warning(f"    Warning: Could not fetch Wikipedia data for {kind}{info.name}: {e}")
        return None


def _add_nominee(
    category_id: uuid.UUID,
    info: NomineeInfo,
    display_order: int,
    summary: Optional[PageSummary],
) -> bool:
    """Returns True when the nominee got linked to a celebrity."""
    photo_url = summary.thumbnail_url if summary else None
    celebrity_id = None

    with session_scope() as session:
        if info.is_person:
            # The nominee is written even when the celebrity link fails
            try:
                with session.begin_nested():
                    celebrity = celebrity_store.find_or_create(
                        session,
                        info.name,
                        photo_url=photo_url,
                        summary=summary.extract if summary else None,
                    )
            except (EgotError, SQLAlchemyError) as e:
                log.warning(f"    Warning: Could not create celebrity {info.name}: {e}")
            else:
                celebrity_id = celebrity.id
                photo_url = celebrity.photo_url or photo_url

        store.create_nominee(
            session,
            category_id=category_id,
            name=info.name,
            display_order=display_order,
            work_title=info.work_title or None,
            photo_url=photo_url,
            celebrity_id=celebrity_id,
        )
    return celebrity_id is not None


def setup_oscar_race(
    year: int,
    nominations: List[OscarNomination],
    reset: bool = False,
    delay: Optional[float] = None,
) -> SetupReport:
    """
    Seed one ceremony: categories in file order, nominees in listed order.
    Person nominees are linked to a (possibly new) celebrity; works get a
    poster from their Wikipedia film page. Sequential, with `delay` seconds
    after every Wikipedia lookup.
    """
    delay = settings.oscar_setup_delay if delay is None else delay
    log.info(f"Setting up Oscar race for {year}...")

    ceremony_id = _prepare_ceremony(year, reset)
    report = SetupReport(ceremony_name=ceremony_name(year))

    for i, nomination in enumerate(nominations):
        try:
            with session_scope() as session:
                category = store.create_category(
                    session, ceremony_id, nomination.category, display_order=i
                )
        except SQLAlchemyError as e:
            log.error(f"Failed to create category {nomination.category}: {e}")
            continue
        report.categories += 1
        log.info(f"  Category: {nomination.category} ({len(nomination.nominees)} nominees)")

        for j, info in enumerate(nomination.nominees):
            # Films compete the year before the ceremony
            summary = _lookup(info, film_year=year - 1)
            if delay > 0:
                time.sleep(delay)

            try:
                linked = _add_nominee(category.id, info, j, summary)
            except (EgotError, SQLAlchemyError) as e:
                log.error(f"    Failed to create nominee {info.name}: {e}")
                continue
            report.nominees += 1
            if linked:
                report.celebrities_linked += 1

    log.info(
        f"=== Setup complete === {report.ceremony_name}: "
        f"categories={report.categories} nominees={report.nominees} "
        f"celebrities={report.celebrities_linked}"
    )
    return report
