from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from ..config.settings import settings
from ..errors import CelebrityNotFound, NotFound, PersistenceError, UpstreamError
from ..store import celebrities as store
from ..store.db import session_scope
from ..store.models import CelebrityRecord, CelebrityWithAwards, CelebrityWithEGOTProgress
from ..utils.deadline import Deadline
from ..utils.logger import get_logger

from .wikidata import build_celebrity, fetch_person

log = get_logger("resolver")


def _stored(name: str) -> Optional[CelebrityWithAwards]:
    with session_scope() as session:
        try:
            return store.find_with_awards(session, name)
        except CelebrityNotFound:
            return None


def search_celebrity(name: str, deadline: Optional[Deadline] = None) -> CelebrityWithAwards:
    """
    Cache-aside lookup:
      1) stored celebrity → return it with awards read fresh from the store
      2) otherwise resolve the entity on Wikidata; if its canonical name is
         already stored, return that row
      3) otherwise fetch the Wikipedia summary, persist, return

    Any upstream failure is reported as CelebrityNotFound; the cause is
    only logged.
    """
    name = name.strip()
    if not name:
        raise CelebrityNotFound("Empty celebrity name")

    deadline = deadline or Deadline(settings.request_deadline)

    # 1) Store
    stored = _stored(name)
    if stored is not None:
        return stored

    # 2) Wikidata + Wikipedia
    log.info(f"Celebrity not in DB, fetching from Wikidata: {name}")
    try:
        person, raw_awards = fetch_person(name, deadline)

        # An alias may resolve to a celebrity stored under its canonical name
        if person.name.lower() != name.lower():
            stored = _stored(person.name)
            if stored is not None:
                log.info(f"'{name}' resolved to stored celebrity {stored.name}")
                return stored

        celebrity, awards = build_celebrity(person, raw_awards, deadline)
        deadline.check("persistence")
    except NotFound as e:
        log.info(f"No upstream match for '{name}': {e}")
        raise CelebrityNotFound(f"Celebrity not found: {name}") from e
    except UpstreamError as e:
        log.warning(f"Upstream fetch failed for '{name}' ({type(e).__name__}): {e}")
        raise CelebrityNotFound(f"Celebrity not found: {name}") from e

    # 3) Celebrity + awards in one transaction
    try:
        with session_scope() as session:
            saved = store.create_with_awards(session, celebrity, awards)
    except SQLAlchemyError as e:
        raise PersistenceError(f"Failed to save {celebrity.name}: {e}") from e

    log.info(f"✅ Saved {saved.name} with {len(saved.awards)} awards from Wikidata")
    return saved


def get_celebrity(celebrity_id: uuid.UUID) -> CelebrityWithAwards:
    """Stored celebrity by id; never fetches upstream."""
    with session_scope() as session:
        celebrity = store.find_by_id(session, celebrity_id)
        return CelebrityWithAwards(
            **celebrity.model_dump(), awards=store.find_awards(session, celebrity.id)
        )


def autocomplete(query: str, limit: Optional[int] = None) -> List[CelebrityRecord]:
    query = query.strip()
    if not query:
        return []
    with session_scope() as session:
        return store.search(session, query, limit)


def get_close_to_egot(limit: Optional[int] = None) -> List[CelebrityWithEGOTProgress]:
    with session_scope() as session:
        return store.find_close_to_egot(session, limit)


def get_egot_winners(limit: Optional[int] = None) -> List[CelebrityWithEGOTProgress]:
    with session_scope() as session:
        return store.find_egot_winners(session, limit)


def get_no_awards(limit: Optional[int] = None) -> List[CelebrityRecord]:
    with session_scope() as session:
        return store.find_no_awards(session, limit)
