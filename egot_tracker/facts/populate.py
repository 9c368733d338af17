from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Iterable, Optional

from ..config.settings import settings
from ..errors import CelebrityNotFound, EgotError
from ..store import celebrities as store
from ..store.db import session_scope
from ..utils.deadline import Deadline
from ..utils.logger import get_logger

from .resolver import search_celebrity

log = get_logger("populate")


@dataclass
class PopulateReport:
    success: int = 0
    skipped: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.success + self.skipped + self.failed


def _already_stored(name: str) -> bool:
    with session_scope() as session:
        try:
            store.find_by_name(session, name)
            return True
        except CelebrityNotFound:
            return False


def populate_celebrities(names: Iterable[str], delay: Optional[float] = None) -> PopulateReport:
    """
    Resolve every name one after the other. Failures are logged and
    skipped, never retried. Sleeps `delay` seconds between upstream
    fetches to stay polite with Wikidata/Wikipedia.
    """
    names = list(names)
    delay = settings.populate_delay if delay is None else delay
    report = PopulateReport()

    log.info(f"Starting population of {len(names)} celebrities...")

    for i, name in enumerate(names, start=1):
        log.info(f"[{i}/{len(names)}] Processing: {name}")

        if _already_stored(name):
            log.info("  → Skipped (already exists)")
            report.skipped += 1
            continue

        try:
            result = search_celebrity(name, Deadline(settings.request_deadline))
        except EgotError as e:
            log.warning(f"  → Failed: {e}")
            report.failed += 1
        else:
            log.info(f"  → Success: {len(result.awards)} awards found")
            report.success += 1

        if i < len(names) and delay > 0:
            time.sleep(delay)

    log.info(
        f"=== Population complete === success={report.success} "
        f"skipped={report.skipped} failed={report.failed} total={report.total}"
    )
    return report
