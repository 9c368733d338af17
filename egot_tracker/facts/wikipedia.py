from __future__ import annotations

from datetime import date
from typing import Optional
from urllib.parse import quote

from pydantic import ValidationError

from ..config.settings import settings
from ..errors import (
    DeadlineExceeded,
    NotFound,
    PageNotFound,
    UpstreamError,
    UpstreamProtocolError,
)
from ..utils.deadline import Deadline
from ..utils.http import get_json
from ..utils.logger import get_logger

from .models import PageSummary

log = get_logger("wikipedia")


def summary_url(title: str) -> str:
    # Wikipedia uses underscores for spaces in titles
    wiki_title = title.strip().replace(" ", "_")
    return f"{settings.wikipedia_summary_api}/{quote(wiki_title, safe='')}"


def fetch_page_summary(title: str, deadline: Deadline) -> PageSummary:
    """
    REST summary for a page title: extract text + optional thumbnail.
    Raises PageNotFound when the title has no page.
    """
    try:
        data = get_json(summary_url(title), deadline)
    except UpstreamError as e:
        if e.status_code == 404:
            raise PageNotFound(f"Wikipedia page not found: {title}") from e
        raise

    try:
        return PageSummary.model_validate(data)
    except ValidationError as e:
        raise UpstreamProtocolError(
            f"Unexpected Wikipedia summary payload for: {title}"
        ) from e


def fetch_summary(title: str, deadline: Deadline) -> str:
    return fetch_page_summary(title, deadline).extract


def fetch_person_summary(name: str, deadline: Deadline) -> PageSummary:
    return fetch_page_summary(name, deadline)


def fetch_film_summary(
    title: str, deadline: Deadline, film_year: Optional[int] = None
) -> PageSummary:
    """
    Films often share a title with something else, so try:
      "<title>", "<title> (film)", "<title> (<year> film)"
    and prefer the first variant that has a poster thumbnail. Without any
    thumbnail, the first variant that resolved at all is returned.
    """
    year = film_year or date.today().year
    variants = [title, f"{title} (film)", f"{title} ({year} film)"]

    first_found: Optional[PageSummary] = None
    for variant in variants:
        try:
            summary = fetch_page_summary(variant, deadline)
        except DeadlineExceeded:
            raise
        except (NotFound, UpstreamError) as e:
            log.debug(f"Film lookup miss for '{variant}': {e}")
            continue

        if summary.thumbnail is not None:
            return summary
        if first_found is None:
            first_found = summary

    if first_found is not None:
        return first_found

    raise PageNotFound(f"Could not find Wikipedia page for film: {title}")
