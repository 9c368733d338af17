from __future__ import annotations

from typing import Optional


class EgotError(Exception):
    """Base class for every error raised by egot_tracker."""


# ---------------------------------------------------------------------
# NOT FOUND
# ---------------------------------------------------------------------


class NotFound(EgotError):
    pass


class CelebrityNotFound(NotFound):
    pass


class PersonNotFound(NotFound):
    """Wikidata entity search returned no candidates."""


class PageNotFound(NotFound):
    """Wikipedia has no page for the requested title."""


class CeremonyNotFound(NotFound):
    pass


class NomineeNotFound(NotFound):
    pass


# ---------------------------------------------------------------------
# UPSTREAM
# ---------------------------------------------------------------------


class UpstreamError(EgotError):
    """An external service answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UpstreamUnavailable(UpstreamError):
    """Network failure or timeout talking to an external service."""


class DeadlineExceeded(UpstreamUnavailable):
    pass


class UpstreamProtocolError(UpstreamError):
    """The response body could not be decoded or had an unexpected shape."""


# ---------------------------------------------------------------------
# STORE
# ---------------------------------------------------------------------


class PersistenceError(EgotError):
    pass


class CeremonyExists(EgotError):
    pass
