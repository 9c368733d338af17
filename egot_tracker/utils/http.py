from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from ..config.settings import settings
from ..errors import (
    DeadlineExceeded,
    UpstreamError,
    UpstreamProtocolError,
    UpstreamUnavailable,
)
from .deadline import Deadline


def _session() -> requests.Session:
    s = requests.Session()
    s.headers.update({"User-Agent": settings.user_agent})
    return s


def get_json(
    url: str,
    deadline: Deadline,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> Any:
    """
    GET + decode JSON, classifying failures:
      network/timeout -> UpstreamUnavailable
      non-2xx         -> UpstreamError (status_code set)
      bad body        -> UpstreamProtocolError
    """
    timeout = deadline.timeout(settings.http_timeout, what=url)
    try:
        with _session() as s:
            r = s.get(url, params=params, headers=headers, timeout=timeout)
    except requests.Timeout as e:
        if deadline.expired():
            raise DeadlineExceeded(f"Deadline exceeded waiting for {url}") from e
        raise UpstreamUnavailable(f"Timed out calling {url}") from e
    except requests.RequestException as e:
        raise UpstreamUnavailable(f"Failed to call {url}: {e}") from e

    if not r.ok:
        raise UpstreamError(
            f"{url} returned status {r.status_code}", status_code=r.status_code
        )

    try:
        return r.json()
    except ValueError as e:
        raise UpstreamProtocolError(f"Failed to decode response from {url}") from e
