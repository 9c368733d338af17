"""Pytest configuration and fixtures."""

import os
import re
from urllib.parse import unquote

import pytest

# Set test environment variables before importing app modules
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("POPULATE_DELAY", "0")
os.environ.setdefault("OSCAR_SETUP_DELAY", "0")
os.environ.setdefault("REQUEST_DEADLINE", "30")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from egot_tracker.config.settings import settings  # noqa: E402
from egot_tracker.store import db  # noqa: E402
from egot_tracker.utils import http  # noqa: E402


class FakeResponse:
    def __init__(self, status_code=200, payload=None, body_error=False):
        self.status_code = status_code
        self._payload = payload
        self._body_error = body_error

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._body_error:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeUpstream:
    """
    Stands in for requests.Session, routing by endpoint:
      search[name]     -> list of {"id", "label", "description"} or exception
      ask[qid]         -> bool, FakeResponse or exception
      awards[qid]      -> list of SPARQL bindings or FakeResponse
      pages[title]     -> summary dict or FakeResponse (missing → 404)
    """

    def __init__(self):
        self.search = {}
        self.ask = {}
        self.awards = {}
        self.pages = {}
        self.calls = []
        self.closed = 0

    # requests.Session surface
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed += 1
        return False

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append(url)
        params = params or {}

        if url == settings.wikidata_api:
            return self._wrap(self.search.get(params.get("search"), []), lambda v: {"search": v})

        if url == settings.wikidata_sparql:
            query = params["query"]
            qid = re.search(r"wd:(Q\d+)", query).group(1)
            if query.strip().startswith("ASK"):
                return self._wrap(self.ask.get(qid, False), lambda v: {"boolean": v})
            return self._wrap(
                self.awards.get(qid, []), lambda v: {"results": {"bindings": v}}
            )

        if url.startswith(settings.wikipedia_summary_api + "/"):
            title = unquote(url[len(settings.wikipedia_summary_api) + 1:]).replace("_", " ")
            if title not in self.pages:
                return FakeResponse(404, {"title": "Not found."})
            return self._wrap(self.pages[title], lambda v: v)

        raise AssertionError(f"Unexpected URL: {url}")

    @staticmethod
    def _wrap(value, shape):
        if isinstance(value, Exception):
            raise value
        if isinstance(value, FakeResponse):
            return value
        return FakeResponse(200, shape(value))

    def count(self, prefix):
        return sum(1 for c in self.calls if c.startswith(prefix))


def binding(award_id, label, year=None, work=None, image=None, person=None):
    """One SPARQL result row in Wikidata's JSON layout."""
    row = {
        "award": {"type": "uri", "value": f"http://www.wikidata.org/entity/{award_id}"},
        "awardLabel": {"type": "literal", "value": label},
    }
    if year is not None:
        row["year"] = {"type": "literal", "value": str(year)}
    if work is not None:
        row["workLabel"] = {"type": "literal", "value": work}
    if image is not None:
        row["image"] = {"type": "uri", "value": image}
    if person is not None:
        row["personLabel"] = {"type": "literal", "value": person}
    return row


@pytest.fixture
def upstream(monkeypatch):
    """Fake Wikidata/Wikipedia behind utils.http."""
    fake = FakeUpstream()
    monkeypatch.setattr(http, "_session", lambda: fake)
    return fake


@pytest.fixture
def offline(monkeypatch):
    """Any HTTP call fails the test."""

    def _fail():
        raise AssertionError("unexpected network access")

    monkeypatch.setattr(http, "_session", _fail)


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    eng = db.make_engine("sqlite://")
    db.init_db(eng)
    db.set_engine(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session(engine):
    s = db.SessionLocal()
    yield s
    s.close()


@pytest.fixture
def meryl(upstream):
    """Upstream data for Meryl Streep (Q873)."""
    upstream.search["Meryl Streep"] = [
        {"id": "Q873", "label": "Meryl Streep", "description": "American actress"},
        {"id": "Q99999", "label": "Meryl Streep", "description": "1979 album"},
    ]
    upstream.ask["Q873"] = True
    upstream.awards["Q873"] = [
        binding("Q103618", "Academy Award for Best Actress", 2012, "The Iron Lady", person="Meryl Streep"),
        binding(
            "Q103618", "Academy Award for Best Actress", 2012, "The Iron Lady",
            image="http://commons.wikimedia.org/wiki/Special:FilePath/Meryl%20Streep.jpg",
        ),
        binding("Q103618", "Academy Award for Best Actress", 1983, "Sophie's Choice"),
        binding("Q106301", "Academy Award for Best Supporting Actress", 1980, "Kramer vs. Kramer"),
        binding("Q989439", "Primetime Emmy Award for Outstanding Lead Actress", 2004, "Angels in America"),
        binding("Q1141149", "Kennedy Center Honors", 2011),
    ]
    upstream.pages["Meryl Streep"] = {
        "title": "Meryl Streep",
        "extract": "Mary Louise \"Meryl\" Streep is an American actress.",
        "thumbnail": {"source": "https://upload.wikimedia.org/meryl.jpg"},
    }
    return upstream
