"""Tests for the Wikipedia summary client."""

import pytest

from conftest import FakeResponse
from egot_tracker.errors import DeadlineExceeded, PageNotFound, UpstreamError, UpstreamProtocolError
from egot_tracker.facts import wikipedia
from egot_tracker.utils.deadline import Deadline


@pytest.fixture
def deadline():
    return Deadline(30)


def _page(title, thumb=None):
    page = {"title": title, "extract": f"{title} extract"}
    if thumb:
        page["thumbnail"] = {"source": thumb}
    return page


class TestSummaryUrl:
    def test_spaces_become_underscores(self):
        assert wikipedia.summary_url("Meryl Streep").endswith("/Meryl_Streep")

    def test_path_segment_is_escaped(self):
        url = wikipedia.summary_url("AC/DC")
        assert url.endswith("/AC%2FDC")


class TestFetchSummary:
    def test_returns_extract(self, upstream, deadline):
        upstream.pages["Meryl Streep"] = _page("Meryl Streep")
        assert wikipedia.fetch_summary("Meryl Streep", deadline) == "Meryl Streep extract"

    def test_missing_page(self, upstream, deadline):
        with pytest.raises(PageNotFound):
            wikipedia.fetch_summary("No Such Page", deadline)

    def test_server_error_is_not_page_not_found(self, upstream, deadline):
        upstream.pages["Cher"] = FakeResponse(500, {})
        with pytest.raises(UpstreamError) as exc:
            wikipedia.fetch_summary("Cher", deadline)
        assert not isinstance(exc.value, PageNotFound)

    def test_bad_thumbnail_shape(self, upstream, deadline):
        upstream.pages["Cher"] = {"extract": "x", "thumbnail": {"width": 10}}
        with pytest.raises(UpstreamProtocolError):
            wikipedia.fetch_page_summary("Cher", deadline)

    def test_person_summary_has_thumbnail(self, upstream, deadline):
        upstream.pages["Mikey Madison"] = _page("Mikey Madison", "https://img/mikey.jpg")
        summary = wikipedia.fetch_person_summary("Mikey Madison", deadline)
        assert summary.thumbnail_url == "https://img/mikey.jpg"


class TestFetchFilmSummary:
    def test_bare_title_with_thumbnail(self, upstream, deadline):
        upstream.pages["Conclave"] = _page("Conclave", "https://img/conclave.jpg")

        summary = wikipedia.fetch_film_summary("Conclave", deadline)

        assert summary.thumbnail_url == "https://img/conclave.jpg"
        assert len(upstream.calls) == 1

    def test_film_suffix_preferred_when_bare_has_no_thumbnail(self, upstream, deadline):
        upstream.pages["Wicked"] = _page("Wicked")
        upstream.pages["Wicked (film)"] = _page("Wicked (film)", "https://img/wicked.jpg")

        summary = wikipedia.fetch_film_summary("Wicked", deadline)

        assert summary.title == "Wicked (film)"

    def test_year_suffix(self, upstream, deadline):
        upstream.pages["Flow (2024 film)"] = _page("Flow (2024 film)", "https://img/flow.jpg")

        summary = wikipedia.fetch_film_summary("Flow", deadline, film_year=2024)

        assert summary.title == "Flow (2024 film)"
        assert len(upstream.calls) == 3

    def test_first_resolved_variant_without_thumbnail(self, upstream, deadline):
        upstream.pages["Anora"] = _page("Anora")
        upstream.pages["Anora (film)"] = _page("Anora (film)")

        summary = wikipedia.fetch_film_summary("Anora", deadline, film_year=2024)

        assert summary.title == "Anora"
        assert summary.thumbnail is None

    def test_no_variant_resolves(self, upstream, deadline):
        with pytest.raises(PageNotFound):
            wikipedia.fetch_film_summary("Nothing", deadline)

    def test_server_errors_fall_through(self, upstream, deadline):
        upstream.pages["Flow"] = FakeResponse(503, {})
        upstream.pages["Flow (film)"] = _page("Flow (film)", "https://img/flow.jpg")

        assert wikipedia.fetch_film_summary("Flow", deadline).title == "Flow (film)"

    def test_expired_deadline_aborts(self, upstream):
        d = Deadline(30)
        d.cancel()
        with pytest.raises(DeadlineExceeded):
            wikipedia.fetch_film_summary("Flow", d)
