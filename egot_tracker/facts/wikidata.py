from __future__ import annotations

from typing import Dict, List, Set, Tuple

from pydantic import ValidationError

from ..config.settings import settings
from ..errors import DeadlineExceeded, PersonNotFound, UpstreamError, UpstreamProtocolError
from ..utils.deadline import Deadline
from ..utils.http import get_json
from ..utils.logger import get_logger
from ..utils.slug import slugify

from .classifier import classify_award
from .models import (
    AskResponse,
    NewAward,
    NewCelebrity,
    PersonCandidate,
    PersonInfo,
    SearchResponse,
    SparqlResponse,
    WikidataAward,
)
from .wikipedia import fetch_summary

log = get_logger("wikidata")

SEARCH_LIMIT = 5

_SPARQL_HEADERS = {"Accept": "application/sparql-results+json"}

_ASK_EGOT_QUERY = """
ASK {{
  wd:{qid} wdt:P166 ?award .
  ?award rdfs:label ?label .
  FILTER(LANG(?label) = "en")
  FILTER(
    CONTAINS(LCASE(?label), "emmy") ||
    CONTAINS(LCASE(?label), "grammy") ||
    CONTAINS(LCASE(?label), "academy award") ||
    CONTAINS(LCASE(?label), "oscar") ||
    CONTAINS(LCASE(?label), "tony award")
  )
}}
"""

# All awards are returned; EGOT filtering happens in classify_award().
# Work: P1686 (for work), P1411 (nominated for), P972 (catalog).
_AWARDS_QUERY = """
SELECT DISTINCT ?personLabel ?image ?award ?awardLabel ?year ?workLabel WHERE {{
  wd:{qid} p:P166 ?statement .
  ?statement ps:P166 ?award .
  OPTIONAL {{ ?statement pq:P585 ?date . BIND(YEAR(?date) AS ?year) }}
  OPTIONAL {{ ?statement pq:P1686|pq:P1411|pq:P972 ?work . }}
  OPTIONAL {{ wd:{qid} wdt:P18 ?image }}
  SERVICE wikibase:label {{ bd:serviceParam wikibase:language "en" }}
}}
ORDER BY DESC(?year)
"""


def _sparql(query: str, deadline: Deadline) -> Dict:
    return get_json(
        settings.wikidata_sparql,
        deadline,
        params={"query": query, "format": "json"},
        headers=_SPARQL_HEADERS,
    )


def _parse_year(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        return 0


# ---------------------------------------------------------------------
# SEARCH + DISAMBIGUATION
# ---------------------------------------------------------------------


def search_candidates(name: str, deadline: Deadline) -> List[PersonCandidate]:
    data = get_json(
        settings.wikidata_api,
        deadline,
        params={
            "action": "wbsearchentities",
            "search": name,
            "language": "en",
            "type": "item",
            "limit": SEARCH_LIMIT,
            "format": "json",
        },
    )
    try:
        resp = SearchResponse.model_validate(data)
    except ValidationError as e:
        raise UpstreamProtocolError(f"Unexpected Wikidata search payload for: {name}") from e

    return [
        PersonCandidate(wikidata_id=r.id, name=r.label, description=r.description)
        for r in resp.search
    ]


def has_egot_awards(wikidata_id: str, deadline: Deadline) -> bool:
    data = _sparql(_ASK_EGOT_QUERY.format(qid=wikidata_id), deadline)
    try:
        return AskResponse.model_validate(data).boolean
    except ValidationError as e:
        raise UpstreamProtocolError(f"Unexpected ASK payload for {wikidata_id}") from e


def search_person(name: str, deadline: Deadline) -> PersonCandidate:
    """
    Rank-ordered candidates; the first one holding any EGOT-type award wins.
    Falls back to the top hit when nobody qualifies.
    """
    candidates = search_candidates(name, deadline)
    if not candidates:
        raise PersonNotFound(f"No Wikidata results found for: {name}")

    for candidate in candidates:
        try:
            if has_egot_awards(candidate.wikidata_id, deadline):
                return candidate
        except DeadlineExceeded:
            raise
        except UpstreamError as e:
            log.warning(f"Award check failed for {candidate.wikidata_id}, skipping: {e}")
            continue

    return candidates[0]


# ---------------------------------------------------------------------
# AWARDS
# ---------------------------------------------------------------------


def fetch_person_with_awards(
    wikidata_id: str, deadline: Deadline
) -> Tuple[PersonInfo, List[WikidataAward]]:
    data = _sparql(_AWARDS_QUERY.format(qid=wikidata_id), deadline)
    try:
        resp = SparqlResponse.model_validate(data)
    except ValidationError as e:
        raise UpstreamProtocolError(f"Unexpected SPARQL payload for {wikidata_id}") from e

    person = PersonInfo(wikidata_id=wikidata_id)
    awards: List[WikidataAward] = []
    seen: Set[Tuple[str, int]] = set()

    for b in resp.results.bindings:
        if not person.name and b.person_label.value:
            person.name = b.person_label.value
        if not person.photo_url and b.image.value:
            person.photo_url = b.image.value

        award_id = b.award.value
        year = _parse_year(b.year.value) if b.year.value else 0

        # Same award in different years are separate wins
        key = (award_id, year)
        if key in seen:
            continue
        seen.add(key)

        awards.append(
            WikidataAward(
                award_id=award_id,
                award_name=b.award_label.value,
                year=year,
                work=b.work.value,
                category=b.award_label.value,
                is_winner=True,
            )
        )

    return person, awards


def to_egot_awards(awards: List[WikidataAward]) -> List[NewAward]:
    out: List[NewAward] = []
    for wa in awards:
        award_type = classify_award(wa.award_name)
        if award_type is None:
            continue
        out.append(
            NewAward(
                type=award_type,
                year=wa.year,
                work=wa.work,
                category=wa.category,
                is_winner=wa.is_winner,
            )
        )
    return out


# ---------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------


def fetch_person(name: str, deadline: Deadline) -> Tuple[PersonInfo, List[WikidataAward]]:
    """Disambiguated entity and its raw awards, named by its Wikidata label."""
    candidate = search_person(name, deadline)

    person, raw_awards = fetch_person_with_awards(candidate.wikidata_id, deadline)
    if not person.name:
        person.name = candidate.name or name
    return person, raw_awards


def build_celebrity(
    person: PersonInfo, raw_awards: List[WikidataAward], deadline: Deadline
) -> Tuple[NewCelebrity, List[NewAward]]:
    # Wikipedia summary is required
    summary = fetch_summary(person.name, deadline)

    awards = to_egot_awards(raw_awards)
    log.info(
        f"Wikidata {person.wikidata_id} → {person.name}: "
        f"{len(raw_awards)} awards, {len(awards)} EGOT"
    )

    celebrity = NewCelebrity(
        name=person.name,
        slug=slugify(person.name),
        photo_url=person.photo_url or None,
        summary=summary or None,
    )
    return celebrity, awards


def fetch_celebrity(
    name: str, deadline: Deadline
) -> Tuple[NewCelebrity, List[NewAward]]:
    person, raw_awards = fetch_person(name, deadline)
    return build_celebrity(person, raw_awards, deadline)
