from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .classifier import AwardType


# ---------------------------------------------------------------------
# WIKIDATA PAYLOADS
# ---------------------------------------------------------------------


class SearchResult(BaseModel):
    id: str
    label: str = ""
    description: str = ""


class SearchResponse(BaseModel):
    search: List[SearchResult] = Field(default_factory=list)


class AskResponse(BaseModel):
    boolean: bool


class SparqlValue(BaseModel):
    type: str = ""
    value: str = ""


class SparqlBinding(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    award: SparqlValue = Field(default_factory=SparqlValue)
    award_label: SparqlValue = Field(default_factory=SparqlValue, alias="awardLabel")
    year: SparqlValue = Field(default_factory=SparqlValue)
    work: SparqlValue = Field(default_factory=SparqlValue, alias="workLabel")
    image: SparqlValue = Field(default_factory=SparqlValue)
    person_label: SparqlValue = Field(default_factory=SparqlValue, alias="personLabel")


class SparqlResults(BaseModel):
    bindings: List[SparqlBinding] = Field(default_factory=list)


class SparqlResponse(BaseModel):
    results: SparqlResults


# ---------------------------------------------------------------------
# WIKIPEDIA PAYLOADS
# ---------------------------------------------------------------------


class Thumbnail(BaseModel):
    source: str


class PageSummary(BaseModel):
    title: str = ""
    extract: str = ""
    description: Optional[str] = None
    thumbnail: Optional[Thumbnail] = None

    @property
    def thumbnail_url(self) -> Optional[str]:
        return self.thumbnail.source if self.thumbnail else None


# ---------------------------------------------------------------------
# RESOLVED FACTS
# ---------------------------------------------------------------------


class PersonCandidate(BaseModel):
    wikidata_id: str
    name: str = ""
    description: str = ""


class PersonInfo(BaseModel):
    wikidata_id: str
    name: str = ""
    photo_url: Optional[str] = None


class WikidataAward(BaseModel):
    award_id: str
    award_name: str
    year: int = 0
    work: str = ""
    category: str = ""
    is_winner: bool = True  # P166 is "award received"


class NewAward(BaseModel):
    type: AwardType
    year: int = 0
    work: str = ""
    category: str = ""
    is_winner: bool = True
    ceremony_date: Optional[date] = None
    is_upcoming: bool = False


class NewCelebrity(BaseModel):
    name: str
    slug: str
    photo_url: Optional[str] = None
    summary: Optional[str] = None
