from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..facts.classifier import AwardType


class _Record(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class CelebrityRecord(_Record):
    id: uuid.UUID
    name: str
    slug: str
    photo_url: Optional[str] = None
    summary: Optional[str] = None
    last_updated: Optional[datetime] = None


class AwardRecord(_Record):
    id: uuid.UUID
    celebrity_id: uuid.UUID
    type: AwardType
    year: int
    work: str = ""
    category: str = ""
    is_winner: bool
    ceremony_date: Optional[date] = None
    is_upcoming: bool = False


class CelebrityWithAwards(CelebrityRecord):
    awards: List[AwardRecord] = Field(default_factory=list)


class CelebrityWithEGOTProgress(CelebrityRecord):
    egot_win_count: int
    won_awards: List[str] = Field(default_factory=list)  # e.g. ["Emmy", "Grammy", "Oscar"]


class OscarCeremonyRecord(_Record):
    id: uuid.UUID
    year: int
    ceremony_name: Optional[str] = None
    ceremony_date: Optional[date] = None
    is_complete: bool = False
    created_at: Optional[datetime] = None


class OscarCategoryRecord(_Record):
    id: uuid.UUID
    ceremony_id: uuid.UUID
    name: str
    display_order: int
    winner_announced: bool = False


class OscarNomineeRecord(_Record):
    id: uuid.UUID
    category_id: uuid.UUID
    celebrity_id: Optional[uuid.UUID] = None
    name: str
    photo_url: Optional[str] = None
    work_title: Optional[str] = None
    is_winner: bool = False
    display_order: int


class OscarCategoryWithNominees(OscarCategoryRecord):
    nominees: List[OscarNomineeRecord] = Field(default_factory=list)


class OscarCeremonyFull(OscarCeremonyRecord):
    categories: List[OscarCategoryWithNominees] = Field(default_factory=list)
