from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class Celebrity(Base):
    __tablename__ = "celebrities"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    photo_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    awards: Mapped[List["Award"]] = relationship(
        back_populates="celebrity",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Celebrity(id={self.id}, name='{self.name}')>"


# One row per case-insensitive name; concurrent creates collide here.
Index("uq_celebrities_name_lower", func.lower(Celebrity.name), unique=True)


class Award(Base):
    __tablename__ = "awards"
    __table_args__ = (
        CheckConstraint(
            "type IN ('Emmy', 'Grammy', 'Oscar', 'Tony')", name="ck_awards_type"
        ),
        Index("idx_awards_celebrity", "celebrity_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    celebrity_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("celebrities.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    work: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_winner: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    ceremony_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    is_upcoming: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    celebrity: Mapped[Celebrity] = relationship(back_populates="awards")

    def __repr__(self) -> str:
        return f"<Award(type='{self.type}', year={self.year}, category='{self.category}')>"


class OscarCeremony(Base):
    __tablename__ = "oscar_ceremonies"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    year: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    ceremony_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    ceremony_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    is_complete: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    categories: Mapped[List["OscarCategory"]] = relationship(
        back_populates="ceremony",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OscarCategory.display_order",
    )


class OscarCategory(Base):
    __tablename__ = "oscar_categories"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    ceremony_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("oscar_ceremonies.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    winner_announced: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    ceremony: Mapped[OscarCeremony] = relationship(back_populates="categories")
    nominees: Mapped[List["OscarNominee"]] = relationship(
        back_populates="category",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OscarNominee.display_order",
    )


class OscarNominee(Base):
    __tablename__ = "oscar_nominees"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    category_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("oscar_categories.id", ondelete="CASCADE"), nullable=False
    )
    # Weak link: nominees never own the celebrity
    celebrity_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("celebrities.id"), nullable=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    photo_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    work_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    is_winner: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    category: Mapped[OscarCategory] = relationship(back_populates="nominees")
    celebrity: Mapped[Optional[Celebrity]] = relationship()
