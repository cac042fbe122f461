"""SQLAlchemy schema for the persisted desktop snapshot."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

SNAPSHOT_ROW_ID = 1


def utc_now() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Declarative base."""


class SystemStateRecord(Base):
    """Single-row table holding the latest desktop snapshot."""

    __tablename__ = "system_state"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SNAPSHOT_ROW_ID)
    windows: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    desktop_icons: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    next_z_index: Mapped[int] = mapped_column(Integer)
    background: Mapped[str | None] = mapped_column(String(128), nullable=True)
    saved_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )


class ApplicationRecord(Base):
    """Application catalog entry, stored as its descriptor payload."""

    __tablename__ = "applications"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, default=0)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)


class FileNodeRecord(Base):
    """Virtual file system node, stored as its model payload."""

    __tablename__ = "file_nodes"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, default=0)
    path: Mapped[str] = mapped_column(String(1024), index=True)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
