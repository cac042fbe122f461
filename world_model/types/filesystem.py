"""Virtual file system node models."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, Field

NodeType = Literal["file", "folder"]


class FileSystemNode(BaseModel):
    """File or folder in the in-memory tree."""

    id: str
    name: str
    type: NodeType
    path: str
    parent_id: str | None = None
    content: str | None = None
    extension: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    modified_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
