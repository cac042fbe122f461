"""SQLite persistence for desktop snapshots."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine, delete, select
from sqlalchemy.orm import Session, sessionmaker

from storage.schemas import (
    SNAPSHOT_ROW_ID,
    ApplicationRecord,
    Base,
    FileNodeRecord,
    SystemStateRecord,
)
from world_model.types.application import Application
from world_model.types.desktop import SystemState
from world_model.types.filesystem import FileSystemNode


class StateStore:
    """Saves and loads the desktop snapshot, app catalog and file tree."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.engine = create_engine(f"sqlite+pysqlite:///{self.db_path}", future=True)
        self._session_factory = sessionmaker(bind=self.engine, future=True)
        self.logger = logging.getLogger("fluxo.state_store")
        Base.metadata.create_all(self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Commit on success, roll back on error."""
        sess = self._session_factory()
        try:
            yield sess
            sess.commit()
        except Exception:
            sess.rollback()
            raise
        finally:
            sess.close()

    def save(self, state: SystemState) -> None:
        payload = state.model_dump(mode="json")
        with self.session() as sess:
            row = sess.get(SystemStateRecord, SNAPSHOT_ROW_ID)
            if row is None:
                row = SystemStateRecord(id=SNAPSHOT_ROW_ID, next_z_index=state.next_z_index)
                sess.add(row)
            row.windows = payload["windows"]
            row.desktop_icons = payload["desktop_icons"]
            row.next_z_index = state.next_z_index
            row.background = state.background
        self.logger.debug(
            "Saved snapshot: %d windows, next z=%s", len(state.windows), state.next_z_index
        )

    def load(self) -> SystemState | None:
        with self.session() as sess:
            row = sess.get(SystemStateRecord, SNAPSHOT_ROW_ID)
            if row is None:
                return None
            return SystemState.model_validate(
                {
                    "windows": row.windows or [],
                    "desktop_icons": row.desktop_icons or [],
                    "next_z_index": row.next_z_index,
                    "background": row.background,
                }
            )

    def save_apps(self, apps: list[Application]) -> None:
        with self.session() as sess:
            sess.execute(delete(ApplicationRecord))
            for position, app in enumerate(apps):
                sess.add(
                    ApplicationRecord(
                        id=app.id, position=position, payload=app.model_dump(mode="json")
                    )
                )

    def load_apps(self) -> list[Application] | None:
        with self.session() as sess:
            rows = sess.scalars(select(ApplicationRecord).order_by(ApplicationRecord.position)).all()
            if not rows:
                return None
            return [Application.model_validate(row.payload) for row in rows]

    def save_nodes(self, nodes: list[FileSystemNode]) -> None:
        with self.session() as sess:
            sess.execute(delete(FileNodeRecord))
            for position, node in enumerate(nodes):
                sess.add(
                    FileNodeRecord(
                        id=node.id,
                        position=position,
                        path=node.path,
                        payload=node.model_dump(mode="json"),
                    )
                )

    def load_nodes(self) -> list[FileSystemNode] | None:
        with self.session() as sess:
            rows = sess.scalars(select(FileNodeRecord).order_by(FileNodeRecord.position)).all()
            if not rows:
                return None
            return [FileSystemNode.model_validate(row.payload) for row in rows]

    def clear(self) -> None:
        with self.session() as sess:
            sess.execute(delete(SystemStateRecord))
            sess.execute(delete(ApplicationRecord))
            sess.execute(delete(FileNodeRecord))
