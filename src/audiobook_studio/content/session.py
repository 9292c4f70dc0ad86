"""JSON file storage for saved sessions."""

from pathlib import Path
from typing import Optional

from loguru import logger
from pydantic import ValidationError

from .models import SavedSession


class SessionStore:
    """Stores one ``SavedSession`` per JSON file in a directory."""

    def __init__(self, directory: Path):
        self.directory = directory

    def path_for(self, session_id: str) -> Path:
        return self.directory / f"{session_id}.json"

    def save(self, session: SavedSession) -> Path:
        """Write a session, updating its last-modified time."""
        path = save_session_file(session, self.path_for(session.id))
        logger.debug(f"Saved session {session.id} to {path}")
        return path

    def load(self, session_id: str) -> Optional[SavedSession]:
        """Load a session by id, or None when it does not exist."""
        path = self.path_for(session_id)
        if not path.exists():
            return None
        return load_session_file(path)

    def list_sessions(self) -> list[SavedSession]:
        """All readable sessions, most recently modified first.

        Files that fail validation are skipped with a warning.
        """
        sessions = []
        if not self.directory.exists():
            return sessions
        for path in self.directory.glob("*.json"):
            try:
                sessions.append(load_session_file(path))
            except ValidationError as e:
                logger.warning(f"Skipping unreadable session file {path}: {e}")
        return sorted(sessions, key=lambda s: s.last_modified, reverse=True)

    def delete(self, session_id: str) -> bool:
        path = self.path_for(session_id)
        if path.exists():
            path.unlink()
            return True
        return False


def load_session_file(path: Path) -> SavedSession:
    """Load a session from a JSON file."""
    return SavedSession.model_validate_json(path.read_text(encoding="utf-8"))


def save_session_file(session: SavedSession, path: Path) -> Path:
    """Write a session to an explicit file path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    session.touch()
    path.write_text(session.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
    return path
