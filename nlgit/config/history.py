"""Operation history persistence for nlgit."""

import datetime
import json
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..constants import DEFAULT_HISTORY_LIMIT
from ..utils.logging import logger
from ..utils.helpers import atomic_write_json


@dataclass
class HistoryEntry:
    """Outcome of one top-level user request."""
    user_prompt: str
    git_commands: List[str]
    success: bool
    output: Optional[str] = None
    error: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(
        default_factory=lambda: datetime.datetime.now(datetime.timezone.utc).isoformat()
    )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "timestamp": self.timestamp,
            "userPrompt": self.user_prompt,
            "gitCommands": list(self.git_commands),
            "success": self.success,
        }
        if self.output is not None:
            data["output"] = self.output
        if self.error is not None:
            data["error"] = self.error
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryEntry":
        return cls(
            id=str(data.get("id", "")),
            timestamp=str(data.get("timestamp", "")),
            user_prompt=str(data.get("userPrompt", "")),
            git_commands=[str(c) for c in data.get("gitCommands", [])],
            success=bool(data.get("success", False)),
            output=data.get("output"),
            error=data.get("error"),
        )


class HistoryStore:
    """Append-only JSON history trimmed to the newest ``limit`` entries."""

    def __init__(self, history_file: Path, limit: int = DEFAULT_HISTORY_LIMIT):
        """Initialize history store.

        Args:
            history_file: Path to history.json
            limit: Number of entries kept on every write
        """
        self.history_file = history_file
        self.limit = limit

    def load(self) -> List[HistoryEntry]:
        """Load all entries, oldest first. Missing or corrupt files load as empty."""
        if not self.history_file.exists():
            return []

        try:
            with open(self.history_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Error reading {self.history_file} ({e}). Starting with empty history.")
            return []

        if not isinstance(data, list):
            logger.warning(f"{self.history_file} is not a JSON list. Starting with empty history.")
            return []

        return [HistoryEntry.from_dict(item) for item in data if isinstance(item, dict)]

    def save(self, entries: List[HistoryEntry]) -> bool:
        """Write entries, keeping only the newest ``limit`` of them."""
        trimmed = entries[-self.limit:] if self.limit > 0 else []
        return atomic_write_json(self.history_file, [entry.to_dict() for entry in trimmed])

    def add_entry(self, user_prompt: str, git_commands: List[str], success: bool,
                  output: Optional[str] = None, error: Optional[str] = None) -> HistoryEntry:
        """Append a new entry and persist the trimmed history."""
        entry = HistoryEntry(
            user_prompt=user_prompt,
            git_commands=list(git_commands),
            success=success,
            output=output,
            error=error,
        )
        entries = self.load()
        entries.append(entry)
        if self.save(entries):
            logger.debug(f"Recorded history entry {entry.id}")
        return entry

    def recent(self, count: int = 10) -> List[HistoryEntry]:
        """Newest ``count`` entries, newest first."""
        if count <= 0:
            return []
        return list(reversed(self.load()[-count:]))

    def get(self, entry_id: str) -> Optional[HistoryEntry]:
        """Find an entry by id."""
        for entry in self.load():
            if entry.id == entry_id:
                return entry
        return None

    def clear(self) -> bool:
        """Remove every entry."""
        return self.save([])

    def last_operations(self, count: int = 1) -> List[HistoryEntry]:
        """Most recent operations, newest first."""
        return self.recent(count)


def create_history_store(history_file: Path, limit: int = DEFAULT_HISTORY_LIMIT) -> HistoryStore:
    """Create a history store for the given file."""
    return HistoryStore(history_file, limit)
