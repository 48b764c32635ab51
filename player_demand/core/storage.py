"""File-backed store for completed pipeline runs, one JSON document per run."""

from __future__ import annotations

import json
import logging
import random
import string
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

from player_demand.core.models import Run

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_SUFFIX_LENGTH = 9
_RAW_DUMP_MARKER = "_raw_api"


class PersistenceError(RuntimeError):
    """Raised when a run cannot be written to disk."""


class ResultStore:
    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)
        self._issued: Set[str] = set()

    def _ensure_directory(self) -> None:
        if not self.directory.exists():
            self.directory.mkdir(parents=True, exist_ok=True)
            logger.info("Created data storage directory: %s", self.directory)

    def path_for(self, run_id: str) -> Path:
        return self.directory / f"{run_id}.json"

    def new_id(self, test_type: str) -> str:
        while True:
            suffix = "".join(random.choices(_ID_ALPHABET, k=_ID_SUFFIX_LENGTH))
            run_id = f"{test_type}_{int(time.time() * 1000)}_{suffix}"
            if run_id not in self._issued and not self.path_for(run_id).exists():
                self._issued.add(run_id)
                return run_id

    def save(self, run: Run) -> str:
        """Persist `run`, assigning its id when it has none, and return the id."""
        run_id = run.id
        try:
            self._ensure_directory()
            run_id = run_id or self.new_id(run.test_type)
            payload = run.to_dict()
            payload["id"] = run_id
            path = self.path_for(run_id)
            with path.open("w", encoding="utf-8") as fh:
                json.dump(payload, fh, ensure_ascii=False, indent=2)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Failed to save run %s: %s", run_id or run.test_type, exc)
            raise PersistenceError(f"could not save run: {exc}") from exc

        run.id = run_id
        logger.info("Saved run %s to %s", run_id, path)
        return run_id

    def get(self, run_id: str) -> Optional[Run]:
        if not run_id or "/" in run_id or "\\" in run_id or run_id.startswith("."):
            return None
        path = self.path_for(run_id)
        if not path.is_file():
            return None
        return self._load(path)

    def list_all(self) -> List[Run]:
        """Every stored run, newest first. Files that are not runs are skipped."""
        if not self.directory.is_dir():
            return []

        runs: List[Run] = []
        for path in sorted(self.directory.glob("*.json")):
            if _RAW_DUMP_MARKER in path.name:
                continue
            run = self._load(path)
            if run is not None:
                runs.append(run)

        runs.sort(key=_timestamp_key, reverse=True)
        return runs

    def files(self) -> List[Dict[str, Any]]:
        """Every file in the storage directory with a type label, for inspection tools."""
        if not self.directory.is_dir():
            return []

        entries: List[Dict[str, Any]] = []
        for path in sorted(self.directory.iterdir()):
            if not path.is_file():
                continue
            stats = path.stat()
            entries.append(
                {
                    "file": path.name,
                    "type": _file_type(path.name),
                    "size_kb": round(stats.st_size / 1024, 1),
                    "modified": datetime.fromtimestamp(stats.st_mtime, tz=timezone.utc).isoformat(),
                }
            )
        return entries

    def _load(self, path: Path) -> Optional[Run]:
        try:
            with path.open("r", encoding="utf-8") as fh:
                payload = json.load(fh)
        except (OSError, ValueError) as exc:
            logger.warning("Skipping unreadable result file %s: %s", path.name, exc)
            return None

        if not isinstance(payload, dict) or not _is_text(payload.get("id")) or not _is_text(payload.get("timestamp")):
            logger.debug("Skipping %s: not a stored run", path.name)
            return None
        try:
            return Run.from_dict(payload)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed run file %s: %s", path.name, exc)
            return None


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def _timestamp_key(run: Run) -> datetime:
    try:
        parsed = datetime.fromisoformat(run.timestamp.replace("Z", "+00:00"))
    except ValueError:
        return datetime.min.replace(tzinfo=timezone.utc)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _file_type(name: str) -> str:
    if _RAW_DUMP_MARKER in name:
        return "Raw API Data"
    if name.endswith(".json"):
        return "Processed Results"
    return "Unknown"
