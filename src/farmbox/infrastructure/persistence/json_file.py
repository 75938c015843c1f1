"""Shared file helpers for the JSON-file repositories."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


class JsonFile:
    """A JSON document on disk, created with *empty* on first use."""

    def __init__(self, file_path: Path, empty: Any = None) -> None:
        self._file_path = file_path
        self._empty = [] if empty is None else empty
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    def load(self) -> Any:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def persist(self, data: Any) -> None:
        self._file_path.write_text(
            json.dumps(data, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self.persist(self._empty)
