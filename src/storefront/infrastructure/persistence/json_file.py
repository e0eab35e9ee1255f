"""Shared file handling for the JSON-backed repositories.

Read and write failures surface as LoadError so callers see one
retryable error type whatever went wrong with the file.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from storefront.domain.exceptions import LoadError


class JsonFile:

    def __init__(self, file_path: Path, empty: Any) -> None:
        self._file_path = file_path
        self._empty = empty
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    def load(self) -> Any:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return json.loads(json.dumps(self._empty))
        except (OSError, json.JSONDecodeError) as exc:
            raise LoadError(f"{self._file_path.name}: {exc}") from exc

    def persist(self, data: Any) -> None:
        try:
            self._file_path.write_text(
                json.dumps(data, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise LoadError(f"{self._file_path.name}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(json.dumps(self._empty), encoding="utf-8")
