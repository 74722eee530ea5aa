"""A JSON document on disk, read whole and replaced atomically."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from storefront.domain.exceptions import UnexpectedError


class JsonFile:

    def __init__(self, file_path: Path, empty: str = "[]") -> None:
        self._file_path = file_path
        self._empty = empty

    @property
    def path(self) -> Path:
        return self._file_path

    def exists(self) -> bool:
        return self._file_path.exists()

    def read(self) -> Any:
        if not self._file_path.exists():
            return json.loads(self._empty)
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise UnexpectedError(f"Cannot read {self._file_path}: {exc}") from exc

    def write(self, data: Any) -> None:
        """Replace the file in one step so readers never see half a document."""
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._file_path.parent, prefix=f".{self._file_path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(json.dumps(data, indent=2) + "\n")
                os.replace(tmp_name, self._file_path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise UnexpectedError(f"Cannot write {self._file_path}: {exc}") from exc
