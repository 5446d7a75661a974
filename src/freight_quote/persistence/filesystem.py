"""File-based persistence helpers for quote records."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

from ..config import settings


class FileStorage:
    """Thin wrapper around the data root for storing JSON documents."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.output_root = self.root / "outputs"
        self.output_root.mkdir(parents=True, exist_ok=True)

    def collection(self, name: str) -> Path:
        path = self.output_root / name
        path.mkdir(parents=True, exist_ok=True)
        return path

    def write_json(self, path: Path, data: Any, *, indent: int = 2) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, ensure_ascii=False, indent=indent, default=str)

    def read_json(self, path: Path) -> Any:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)

    def iter_json(self, directory: Path) -> Iterator[Any]:
        for path in sorted(directory.glob("*.json")):
            yield self.read_json(path)
