"""JSON file storage for tournament models."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any


class JsonStore:
    """A JSON document on disk holding every table of the tournament.

    The document has the shape ``{"models": [{"<Table>": [rows...], ...}]}``.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def load(self, object_name: str) -> Any:
        """Return the value stored under ``object_name``.

        A missing or empty file, or a document without that key, gives an
        empty list.  A file that is not valid JSON raises
        :class:`json.JSONDecodeError`.
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        if not text:
            return []
        document = json.loads(text)
        if isinstance(document, dict) and object_name in document:
            return document[object_name]
        return []

    def save(self, models: Any) -> None:
        """Write ``models`` back to the file under the ``"models"`` key."""
        text = json.dumps({"models": models}, indent=4, sort_keys=True, ensure_ascii=False)
        self.path.write_text(text, encoding="utf-8")