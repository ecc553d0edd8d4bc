# -*- coding: utf-8 -*-
"""Location: ./modtranscoder/persistence.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Document load/save collaborators.

Reading and writing the binary asset formats happens elsewhere; transcoder
sessions only see a ``DocumentStore`` that hands out the canonical document as
a JSON-shaped dict and accepts one back. Errors raised by a store propagate
untouched to the caller.

Two reference stores are provided: ``InMemoryDocumentStore`` for tests and
embedding, and ``JsonFileDocumentStore`` which treats the handle as a path to a
JSON file.

Examples:
    >>> store = InMemoryDocumentStore({"a": {"Name": "x"}})
    >>> store.load("a")
    {'Name': 'x'}
    >>> store.save("b", {"Name": "y"})
    >>> sorted(store.documents)
    ['a', 'b']
"""

# Standard
import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, runtime_checkable

# Third-Party
import orjson

logger = logging.getLogger(__name__)


@runtime_checkable
class DocumentStore(Protocol):
    """Load and save canonical documents by an opaque handle."""

    def load(self, handle: str) -> Dict[str, Any]:
        """Return the canonical document stored under ``handle``.

        Args:
            handle: Opaque document identifier (a path, a key ...).

        Returns:
            Dict[str, Any]: JSON-shaped document.
        """
        ...  # pragma: no cover

    def save(self, handle: str, data: Dict[str, Any]) -> None:
        """Persist a canonical document under ``handle``.

        Args:
            handle: Opaque document identifier.
            data: JSON-shaped document.
        """
        ...  # pragma: no cover


class InMemoryDocumentStore:
    """Dict-backed store; loads and saves deep copies."""

    def __init__(self, documents: Optional[Dict[str, Dict[str, Any]]] = None):
        self.documents: Dict[str, Dict[str, Any]] = dict(documents or {})

    def load(self, handle: str) -> Dict[str, Any]:
        """Return a copy of the stored document.

        Args:
            handle: Key of the document.

        Returns:
            Dict[str, Any]: Deep copy of the document.

        Raises:
            KeyError: If nothing is stored under ``handle``.
        """
        return copy.deepcopy(self.documents[handle])

    def save(self, handle: str, data: Dict[str, Any]) -> None:
        """Store a copy of ``data``.

        Args:
            handle: Key of the document.
            data: Document to store.
        """
        self.documents[handle] = copy.deepcopy(data)


class JsonFileDocumentStore:
    """Store that reads and writes JSON files, with paths as handles.

    Args:
        base_dir: Directory relative handles are resolved against.
    """

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = Path(base_dir) if base_dir is not None else None

    def _resolve(self, handle: str) -> Path:
        path = Path(handle)
        if self.base_dir is not None and not path.is_absolute():
            path = self.base_dir / path
        return path

    def load(self, handle: str) -> Dict[str, Any]:
        """Read and decode a JSON document.

        Args:
            handle: File path.

        Returns:
            Dict[str, Any]: Decoded document.

        Raises:
            FileNotFoundError: If the file does not exist.
            orjson.JSONDecodeError: If the file is not valid JSON.
        """
        path = self._resolve(handle)
        with open(path, "rb") as f:
            data = orjson.loads(f.read())
        logger.debug("Loaded document from %s", path)
        return data

    def save(self, handle: str, data: Dict[str, Any]) -> None:
        """Encode and write a JSON document, creating parent directories.

        Args:
            handle: File path.
            data: Document to write.
        """
        path = self._resolve(handle)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            f.write(orjson.dumps(data, option=orjson.OPT_INDENT_2))
        logger.info("Saved document to %s", path)
