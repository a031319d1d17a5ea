# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
FileSnapshotBackend for the TraceWise SDK

Persists snapshots in a single JSON document so that the last known
subscription state survives process restarts, the way mobile SDKs keep it
in platform preference storage.
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from .base import DEFAULT_NAMESPACE, HealthCheckResult, SnapshotBackend

logger = logging.getLogger(__name__)


class FileSnapshotBackend(SnapshotBackend):
    """
    A JSON file snapshot backend.

    The whole document is rewritten on every write through a temporary file
    and ``os.replace``, so readers in other processes never observe a
    half-written file. Blocking file I/O runs in a worker thread.

    Args:
        path: Location of the JSON document. Parent directories are created
            on first write.
        namespace: Namespace for key isolation inside the document
    """

    backend_type = "file"

    def __init__(self, path: str | Path, namespace: str = DEFAULT_NAMESPACE) -> None:
        super().__init__(namespace)
        self.path = Path(path).expanduser()
        self._lock = asyncio.Lock()

    def _read_document(self) -> dict[str, Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except UnicodeDecodeError as e:
            logger.warning(f"Ignoring snapshot file {self.path}: not UTF-8 text ({e})")
            return {}
        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable snapshot file {self.path}: {e}")
            return {}
        if not isinstance(document, dict):
            logger.warning(f"Ignoring snapshot file {self.path}: not a JSON object")
            return {}
        return document

    def _write_document(self, document: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(document, fh, sort_keys=True)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    async def get_state(self, key: str) -> dict[str, Any] | None:
        async with self._lock:
            document = await asyncio.to_thread(self._read_document)
        state = document.get(self._key(key))
        return state if isinstance(state, dict) else None

    async def set_state(self, key: str, state: dict[str, Any]) -> None:
        async with self._lock:
            document = await asyncio.to_thread(self._read_document)
            document[self._key(key)] = state
            await asyncio.to_thread(self._write_document, document)

    async def delete_state(self, key: str) -> None:
        async with self._lock:
            document = await asyncio.to_thread(self._read_document)
            if document.pop(self._key(key), None) is not None:
                await asyncio.to_thread(self._write_document, document)

    async def clear(self) -> None:
        prefix = f"{self.namespace}:"
        async with self._lock:
            document = await asyncio.to_thread(self._read_document)
            remaining = {k: v for k, v in document.items() if not k.startswith(prefix)}
            if len(remaining) != len(document):
                await asyncio.to_thread(self._write_document, remaining)

    async def health_check(self) -> HealthCheckResult:
        directory = self.path.parent
        writable = os.access(directory if directory.exists() else Path.cwd(), os.W_OK)
        return HealthCheckResult(
            healthy=writable,
            backend_type=self.backend_type,
            namespace=self.namespace,
            error=None if writable else f"{directory} is not writable",
            metadata={"path": str(self.path), "exists": self.path.exists()},
        )


__all__ = ["FileSnapshotBackend"]
