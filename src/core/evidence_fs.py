from __future__ import annotations

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO, Iterator, List

from .logging import get_logger

LOGGER = get_logger("core.evidence_fs")


class EvidenceFS(ABC):
    """Abstract read-only view over a user profile tree."""

    @abstractmethod
    def open_for_read(self, path: str) -> BinaryIO:
        """Return a binary file-like object for the specified path."""

    @abstractmethod
    def walk_directory(self, dir_path: str) -> Iterator[str]:
        """
        Walk a specific directory and yield all file paths within it.

        Args:
            dir_path: Path to directory to walk

        Yields:
            Normalized file paths (files only, not directories). Nothing is
            yielded when the directory does not exist.
        """

    @property
    def source_name(self) -> str:
        """Label recorded as the source of findings read from this filesystem."""
        return ""

    def read_file(self, path: str) -> bytes:
        """
        Read entire file content as bytes.

        Convenience wrapper around open_for_read().
        """
        with self.open_for_read(path) as f:
            return f.read()

    def list_files(self, dir_path: str, suffix: str) -> List[str]:
        """
        Return files directly or recursively under ``dir_path`` whose name ends
        with ``suffix`` (case-insensitive), sorted for stable output.
        """
        suffix = suffix.lower()
        return sorted(
            path for path in self.walk_directory(dir_path)
            if path.lower().endswith(suffix)
        )


class MountedFS(EvidenceFS):
    """Evidence filesystem wrapper for a locally mounted read-only path."""

    def __init__(self, mount_point: Path) -> None:
        if not mount_point.exists():
            raise FileNotFoundError(f"Mount point {mount_point} does not exist.")
        self.mount_point = mount_point
        LOGGER.info("MountedFS bound to %s", mount_point)

    def open_for_read(self, path: str) -> BinaryIO:
        resolved = self._resolve_under_mount(path)
        if not resolved.is_file():
            raise FileNotFoundError(f"Path {path} not found under mount {self.mount_point}.")
        LOGGER.debug("Opening %s for read (MountedFS)", resolved)
        return resolved.open("rb")

    def walk_directory(self, dir_path: str) -> Iterator[str]:
        resolved = self._resolve_under_mount(dir_path)
        if not resolved.is_dir():
            LOGGER.debug("walk_directory: Directory not found: %s", dir_path)
            return

        base = self.mount_point.resolve()
        for root, _dirs, files in os.walk(resolved):
            for name in files:
                full_path = os.path.join(root, name)
                rel_path = os.path.relpath(full_path, base)
                # Normalize separators to forward slashes
                yield rel_path.replace(os.sep, "/")

    def _resolve_under_mount(self, path: str) -> Path:
        """
        Resolve a user-provided path and enforce mount root confinement.

        This prevents path traversal such as '../..' from escaping the mounted
        evidence root.
        """
        base = self.mount_point.resolve()
        resolved = (self.mount_point / path).resolve()
        try:
            resolved.relative_to(base)
        except ValueError as exc:
            raise ValueError(
                f"Path traversal attempt: {path!r} resolves outside mount {self.mount_point}"
            ) from exc
        return resolved

    @property
    def source_name(self) -> str:
        return str(self.mount_point)
