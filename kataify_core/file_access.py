"""
File Access - Pluggable storage backends for the batch kataifier

The batch driver never touches the filesystem itself. It is handed an object
satisfying FileAccessProtocol and only ever calls ``read`` and ``write`` on it:

- LocalFileAccess - local disk, blocking I/O pushed to worker threads
- InMemoryFileAccess - dict-backed store for tests and previews
- DryRunFileAccess - reads through another backend, keeps writes in memory

Author: Kataify maintainers | 2026-10-18
"""

import asyncio
import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Tuple, Union, runtime_checkable

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class KataifyError(Exception):
    """Base class for all kataify errors."""


class ReadError(KataifyError):
    """A source file could not be read."""

    def __init__(self, path: PathLike, reason: str = ""):
        self.path = str(path)
        self.reason = reason
        message = f"Cannot read {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class WriteError(KataifyError):
    """A destination file could not be written."""

    def __init__(self, path: PathLike, reason: str = ""):
        self.path = str(path)
        self.reason = reason
        message = f"Cannot write {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


@runtime_checkable
class FileAccessProtocol(Protocol):
    """
    Protocol defining the file access capability.

    Implementations own their own locking and cancellation discipline.
    """

    async def read(self, path: str) -> str:
        """
        Read the content of a file.

        Raises:
            ReadError: If the path is inaccessible
        """
        ...

    async def write(self, path: str, content: str) -> None:
        """
        Write content to a file.

        Raises:
            WriteError: If the destination cannot be written
        """
        ...


# Short alias used in signatures
FileAccess = FileAccessProtocol


class LocalFileAccess:
    """
    Local filesystem backend.

    Relative paths are resolved against ``root`` when one is given, otherwise
    against the current directory. Line breaks are read and written as they
    are, so ``\\r\\n`` files keep their endings.
    """

    def __init__(
        self,
        root: Optional[PathLike] = None,
        encoding: str = "utf-8",
        create_dirs: bool = True,
    ):
        """
        Initialize local file access.

        Args:
            root: Base directory for relative paths
            encoding: Text encoding used for reading and writing
            create_dirs: Create missing parent directories on write
        """
        self.root = Path(root) if root is not None else None
        self.encoding = encoding
        self.create_dirs = create_dirs

    def resolve(self, path: PathLike) -> Path:
        """Resolve a path against the root directory."""
        p = Path(path)
        if self.root is not None and not p.is_absolute():
            p = self.root / p
        return p

    def _read_sync(self, path: PathLike) -> str:
        target = self.resolve(path)
        try:
            with open(target, "r", encoding=self.encoding, newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(path, str(e)) from e

    def _write_sync(self, path: PathLike, content: str) -> None:
        target = self.resolve(path)
        try:
            if self.create_dirs:
                target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "w", encoding=self.encoding, newline="") as f:
                f.write(content)
        except (OSError, UnicodeEncodeError) as e:
            raise WriteError(path, str(e)) from e

    async def read(self, path: str) -> str:
        logger.debug(f"Reading {path}")
        return await asyncio.to_thread(self._read_sync, path)

    async def write(self, path: str, content: str) -> None:
        logger.debug(f"Writing {path} ({len(content)} chars)")
        await asyncio.to_thread(self._write_sync, path, content)


class InMemoryFileAccess:
    """
    Dict-backed file store.

    Every call is recorded in order, which makes it usable as a spy:
    ``reads`` holds the paths read, ``writes`` the (path, content) pairs.
    """

    def __init__(self, files: Optional[Dict[str, str]] = None):
        self.files: Dict[str, str] = dict(files or {})
        self.reads: List[str] = []
        self.writes: List[Tuple[str, str]] = []

    async def read(self, path: str) -> str:
        self.reads.append(path)
        if path not in self.files:
            raise ReadError(path, "no such file")
        return self.files[path]

    async def write(self, path: str, content: str) -> None:
        self.writes.append((path, content))
        self.files[path] = content


class DryRunFileAccess:
    """
    Read through another backend and keep writes in memory.

    Used for previews: nothing is ever written to the inner backend.
    """

    def __init__(self, inner: FileAccessProtocol):
        self.inner = inner
        self.writes: Dict[str, str] = {}

    async def read(self, path: str) -> str:
        return await self.inner.read(path)

    async def write(self, path: str, content: str) -> None:
        logger.info(f"[dry-run] would write {path} ({len(content)} chars)")
        self.writes[path] = content
