"""
Batch Kataifier - Kataify many files concurrently

Each FileMapping names a source file and the destination its kata goes to.
Every mapping runs as its own task: read, kataify, write. Mappings share no
state, so they are gathered concurrently; the batch completes only once all
of them have finished.

Two entry points:
- kataify() - raises the first failure after the whole batch has run
- KataifyExecutor.execute() - never raises, returns a KataifyResult report

Author: Kataify maintainers | 2026-10-18
"""

import asyncio
import json
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .file_access import FileAccessProtocol
from .kataifier import KataMode, kataify_file

logger = logging.getLogger(__name__)


class KataifyExitCode(int, Enum):
    """Exit codes for batch kataification."""

    SUCCESS = 0
    FAILURE = 1
    PARTIAL_SUCCESS = 2
    CONFIGURATION_ERROR = 10
    EXECUTION_ERROR = 20


class MappingStatus(str, Enum):
    """Outcome of a single mapping."""

    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class FileMapping:
    """A source file and the destination of its kata."""

    source_filename: str
    destination_filename: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileMapping":
        """
        Build a mapping from a dict.

        Accepts ``source_filename``/``destination_filename`` as well as
        ``sourceFilename``/``destinationFilename``.
        """
        source = data.get("source_filename", data.get("sourceFilename"))
        destination = data.get("destination_filename", data.get("destinationFilename"))
        if source is None or destination is None:
            raise ValueError(f"Mapping needs a source and a destination filename: {data!r}")
        return cls(str(source), str(destination))

    def to_dict(self) -> Dict[str, str]:
        return {
            "source_filename": self.source_filename,
            "destination_filename": self.destination_filename,
        }


@dataclass
class MappingResult:
    """Result of kataifying one mapping."""

    mapping: FileMapping
    status: MappingStatus
    duration: float = 0.0
    lines_in: int = 0
    lines_out: int = 0
    error: Optional[str] = None
    exception: Optional[BaseException] = field(default=None, repr=False, compare=False)

    @property
    def success(self) -> bool:
        return self.status == MappingStatus.COMPLETED

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.mapping.to_dict(),
            "status": self.status.value,
            "duration": self.duration,
            "lines_in": self.lines_in,
            "lines_out": self.lines_out,
            "error": self.error,
        }


@dataclass
class KataifyResult:
    """Result of a batch run."""

    start_time: datetime
    end_time: datetime
    mapping_results: List[MappingResult]
    exit_code: KataifyExitCode
    dry_run: bool = False

    @property
    def duration(self) -> float:
        """Total execution duration in seconds."""
        return (self.end_time - self.start_time).total_seconds()

    @property
    def success(self) -> bool:
        return self.exit_code == KataifyExitCode.SUCCESS

    @property
    def completed(self) -> List[MappingResult]:
        return [r for r in self.mapping_results if r.status == MappingStatus.COMPLETED]

    @property
    def failed(self) -> List[MappingResult]:
        return [r for r in self.mapping_results if r.status == MappingStatus.FAILED]

    @property
    def skipped(self) -> List[MappingResult]:
        return [r for r in self.mapping_results if r.status == MappingStatus.SKIPPED]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "duration": self.duration,
            "dry_run": self.dry_run,
            "total_files": len(self.mapping_results),
            "completed_files": len(self.completed),
            "failed_files": len(self.failed),
            "skipped_files": len(self.skipped),
            "exit_code": self.exit_code.value,
            "files": [r.to_dict() for r in self.mapping_results],
        }

    def save_json(self, path: Path):
        """Save results to JSON file."""
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    def print_summary(self):
        """Print human-readable summary."""
        title = "Kataify Summary (dry run)" if self.dry_run else "Kataify Summary"
        print(f"\n{'=' * 60}")
        print(title)
        print(f"{'=' * 60}")
        print(f"Duration: {self.duration:.2f}s")
        print(f"Files: {len(self.mapping_results)} total, "
              f"{len(self.completed)} kataified, "
              f"{len(self.failed)} failed, "
              f"{len(self.skipped)} skipped")
        print(f"Exit Code: {self.exit_code.name} ({self.exit_code.value})")
        print(f"{'=' * 60}\n")

        for r in self.mapping_results:
            status_icon = {"completed": "✅", "failed": "❌", "skipped": "⏭"}[r.status.value]
            print(f"{status_icon} {r.mapping.source_filename} -> {r.mapping.destination_filename}")
            if r.success:
                print(f"   Lines: {r.lines_in} -> {r.lines_out}")
            elif r.error:
                print(f"   Error: {r.error}")
        print()


class MappingSkipped(Exception):
    """A mapping was abandoned before its write because the batch stopped."""


async def kataify_mapping(
    mapping: FileMapping,
    file_access: FileAccessProtocol,
    mode: KataMode = KataMode.NEXT_LINE,
    stop: Optional[asyncio.Event] = None,
) -> MappingResult:
    """
    Read, kataify and write a single mapping.

    Failures from the file access are not caught here. When ``stop`` is set
    by the time the read completes, nothing is written and MappingSkipped
    is raised.

    Returns:
        MappingResult with status COMPLETED
    """
    start = time.monotonic()
    content = await file_access.read(mapping.source_filename)
    if stop is not None and stop.is_set():
        raise MappingSkipped(mapping.source_filename)
    kata = kataify_file(content, mode)
    await file_access.write(mapping.destination_filename, kata)

    logger.debug(f"Kataified {mapping.source_filename} -> {mapping.destination_filename}")
    return MappingResult(
        mapping=mapping,
        status=MappingStatus.COMPLETED,
        duration=time.monotonic() - start,
        lines_in=content.count("\n") + 1 if content else 0,
        lines_out=kata.count("\n") + 1 if kata else 0,
    )


class KataifyExecutor:
    """
    Executor for batch kataification.

    Runs one task per mapping, optionally bounded by ``max_parallel``,
    records a MappingResult for each and derives the exit code.
    """

    def __init__(
        self,
        file_access: FileAccessProtocol,
        mode: KataMode = KataMode.NEXT_LINE,
        max_parallel: Optional[int] = None,
        fail_fast: bool = False,
        verbose: bool = False,
    ):
        """
        Initialize batch executor.

        Args:
            file_access: Backend used for every read and write
            mode: Which lines each kata line replaces
            max_parallel: Max mappings in flight (None = unbounded)
            fail_fast: Skip mappings not yet started after the first failure
            verbose: Log failures with tracebacks
        """
        if max_parallel is not None and max_parallel < 1:
            raise ValueError(f"max_parallel must be >= 1, got {max_parallel}")
        self.file_access = file_access
        self.mode = KataMode(mode)
        self.max_parallel = max_parallel
        self.fail_fast = fail_fast
        self.verbose = verbose

    async def execute(self, mappings: Iterable[FileMapping]) -> KataifyResult:
        """
        Kataify all mappings.

        Returns:
            KataifyResult with one MappingResult per mapping, in mapping order
        """
        mappings = list(mappings)
        start_time = datetime.now()

        if not mappings:
            logger.info("No files to kataify")
            return KataifyResult(
                start_time=start_time,
                end_time=datetime.now(),
                mapping_results=[],
                exit_code=KataifyExitCode.SUCCESS,
            )

        logger.info(f"Kataifying {len(mappings)} file(s) [mode={self.mode.value}]")

        semaphore = asyncio.Semaphore(self.max_parallel) if self.max_parallel else None
        stop = asyncio.Event()

        async def bounded_task(mapping: FileMapping) -> MappingResult:
            if semaphore is None:
                return await self._run_one(mapping, stop)
            async with semaphore:
                return await self._run_one(mapping, stop)

        results = await asyncio.gather(*[bounded_task(m) for m in mappings])

        completed = sum(1 for r in results if r.status == MappingStatus.COMPLETED)
        failed = sum(1 for r in results if r.status == MappingStatus.FAILED)

        if failed == 0 and completed == len(results):
            exit_code = KataifyExitCode.SUCCESS
        elif completed == 0:
            exit_code = KataifyExitCode.FAILURE
        else:
            exit_code = KataifyExitCode.PARTIAL_SUCCESS

        result = KataifyResult(
            start_time=start_time,
            end_time=datetime.now(),
            mapping_results=list(results),
            exit_code=exit_code,
        )
        logger.info(
            f"Kataify completed: {exit_code.name} "
            f"({completed} kataified, {failed} failed, {len(result.skipped)} skipped)"
        )
        return result

    async def _run_one(self, mapping: FileMapping, stop: asyncio.Event) -> MappingResult:
        if stop.is_set():
            logger.debug(f"Skipping {mapping.source_filename} (fail-fast)")
            return MappingResult(mapping=mapping, status=MappingStatus.SKIPPED)

        start = time.monotonic()
        try:
            return await kataify_mapping(mapping, self.file_access, self.mode, stop)
        except MappingSkipped:
            logger.debug(f"Skipping {mapping.source_filename} after read (fail-fast)")
            return MappingResult(
                mapping=mapping,
                status=MappingStatus.SKIPPED,
                duration=time.monotonic() - start,
            )
        except Exception as e:
            logger.error(f"❌ {mapping.source_filename}: {e}", exc_info=self.verbose)
            if self.fail_fast:
                stop.set()
            return MappingResult(
                mapping=mapping,
                status=MappingStatus.FAILED,
                duration=time.monotonic() - start,
                error=str(e),
                exception=e,
            )


async def kataify(
    mappings: Sequence[FileMapping],
    file_access: FileAccessProtocol,
    mode: KataMode = KataMode.NEXT_LINE,
    max_parallel: Optional[int] = None,
) -> None:
    """
    Kataify every mapping, reading and writing through ``file_access``.

    An empty sequence makes no file access calls at all. All mappings run
    to completion even when some fail; the first failure (in mapping order)
    is then re-raised as it was raised by the file access.

    Args:
        mappings: Source/destination pairs
        file_access: Backend providing read and write
        mode: Which lines each kata line replaces
        max_parallel: Max mappings in flight (None = unbounded)
    """
    if not mappings:
        return

    executor = KataifyExecutor(file_access, mode=mode, max_parallel=max_parallel)
    result = await executor.execute(mappings)

    failures = result.failed
    if failures:
        if len(failures) > 1:
            logger.warning(f"{len(failures)} files failed, raising the first one")
        raise failures[0].exception


def run_kataify_sync(
    mappings: Iterable[FileMapping],
    file_access: FileAccessProtocol,
    mode: KataMode = KataMode.NEXT_LINE,
    max_parallel: Optional[int] = None,
    fail_fast: bool = False,
    verbose: bool = False,
) -> KataifyResult:
    """
    Synchronous wrapper for batch kataification.

    Returns:
        KataifyResult
    """
    executor = KataifyExecutor(
        file_access,
        mode=mode,
        max_parallel=max_parallel,
        fail_fast=fail_fast,
        verbose=verbose,
    )
    return asyncio.run(executor.execute(mappings))
