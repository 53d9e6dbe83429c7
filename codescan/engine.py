"""Scan orchestration: walk the tree, load each file once, apply every rule."""

from __future__ import annotations

import logging
import threading
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Deque, Iterable, List, Optional

from .registry import RuleRegistry
from .result import FILE_UNREADABLE, MARKUP_PARSE_FAILURE, Diagnostic, Finding, ScanResult
from .rules import Rule, ScanTarget
from .utils import iter_tree, read_text_file
from .utils.walk import WalkEntry

logger = logging.getLogger(__name__)


@dataclass
class FileBatch:
    """Everything one file contributed to the scan."""

    findings: List[Finding] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)


class ScanEngine:
    """Apply a rule registry to every file under a root directory.

    With ``workers > 1`` files are scanned on a thread pool; per-file batches
    are merged back in discovery order, so the output is identical to a
    sequential scan.
    """

    def __init__(
        self,
        registry: RuleRegistry,
        workers: int = 1,
        exclude: Iterable[str] = (),
        strict_markup: bool = False,
    ) -> None:
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self.registry = registry
        self.workers = workers
        self.exclude = tuple(exclude)
        self.strict_markup = strict_markup

    def scan(self, root: Path, cancel: Optional[threading.Event] = None) -> ScanResult:
        result = ScanResult()
        walk_errors: List[Diagnostic] = []

        def on_walk_error(path: Path, exc: OSError) -> None:
            walk_errors.append(Diagnostic(FILE_UNREADABLE, _relative(root, path), str(exc)))

        entries = iter_tree(Path(root), exclude=self.exclude, on_error=on_walk_error)
        logger.info("Scanning %s with %d rule(s)", root, len(self.registry))

        if self.workers == 1:
            for entry in entries:
                if _is_cancelled(cancel):
                    result.cancelled = True
                    break
                self._merge(result, self.scan_file(entry))
        else:
            self._scan_parallel(entries, result, cancel)

        for diagnostic in walk_errors:
            logger.warning("%s: %s (%s)", diagnostic.kind, diagnostic.file, diagnostic.message)
        result.diagnostics.extend(walk_errors)
        logger.info(
            "Scanned %d file(s): %d finding(s), %d diagnostic(s)%s",
            result.files_scanned,
            len(result.findings),
            len(result.diagnostics),
            " (cancelled)" if result.cancelled else "",
        )
        return result

    def scan_file(self, entry: WalkEntry) -> FileBatch:
        """Load one file and run every rule against it."""

        batch = FileBatch()
        try:
            content = read_text_file(entry.path)
        except OSError as exc:
            logger.warning("%s: %s (%s)", FILE_UNREADABLE, entry.relative_path, exc)
            batch.diagnostics.append(Diagnostic(FILE_UNREADABLE, entry.relative_path, str(exc)))
            return batch

        target = ScanTarget.from_entry(entry, content)
        for rule in self.registry:
            batch.findings.extend(rule.inspect(target))
        if self.strict_markup and target.is_markup and target.markup is None:
            batch.diagnostics.append(
                Diagnostic(MARKUP_PARSE_FAILURE, entry.relative_path, "markup could not be parsed")
            )
        logger.debug("%s: %d finding(s)", entry.relative_path, len(batch.findings))
        return batch

    def _scan_parallel(
        self,
        entries: Iterable[WalkEntry],
        result: ScanResult,
        cancel: Optional[threading.Event],
    ) -> None:
        in_flight: Deque["Future[FileBatch]"] = deque()
        limit = self.workers * 2
        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="codescan") as pool:
            try:
                for entry in entries:
                    if len(in_flight) >= limit:
                        if _is_cancelled(cancel):
                            result.cancelled = True
                            break
                        self._merge(result, in_flight.popleft().result())
                    in_flight.append(pool.submit(self.scan_file, entry))
                while in_flight and not result.cancelled:
                    if _is_cancelled(cancel):
                        result.cancelled = True
                        break
                    self._merge(result, in_flight.popleft().result())
            finally:
                for future in in_flight:
                    future.cancel()

    @staticmethod
    def _merge(result: ScanResult, batch: FileBatch) -> None:
        result.merge(batch.findings, batch.diagnostics)


def scan(
    root: Path,
    rules: Iterable[Rule],
    workers: int = 1,
    exclude: Iterable[str] = (),
    strict_markup: bool = False,
    cancel: Optional[threading.Event] = None,
) -> ScanResult:
    """Scan ``root`` with ``rules``; see :class:`ScanEngine`."""

    registry = rules if isinstance(rules, RuleRegistry) else RuleRegistry(rules)
    engine = ScanEngine(registry, workers=workers, exclude=exclude, strict_markup=strict_markup)
    return engine.scan(root, cancel=cancel)


def _is_cancelled(cancel: Optional[threading.Event]) -> bool:
    return cancel is not None and cancel.is_set()


def _relative(root: Path, path: Path) -> str:
    try:
        return path.relative_to(Path(root).resolve()).as_posix()
    except ValueError:
        return path.as_posix()
