"""Issue Detector: applies every registry pattern to every build file.

Findings are not deduplicated here. Category statistics must reflect the
true number of matcher hits; deduplication belongs to the recipe generator.

File reading and matching fan out over a thread pool. Paths are collected
and sorted first and results are merged in that order, so the Finding list
is identical for a given file set regardless of worker count.
"""

from __future__ import annotations

from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Sequence

from ..config import DEFAULT_CONFIG, AnalysisConfig
from ..exceptions import FileAccessError
from ..logging_config import get_logger
from ..models import BuildFile, Finding
from .registry import PATTERNS, PatternDefinition, categories

logger = get_logger(__name__)

# Below this many files the pool costs more than it saves
_PARALLEL_MIN_FILES = 8


def line_number(content: str, offset: int) -> int:
    """1-based line of ``offset``: one plus the newlines preceding it."""
    return content.count("\n", 0, offset) + 1


def detect_in_content(
    content: str,
    relative_path: str,
    patterns: Sequence[PatternDefinition] = PATTERNS,
) -> list[Finding]:
    """All matches of all patterns in one file, pattern by pattern."""
    findings: list[Finding] = []
    for pattern in patterns:
        for match in pattern.matcher.finditer(content):
            findings.append(
                Finding(
                    file=relative_path,
                    line=line_number(content, match.start()),
                    category=pattern.category,
                    pattern=pattern.name,
                    matched_text=match.group(0),
                    description=pattern.description,
                    suggested_fix=pattern.suggested_fix,
                    transformation=pattern.transformation,
                    config=pattern.generate_config(match),
                    severity=pattern.severity,
                )
            )
    return findings


@dataclass
class FileScan:
    """Per-file scan output."""

    path: str
    lines: int = 0
    findings: list[Finding] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class DetectionResult:
    findings: list[Finding]
    total_lines: int
    files_scanned: int
    files_errored: int = 0

    def category_counts(self, patterns: Sequence[PatternDefinition] = PATTERNS) -> dict[str, int]:
        return count_categories(self.findings, patterns)


def count_categories(
    findings: Iterable[Finding], patterns: Sequence[PatternDefinition] = PATTERNS
) -> dict[str, int]:
    """Per-category hit counts in registry order, zero categories omitted."""
    counts = Counter(f.category for f in findings)
    return {c: counts[c] for c in categories(tuple(patterns)) if counts[c] > 0}


class IssueDetector:
    """Scan build files for registry patterns."""

    def __init__(
        self,
        root_dir: Path | str,
        config: Optional[AnalysisConfig] = None,
        patterns: Sequence[PatternDefinition] = PATTERNS,
    ):
        self.root_dir = Path(root_dir)
        self.config = config or DEFAULT_CONFIG
        self.patterns = tuple(patterns)

    def _read(self, relative_path: str) -> str:
        filepath = self.root_dir / relative_path
        try:
            with open(filepath, encoding="utf-8", errors="replace") as f:
                return f.read()
        except OSError as e:
            raise FileAccessError(filepath, f"Cannot read file: {e}")

    def scan_file(self, relative_path: str) -> FileScan:
        try:
            content = self._read(relative_path)
        except FileAccessError as e:
            return FileScan(path=relative_path, error=e.reason)
        return FileScan(
            path=relative_path,
            lines=len(content.splitlines()),
            findings=detect_in_content(content, relative_path, self.patterns),
        )

    def detect(self, files: Sequence[BuildFile]) -> DetectionResult:
        paths = sorted(f.path for f in files)

        if len(paths) < _PARALLEL_MIN_FILES or self.config.workers == 1:
            scans = [self.scan_file(p) for p in paths]
        else:
            # map() yields in submission order, i.e. sorted path order
            with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
                scans = list(executor.map(self.scan_file, paths))

        findings: list[Finding] = []
        total_lines = 0
        errored = 0
        for scan in scans:
            if scan.error is not None:
                errored += 1
                logger.warning(f"Skipping unreadable build file {scan.path}: {scan.error}")
                continue
            total_lines += scan.lines
            findings.extend(scan.findings)
            logger.debug(f"Scanned {scan.path}: {len(scan.findings)} findings")

        logger.info(f"Detection complete: {len(findings)} findings in {len(scans)} files")
        return DetectionResult(
            findings=findings,
            total_lines=total_lines,
            files_scanned=len(scans) - errored,
            files_errored=errored,
        )
