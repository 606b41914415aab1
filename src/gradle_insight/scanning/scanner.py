"""Build file discovery.

Only files whose name is exactly one of the recognized build or settings
script names are returned. Exclusion is decided on the path segments between
the project root and the file, so ``build.gradle`` is never rejected because
its own name contains ``build``, while anything under ``build/`` or a tool
cache directory is.
"""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath
from typing import Iterable, Optional

from ..config import DEFAULT_CONFIG, AnalysisConfig
from ..logging_config import get_logger
from ..models import BuildFile, Dialect

logger = get_logger(__name__)

BUILD_FILE_NAMES = {
    "build.gradle": Dialect.GROOVY,
    "build.gradle.kts": Dialect.KOTLIN,
}
SETTINGS_FILE_NAMES = {
    "settings.gradle": Dialect.GROOVY,
    "settings.gradle.kts": Dialect.KOTLIN,
}
RECOGNIZED_NAMES = {**BUILD_FILE_NAMES, **SETTINGS_FILE_NAMES}


def is_excluded(relative: PurePosixPath, exclude_dirs: Iterable[str]) -> bool:
    """True if any directory segment of ``relative`` is an excluded name."""
    excluded = set(exclude_dirs)
    return any(part in excluded for part in relative.parts[:-1])


def classify(relative: PurePosixPath) -> Optional[BuildFile]:
    """Return a BuildFile for recognized names, None otherwise."""
    dialect = RECOGNIZED_NAMES.get(relative.name)
    if dialect is None:
        return None
    return BuildFile(
        path=relative.as_posix(),
        dialect=dialect,
        is_settings=relative.name in SETTINGS_FILE_NAMES,
    )


class BuildFileScanner:
    """Walk a project and collect its build and settings scripts."""

    def __init__(self, root_dir: Path | str, config: Optional[AnalysisConfig] = None):
        self.root_dir = Path(root_dir)
        self.config = config or DEFAULT_CONFIG
        self._exclude = frozenset(self.config.exclude_dirs)

    def scan(self) -> list[BuildFile]:
        """Return recognized files sorted by relative path."""
        found: list[BuildFile] = []
        skipped = 0

        for dirpath, dirnames, filenames in os.walk(self.root_dir):
            # Prune in place so excluded trees are never entered
            kept = [d for d in dirnames if d not in self._exclude]
            skipped += len(dirnames) - len(kept)
            dirnames[:] = sorted(kept)

            for name in filenames:
                if name not in RECOGNIZED_NAMES:
                    continue
                full = Path(dirpath) / name
                if not full.is_file():
                    continue
                relative = PurePosixPath(full.relative_to(self.root_dir).as_posix())
                if is_excluded(relative, self._exclude):
                    continue
                build_file = classify(relative)
                if build_file is not None:
                    found.append(build_file)

        found.sort(key=lambda f: f.path)
        logger.info(
            f"Scan complete: {len(found)} build files, {skipped} excluded directories pruned"
        )
        return found
