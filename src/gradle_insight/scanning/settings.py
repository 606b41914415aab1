"""Module counting from the root settings script."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

from ..logging_config import get_logger

logger = get_logger(__name__)

# include(":a", ":b") and include ':a', ':b' (Groovy call without parentheses).
# A Groovy statement continues onto the next line after a trailing comma.
_INCLUDE_CALL_RE = re.compile(r"\binclude\s*\(([^)]*)\)", re.DOTALL)
_INCLUDE_STMT_RE = re.compile(
    r"^\s*include[ \t]+([^(\s](?:[^\n]*,[ \t]*\n)*[^\n]*)$", re.MULTILINE
)
_QUOTED_RE = re.compile(r"""["']([^"']+)["']""")
_LINE_COMMENT_RE = re.compile(r"//[^\n]*")


def find_settings_file(root: Path) -> Optional[Path]:
    for name in ("settings.gradle.kts", "settings.gradle"):
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def count_included_projects(content: str) -> int:
    """Number of project paths named by include statements."""
    content = _LINE_COMMENT_RE.sub("", content)
    count = 0
    for m in _INCLUDE_CALL_RE.finditer(content):
        count += len(_QUOTED_RE.findall(m.group(1)))
    for m in _INCLUDE_STMT_RE.finditer(content):
        count += len(_QUOTED_RE.findall(m.group(1)))
    return count


def count_modules(root: Path) -> int:
    """Root project plus every included subproject; 1 without a settings file."""
    settings = find_settings_file(root)
    if settings is None:
        logger.debug("No settings script found, assuming a single-project build")
        return 1
    try:
        content = settings.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning(f"Cannot read {settings.name}: {e}; assuming a single-project build")
        return 1
    return 1 + count_included_projects(content)
