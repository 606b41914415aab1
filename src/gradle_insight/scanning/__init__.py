"""Build file discovery and settings parsing."""

from .scanner import BUILD_FILE_NAMES, SETTINGS_FILE_NAMES, BuildFileScanner, classify, is_excluded
from .settings import count_included_projects, count_modules, find_settings_file

__all__ = [
    "BUILD_FILE_NAMES",
    "SETTINGS_FILE_NAMES",
    "BuildFileScanner",
    "classify",
    "is_excluded",
    "count_included_projects",
    "count_modules",
    "find_settings_file",
]
