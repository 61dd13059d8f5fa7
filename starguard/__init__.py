"""
Import star guard.

This package lints Go imports against the popularity of the GitHub
repositories they reference:
- Scans Go source files and go.mod files for imports
- Reads each github.com repository's star count from its public page
- Reports imports below the configured warn/error thresholds
"""

from starguard.scanner import ImportScanner, GoImportScanner, GoModScanner, scanner_for
from starguard.stargazer import Stargazer, parse_star_count
from starguard.processor import Processor

__all__ = [
    "ImportScanner",
    "GoImportScanner",
    "GoModScanner",
    "scanner_for",
    "Stargazer",
    "parse_star_count",
    "Processor",
]
