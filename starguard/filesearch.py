"""
File search for lint targets.

Arguments follow the go tool's conventions: a file, a directory, or a
`dir/...` pattern that includes every sub directory.
"""

import os
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from starguard.scanner import GO_MOD_FILE


RECURSIVE_SUFFIX = "..."
SKIP_DIRS = {"vendor", "testdata"}


def find(cwd: Path, no_test: bool, args: Optional[Sequence[str]] = None) -> List[str]:
    """
    Resolve arguments to the files to lint.

    Args:
        cwd: Directory relative arguments are resolved against
        no_test: Drop *_test.go files
        args: File, directory or "dir/..." arguments (defaults to "./...")

    Returns:
        Sorted, de-duplicated file names, relative to cwd when possible
    """
    found = set()
    for arg in args or ["./" + RECURSIVE_SUFFIX]:
        arg = arg.strip()
        if not arg:
            continue

        if arg.endswith(RECURSIVE_SUFFIX):
            root = cwd / (arg[:-len(RECURSIVE_SUFFIX)] or ".")
            candidates = _walk(root)
        else:
            path = cwd / arg
            if path.is_dir():
                candidates = (p for p in sorted(path.iterdir()) if p.is_file())
            else:
                # explicit files are kept even if they do not exist yet;
                # the processor reports them as unreadable
                candidates = [path]

        for candidate in candidates:
            if _is_lintable(candidate, no_test):
                found.add(_relative(candidate, cwd))

    return sorted(found)


def _walk(root: Path) -> Iterable[Path]:
    for dir_path, dir_names, file_names in os.walk(root):
        dir_names[:] = sorted(
            d for d in dir_names if d not in SKIP_DIRS and not d.startswith(".")
        )
        for file_name in sorted(file_names):
            yield Path(dir_path) / file_name


def _is_lintable(path: Path, no_test: bool) -> bool:
    if path.name == GO_MOD_FILE:
        return True
    if path.suffix != ".go":
        return False
    if no_test and path.name.endswith("_test.go"):
        return False
    return True


def _relative(path: Path, cwd: Path) -> str:
    try:
        return os.path.normpath(os.path.relpath(path, cwd))
    except ValueError:  # different drive on Windows
        return str(path)
