"""Locate test scripts on disk."""

from __future__ import annotations

import os
from fnmatch import fnmatch
from pathlib import Path


def is_test_file(path: Path, include: list[str]) -> bool:
    return any(fnmatch(path.name, pattern) for pattern in include)


def _excluded(name: str, exclude: list[str]) -> bool:
    return any(fnmatch(name, pattern) for pattern in exclude)


def _walk(directory: Path, include: list[str], exclude: list[str]) -> list[Path]:
    found: list[Path] = []
    for root, dirs, files in os.walk(directory):
        # prune in place so os.walk never descends into excluded directories
        dirs[:] = sorted(d for d in dirs if not _excluded(d, exclude))
        for name in sorted(files):
            candidate = Path(root) / name
            if is_test_file(candidate, include):
                found.append(candidate)
    return found


def find_test_files(
    paths: list[Path], include: list[str], exclude: list[str]
) -> list[Path]:
    """Expand ``paths`` into the list of test scripts to run.

    Files named explicitly are always kept. Directories are searched
    recursively for names matching ``include``. With no paths the current
    directory is searched.
    """
    if not paths:
        paths = [Path(".")]

    test_files: list[Path] = []
    for path in paths:
        if path.is_file():
            test_files.append(path)
        elif path.is_dir():
            test_files.extend(_walk(path, include, exclude))

    seen: set[Path] = set()
    unique: list[Path] = []
    for f in test_files:
        key = f.resolve()
        if key not in seen:
            seen.add(key)
            unique.append(f)
    return unique
