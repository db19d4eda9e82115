"""Corpus discovery: lazily enumerate candidate workflow files."""

import os
from pathlib import Path
from typing import Iterator, Union


def walk_json_files(root: Union[str, Path]) -> Iterator[Path]:
    """Yield every `.json` file under root, depth-first.

    Entries are visited in name order so a given filesystem snapshot is
    always walked the same way. Hidden directories and directories that
    cannot be listed are skipped without error. Each call starts a fresh
    traversal; nothing is collected up front.
    """
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError:
        return

    for entry in entries:
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            is_file = entry.is_file()
        except OSError:
            continue

        if is_dir:
            if not entry.name.startswith("."):
                yield from walk_json_files(entry.path)
        elif is_file and entry.name.endswith(".json"):
            yield Path(entry.path)
