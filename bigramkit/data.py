#!/usr/bin/env python3
"""
Corpus Loading
==============
Reads a names file: one name per line, whitespace trimmed, blank lines
dropped.
"""

import logging
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


def load_names(path, unique: bool = False, encoding: str = 'utf-8') -> List[str]:
    """
    Load names from a text file.

    Args:
        path: File with one name per line
        unique: Drop repeated names (first occurrence wins)
        encoding: File encoding

    Returns:
        List of names in file order
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Names file not found: {path}")

    names = []
    seen = set()
    for line in path.read_text(encoding=encoding).splitlines():
        name = line.strip()
        if not name:
            continue
        if unique:
            if name in seen:
                continue
            seen.add(name)
        names.append(name)

    logger.info("Loaded %d names from %s", len(names), path)
    return names


__all__ = ['load_names']
