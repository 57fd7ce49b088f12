"""Parse smbclient ``ls`` output into file names."""

import re
from typing import List

_WHITESPACE = re.compile(r"\s+")

_FOOTER_MARKERS = ("blocks of size", "blocks available")


def parse_listing(stdout: str) -> List[str]:
    """Extract plain file names from an smbclient listing transcript.

    Each entry line looks like:
        file1.txt                          A    12345  Mon Jan 29 10:00:00 2026

    Directories (``D`` attribute), ``.``/``..`` and dot-prefixed entries and
    the block-count footer are skipped. Names are taken verbatim from the
    first column, so names containing whitespace cannot be recovered.
    """
    files: List[str] = []
    for line in stdout.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("."):
            continue
        if any(marker in line for marker in _FOOTER_MARKERS):
            continue

        parts = _WHITESPACE.split(stripped)
        if len(parts) < 2:
            continue

        name, attributes = parts[0], parts[1]
        if "A" in attributes and "D" not in attributes:
            files.append(name)

    return files
