"""
NT status lookup for smbclient diagnostics.

smbclient prints failures as ``NT_STATUS_<NAME>`` tokens. Impacket ships the
full NT status catalogue, so the token can be mapped back to its numeric
code and a human readable description.
"""

import re
from typing import Dict, Optional, Tuple

from impacket import nt_errors

_NT_STATUS = re.compile(r"\bNT_(STATUS_[A-Z0-9_]+)\b")

_BY_NAME: Optional[Dict[str, Tuple[int, str]]] = None


def _catalogue() -> Dict[str, Tuple[int, str]]:
    global _BY_NAME
    if _BY_NAME is None:
        _BY_NAME = {
            name: (code, description)
            for code, (name, description) in nt_errors.ERROR_MESSAGES.items()
        }
    return _BY_NAME


def find_status(text: str) -> Optional[str]:
    """Return the first ``NT_STATUS_*`` token in ``text`` (upper-cased), or None."""
    if not text:
        return None
    m = _NT_STATUS.search(text.upper())
    return f"NT_{m.group(1)}" if m else None


def status_code(status: str) -> Optional[int]:
    entry = _catalogue().get(status[3:] if status.startswith("NT_") else status)
    return entry[0] if entry else None


def describe_status(status: str) -> Optional[str]:
    """Describe an NT status name such as ``NT_STATUS_ACCESS_DENIED``."""
    entry = _catalogue().get(status[3:] if status.startswith("NT_") else status)
    return entry[1] if entry else None
