"""
Error taxonomy for share operations.

Every error carries the location string the caller passed in (``path``)
and, where the failure came from smbclient, the raw diagnostic text
(``detail``) and the first NT status code found in it (``status``).
"""

from typing import Optional


class SmbShareError(Exception):
    def __init__(
            self,
            message: str,
            path: Optional[str] = None,
            detail: str = "",
            status: Optional[str] = None,
    ):
        super().__init__(message)
        self.path = path
        self.detail = detail
        self.status = status


class InvalidAddressError(SmbShareError, ValueError):
    """Malformed location string. Never retried."""


class RemoteNotFoundError(SmbShareError, FileNotFoundError):
    pass


class RemoteAccessDeniedError(SmbShareError, PermissionError):
    pass


class UnreachableShareError(SmbShareError, ConnectionError):
    pass


class RemoteFailureError(SmbShareError, OSError):
    """Uncategorized smbclient failure."""


class ConflictError(SmbShareError, FileExistsError):
    pass


class ToolUnavailableError(SmbShareError, RuntimeError):
    pass
