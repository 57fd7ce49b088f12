"""
Failure classification for smbclient invocations

smbclient has no structured error channel; failures are recognised by
substring matching on the combined stdout/stderr text. Rules are evaluated
in order and the first match wins.
"""

import logging
import re
from typing import List, Optional, Pattern, Tuple, Type

from smbshare.errors import (
    RemoteAccessDeniedError,
    RemoteFailureError,
    RemoteNotFoundError,
    SmbShareError,
    UnreachableShareError,
)
from smbshare.transport.process import ProcessResult
from smbshare.transport.status import describe_status, find_status, status_code

logger = logging.getLogger("smbshare")


CLASSIFICATION_RULES: List[Tuple[Pattern, Type[SmbShareError]]] = [
    (
        re.compile(
            r"does not exist"
            r"|(?<!network name )not found"
            r"|nt_status_object_name_not_found"
            r"|nt_status_object_path_not_found"
            r"|nt_status_no_such_file"
        ),
        RemoteNotFoundError,
    ),
    (
        re.compile(
            r"access denied"
            r"|permission denied"
            r"|nt_status_access_denied"
            r"|logon failure"
            r"|nt_status_logon_failure"
        ),
        RemoteAccessDeniedError,
    ),
    (
        re.compile(
            r"bad network path"
            r"|network name not found"
            r"|nt_status_bad_network_name"
        ),
        UnreachableShareError,
    ),
]


def diagnostic_text(result: ProcessResult) -> str:
    return "\n".join(s for s in (result.stderr, result.stdout) if s and s.strip()).strip()


def match_rule(text: str) -> Optional[Type[SmbShareError]]:
    lowered = text.lower()
    for pattern, error_cls in CLASSIFICATION_RULES:
        if pattern.search(lowered):
            return error_cls
    return None


def classify_failure(result: ProcessResult, context_path: str) -> SmbShareError:
    """Map a failed invocation (non-zero exit) to an error instance."""
    detail = diagnostic_text(result)
    status = find_status(detail)
    error_cls = match_rule(detail) or RemoteFailureError

    if error_cls is RemoteNotFoundError:
        message = f"The specified path was not found on {context_path}"
    elif error_cls is RemoteAccessDeniedError:
        message = f"Access denied to {context_path}: {detail}"
    elif error_cls is UnreachableShareError:
        message = f"The network path was not found: {context_path}: {detail}"
    else:
        message = f"Failed to execute smbclient command on {context_path}: {detail}"
        description = describe_status(status) if status else None
        if description:
            message = f"{message} ({status} 0x{status_code(status):08X}: {description})"

    logger.debug(
        f"smbclient exited {result.exit_code} on {context_path} -> {error_cls.__name__}"
    )
    return error_cls(message, path=context_path, detail=detail, status=status)
