#!/usr/bin/env python3
import re
from dataclasses import dataclass
from typing import Tuple

from smbshare.errors import InvalidAddressError

_LOCATION = re.compile(r"^[/\\]{2}([^/\\]+)[/\\]([^/\\]+)(?:[/\\](.*))?$")


@dataclass(frozen=True)
class Location:
    host: str
    share: str
    path: str = ""

    @property
    def share_target(self) -> str:
        return f"//{self.host}/{self.share}"

    def remote_file(self, file_name: str) -> str:
        """Path of ``file_name`` relative to the share root."""
        return f"{self.path}/{file_name}" if self.path else file_name

    def __str__(self):
        if self.path:
            return f"{self.share_target}/{self.path}"
        return self.share_target


def parse_location(address: str) -> Location:
    """Parse a UNC address into a Location.

    Args:
        address: UNC path like //server/share/path or \\\\server\\share\\path.
            Slash direction may be mixed.

    Returns:
        Location whose path uses forward slashes and is empty for the
        share root.

    Raises:
        InvalidAddressError: If the leading double separator, the host or
            the share is missing.
    """
    if not address:
        raise InvalidAddressError(f"Invalid SMB path format: {address!r}", path=address)

    m = _LOCATION.match(address)
    if not m:
        raise InvalidAddressError(f"Invalid SMB path format: {address}", path=address)

    host, share, rest = m.group(1), m.group(2), m.group(3) or ""
    rest = rest.replace("\\", "/").strip("/")

    return Location(host=host, share=share, path=rest)


def split_file_path(file_path: str) -> Tuple[str, str]:
    """Split //server/share/dir/file.txt into (//server/share/dir, file.txt).

    The directory part must itself be a valid location and the file name
    must not be empty.
    """
    if not file_path or not file_path.strip():
        raise InvalidAddressError("File path cannot be empty", path=file_path)

    normalized = file_path.replace("\\", "/")
    directory, sep, name = normalized.rstrip("/").rpartition("/")
    if not sep or not name:
        raise InvalidAddressError(
            f"Invalid file path - cannot determine file name: {file_path}",
            path=file_path,
        )

    try:
        parse_location(directory)
    except InvalidAddressError:
        raise InvalidAddressError(
            f"Invalid file path - cannot determine directory: {file_path}",
            path=file_path,
        ) from None

    return directory, name
