"""
smbclient command construction

Turns (location, auth, sub-command) into the exact argument vector and
environment handed to the smbclient process. Passwords never appear in the
argument vector: they travel in an owner-only credentials file (default) or
in the PASSWD environment variable (legacy).
"""

import logging
import os
import shlex
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional

from smbshare.utils.path_utils import Location

logger = logging.getLogger("smbshare")

DEFAULT_EXECUTABLE = "smbclient"

CREDENTIAL_TRANSPORTS = ("file", "env")


class AuthMode(Enum):
    KERBEROS = "kerberos"
    CREDENTIALS = "credentials"


@dataclass(frozen=True)
class AuthContext:
    mode: AuthMode = AuthMode.KERBEROS
    username: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)
    domain: Optional[str] = None

    def __post_init__(self):
        if self.mode == AuthMode.CREDENTIALS and (
                not self.username or not self.username.strip()
                or not self.password or not self.password.strip()
        ):
            raise ValueError(
                "Username and Password must be provided when not using Kerberos authentication."
            )

    @classmethod
    def kerberos(cls) -> "AuthContext":
        return cls(mode=AuthMode.KERBEROS)

    @classmethod
    def credentials(cls, username: str, password: str, domain: Optional[str] = None) -> "AuthContext":
        return cls(
            mode=AuthMode.CREDENTIALS,
            username=username,
            password=password,
            domain=domain or None,
        )

    @property
    def principal(self) -> str:
        user = self.username or ""
        return f"{self.domain}\\{user}" if self.domain else user


# ---------------------------------------------------------------- escaping

def escape_argument(argument: str) -> str:
    """Neutralise text interpolated into an smbclient sub-command.

    Backslashes are doubled first, then double quotes, backticks and dollar
    signs are backslash-escaped.

    smbclient's own tokenizer only toggles on double quotes and never
    removes backslashes, so an escaped character reaches the share with its
    backslash in front (``~$lock.docx`` arrives as ``~\\$lock.docx``, which
    the server reads as a path separator). Names containing ``"``, backticks,
    ``$`` or ``\\`` are therefore not addressable through smbclient.
    """
    if not argument:
        return argument
    return (
        argument
        .replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("`", "\\`")
        .replace("$", "\\$")
    )


def escape_command_string(command: str) -> str:
    """Escape a whole sub-command for embedding as a quoted ``-c`` literal."""
    if not command:
        return command
    return command.replace("\\", "\\\\").replace('"', '\\"')


def quote(argument: str) -> str:
    return f'"{escape_argument(argument)}"'


# ---------------------------------------------------------------- sub-commands

def list_command(path: str) -> str:
    return f"ls {quote(path + '/*')}" if path else "ls"


def probe_command(remote_path: str) -> str:
    return f"ls {quote(remote_path)}"


def get_command(remote_path: str, local_path: str) -> str:
    return f"get {quote(remote_path)} {quote(local_path)}"


def put_command(local_path: str, remote_path: str) -> str:
    return f"put {quote(local_path)} {quote(remote_path)}"


def delete_command(remote_path: str) -> str:
    return f"del {quote(remote_path)}"


def mkdir_command(path: str) -> str:
    return f"mkdir {quote(path)}"


def change_dir_command(path: str) -> str:
    return f"cd {quote(path)}; ls"


# ---------------------------------------------------------------- invocation

@dataclass
class Invocation:
    executable: str
    argv: List[str]
    env: Dict[str, str] = field(default_factory=dict, repr=False)
    temp_files: List[str] = field(default_factory=list)

    def display(self) -> str:
        """Render the command line as a single string (for logs)."""
        parts = [self.executable]
        args = iter(self.argv)
        for arg in args:
            if arg == "-c":
                parts.append(f'-c "{escape_command_string(next(args, ""))}"')
            else:
                parts.append(shlex.quote(arg))
        return " ".join(parts)

    def cleanup(self):
        while self.temp_files:
            path = self.temp_files.pop()
            try:
                os.remove(path)
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning(f"Could not remove credentials file {path}: {e}")


class CommandBuilder:
    """Builds smbclient invocations for one authentication context."""

    def __init__(
            self,
            auth: AuthContext,
            executable: str = DEFAULT_EXECUTABLE,
            use_wsl: bool = False,
            credential_transport: str = "file",
    ):
        if credential_transport not in CREDENTIAL_TRANSPORTS:
            raise ValueError(f"Unknown credential transport: {credential_transport!r}")

        self.auth = auth
        self.executable = executable
        self.use_wsl = use_wsl
        self.credential_transport = credential_transport

    def _base(self) -> Invocation:
        if self.use_wsl:
            return Invocation(executable="wsl", argv=[self.executable])
        return Invocation(executable=self.executable, argv=[])

    def version_query(self) -> Invocation:
        inv = self._base()
        inv.argv.append("--version")
        return inv

    def build(self, location: Location, sub_command: str) -> Invocation:
        inv = self._base()
        inv.argv.append(location.share_target)

        if self.auth.mode == AuthMode.KERBEROS:
            inv.argv.append("--use-kerberos=required")
        else:
            # NTLM only; Kerberos negotiation fails against IP-addressed hosts
            inv.argv.append("--use-kerberos=disabled")
            if self.credential_transport == "file":
                cred_path = self._write_credentials_file()
                inv.temp_files.append(cred_path)
                inv.argv.extend(["-A", cred_path])
            else:
                inv.argv.extend(["-U", self.auth.principal])
                inv.env["PASSWD"] = self.auth.password or ""

        inv.argv.extend(["-c", sub_command])
        return inv

    @contextmanager
    def invocation(self, location: Location, sub_command: str) -> Iterator[Invocation]:
        """Build an invocation and remove its credentials file on exit."""
        inv = self.build(location, sub_command)
        try:
            yield inv
        finally:
            inv.cleanup()

    def _write_credentials_file(self) -> str:
        fd, path = tempfile.mkstemp(prefix="smbshare-cred-", suffix=".txt")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                os.fchmod(fh.fileno(), 0o600)
                fh.write(f"username={self.auth.principal}\n")
                fh.write(f"password={self.auth.password}\n")
        except BaseException:
            try:
                os.remove(path)
            except OSError:
                pass
            raise
        return path
