"""
In-memory smbclient stand-in shared by the unit tests.

FakeSmbClient implements ProcessRunner.run: it parses the ``-c`` sub-command
the way smbclient would and serves it from a dict-backed share.
"""

import os
from collections import defaultdict
from typing import Dict, List, Optional

import pytest

from smbshare.accessors.smbclient_accessor import SmbClientFileAccessor
from smbshare.transport.command import AuthContext, CommandBuilder
from smbshare.transport.process import ProcessResult
from smbshare.transport.smbclient import SmbClientTransport

LISTING_FOOTER = "\n\t\t12345 blocks of size 4096. 6789 blocks available\n"


def _tokens(command: str) -> List[str]:
    """Split like smbclient: double quotes toggle quoting and are dropped,
    backslashes are kept verbatim."""
    tokens: List[str] = []
    current: List[str] = []
    quoted = started = False
    for ch in command:
        if ch == '"':
            quoted = not quoted
            started = True
        elif ch.isspace() and not quoted:
            if started:
                tokens.append("".join(current))
                current, started = [], False
        else:
            current.append(ch)
            started = True
    if started:
        tokens.append("".join(current))
    return tokens


def _norm(path: str) -> str:
    return path.replace("\\", "/").strip("/")


def _entry(name: str, attr: str, size: int = 0) -> str:
    return f"  {name:<35}{attr:>4}{size:>9}  Mon Jan 29 10:00:00 2026"


class FakeSmbClient:

    def __init__(self):
        self.files: Dict[str, bytes] = {}
        self.dirs = {""}
        self.calls: List[dict] = []
        self.failures: Dict[str, List[ProcessResult]] = defaultdict(list)

    # ---------- helpers ----------

    @property
    def commands(self) -> List[str]:
        return [c["command"] for c in self.calls if c["command"] is not None]

    def verbs(self) -> List[str]:
        return [c.split()[0] for c in self.commands]

    def fail(self, verb: str, stderr: str, times: int = 1, exit_code: int = 1):
        for _ in range(times):
            self.failures[verb].append(ProcessResult(exit_code, "", stderr))

    # ---------- ProcessRunner API ----------

    async def run(self, executable, args, env=None) -> ProcessResult:
        args = list(args)
        command = args[args.index("-c") + 1] if "-c" in args else None
        cred = None
        if "-A" in args:
            cred_path = args[args.index("-A") + 1]
            with open(cred_path, encoding="utf-8") as fh:
                cred = {"path": cred_path, "content": fh.read(), "mode": os.stat(cred_path).st_mode & 0o777}

        self.calls.append({
            "executable": executable,
            "args": args,
            "env": dict(env or {}),
            "command": command,
            "credentials": cred,
        })

        if "--version" in args:
            return ProcessResult(0, "Version 4.19.5-Ubuntu\n", "")

        stdout = []
        for part in command.split("; "):
            tokens = _tokens(part)
            verb = tokens[0]
            if self.failures[verb]:
                return self.failures[verb].pop(0)

            result = getattr(self, f"_do_{verb}")(*tokens[1:])
            if result.exit_code != 0:
                return result
            stdout.append(result.stdout)

        return ProcessResult(0, "".join(stdout), "")

    # ---------- sub-commands ----------

    def _listing(self, directory: str) -> str:
        lines = [_entry(".", "D"), _entry("..", "D")]
        prefix = f"{directory}/" if directory else ""
        for d in sorted(self.dirs):
            if d and d.startswith(prefix) and "/" not in d[len(prefix):]:
                lines.append(_entry(d[len(prefix):], "D"))
        for f, data in self.files.items():
            if f.startswith(prefix) and "/" not in f[len(prefix):]:
                lines.append(_entry(f[len(prefix):], "A", len(data)))
        return "\n".join(lines) + "\n" + LISTING_FOOTER

    def _do_ls(self, target: Optional[str] = None) -> ProcessResult:
        if target is None:
            return ProcessResult(0, self._listing(""), "")

        path = _norm(target)
        if path.endswith("/*"):
            directory = path[:-2]
            if directory not in self.dirs:
                return ProcessResult(1, "", f"NT_STATUS_NO_SUCH_FILE listing \\{directory}\\*")
            return ProcessResult(0, self._listing(directory), "")

        if path in self.files:
            return ProcessResult(0, _entry(os.path.basename(path), "A", len(self.files[path])) + LISTING_FOOTER, "")
        if path in self.dirs:
            return ProcessResult(0, _entry(os.path.basename(path), "D") + LISTING_FOOTER, "")
        return ProcessResult(1, "", f"NT_STATUS_NO_SUCH_FILE listing \\{path}")

    def _do_get(self, remote: str, local: str) -> ProcessResult:
        path = _norm(remote)
        if path not in self.files:
            return ProcessResult(
                1, "", f"NT_STATUS_OBJECT_NAME_NOT_FOUND opening remote file \\{path}"
            )
        with open(local, "wb") as fh:
            fh.write(self.files[path])
        return ProcessResult(0, f"getting file \\{path} of size {len(self.files[path])}\n", "")

    def _do_put(self, local: str, remote: str) -> ProcessResult:
        path = _norm(remote)
        with open(local, "rb") as fh:
            self.files[path] = fh.read()
        return ProcessResult(0, f"putting file {local} as \\{path}\n", "")

    def _do_del(self, remote: str) -> ProcessResult:
        path = _norm(remote)
        if path not in self.files:
            return ProcessResult(1, "", f"NT_STATUS_NO_SUCH_FILE deleting remote file \\{path}")
        del self.files[path]
        return ProcessResult(0, "", "")

    def _do_mkdir(self, remote: str) -> ProcessResult:
        self.dirs.add(_norm(remote))
        return ProcessResult(0, "", "")

    def _do_cd(self, remote: str) -> ProcessResult:
        path = _norm(remote)
        if path not in self.dirs:
            return ProcessResult(1, "", f"cd \\{path}\\: NT_STATUS_OBJECT_NAME_NOT_FOUND")
        return ProcessResult(0, "", "")


@pytest.fixture
def fake_smbclient():
    return FakeSmbClient()


@pytest.fixture
def kerberos_builder():
    return CommandBuilder(AuthContext.kerberos())


@pytest.fixture
def transport(fake_smbclient, kerberos_builder):
    return SmbClientTransport(kerberos_builder, fake_smbclient)


@pytest.fixture
def accessor(transport):
    return SmbClientFileAccessor(transport, retry_delay=0)
