"""
Async subprocess runner for the smbclient executable.
"""

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from smbshare.errors import RemoteFailureError, ToolUnavailableError

logger = logging.getLogger("smbshare")


@dataclass(frozen=True)
class ProcessResult:
    exit_code: int
    stdout: str = ""
    stderr: str = ""


class ProcessRunner:
    """Run an executable, capture both streams and the exit code.

    The child inherits the parent environment overlaid with ``env``. When the
    awaiting task is cancelled the child is killed and reaped before the
    cancellation propagates.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout or None

    async def run(
            self,
            executable: str,
            args: Sequence[str],
            env: Optional[Dict[str, str]] = None,
    ) -> ProcessResult:
        merged_env = os.environ.copy()
        if env:
            merged_env.update(env)

        try:
            proc = await asyncio.create_subprocess_exec(
                executable,
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=merged_env,
            )
        except FileNotFoundError as e:
            raise ToolUnavailableError(
                f"{executable} is not installed or not available in PATH"
            ) from e

        try:
            stdout_bytes, stderr_bytes = await asyncio.wait_for(
                proc.communicate(),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            await self._kill(proc)
            raise RemoteFailureError(
                f"{executable} timed out after {self.timeout}s"
            ) from None
        except asyncio.CancelledError:
            await self._kill(proc)
            raise

        return ProcessResult(
            exit_code=proc.returncode if proc.returncode is not None else -1,
            stdout=stdout_bytes.decode("utf-8", errors="replace"),
            stderr=stderr_bytes.decode("utf-8", errors="replace"),
        )

    @staticmethod
    async def _kill(proc):
        if proc.returncode is None:
            try:
                proc.kill()
            except ProcessLookupError:
                pass
        await proc.wait()
