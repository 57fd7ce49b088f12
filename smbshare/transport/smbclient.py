import logging
from typing import Optional

from smbshare.analysis.diagnostics import classify_failure
from smbshare.errors import SmbShareError
from smbshare.transport.command import CommandBuilder
from smbshare.transport.process import ProcessResult, ProcessRunner
from smbshare.utils.path_utils import Location

logger = logging.getLogger("smbshare")


class SmbClientTransport:
    """
    smbclient transport

    Responsibilities:
    - Build the invocation for a sub-command
    - Run it and remove credential material afterwards
    - Turn a non-zero exit into a classified error
    """

    def __init__(self, builder: CommandBuilder, runner: Optional[ProcessRunner] = None):
        self.builder = builder
        self.runner = runner or ProcessRunner()

    async def run(self, location: Location, sub_command: str) -> ProcessResult:
        with self.builder.invocation(location, sub_command) as inv:
            logger.debug(f"Running: {inv.display()}")
            return await self.runner.run(inv.executable, inv.argv, inv.env)

    async def execute(self, location: Location, sub_command: str, context_path: str) -> str:
        """Run ``sub_command`` against ``location`` and return stdout.

        Raises the classified error when smbclient exits non-zero.
        """
        try:
            result = await self.run(location, sub_command)
        except SmbShareError as e:
            if e.path is not None:
                raise
            # timeouts and spawn failures carry no location yet
            raise type(e)(
                f"Failed to execute smbclient command on {context_path}: {e}",
                path=context_path,
                detail=e.detail,
                status=e.status,
            ) from e

        if result.exit_code == 0:
            return result.stdout
        raise classify_failure(result, context_path)
