"""
smbclient availability check

The version query runs at most once per probe instance. Callers that want a
single answer for the whole process share one probe.
"""

import asyncio
import logging
from typing import Optional

from smbshare.transport.command import CommandBuilder
from smbshare.transport.process import ProcessRunner

logger = logging.getLogger("smbshare")


class AvailabilityProbe:

    def __init__(self, runner: ProcessRunner, builder: CommandBuilder):
        self.runner = runner
        self.builder = builder
        self._available: Optional[bool] = None
        self._lock = asyncio.Lock()

    @property
    def determined(self) -> bool:
        return self._available is not None

    async def is_tool_available(self) -> bool:
        if self._available is not None:
            return self._available

        async with self._lock:
            if self._available is not None:
                return self._available

            inv = self.builder.version_query()
            try:
                result = await self.runner.run(inv.executable, inv.argv, inv.env)
                available = result.exit_code == 0
                if available:
                    logger.debug(f"smbclient found: {result.stdout.strip()}")
                else:
                    logger.debug(f"{inv.display()} exited {result.exit_code}")
            except Exception as e:
                logger.debug(f"smbclient availability check failed: {e}")
                available = False

            self._available = available
            return available

    def reset(self):
        self._available = None
