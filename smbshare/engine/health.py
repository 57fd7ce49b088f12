import logging
from dataclasses import dataclass
from typing import Optional

from smbshare.accessors.file_accessor import FileAccessor

logger = logging.getLogger("smbshare")


@dataclass(frozen=True)
class HealthResult:
    healthy: bool
    description: str
    error: Optional[BaseException] = None


class ShareHealthCheck:
    """Connectivity check for one share directory."""

    def __init__(self, accessor: FileAccessor, directory: str):
        if accessor is None:
            raise ValueError("accessor is required")
        if directory is None:
            raise ValueError("directory is required")
        self.accessor = accessor
        self.directory = directory

    async def check(self) -> HealthResult:
        try:
            if await self.accessor.can_connect(self.directory):
                logger.debug(f"Health check succeeded for SMB share: {self.directory}")
                return HealthResult(True, f"Successfully connected to SMB share: {self.directory}")

            logger.error(f"Health check failed: Unable to connect to SMB share: {self.directory}")
            return HealthResult(False, f"Unable to connect to SMB share: {self.directory}")

        except Exception as e:
            logger.error(f"Health check failed for SMB share {self.directory}: {e}")
            return HealthResult(
                False,
                f"Health check failed for SMB share {self.directory}: {e}",
                error=e,
            )
