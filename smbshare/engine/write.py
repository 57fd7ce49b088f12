"""
Write pipeline
Maps overwrite / create-new / append semantics onto smbclient's
whole-file get and put.
"""

import logging
import os
from enum import Enum
from typing import BinaryIO, Optional

from smbshare.errors import ConflictError, RemoteNotFoundError
from smbshare.transport.command import get_command, probe_command, put_command
from smbshare.transport.smbclient import SmbClientTransport
from smbshare.utils.path_utils import Location
from smbshare.utils.staging import materialize, staged_file

logger = logging.getLogger("smbshare")


class WriteMode(Enum):
    OVERWRITE = "overwrite"
    CREATE_NEW = "create-new"
    APPEND = "append"


class WriteOrchestrator:

    def __init__(self, transport: SmbClientTransport):
        self.transport = transport

    async def write(
            self,
            location: Location,
            file_name: str,
            stream: BinaryIO,
            mode: WriteMode = WriteMode.OVERWRITE,
            context_path: Optional[str] = None,
    ) -> None:
        """
        Upload ``stream`` to ``file_name`` inside ``location``

        Args:
            location: Parsed target directory
            file_name: Remote file name
            stream: Readable binary stream, consumed from its current position
            mode: Write semantics
            context_path: Address reported in errors (defaults to the location)

        Raises:
            ConflictError: CREATE_NEW and the file already exists
        """
        context_path = context_path or str(location)
        remote_path = location.remote_file(file_name)

        with staged_file(file_name) as staging:
            if mode == WriteMode.CREATE_NEW:
                await self._ensure_absent(location, file_name, remote_path, context_path)
                await materialize(stream, staging)

            elif mode == WriteMode.APPEND:
                await self._stage_append(location, file_name, remote_path, stream, staging, context_path)

            else:
                await materialize(stream, staging)

            await self.transport.execute(
                location, put_command(staging, remote_path), context_path
            )

        logger.debug(f"Wrote {file_name} to {context_path} ({mode.value})")

    async def _ensure_absent(self, location: Location, file_name: str, remote_path: str, context_path: str):
        try:
            await self.transport.execute(location, probe_command(remote_path), context_path)
        except RemoteNotFoundError:
            return

        raise ConflictError(
            f"File already exists: {context_path}/{file_name}",
            path=context_path,
        )

    async def _stage_append(
            self,
            location: Location,
            file_name: str,
            remote_path: str,
            stream: BinaryIO,
            staging: str,
            context_path: str,
    ):
        with staged_file(file_name, tag="existing") as existing:
            try:
                await self.transport.execute(
                    location, get_command(remote_path, existing), context_path
                )
            except RemoteNotFoundError:
                logger.debug(f"{file_name} not present on {context_path}, appending to empty file")

            prefix = existing if os.path.exists(existing) else None
            await materialize(stream, staging, prefix=prefix)
