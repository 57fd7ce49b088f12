"""
File operations over smbclient
Every call parses the address, runs one or more smbclient sub-commands and
turns their output into results or classified errors.
"""

import asyncio
import logging
import os
from typing import BinaryIO, List, Tuple

from smbshare.accessors.file_accessor import FileAccessor, require
from smbshare.analysis.listing import parse_listing
from smbshare.engine.move import DEFAULT_RETRY_DELAY, MoveOrchestrator
from smbshare.engine.write import WriteMode, WriteOrchestrator
from smbshare.errors import InvalidAddressError, RemoteNotFoundError
from smbshare.transport.command import (
    change_dir_command,
    delete_command,
    get_command,
    list_command,
    mkdir_command,
    probe_command,
)
from smbshare.transport.smbclient import SmbClientTransport
from smbshare.utils.path_utils import Location, parse_location
from smbshare.utils.staging import open_detached, remove_quietly, staging_path

logger = logging.getLogger("smbshare")


def _fold(location: Location, file_name: str) -> Tuple[str, str, str]:
    return location.host.lower(), location.share.lower(), location.remote_file(file_name).lower()


class SmbClientFileAccessor(FileAccessor):

    def __init__(self, transport: SmbClientTransport, retry_delay: float = DEFAULT_RETRY_DELAY):
        self.transport = transport
        self.writer = WriteOrchestrator(transport)
        self.mover = MoveOrchestrator(self, retry_delay=retry_delay)

    async def enumerate_files(self, directory: str) -> List[str]:
        require(directory, "Directory path")
        location = parse_location(directory)

        try:
            output = await self.transport.execute(location, list_command(location.path), directory)
        except Exception as e:
            logger.error(f"Error enumerating files in SMB path: {directory}: {e}")
            raise

        return parse_listing(output)

    async def file_exists(self, file_name: str, directory: str) -> bool:
        require(file_name, "File name")
        files = await self.enumerate_files(directory)
        wanted = file_name.lower()
        return any(f.lower() == wanted for f in files)

    async def read_file(self, directory: str, file_name: str) -> BinaryIO:
        require(directory, "Directory path")
        require(file_name, "File name")
        location = parse_location(directory)
        local = staging_path(file_name)

        try:
            await self.transport.execute(
                location, get_command(location.remote_file(file_name), local), directory
            )
            if not os.path.exists(local):
                raise RemoteNotFoundError(
                    f"Failed to download file {file_name} from {directory}",
                    path=directory,
                )
            return open_detached(local)
        except BaseException:
            remove_quietly(local)
            raise

    async def write_file(
            self,
            directory: str,
            file_name: str,
            stream: BinaryIO,
            mode: WriteMode = WriteMode.OVERWRITE,
    ) -> None:
        require(directory, "Directory path")
        require(file_name, "File name")
        if stream is None:
            raise ValueError("stream cannot be None")

        location = parse_location(directory)
        await self.writer.write(location, file_name, stream, mode, context_path=directory)

    async def delete_file(self, directory: str, file_name: str) -> None:
        require(directory, "Directory path")
        require(file_name, "File name")
        location = parse_location(directory)

        await self.transport.execute(
            location, delete_command(location.remote_file(file_name)), directory
        )

    async def move_file(self, source_dir: str, source_name: str, dest_dir: str, dest_name: str) -> None:
        for value, what in (
                (source_dir, "Source directory"),
                (source_name, "Source file name"),
                (dest_dir, "Destination directory"),
                (dest_name, "Destination file name"),
        ):
            require(value, what)
        source = parse_location(source_dir)
        dest = parse_location(dest_dir)

        # SMB names are case-insensitive: same file, nothing to move
        if _fold(source, source_name) == _fold(dest, dest_name):
            logger.debug(f"Move source and destination are the same file: {source_dir}/{source_name}")
            return

        await self.mover.move(source_dir, source_name, dest_dir, dest_name)

    async def create_directory(self, directory: str) -> None:
        require(directory, "Directory path")
        location = parse_location(directory)
        if not location.path:
            raise InvalidAddressError("Directory path cannot be empty", path=directory)

        # already present: nothing to do
        try:
            await self.transport.execute(location, probe_command(location.path), directory)
            return
        except RemoteNotFoundError:
            pass

        await self.transport.execute(location, mkdir_command(location.path), directory)
        logger.debug(f"Created directory {directory}")

    async def can_connect(self, directory: str) -> bool:
        if not directory or not directory.strip():
            return False

        try:
            location = parse_location(directory)
            command = change_dir_command(location.path) if location.path else "ls"
            await self.transport.execute(location, command, directory)
            return True
        except (Exception, asyncio.CancelledError) as e:
            logger.debug(f"Cannot connect to {directory}: {e}")
            return False
