"""
Native file operations
Used when shares are reachable as ordinary paths (UNC paths on Windows, or a
mounted share). Delegates to the OS file APIs in a worker thread.
"""

import asyncio
import logging
import os
import shutil
from typing import BinaryIO, List, Tuple

from smbshare.accessors.file_accessor import FileAccessor, require
from smbshare.engine.write import WriteMode
from smbshare.errors import ConflictError, RemoteNotFoundError

logger = logging.getLogger("smbshare")

_OPEN_MODES = {
    WriteMode.OVERWRITE: "wb",
    WriteMode.CREATE_NEW: "xb",
    WriteMode.APPEND: "ab",
}


class LocalFileAccessor(FileAccessor):

    def split_path(self, file_path: str) -> Tuple[str, str]:
        require(file_path, "File path")
        directory, file_name = os.path.split(file_path.rstrip("/\\"))
        require(file_name, "File name")
        return directory or ".", file_name

    async def enumerate_files(self, directory: str) -> List[str]:
        require(directory, "Directory path")

        def _list():
            if not os.path.isdir(directory):
                raise RemoteNotFoundError(
                    f"The directory {directory} could not be found or I don't have access to it",
                    path=directory,
                )
            with os.scandir(directory) as it:
                return [entry.name for entry in it if entry.is_file()]

        return await asyncio.to_thread(_list)

    async def file_exists(self, file_name: str, directory: str) -> bool:
        require(file_name, "File name")
        require(directory, "Directory path")
        return await asyncio.to_thread(os.path.isfile, os.path.join(directory, file_name))

    async def read_file(self, directory: str, file_name: str) -> BinaryIO:
        require(directory, "Directory path")
        require(file_name, "File name")
        path = os.path.join(directory, file_name)

        try:
            return await asyncio.to_thread(open, path, "rb")
        except FileNotFoundError:
            raise RemoteNotFoundError(
                f"The file {path} could not be found or I don't have access to it",
                path=directory,
            ) from None

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
        path = os.path.join(directory, file_name)

        def _write():
            with open(path, _OPEN_MODES[mode]) as out:
                shutil.copyfileobj(stream, out)

        try:
            await asyncio.to_thread(_write)
        except FileExistsError:
            raise ConflictError(f"File already exists: {path}", path=directory) from None

    async def delete_file(self, directory: str, file_name: str) -> None:
        require(directory, "Directory path")
        require(file_name, "File name")
        path = os.path.join(directory, file_name)

        def _delete():
            if os.path.exists(path):
                os.remove(path)

        await asyncio.to_thread(_delete)

    async def move_file(self, source_dir: str, source_name: str, dest_dir: str, dest_name: str) -> None:
        require(source_dir, "Source directory")
        require(source_name, "Source file name")
        require(dest_dir, "Destination directory")
        require(dest_name, "Destination file name")

        await asyncio.to_thread(
            shutil.move,
            os.path.join(source_dir, source_name),
            os.path.join(dest_dir, dest_name),
        )

    async def create_directory(self, directory: str) -> None:
        require(directory, "Directory path")
        await asyncio.to_thread(os.makedirs, directory, exist_ok=True)

    async def can_connect(self, directory: str) -> bool:
        if not directory or not directory.strip():
            return False
        try:
            return await asyncio.to_thread(os.path.isdir, directory)
        except (Exception, asyncio.CancelledError):
            return False
