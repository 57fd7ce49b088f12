# smbshare/accessors/file_accessor.py

from abc import ABC, abstractmethod
from io import BytesIO
from typing import BinaryIO, List, Tuple

from smbshare.engine.write import WriteMode
from smbshare.errors import InvalidAddressError
from smbshare.utils.path_utils import split_file_path


def require(value: str, what: str):
    if not value or not value.strip():
        raise InvalidAddressError(f"{what} cannot be null or empty", path=value)


class FileAccessor(ABC):
    """File operations on a share directory.

    Directories are addresses like ``//server/share/dir``; file names are
    single path components.
    """

    @abstractmethod
    async def enumerate_files(self, directory: str) -> List[str]:
        """List file names (no directories) in ``directory``."""
        ...

    @abstractmethod
    async def file_exists(self, file_name: str, directory: str) -> bool:
        ...

    @abstractmethod
    async def read_file(self, directory: str, file_name: str) -> BinaryIO:
        """Open a file for reading.

        Returns:
            Binary stream positioned at the start. The caller closes it.
        """
        ...

    @abstractmethod
    async def write_file(
            self,
            directory: str,
            file_name: str,
            stream: BinaryIO,
            mode: WriteMode = WriteMode.OVERWRITE,
    ) -> None:
        ...

    @abstractmethod
    async def delete_file(self, directory: str, file_name: str) -> None:
        ...

    @abstractmethod
    async def move_file(self, source_dir: str, source_name: str, dest_dir: str, dest_name: str) -> None:
        ...

    @abstractmethod
    async def create_directory(self, directory: str) -> None:
        ...

    @abstractmethod
    async def can_connect(self, directory: str) -> bool:
        """Return True when ``directory`` is reachable. Never raises."""
        ...

    def split_path(self, file_path: str) -> Tuple[str, str]:
        """Split a full file path into (directory, file name)."""
        return split_file_path(file_path)

    async def write_text(self, file_path: str, content: str, mode: WriteMode = WriteMode.OVERWRITE) -> None:
        if content is None:
            raise ValueError("content cannot be None")
        directory, file_name = self.split_path(file_path)
        with BytesIO(content.encode("utf-8")) as stream:
            await self.write_file(directory, file_name, stream, mode)
