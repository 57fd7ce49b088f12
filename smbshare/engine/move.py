"""
Move pipeline

smbclient has no rename across locations, so a move is read, write to
destination, delete source. This is not atomic. A failing source delete is
retried once after a short delay; if the retry fails too, the destination
copy is removed (best effort) and the first delete error is raised.
"""

import asyncio
import logging

from smbshare.accessors.file_accessor import FileAccessor
from smbshare.engine.write import WriteMode

logger = logging.getLogger("smbshare")

DEFAULT_RETRY_DELAY = 1.0


class MoveOrchestrator:

    def __init__(self, accessor: FileAccessor, retry_delay: float = DEFAULT_RETRY_DELAY):
        if retry_delay < 0:
            raise ValueError("retry_delay cannot be negative")
        self.accessor = accessor
        self.retry_delay = retry_delay

    async def move(self, source_dir: str, source_name: str, dest_dir: str, dest_name: str) -> None:
        # fetch + upload: any failure leaves the source untouched
        stream = await self.accessor.read_file(source_dir, source_name)
        try:
            await self.accessor.write_file(dest_dir, dest_name, stream, WriteMode.OVERWRITE)
        finally:
            stream.close()

        try:
            await self.accessor.delete_file(source_dir, source_name)
            return
        except Exception as e:
            delete_error = e
            logger.warning(
                f"Delete of {source_dir}/{source_name} failed after copy, "
                f"retrying in {self.retry_delay}s: {e}"
            )

        await asyncio.sleep(self.retry_delay)

        try:
            await self.accessor.delete_file(source_dir, source_name)
            logger.info(f"Delete of {source_dir}/{source_name} succeeded on retry")
            return
        except Exception as e:
            logger.error(f"Delete retry of {source_dir}/{source_name} failed: {e}")

        await self._rollback(dest_dir, dest_name)
        raise delete_error

    async def _rollback(self, dest_dir: str, dest_name: str):
        try:
            await self.accessor.delete_file(dest_dir, dest_name)
            logger.warning(f"Rolled back move: removed {dest_dir}/{dest_name}")
        except Exception as e:
            logger.error(
                f"Rollback failed, {dest_dir}/{dest_name} left in place: {e}"
            )
