"""
Local staging files

smbclient only moves whole files between the share and local paths, so
stream contents are materialised into uniquely named files under the
platform temp directory. Every staging file is removed when its scope
exits, whatever the outcome.
"""

import asyncio
import logging
import os
import re
import shutil
import tempfile
import uuid
from contextlib import contextmanager
from typing import BinaryIO, Iterator, Optional

logger = logging.getLogger("smbshare")

# characters smbclient sub-commands would need escaped
_UNSAFE = re.compile(r'[\\"`$]')


def staging_path(file_name: str, tag: str = "") -> str:
    name = os.path.basename(file_name.replace("\\", "/")) or "file"
    name = _UNSAFE.sub("_", name)
    prefix = f"{uuid.uuid4().hex}_{tag}_" if tag else f"{uuid.uuid4().hex}_"
    return os.path.join(tempfile.gettempdir(), prefix + name)


def remove_quietly(path: str):
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove staging file {path}: {e}")


@contextmanager
def staged_file(file_name: str, tag: str = "") -> Iterator[str]:
    """Yield a fresh staging path and delete the file on exit."""
    path = staging_path(file_name, tag)
    try:
        yield path
    finally:
        remove_quietly(path)


def _materialize(stream: BinaryIO, dest: str, prefix: Optional[str]):
    with open(dest, "wb") as out:
        if prefix is not None:
            with open(prefix, "rb") as existing:
                shutil.copyfileobj(existing, out)
        shutil.copyfileobj(stream, out)


async def materialize(stream: BinaryIO, dest: str, prefix: Optional[str] = None):
    """Write ``prefix``'s bytes (if given) then the rest of ``stream`` into ``dest``.

    The stream is read from its current position.
    """
    await asyncio.to_thread(_materialize, stream, dest, prefix)


def open_detached(path: str) -> BinaryIO:
    """Open a staging file for reading and unlink it right away.

    The returned handle keeps the data alive until it is closed.
    """
    fh = open(path, "rb")
    try:
        os.remove(path)
    except OSError:
        fh.close()
        raise
    return fh
