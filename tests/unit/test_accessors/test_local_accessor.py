import io

import pytest

from smbshare.accessors.local_accessor import LocalFileAccessor
from smbshare.engine.write import WriteMode
from smbshare.errors import ConflictError, InvalidAddressError, RemoteNotFoundError


@pytest.fixture
def local():
    return LocalFileAccessor()


@pytest.fixture
def share_dir(tmp_path):
    (tmp_path / "a.txt").write_bytes(b"alpha")
    (tmp_path / "b.log").write_bytes(b"beta")
    (tmp_path / "sub").mkdir()
    return tmp_path


@pytest.mark.asyncio
async def test_enumerate_lists_files_only(local, share_dir):
    assert sorted(await local.enumerate_files(str(share_dir))) == ["a.txt", "b.log"]


@pytest.mark.asyncio
async def test_enumerate_missing_directory(local, tmp_path):
    with pytest.raises(RemoteNotFoundError):
        await local.enumerate_files(str(tmp_path / "nope"))


@pytest.mark.asyncio
async def test_file_exists(local, share_dir):
    assert await local.file_exists("a.txt", str(share_dir))
    assert not await local.file_exists("sub", str(share_dir))
    assert not await local.file_exists("zzz.txt", str(share_dir))


@pytest.mark.asyncio
async def test_read(local, share_dir):
    stream = await local.read_file(str(share_dir), "a.txt")
    with stream:
        assert stream.read() == b"alpha"


@pytest.mark.asyncio
async def test_read_missing(local, share_dir):
    with pytest.raises(RemoteNotFoundError):
        await local.read_file(str(share_dir), "missing.txt")


@pytest.mark.asyncio
async def test_write_modes(local, share_dir):
    d = str(share_dir)
    await local.write_file(d, "a.txt", io.BytesIO(b"new"))
    assert (share_dir / "a.txt").read_bytes() == b"new"

    await local.write_file(d, "a.txt", io.BytesIO(b"+more"), WriteMode.APPEND)
    assert (share_dir / "a.txt").read_bytes() == b"new+more"

    await local.write_file(d, "c.txt", io.BytesIO(b"c"), WriteMode.CREATE_NEW)
    assert (share_dir / "c.txt").read_bytes() == b"c"


@pytest.mark.asyncio
async def test_create_new_conflict(local, share_dir):
    with pytest.raises(ConflictError):
        await local.write_file(str(share_dir), "a.txt", io.BytesIO(b"x"), WriteMode.CREATE_NEW)
    assert (share_dir / "a.txt").read_bytes() == b"alpha"


@pytest.mark.asyncio
async def test_delete(local, share_dir):
    await local.delete_file(str(share_dir), "a.txt")
    assert not (share_dir / "a.txt").exists()
    # absent file is not an error
    await local.delete_file(str(share_dir), "a.txt")


@pytest.mark.asyncio
async def test_move(local, share_dir):
    await local.move_file(str(share_dir), "a.txt", str(share_dir / "sub"), "moved.txt")
    assert not (share_dir / "a.txt").exists()
    assert (share_dir / "sub" / "moved.txt").read_bytes() == b"alpha"


@pytest.mark.asyncio
async def test_create_directory_idempotent(local, tmp_path):
    target = tmp_path / "x" / "y"
    await local.create_directory(str(target))
    await local.create_directory(str(target))
    assert target.is_dir()


@pytest.mark.asyncio
async def test_can_connect(local, share_dir):
    assert await local.can_connect(str(share_dir))
    assert not await local.can_connect(str(share_dir / "a.txt"))
    assert not await local.can_connect("")


@pytest.mark.asyncio
async def test_write_text(local, share_dir):
    await local.write_text(str(share_dir / "t.txt"), "text")
    assert (share_dir / "t.txt").read_text() == "text"


@pytest.mark.asyncio
async def test_blank_arguments(local):
    with pytest.raises(InvalidAddressError):
        await local.read_file("", "a.txt")


def test_split_path(local):
    assert local.split_path("/mnt/share/dir/file.txt") == ("/mnt/share/dir", "file.txt")
    assert local.split_path("file.txt") == (".", "file.txt")
    with pytest.raises(InvalidAddressError):
        local.split_path("")
