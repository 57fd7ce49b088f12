from unittest.mock import AsyncMock, MagicMock

import pytest

from smbshare.engine.health import ShareHealthCheck


def make_accessor(**kwargs):
    accessor = MagicMock()
    accessor.can_connect = AsyncMock(**kwargs)
    return accessor


@pytest.mark.asyncio
async def test_healthy():
    result = await ShareHealthCheck(make_accessor(return_value=True), "//srv/share").check()
    assert result.healthy
    assert "//srv/share" in result.description
    assert result.error is None


@pytest.mark.asyncio
async def test_unhealthy():
    result = await ShareHealthCheck(make_accessor(return_value=False), "//srv/share").check()
    assert not result.healthy
    assert "Unable to connect" in result.description


@pytest.mark.asyncio
async def test_exception_becomes_unhealthy():
    boom = RuntimeError("boom")
    result = await ShareHealthCheck(make_accessor(side_effect=boom), "//srv/share").check()
    assert not result.healthy
    assert result.error is boom
    assert "boom" in result.description


@pytest.mark.asyncio
async def test_real_accessor(accessor, fake_smbclient):
    fake_smbclient.dirs.add("dir")
    assert (await ShareHealthCheck(accessor, "//srv/share/dir").check()).healthy
    assert not (await ShareHealthCheck(accessor, "//srv/share/nope").check()).healthy


def test_requires_arguments():
    with pytest.raises(ValueError):
        ShareHealthCheck(None, "//srv/share")
    with pytest.raises(ValueError):
        ShareHealthCheck(make_accessor(), None)
