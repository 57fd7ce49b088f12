"""
Accessor construction

Selects the backend once, at construction. The smbclient backend is only
handed out after its availability probe succeeds.
"""

import logging
import os
from typing import Optional

from smbshare.accessors.file_accessor import FileAccessor
from smbshare.accessors.local_accessor import LocalFileAccessor
from smbshare.accessors.smbclient_accessor import SmbClientFileAccessor
from smbshare.config.configuration import SmbShareConfiguration
from smbshare.engine.availability import AvailabilityProbe
from smbshare.errors import ToolUnavailableError
from smbshare.transport.command import CommandBuilder
from smbshare.transport.process import ProcessRunner
from smbshare.transport.smbclient import SmbClientTransport

logger = logging.getLogger("smbshare")

INSTALL_HINT = (
    "smbclient is not installed or not available in PATH. "
    "On Linux, install it using: apt-get install smbclient (Debian/Ubuntu) "
    "or yum install samba-client (RHEL/CentOS)"
)


def resolve_backend(kind: str) -> str:
    if kind == "auto":
        return "local" if os.name == "nt" else "smbclient"
    return kind


async def create_file_accessor(
        cfg: SmbShareConfiguration,
        runner: Optional[ProcessRunner] = None,
        probe: Optional[AvailabilityProbe] = None,
) -> FileAccessor:
    """
    Build the accessor described by ``cfg``

    Args:
        cfg: Validated configuration
        runner: Process runner (defaults to a real one honouring tool.timeout)
        probe: Caller-owned availability probe; share one to check only once
            per process

    Raises:
        ToolUnavailableError: smbclient backend selected but not runnable
        ValueError: invalid configuration
    """
    cfg.validate()

    backend = resolve_backend(cfg.backend.kind)
    if backend == "local":
        logger.debug("Using native file APIs")
        return LocalFileAccessor()

    builder = CommandBuilder(
        cfg.auth.to_context(),
        executable=cfg.tool.executable,
        use_wsl=cfg.tool.use_wsl,
        credential_transport=cfg.tool.credential_transport,
    )
    runner = runner or ProcessRunner(timeout=cfg.tool.timeout)
    probe = probe or AvailabilityProbe(runner, builder)

    if not await probe.is_tool_available():
        logger.error("smbclient is not installed or not available in PATH.")
        raise ToolUnavailableError(INSTALL_HINT)

    transport = SmbClientTransport(builder, runner)
    return SmbClientFileAccessor(transport, retry_delay=cfg.move.retry_delay)


async def with_kerberos(**kwargs) -> FileAccessor:
    """smbclient accessor authenticating with the current Kerberos ticket (kinit)."""
    cfg = SmbShareConfiguration()
    cfg.backend.kind = "smbclient"
    cfg.auth.kerberos = True
    return await create_file_accessor(cfg, **kwargs)


async def with_credentials(
        username: str,
        password: str,
        domain: Optional[str] = None,
        **kwargs,
) -> FileAccessor:
    if not username or not username.strip():
        raise ValueError("Username cannot be null or empty")
    if not password or not password.strip():
        raise ValueError("Password cannot be null or empty")

    cfg = SmbShareConfiguration()
    cfg.backend.kind = "smbclient"
    cfg.auth.kerberos = False
    cfg.auth.username = username
    cfg.auth.password = password
    cfg.auth.domain = domain
    return await create_file_accessor(cfg, **kwargs)
