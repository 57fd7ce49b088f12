"""
Configuration for smbshare

Sections mirror the TOML file layout:

    [auth]     kerberos / username / password / domain
    [tool]     smbclient executable, WSL wrapper, credential transport, timeout
    [move]     delay before the single source-delete retry
    [backend]  auto | smbclient | local
    [logging]  level / file / type
"""

import logging
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import toml

from smbshare.transport.command import CREDENTIAL_TRANSPORTS, DEFAULT_EXECUTABLE, AuthContext

logger = logging.getLogger("smbshare")

BACKENDS = ("auto", "smbclient", "local")


@dataclass
class AuthConfig:
    kerberos: bool = True
    username: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)
    domain: Optional[str] = None

    def to_context(self) -> AuthContext:
        if self.kerberos:
            return AuthContext.kerberos()
        return AuthContext.credentials(self.username, self.password, self.domain)


@dataclass
class ToolConfig:
    executable: str = DEFAULT_EXECUTABLE
    use_wsl: bool = False
    credential_transport: str = "file"
    timeout: float = 0


@dataclass
class MoveConfig:
    retry_delay: float = 1.0


@dataclass
class BackendConfig:
    kind: str = "auto"


@dataclass
class LoggingConfig:
    level: str = "info"
    file: Optional[str] = None
    type: str = "plain"


@dataclass
class SmbShareConfiguration:
    auth: AuthConfig = field(default_factory=AuthConfig)
    tool: ToolConfig = field(default_factory=ToolConfig)
    move: MoveConfig = field(default_factory=MoveConfig)
    backend: BackendConfig = field(default_factory=BackendConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def load_from_toml(self, path: str):
        """Overlay values from a TOML file onto this configuration."""
        cfg_path = Path(path)
        if not cfg_path.is_file():
            raise FileNotFoundError(f"Config file not found: {path}")

        data = toml.load(cfg_path)
        logger.debug(f"Loaded config from {path}")
        self.apply(data)

    def apply(self, data: Dict[str, Any]):
        for section_name, values in data.items():
            section = getattr(self, section_name, None)
            if not is_dataclass(section) or not isinstance(values, dict):
                raise ValueError(f"Unknown config section: [{section_name}]")

            known = {f.name for f in fields(section)}
            for key, value in values.items():
                if key not in known:
                    raise ValueError(f"Unknown config key: {section_name}.{key}")
                # empty strings in TOML mean "unset"
                setattr(section, key, None if value == "" else value)

    def validate(self):
        if not self.auth.kerberos and (
                not self.auth.username or not self.auth.password
        ):
            raise ValueError(
                "Username and Password must be provided when not using Kerberos authentication."
            )

        if self.tool.credential_transport not in CREDENTIAL_TRANSPORTS:
            raise ValueError(
                f"Invalid credential_transport {self.tool.credential_transport!r} "
                f"(use one of: {', '.join(CREDENTIAL_TRANSPORTS)})"
            )

        if not self.tool.executable:
            raise ValueError("tool.executable cannot be empty")

        if self.tool.timeout is not None and self.tool.timeout < 0:
            raise ValueError("tool.timeout cannot be negative")

        if self.move.retry_delay < 0:
            raise ValueError("move.retry_delay cannot be negative")

        if self.backend.kind not in BACKENDS:
            raise ValueError(
                f"Invalid backend {self.backend.kind!r} (use one of: {', '.join(BACKENDS)})"
            )
