"""Configuration models for the forking server.

One set of fields is declared once and shared by two models:

- ServerConfigBuilder: mutable, validated on every assignment, used only while the
  defaults, config file and command-line layers are applied
- ServerConfig: frozen result handed to the supervisor and the worker

Contract:
- Inputs: Field assignments from the binder, loader and assembler
- Outputs: Validated, immutable ServerConfig objects
- Side Effects: None
"""

from __future__ import annotations

import uuid
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator

DEFAULT_PORT = 9998
DEFAULT_HOST = "localhost"
ALL_INTERFACES = "0.0.0.0"

# If the worker doesn't receive a ping or the parent doesn't hear back from
# a ping in this amount of time, the worker is terminated and restarted.
DEFAULT_PING_TIMEOUT_MILLIS = 30_000
DEFAULT_PING_PULSE_MILLIS = 500

# Per task (parse, detect, unpack, ...) before the worker is shut down.
DEFAULT_TASK_TIMEOUT_MILLIS = 120_000
DEFAULT_TASK_PULSE_MILLIS = 500

DEFAULT_FORKED_STARTUP_MILLIS = 120_000

# Restart the worker after this many files.
DEFAULT_MAX_FILES = 100_000
DEFAULT_MAX_RESTARTS = -1

DEFAULT_DIGEST_MARK_LIMIT = 20 * 1024 * 1024
DEFAULT_TEMP_FILE_PREFIX = "tika-server-tmp-"

LOG_LEVELS = frozenset({"debug", "info"})

# Config file keys that only mean something when the server forks a worker.
FORK_MODE_ONLY = (
    "taskTimeoutMillis",
    "taskPulseMillis",
    "pingTimeoutMillis",
    "pingPulseMillis",
    "maxFiles",
    "maxRestarts",
    "numRestarts",
    "forkedStatusFile",
    "maxForkedStartupMillis",
    "tmpFilePrefix",
)

UNSECURE_WARNING = (
    "WARNING: You have chosen to run the server with unsecure features enabled.\n"
    "Whoever has access to your service now has the same read permissions\n"
    "as you've given your fetchers and the same write permissions as your emitters.\n"
    "Users could request and receive a sensitive file from your\n"
    "drive or a webpage from your intranet and/or send malicious content to\n"
    "your emitter endpoints.  See CVE-2015-3271.\n"
    "Please make sure you know what you are doing."
)


def _new_id() -> str:
    return str(uuid.uuid4())


class ServerSettingsBase(BaseModel):
    """Fields and per-field rules shared by the builder and the frozen config."""

    # Network identity
    host: str | None = Field(
        default=DEFAULT_HOST,
        description="Listen address ('*' binds all interfaces)",
    )
    port: int = Field(default=DEFAULT_PORT, description="Listen port")
    port_string: str | None = Field(
        default=str(DEFAULT_PORT),
        description="Port as given; kept verbatim when it is not a number",
    )
    id_base: str = Field(default_factory=_new_id, description="Server instance id")

    # Worker lifecycle, read by the parent only
    task_timeout_millis: int = Field(
        default=DEFAULT_TASK_TIMEOUT_MILLIS,
        description="Milliseconds allowed per task before the worker is restarted",
    )
    task_pulse_millis: int = Field(
        default=DEFAULT_TASK_PULSE_MILLIS,
        description="How often the parent checks for timed out tasks",
    )
    ping_timeout_millis: int = Field(
        default=DEFAULT_PING_TIMEOUT_MILLIS,
        description="Restart the worker if no ping round trip completes in this time",
    )
    ping_pulse_millis: int = Field(
        default=DEFAULT_PING_PULSE_MILLIS,
        description="How often to test that the parent and worker are alive",
    )
    max_forked_startup_millis: int = Field(
        default=DEFAULT_FORKED_STARTUP_MILLIS,
        description="Maximum time to allow for the worker to start or restart",
    )
    max_restarts: int = Field(
        default=DEFAULT_MAX_RESTARTS,
        description="Maximum number of worker restarts (-1 = unlimited)",
    )
    max_files: int = Field(
        default=DEFAULT_MAX_FILES,
        description="Files processed before the worker is restarted",
    )

    # Set on the worker's command line by the parent
    forked_status_file: str | None = None
    num_restarts: int = 0

    # Feature flags
    enable_unsecure_features: bool = False
    return_stack_trace: bool = False
    no_fork: bool = False

    endpoints: list[str] = Field(
        default_factory=list,
        description="Enabled endpoints in declaration order (empty = all)",
    )
    forked_jvm_args: list[str] = Field(
        default_factory=list,
        description="Extra worker startup arguments in declaration order",
    )
    temp_file_prefix: str = DEFAULT_TEMP_FILE_PREFIX
    digest: str = Field(
        default="",
        description="Digest specification, e.g. 'md5:32,sha256:16'",
    )
    digest_mark_limit: int = DEFAULT_DIGEST_MARK_LIMIT
    cors: str = Field(default="", description="CORS origin, may be '*'")
    log_level: str | None = Field(default=None, description="'debug' or 'info'")
    config_path: Path | None = None

    @field_validator("host")
    @classmethod
    def normalize_host(cls, value: str | None) -> str | None:
        """Map the '*' wildcard to the all-interfaces address."""
        if value == "*":
            return ALL_INTERFACES
        return value

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str | None) -> str | None:
        if value is not None and value not in LOG_LEVELS:
            raise ValueError("log level must be one of: 'debug' or 'info'")
        return value


class ServerConfig(ServerSettingsBase):
    """Assembled server configuration.

    Frozen once assembly finishes and safe to share across threads.

    Example:
        >>> config = ServerConfig()
        >>> assert config.host == "localhost"
        >>> assert config.port == 9998
    """

    model_config = ConfigDict(frozen=True)

    endpoints: tuple[str, ...] = ()
    forked_jvm_args: tuple[str, ...] = ()

    @property
    def id(self) -> str:
        return self.id_base

    @property
    def has_config_file(self) -> bool:
        return self.config_path is not None


class ServerConfigBuilder(ServerSettingsBase):
    """Mutable configuration used while the layers are applied.

    Every assignment is validated, so an unsupported log level fails at the
    point where it is set rather than at the end of assembly.
    """

    model_config = ConfigDict(validate_assignment=True)

    def build(self) -> ServerConfig:
        """Freeze the current values into a ServerConfig."""
        return ServerConfig.model_validate(self.model_dump())
