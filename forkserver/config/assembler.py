"""Assemble server configuration from defaults, a config file and the command line.

Layers are applied in order, each overwriting what the previous one set:
1. Built-in defaults
2. Config file (-c), if given
3. Command-line overrides (-p, -h, -i, --numRestarts, --forkedStatusFile)

Contract:
- Inputs: Parsed command-line options
- Outputs: Frozen ServerConfig
- Side Effects: Reads the config file; logs warnings for risky settings
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from .binder import BINDINGS
from .binder import parse_int
from .errors import InvalidConfigError
from .loader import load_path
from .settings import FORK_MODE_ONLY
from .settings import UNSECURE_WARNING
from .settings import ServerConfig
from .settings import ServerConfigBuilder
from .validation import validate_consistency

logger = logging.getLogger(__name__)

CONFIG_OPTION = "c"
PORT_OPTION = "p"
HOST_OPTION = "h"
ID_OPTION = "i"
NUM_RESTARTS_OPTION = "numRestarts"
FORKED_STATUS_FILE_OPTION = "forkedStatusFile"

# Worker-only keys that are set on the command line rather than bound from a file
_COMMAND_LINE_FIELDS = {
    "numRestarts": "num_restarts",
    "forkedStatusFile": "forked_status_file",
}


def assemble(options: Mapping[str, str | None]) -> ServerConfig:
    """Assemble the configuration for this process.

    Args:
        options: Option name -> value for each flag given on the command line.
            Absent flags may be missing or None.

    Returns:
        Frozen configuration

    Raises:
        ConfigLoadError: Config file can't be read or parsed
        UnexpectedRootError: Config file has the wrong root element
        BindError: Config file has an unknown key or a bad value
        InvalidConfigError: Final configuration is inconsistent

    Example:
        >>> config = assemble({"p": "7000", "h": "*", "i": "worker-1"})
        >>> config.host, config.port, config.id
        ('0.0.0.0', 7000, 'worker-1')
    """
    config_file = options.get(CONFIG_OPTION)
    if config_file is not None:
        builder = load_path(Path(config_file))
        builder.config_path = Path(config_file)
    else:
        logger.debug("No configuration file given, using defaults")
        builder = ServerConfigBuilder()

    return apply_overrides(builder, options)


def apply_overrides(builder: ServerConfigBuilder, options: Mapping[str, str | None]) -> ServerConfig:
    """Apply command-line overrides, run the final validation pass and freeze.

    A port that isn't a number is kept only in its textual form; the numeric
    port keeps whatever the earlier layers set.

    Raises:
        InvalidConfigError: --numRestarts isn't an integer, or host is unset
    """
    port = options.get(PORT_OPTION)
    if port is not None:
        try:
            builder.port = parse_int(port)
        except ValueError:
            logger.debug(f"Port {port!r} is not numeric, keeping it as text")
        builder.port_string = port

    host = options.get(HOST_OPTION)
    if host is not None:
        builder.host = host

    instance_id = options.get(ID_OPTION)
    if instance_id is not None:
        builder.id_base = instance_id

    num_restarts = options.get(NUM_RESTARTS_OPTION)
    if num_restarts is not None:
        try:
            builder.num_restarts = parse_int(num_restarts)
        except ValueError as e:
            raise InvalidConfigError(f"--numRestarts must be an integer, got {num_restarts!r}") from e

    forked_status_file = options.get(FORKED_STATUS_FILE_OPTION)
    if forked_status_file is not None:
        builder.forked_status_file = forked_status_file

    validate_consistency(builder)
    config = builder.build()

    _warn_about_risky_settings(config)
    logger.info(f"Server configuration assembled: host={config.host}, port={config.port_string}, id={config.id}")
    return config


def fork_mode_only_overrides(config: ServerConfig) -> list[str]:
    """List fork-mode-only keys whose values differ from their defaults.

    Args:
        config: Assembled configuration

    Returns:
        Config keys in FORK_MODE_ONLY order
    """
    changed = []
    for key in FORK_MODE_ONLY:
        binding = BINDINGS.get(key)
        field = binding.field if binding is not None else _COMMAND_LINE_FIELDS[key]
        if getattr(config, field) != ServerConfig.model_fields[field].default:
            changed.append(key)
    return changed


def _warn_about_risky_settings(config: ServerConfig) -> None:
    if config.enable_unsecure_features:
        logger.warning(UNSECURE_WARNING)

    if config.no_fork:
        ignored = fork_mode_only_overrides(config)
        if ignored:
            logger.warning(f"Forking is disabled; these settings have no effect: {', '.join(ignored)}")
