"""Command-line arguments for a newly spawned worker process.

The parent passes the worker its port, instance id and config file location.
Timeouts and restart policy are not passed; the worker reads them from its
own copy of the same config file.
"""

from __future__ import annotations

import sys

from forkserver.config.settings import ServerConfig

IS_WINDOWS = sys.platform == "win32"


def escape_command_line(arg: str) -> str:
    """Make arg survive as a single argument on the worker's command line.

    Argument lists need no quoting on POSIX. On Windows an argument with a
    space is wrapped in double quotes unless it already is.

    Example:
        >>> escape_command_line("/opt/server/config.xml")
        '/opt/server/config.xml'
    """
    if IS_WINDOWS and " " in arg and not (arg.startswith('"') and arg.endswith('"')):
        return f'"{arg}"'
    return arg


def forked_process_args(config: ServerConfig, port: int, worker_id: str) -> list[str]:
    """Build the argument list for a worker.

    Args:
        config: Parent's assembled configuration
        port: Port the worker should listen on
        worker_id: Instance id for the worker

    Returns:
        ["-p", port, "-i", id] plus ["-c", config path] when a config file was used

    Example:
        >>> forked_process_args(ServerConfig(), 7000, "worker-1")
        ['-p', '7000', '-i', 'worker-1']
    """
    args = ["-p", str(port), "-i", worker_id]
    if config.has_config_file:
        args.extend(["-c", escape_command_line(str(config.config_path.absolute()))])
    return args
