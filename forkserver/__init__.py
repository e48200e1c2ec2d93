"""forkserver - configuration for a server that supervises a forked worker.

Public Interface:
    Modules:
    - config: Layered configuration assembly and validation
    - worker: Arguments for spawned worker processes
"""

__version__ = "0.1.0"

from .config import ServerConfig
from .config import assemble
from .worker import forked_process_args

__all__ = [
    "ServerConfig",
    "assemble",
    "forked_process_args",
]
