"""Worker process helpers.

Public Interface:
    - forked_process_args: Arguments for a newly spawned worker
    - escape_command_line: Quote one argument for the worker's command line
"""

from .arguments import escape_command_line
from .arguments import forked_process_args

__all__ = [
    "forked_process_args",
    "escape_command_line",
]
