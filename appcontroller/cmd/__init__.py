"""
This module holds all of the command classes for the main entrypoint
"""

# Local
from .base import CmdBase, ResourceCmdBase
from .create_cmd import CreateCmd
from .delete_cmd import DeleteCmd
from .status_cmd import StatusCmd
