"""
Create a resource unless it already exists
"""

# Standard
import argparse

# Local
from .base import ResourceCmdBase


class CreateCmd(ResourceCmdBase):
    __doc__ = __doc__

    command_name = "create"
    command_help = __doc__

    def run(self, resource, args: argparse.Namespace):
        resource.create()
        print(f"{resource.key} created")
