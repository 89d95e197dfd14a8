"""
Delete a resource from the cluster
"""

# Standard
import argparse

# Local
from .base import ResourceCmdBase


class DeleteCmd(ResourceCmdBase):
    __doc__ = __doc__

    command_name = "delete"
    command_help = __doc__

    def run(self, resource, args: argparse.Namespace):
        resource.delete()
        print(f"{resource.key} deleted")
