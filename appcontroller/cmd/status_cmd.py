"""
Report whether a resource and everything it depends on is ready
"""

# Standard
import argparse
import sys

# Local
from ..status import Readiness
from .base import ResourceCmdBase


class StatusCmd(ResourceCmdBase):
    __doc__ = __doc__

    command_name = "status"
    command_help = __doc__

    def add_subparser(self, subparsers):
        parser = super().add_subparser(subparsers)
        parser.add_argument(
            "--meta",
            "-m",
            nargs="*",
            default=[],
            help="key=value hints passed to the status check (e.g. success_factor=50)",
        )
        return parser

    def run(self, resource, args: argparse.Namespace):
        meta = dict(item.split("=", 1) for item in args.meta if "=" in item)
        readiness = resource.status(meta)
        print(f"{resource.key}: {readiness}")
        if readiness is not Readiness.READY:
            sys.exit(1)
