"""
Base class for all appcontroller commands
"""

# Standard
from typing import List
import abc
import argparse

# Third Party
import yaml

# First Party
import alog

# Local
from .. import config
from ..client import ClusterClientBase, DryRunClusterClient, OpenshiftClusterClient
from ..definition import ResourceDefinition
from ..exceptions import assert_config
from ..resources import (
    Resource,
    find_definition,
    new_existing_resource,
    new_resource,
)

log = alog.use_channel("CMD")


class CmdBase(abc.ABC):
    __doc__ = __doc__

    @abc.abstractmethod
    def add_subparser(
        self,
        subparsers: argparse._SubParsersAction,
    ) -> argparse.ArgumentParser:
        """Add this command's argument parser subcommand

        Args:
            subparsers (argparse._SubParsersAction): The subparser section for
                the central main parser

        Returns:
            subparser (argparse.ArgumentParser): The configured parser for this
                command
        """

    @abc.abstractmethod
    def cmd(self, args: argparse.Namespace):
        """Execute the command with the parsed arguments

        Args:
            args (argparse.Namespace): The parsed command line arguments
        """


class ResourceCmdBase(CmdBase):
    """Shared base for commands that act on a single resource"""

    # Name and help string for the subcommand
    command_name = None
    command_help = None

    def add_subparser(
        self,
        subparsers: argparse._SubParsersAction,
    ) -> argparse.ArgumentParser:
        parser = subparsers.add_parser(self.command_name, help=self.command_help)
        target_args = parser.add_argument_group("Resource Selection")
        target_args.add_argument(
            "--file",
            "-f",
            default=None,
            help="YAML file holding one or more resource definitions",
        )
        target_args.add_argument(
            "--name",
            "-n",
            default=None,
            help="Name of the resource in --file to act on",
        )
        target_args.add_argument(
            "--existing",
            "-e",
            default=None,
            help="Act on an existing resource by key (e.g. service/web)",
        )
        return parser

    def cmd(self, args: argparse.Namespace):
        client = make_client()
        resource = load_resource(args, client)
        log.debug("Running [%s] for [%s]", self.command_name, resource.key)
        return self.run(resource, args)

    @abc.abstractmethod
    def run(self, resource: Resource, args: argparse.Namespace):
        """Run the command against the selected resource"""


## Helpers #####################################################################


def make_client() -> ClusterClientBase:
    """Build the cluster client selected by the library config"""
    if config.dry_run:
        log.info("Running with the dry run cluster client")
        return DryRunClusterClient(namespace=config.namespace)
    return OpenshiftClusterClient(namespace=config.namespace)


def load_definitions(path: str) -> List[ResourceDefinition]:
    """Load every resource definition from a (multi-document) YAML file"""
    with open(path, encoding="utf-8") as handle:
        documents = [doc for doc in yaml.safe_load_all(handle) if doc]
    definitions = []
    for doc in documents:
        items = doc if isinstance(doc, list) else [doc]
        definitions.extend(ResourceDefinition.from_dict(item) for item in items)
    log.debug2("Loaded %d definitions from %s", len(definitions), path)
    return definitions


def load_resource(args: argparse.Namespace, client: ClusterClientBase) -> Resource:
    """Construct the resource selected on the command line"""
    if args.existing:
        assert_config(not args.file, "Use either --existing or --file, not both")
        return new_existing_resource(args.existing, client)

    assert_config(args.file, "One of --existing or --file is required")
    definitions = load_definitions(args.file)
    if args.name is None:
        assert_config(
            len(definitions) == 1,
            f"--name is required when {args.file} holds more than one definition",
        )
        definition = definitions[0]
    else:
        definition = find_definition(definitions, args.name)
        assert_config(
            definition is not None, f"No definition named [{args.name}] in {args.file}"
        )
    log.debug2("Using definition [%s] from %s", definition.name, args.file)
    return new_resource(definition, client)
