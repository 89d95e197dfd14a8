#!/usr/bin/env python
"""
Create, delete, and check the readiness of cluster resources
"""

# Standard
from typing import Dict, List
import argparse

# First Party
import aconfig
import alog

# Local
from .cmd import CmdBase, CreateCmd, DeleteCmd, StatusCmd
from .config import library_config
from .log_format import AppControllerJsonFormatter

log = alog.use_channel("MAIN")

## Helpers #####################################################################


def add_library_config_args(parser, config_obj=None, path=None) -> Dict[str, List[str]]:
    """Add a --<key> argument for every library config value. Nested keys use
    '.' notation (e.g. --api_versions.stateful_set).

    Returns:
        setters:  Dict[str, List[str]]
            Map from argparse dest to the config path that it overrides
    """
    path = path or []
    setters = {}
    config_obj = library_config if config_obj is None else config_obj
    for key, val in config_obj.items():
        sub_path = path + [key]
        if isinstance(val, aconfig.AttributeAccessDict):
            setters.update(add_library_config_args(parser, val, sub_path))
            continue

        arg_name = ".".join(sub_path)
        dest_name = "_".join(sub_path)
        kwargs = {
            "default": val,
            "dest": dest_name,
            "help": f"Library config override for {arg_name}",
        }
        if isinstance(val, bool):
            kwargs["action"] = "store_true"
        elif isinstance(val, list):
            kwargs["nargs"] = "*"
        elif val is not None:
            kwargs["type"] = type(val)
        else:
            kwargs["type"] = _parse_optional_bool
        parser.add_argument(f"--{arg_name}", **kwargs)
        setters[dest_name] = sub_path
    return setters


def update_library_config(args, setters):
    """Write the parsed argument values back into the library config"""
    for dest_name, config_path in setters.items():
        config_obj = library_config
        for part in config_path[:-1]:
            config_obj = config_obj[part]
        config_obj[config_path[-1]] = getattr(args, dest_name)


def _parse_optional_bool(value: str):
    # Only optional booleans default to null in the library config
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    raise argparse.ArgumentTypeError(f"Expected true or false, got {value}")


def add_command(
    subparsers: argparse._SubParsersAction,
    cmd: CmdBase,
) -> Dict[str, List[str]]:
    """Add the subparser and set up the default function call"""
    parser = cmd.add_subparser(subparsers)
    parser.set_defaults(func=cmd.cmd)
    library_args = parser.add_argument_group("Library Configuration")
    return add_library_config_args(library_args)


## Main ########################################################################


def main(argv=None):
    """The main entrypoint for the appcontroller command line"""
    parser = argparse.ArgumentParser(description=__doc__)
    subparsers = parser.add_subparsers(
        help="Available commands", dest="command", required=True
    )
    setters = {}
    for cmd in (CreateCmd(), DeleteCmd(), StatusCmd()):
        setters.update(add_command(subparsers, cmd))
    args = parser.parse_args(argv)

    update_library_config(args, setters)
    alog.configure(
        default_level=library_config.log_level,
        filters=library_config.log_filters,
        formatter=(
            AppControllerJsonFormatter(namespace=library_config.namespace)
            if library_config.log_json
            else "pretty"
        ),
        thread_id=library_config.log_thread_id,
    )

    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    main()
