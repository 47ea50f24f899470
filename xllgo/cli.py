#
# Copyright 2024 zhlinh and xllgo Project Authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found at
#
# https://opensource.org/license/MIT
#
# The above copyright notice and this permission
# notice shall be included in all copies or
# substantial portions of the Software.

import os
import sys
import importlib
import argparse

from xllgo.utils.context.namespace import CliNameSpace
from xllgo.utils.context.context import CliContext
from xllgo.utils.context.command import CliCommand

SCRIPT_PATH = os.path.split(os.path.realpath(__file__))[0]
PACKAGE_NAME = os.path.basename(SCRIPT_PATH)


# Root Class for Command Line Interface
class Cli(CliCommand):
    def description(self) -> str:
        return """XLLGO - Excel Add-In Build Staging Tool

Stages .dna add-in descriptors as 32-bit and 64-bit Excel add-ins, next to the
.xll loader of each bitness and the matching .config file.

USAGE:
    xllgo <command> [options]

COMMANDS:
    stage       Stage add-ins into the build output directory
    help        Show detailed help information

EXAMPLES:
    xllgo stage                          # Stage using XLLGO.toml
    xllgo stage --manifest addins.json   # Also write the packing manifest
    xllgo help                           # Show detailed help

For more information on a specific command:
    xllgo <command> --help
        """

    def get_command_list(self) -> list:
        arr = []
        for command in os.listdir(os.path.join(SCRIPT_PATH, "commands")):
            if (
                not command.startswith("_")
                and not command.startswith("test_")
                and command.endswith(".py")
            ):
                arr.append(os.path.splitext(os.path.basename(command))[0])
        return sorted(arr)

    def _root_parser(self, add_help: bool) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="xllgo",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
            add_help=add_help,
        )
        parser.add_argument(
            "subcommand",
            metavar=f"{self.get_command_list()}",
            type=str,
            nargs='?' if not add_help else None,
            choices=self.get_command_list(),
        )
        return parser

    def cli(self) -> CliNameSpace:
        # Help for the main command only (xllgo --help), not for subcommands
        if len(sys.argv) == 2 and sys.argv[1] in ['--help', '-h']:
            self._root_parser(add_help=True).print_help()
            sys.exit(0)

        # parse only known args - this will NOT consume the subcommand options
        args, unknown = self._root_parser(add_help=False).parse_known_args(sys.argv[1:2])
        return args

    def exec(self, context: CliContext, args: CliNameSpace):
        if not args.subcommand:
            print("ERROR: No command specified\n")
            self._root_parser(add_help=True).print_help()
            sys.exit(1)

        # xllgo.commands.<subcommand> defines class <Subcommand>
        module = importlib.import_module(f"{PACKAGE_NAME}.commands.{args.subcommand}")
        klass = getattr(module, args.subcommand.capitalize())
        sub_cmd = klass()
        sub_cmd.exec(context, sub_cmd.cli())
