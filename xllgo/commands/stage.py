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
import json
import argparse

from xllgo.utils.context.namespace import CliNameSpace
from xllgo.utils.context.context import CliContext
from xllgo.utils.context.command import CliCommand
from xllgo.addin.config import (
    CONFIG_FILE_NAME,
    AddInBuildError,
    find_config_file,
    load_addin_config,
    load_toml,
)
from xllgo.addin.diagnostics import ConsoleLog, Importance
from xllgo.addin.file_system import PhysicalFileSystem
from xllgo.addin.pipeline import create_addin


class Stage(CliCommand):
    def description(self) -> str:
        return """Stage Excel add-ins into the build output directory.

Every .dna descriptor of the project is copied to the output directory as a
32-bit and a 64-bit add-in, next to the matching .xll loader and .config file.
A descriptor written for one bitness (e.g. Book64.dna) takes precedence over the
generic one (Book.dna) for that bitness.

EXAMPLES:
    # Stage using [addin] of XLLGO.toml
    xllgo stage

    # Stage explicit files, 64-bit only
    xllgo stage MyAddIn.dna App.config --no-32bit

    # Write the manifest for the packing step
    xllgo stage --manifest bin/addins.json

OUTPUT STRUCTURE (suffix32 "", suffix64 "64"):
    <out-dir>/
    ├── MyAddIn.dna
    ├── MyAddIn.xll
    ├── MyAddIn.xll.config       (when the project has a config)
    ├── MyAddIn64.dna
    ├── MyAddIn64.xll
    └── MyAddIn64.xll.config
        """

    def cli(self) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="xllgo stage",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        parser.add_argument(
            "files",
            nargs="*",
            help="Project files to consider (default: scan the project directory)",
        )
        parser.add_argument(
            "--project-dir",
            type=str,
            default=None,
            help="Project directory (default: current directory)",
        )
        parser.add_argument("--out-dir", type=str, help="Output directory (default: bin)")
        parser.add_argument("--xll32", type=str, help="Path of the 32-bit .xll loader")
        parser.add_argument("--xll64", type=str, help="Path of the 64-bit .xll loader")
        parser.add_argument(
            "--no-32bit",
            dest="create32",
            action="store_false",
            default=None,
            help="Do not stage 32-bit add-ins",
        )
        parser.add_argument(
            "--no-64bit",
            dest="create64",
            action="store_false",
            default=None,
            help="Do not stage 64-bit add-ins",
        )
        parser.add_argument("--suffix32", type=str, help="Name suffix of 32-bit files (default: '')")
        parser.add_argument("--suffix64", type=str, help="Name suffix of 64-bit files (default: '64')")
        parser.add_argument(
            "--no-pack",
            dest="pack",
            action="store_false",
            default=None,
            help="Do not list staged add-ins for packing",
        )
        parser.add_argument("--packed-suffix", type=str, help="Suffix of packed .xll files (default: '-packed')")
        parser.add_argument("--manifest", type=str, help="Write the packing manifest as JSON to this file")
        parser.add_argument("-v", "--verbose", action="store_true", help="Show low importance messages")
        parser.add_argument("-q", "--quiet", action="store_true", help="Only show errors")

        args, unknown = parser.parse_known_args(sys.argv[2:])
        return args

    def get_overrides(self, args: CliNameSpace) -> dict:
        return {
            'out_dir': args.out_dir,
            'xll32': args.xll32,
            'xll64': args.xll64,
            'create32': args.create32,
            'create64': args.create64,
            'suffix32': args.suffix32,
            'suffix64': args.suffix64,
            'pack': args.pack,
            'packed_suffix': args.packed_suffix,
        }

    def get_verbosity(self, args: CliNameSpace) -> int:
        if args.quiet:
            return Importance.ERROR
        if args.verbose:
            return Importance.LOW
        return Importance.NORMAL

    def get_project_files(self, files: list, start_dir: str, project_dir: str) -> list:
        # files are typed relative to start_dir, staging resolves them against project_dir
        return [
            os.path.relpath(os.path.abspath(os.path.join(start_dir, f)), project_dir)
            for f in files
        ]

    def write_manifest(self, manifest, manifest_path: str):
        manifest_dir = os.path.dirname(manifest_path)
        if manifest_dir:
            os.makedirs(manifest_dir, exist_ok=True)
        with open(manifest_path, "w", encoding="utf-8") as f:
            json.dump({"addins": [entry.to_metadata() for entry in manifest]}, f, indent=2)

    def exec(self, context: CliContext, args: CliNameSpace):
        start_dir = os.path.abspath(args.project_dir or context.home_path)
        project_dir = start_dir
        log = ConsoleLog(verbosity=self.get_verbosity(args))

        # XLLGO.toml may live in an immediate subdirectory; that becomes the project root
        config_path = find_config_file(project_dir)
        if config_path:
            project_dir = os.path.dirname(config_path)
            log.log(f"Using {config_path}", Importance.LOW)
        else:
            log.log(f"⚠️  Warning: {CONFIG_FILE_NAME} not found, using command line options only", Importance.HIGH)

        try:
            config = load_addin_config(load_toml(config_path) if config_path else {}, self.get_overrides(args))
        except AddInBuildError as e:
            log.log(str(e), Importance.ERROR)
            sys.exit(1)

        file_system = PhysicalFileSystem(project_dir)
        if args.files:
            files = self.get_project_files(args.files, start_dir, project_dir)
        else:
            files = file_system.list_project_files(exclude_dirs=[config.out_directory])

        result = create_addin(config, files, file_system=file_system, log=log)
        if result.is_failure():
            log.log("Staging add-ins failed", Importance.ERROR)
            sys.exit(1)

        manifest = result.get_value()
        if args.manifest:
            self.write_manifest(manifest, os.path.join(project_dir, args.manifest))
            log.log(f"Manifest written to {args.manifest}", Importance.NORMAL)

        if config.pack_is_enabled:
            log.log(f"✅ Staged {len(manifest)} add-in(s) for packing into {config.out_directory}")
        else:
            log.log(f"✅ Staged add-ins into {config.out_directory}")
