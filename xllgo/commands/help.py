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

import sys
import argparse

from xllgo.utils.context.namespace import CliNameSpace
from xllgo.utils.context.context import CliContext
from xllgo.utils.context.command import CliCommand


class Help(CliCommand):
    def description(self) -> str:
        return """Show detailed help information for XLLGO commands.

This command displays comprehensive usage information including:
- Command syntax and options
- Naming rules for 32-bit and 64-bit add-ins
- The XLLGO.toml configuration

Use 'xllgo <command> --help' for command-specific help.
        """

    def cli(self) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="xllgo help",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        args, unknown = parser.parse_known_args(sys.argv[2:])
        return args

    def exec(self, context: CliContext, args: CliNameSpace):
        print("\n" + "=" * 70)
        print("XLLGO - Excel Add-In Build Staging Tool")
        print("=" * 70)

        print("\n1. Stage add-ins into the build output directory")
        print("\n  xllgo stage [files...] [options]")
        print("\n  Options:")
        print("    --project-dir <dir>     Project directory (default: current directory)")
        print("    --out-dir <dir>         Output directory (default: bin)")
        print("    --xll32 <file>          32-bit .xll loader")
        print("    --xll64 <file>          64-bit .xll loader")
        print("    --no-32bit              Do not stage 32-bit add-ins")
        print("    --no-64bit              Do not stage 64-bit add-ins")
        print("    --suffix32 <suffix>     Name suffix of 32-bit files (default: '')")
        print("    --suffix64 <suffix>     Name suffix of 64-bit files (default: '64')")
        print("    --no-pack               Do not list staged add-ins for packing")
        print("    --packed-suffix <s>     Suffix of packed .xll files (default: '-packed')")
        print("    --manifest <file>       Write the packing manifest as JSON")
        print("    -v, --verbose           Show low importance messages")
        print("    -q, --quiet             Only show errors")
        print("\n  Examples:")
        print("    xllgo stage")
        print("    xllgo stage MyAddIn.dna App.config --xll32 ExcelDna.xll --xll64 ExcelDna64.xll")
        print("    xllgo stage --no-32bit --manifest bin/addins.json")

        print("\n2. Naming rules")
        print("\n  Each descriptor gets a 32-bit and a 64-bit name: both suffixes are")
        print("  stripped from its base name, then the suffix of the bitness is appended.")
        print("\n    suffix32 '32', suffix64 '64':")
        print("      Book.dna   -> Book32.dna + Book32.xll, Book64.dna + Book64.xll")
        print("      Book64.dna -> Book32.dna, Book64.dna")
        print("\n  A descriptor already named for a bitness (Book32.dna) wins over the")
        print("  generic one (Book.dna) for that bitness.")
        print("\n  Config files are looked up in order:")
        print("    Book32.config, App32.config, App.config -> <out-dir>/Book32.xll.config")

        print("\n3. Configuration (XLLGO.toml)")
        print("\n  [addin]")
        print('  out_dir = "bin"')
        print('  xll32 = "packages/ExcelDna.xll"')
        print('  xll64 = "packages/ExcelDna64.xll"')
        print("  create32 = true")
        print("  create64 = true")
        print('  suffix32 = ""')
        print('  suffix64 = "64"')
        print("  pack = true")
        print('  packed_suffix = "-packed"')
        print("\n  Command line options override XLLGO.toml; values support ${VAR} expansion.")

        print("\n" + "=" * 70 + "\n")
