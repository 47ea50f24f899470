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

from xllgo.cli import Cli
from xllgo.utils.context.context import CliContext


def main():
    cli = Cli()
    cli.exec(CliContext(), cli.cli())


if __name__ == "__main__":
    main()
