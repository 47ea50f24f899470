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

"""Console diagnostics for add-in staging."""

import sys
import zlib


class Importance:
    LOW = 0
    NORMAL = 1
    HIGH = 2
    ERROR = 3


_PREFIXES = {
    Importance.LOW: "   ",
    Importance.NORMAL: "  ",
    Importance.HIGH: "",
    Importance.ERROR: "❌ ",
}


def error_code(exc: BaseException) -> str:
    """Stable error tag of an exception type, e.g. "DNA1234"."""
    return "DNA%04d" % (zlib.crc32(type(exc).__name__.encode("utf-8")) % 10000)


class ConsoleLog:
    """
    Prints diagnostics at or above a verbosity threshold.

    Errors are always printed, to stderr.
    """

    def __init__(self, verbosity=Importance.NORMAL, stream=None, error_stream=None):
        self.verbosity = verbosity
        self.stream = stream
        self.error_stream = error_stream

    def log(self, message, importance=Importance.NORMAL):
        if importance == Importance.ERROR:
            print(_PREFIXES[importance] + message, file=self.error_stream or sys.stderr)
        elif importance >= self.verbosity:
            print(_PREFIXES.get(importance, "") + message, file=self.stream or sys.stdout)
