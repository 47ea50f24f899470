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

"""
Build item resolution.

Every .dna descriptor of the project becomes one BuildItemSpec holding all the
names staging needs, for both bitness variants:

    Book.dna (suffix32 "", suffix64 "64", out_dir "bin")
        32-bit: bin/Book.dna    bin/Book.xll    bin/Book.xll.config
        64-bit: bin/Book64.dna  bin/Book64.xll  bin/Book64.xll.config
"""

import os
from dataclasses import dataclass
from typing import Iterable, Tuple

from .config import BITNESS_32, BITNESS_64, AddInBuildConfig
from .naming import (
    CONFIG_EXTENSION,
    DEFAULT_CONFIG_FILE_NAME,
    LOADER_CONFIG_EXTENSION,
    LOADER_EXTENSION,
    change_extension,
    with_bitness_suffix,
)


@dataclass(frozen=True)
class BuildItemVariant:
    """The names of one bitness variant of a build item."""
    bitness: int
    input_descriptor_name: str
    input_descriptor_name_as_bitness: str
    input_config_name: str
    input_config_fallback: str
    output_descriptor_name: str
    output_loader_name: str
    output_config_name: str


@dataclass(frozen=True)
class BuildItemSpec:
    """Resolved names for one descriptor of the project."""
    input_descriptor_name: str

    input_descriptor_name_as32: str
    input_descriptor_name_as64: str

    input_config_name_as32: str
    input_config_fallback_as32: str

    input_config_name_as64: str
    input_config_fallback_as64: str

    output_descriptor_name_as32: str
    output_descriptor_name_as64: str

    output_loader_name_as32: str
    output_loader_name_as64: str

    output_config_name_as32: str
    output_config_name_as64: str

    def variant(self, bitness: int) -> BuildItemVariant:
        if bitness == BITNESS_32:
            return BuildItemVariant(
                bitness=bitness,
                input_descriptor_name=self.input_descriptor_name,
                input_descriptor_name_as_bitness=self.input_descriptor_name_as32,
                input_config_name=self.input_config_name_as32,
                input_config_fallback=self.input_config_fallback_as32,
                output_descriptor_name=self.output_descriptor_name_as32,
                output_loader_name=self.output_loader_name_as32,
                output_config_name=self.output_config_name_as32,
            )
        return BuildItemVariant(
            bitness=bitness,
            input_descriptor_name=self.input_descriptor_name,
            input_descriptor_name_as_bitness=self.input_descriptor_name_as64,
            input_config_name=self.input_config_name_as64,
            input_config_fallback=self.input_config_fallback_as64,
            output_descriptor_name=self.output_descriptor_name_as64,
            output_loader_name=self.output_loader_name_as64,
            output_config_name=self.output_config_name_as64,
        )


class BuildItemResolver:
    """Derives the BuildItemSpec of descriptors for one configuration"""

    def __init__(self, config: AddInBuildConfig):
        self.config = config

    def file_name_as(self, file_name: str, bitness: int) -> str:
        """
        Name of file_name for the given bitness.

        Both bitness suffixes are stripped from the base name before the suffix
        of the requested bitness is appended, e.g. with suffixes "32"/"64"
        "Book64.dna" becomes "Book32.dna" for 32-bit.
        """
        return with_bitness_suffix(file_name, self.config.suffix_for(bitness), self.config.known_suffixes)

    def default_config_name_as(self, bitness: int) -> str:
        return self.file_name_as(DEFAULT_CONFIG_FILE_NAME, bitness)

    def _output_path(self, file_name: str) -> str:
        return os.path.join(self.config.out_directory, file_name)

    def resolve(self, descriptor_file: str) -> BuildItemSpec:
        name_as32 = self.file_name_as(descriptor_file, BITNESS_32)
        name_as64 = self.file_name_as(descriptor_file, BITNESS_64)

        return BuildItemSpec(
            input_descriptor_name=descriptor_file,

            input_descriptor_name_as32=name_as32,
            input_descriptor_name_as64=name_as64,

            input_config_name_as32=change_extension(name_as32, CONFIG_EXTENSION),
            input_config_fallback_as32=self.default_config_name_as(BITNESS_32),

            input_config_name_as64=change_extension(name_as64, CONFIG_EXTENSION),
            input_config_fallback_as64=self.default_config_name_as(BITNESS_64),

            output_descriptor_name_as32=self._output_path(name_as32),
            output_descriptor_name_as64=self._output_path(name_as64),

            output_loader_name_as32=self._output_path(change_extension(name_as32, LOADER_EXTENSION)),
            output_loader_name_as64=self._output_path(change_extension(name_as64, LOADER_EXTENSION)),

            # the config travels next to the loader: Book64.xll.config
            output_config_name_as32=self._output_path(change_extension(name_as32, LOADER_CONFIG_EXTENSION)),
            output_config_name_as64=self._output_path(change_extension(name_as64, LOADER_CONFIG_EXTENSION)),
        )

    def resolve_all(self, descriptor_files: Iterable[str]) -> Tuple[BuildItemSpec, ...]:
        """Resolve descriptors in the order given (sorted by the classifier)"""
        return tuple(self.resolve(f) for f in descriptor_files)
