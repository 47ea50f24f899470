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
Copies accepted build items into the output directory.

Each staged add-in consists of the descriptor, the loader binary of its bitness
and, when the project has one, a config file. The config is searched in order:

    1. the config named after the descriptor      Book64.config
    2. the bitness variant of the default config  App64.config
    3. the default config itself                  App.config
"""

import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .classifier import ConfigCandidateSet
from .config import AddInBuildConfig
from .diagnostics import Importance
from .file_system import FileSystem
from .naming import DEFAULT_CONFIG_FILE_NAME, is_blank, packed_file_name
from .resolver import BuildItemSpec


@dataclass(frozen=True)
class ManifestEntry:
    """One staged add-in, as handed to the packing step."""
    descriptor_output_path: str
    loader_output_path: str
    config_output_path: str

    def to_metadata(self) -> Dict[str, str]:
        return {
            "OutputDnaFileName": self.descriptor_output_path,
            "OutputPackedXllFileName": self.loader_output_path,
            "OutputXllConfigFileName": self.config_output_path,
        }


class OutputStager:
    def __init__(self, config: AddInBuildConfig, file_system: FileSystem, config_files: ConfigCandidateSet, log):
        self.config = config
        self.file_system = file_system
        self.config_files = config_files
        self.log = log
        self._entries: List[ManifestEntry] = []

    @property
    def manifest(self) -> Tuple[ManifestEntry, ...]:
        return tuple(self._entries)

    def stage(self, item: BuildItemSpec, bitness: int):
        variant = item.variant(bitness)

        self.copy_file_to_build_output(variant.input_descriptor_name, variant.output_descriptor_name)
        self.copy_file_to_build_output(self.config.loader_for(bitness), variant.output_loader_name)
        self.try_copy_config_file_to_output(
            variant.input_config_name, variant.input_config_fallback, variant.output_config_name
        )

        self.add_to_manifest(variant.output_descriptor_name, variant.output_loader_name, variant.output_config_name)

    def find_config_file(self, preferred_config_file: str, fallback_config_file: str) -> Optional[str]:
        """Project config file for an add-in, or None when the project has none"""
        for candidate in (preferred_config_file, fallback_config_file, DEFAULT_CONFIG_FILE_NAME):
            config_file = self.config_files.find(candidate)
            if config_file:
                return config_file
        return None

    def try_copy_config_file_to_output(self, preferred_config_file, fallback_config_file, output_config_file):
        config_file = self.find_config_file(preferred_config_file, fallback_config_file)
        if config_file:
            self.copy_file_to_build_output(config_file, output_config_file)

    def copy_file_to_build_output(self, source_file: str, destination_file: str):
        self.log.log(
            self.file_system.get_relative_path(source_file) + " -> " + self.file_system.get_relative_path(destination_file),
            Importance.NORMAL,
        )

        destination_folder = os.path.dirname(destination_file)
        if not is_blank(destination_folder) and not self.file_system.directory_exists(destination_folder):
            self.file_system.create_directory(destination_folder)

        self.file_system.copy_file(source_file, destination_file, overwrite=True)

    def add_to_manifest(self, output_descriptor_file, output_loader_file, output_config_file):
        if not self.config.pack_is_enabled:
            return

        self._entries.append(ManifestEntry(
            descriptor_output_path=output_descriptor_file,
            loader_output_path=packed_file_name(output_loader_file, self.config.packed_file_suffix),
            config_output_path=output_config_file,
        ))
