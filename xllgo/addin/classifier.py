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

"""Sorting project files into add-in descriptors and config files."""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from .naming import CONFIG_EXTENSION, DESCRIPTOR_EXTENSION, has_extension


class ConfigCandidateSet:
    """Sorted config files of the project, looked up case-insensitively"""

    def __init__(self, files: Iterable[str]):
        self.files: Tuple[str, ...] = tuple(sorted(set(files)))
        self._by_name: Dict[str, str] = {}
        for file in self.files:
            self._by_name.setdefault(file.lower(), file)

    def find(self, file_name: str) -> Optional[str]:
        """Return the project file matching file_name ignoring case, or None"""
        if not file_name:
            return None
        return self._by_name.get(file_name.lower())

    def __len__(self):
        return len(self.files)


@dataclass(frozen=True)
class ClassifiedInputs:
    descriptor_files: Tuple[str, ...]
    config_files: ConfigCandidateSet


def classify_inputs(files_in_project: Iterable[str]) -> ClassifiedInputs:
    """
    Split the project files by extension (.dna / .config, ignoring case).

    Both lists are sorted so the outcome does not depend on the order the
    files were enumerated in. Other files are ignored.
    """
    files = set(files_in_project or ())
    descriptor_files = tuple(sorted(f for f in files if has_extension(f, DESCRIPTOR_EXTENSION)))
    config_files = ConfigCandidateSet(f for f in files if has_extension(f, CONFIG_EXTENSION))
    return ClassifiedInputs(descriptor_files=descriptor_files, config_files=config_files)
