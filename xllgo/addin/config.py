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
Add-in build configuration for xllgo.

Values come from the [addin] table of XLLGO.toml and may be overridden from the
command line.

Configuration structure:
    [addin]
    out_dir = "bin"                 # Output directory (default: bin)
    xll32 = "lib/ExcelDna.xll"      # 32-bit loader binary (required)
    xll64 = "lib/ExcelDna64.xll"    # 64-bit loader binary (required)
    create32 = true                 # Stage 32-bit add-ins (default: true)
    create64 = true                 # Stage 64-bit add-ins (default: true)
    suffix32 = ""                   # Name suffix of 32-bit files (default: "")
    suffix64 = "64"                 # Name suffix of 64-bit files (default: "64")
    pack = true                     # Produce the manifest for packing (default: true)
    packed_suffix = "-packed"       # Suffix of packed loaders (default: "-packed")

String values support ${VAR_NAME} and $VAR_NAME environment expansion.
"""

import os
import re
import sys
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

CONFIG_FILE_NAME = "XLLGO.toml"

BITNESS_32 = 32
BITNESS_64 = 64
ALL_BITNESS = (BITNESS_32, BITNESS_64)

DEFAULT_OUT_DIR = "bin"
DEFAULT_SUFFIX_32BIT = ""
DEFAULT_SUFFIX_64BIT = "64"
DEFAULT_PACKED_SUFFIX = "-packed"


class AddInBuildError(Exception):
    """Exception raised when the add-in build cannot start"""
    pass


@dataclass(frozen=True)
class AddInBuildConfig:
    """Immutable settings of one staging run."""
    out_directory: str
    xll32_file_path: str
    xll64_file_path: str
    create_32bit_addin: bool = True
    create_64bit_addin: bool = True
    file_suffix_32bit: str = DEFAULT_SUFFIX_32BIT
    file_suffix_64bit: str = DEFAULT_SUFFIX_64BIT
    pack_is_enabled: bool = True
    packed_file_suffix: str = DEFAULT_PACKED_SUFFIX

    def __post_init__(self):
        # missing suffixes behave like empty ones
        for name in ('file_suffix_32bit', 'file_suffix_64bit', 'packed_file_suffix'):
            if getattr(self, name) is None:
                object.__setattr__(self, name, "")

    @property
    def known_suffixes(self) -> tuple:
        """Suffixes stripped when deriving a name, 32-bit first."""
        return (self.file_suffix_32bit, self.file_suffix_64bit)

    def suffix_for(self, bitness: int) -> str:
        return self.file_suffix_32bit if bitness == BITNESS_32 else self.file_suffix_64bit

    def loader_for(self, bitness: int) -> str:
        return self.xll32_file_path if bitness == BITNESS_32 else self.xll64_file_path

    def is_enabled(self, bitness: int) -> bool:
        return self.create_32bit_addin if bitness == BITNESS_32 else self.create_64bit_addin

    def suffixes_conflict(self) -> bool:
        return self.file_suffix_32bit.lower() == self.file_suffix_64bit.lower()

    def summary(self, file_count: int) -> List[str]:
        """Argument lines logged at the start of a run."""
        return [
            "----Arguments----",
            f"FilesInProject: {file_count}",
            f"OutDirectory: {self.out_directory}",
            f"Xll32FilePath: {self.xll32_file_path}",
            f"Xll64FilePath: {self.xll64_file_path}",
            f"Create32BitAddIn: {self.create_32bit_addin}",
            f"Create64BitAddIn: {self.create_64bit_addin}",
            f"FileSuffix32Bit: {self.file_suffix_32bit}",
            f"FileSuffix64Bit: {self.file_suffix_64bit}",
            "-----------------",
        ]


def _expand_env(value):
    """
    Expand environment variables in configuration values.

    Supports ${VAR_NAME} and $VAR_NAME syntax. Unknown variables are kept as is.
    """
    if not isinstance(value, str):
        return value

    pattern1 = re.compile(r'\$\{([^}]+)\}')
    value = pattern1.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)

    pattern2 = re.compile(r'\$([A-Za-z_][A-Za-z0-9_]*)')
    value = pattern2.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)

    return value


def _to_bool(value, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ('true', 'yes', '1', 'on'):
        return True
    if isinstance(value, str) and value.strip().lower() in ('false', 'no', '0', 'off'):
        return False
    raise AddInBuildError(f"Invalid boolean value for '{key}': {value!r}")


def _to_str(value, key: str) -> str:
    # suffix64 = 64 is valid TOML
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise AddInBuildError(f"Invalid string value for '{key}': {value!r}")


def find_config_file(project_dir: str) -> Optional[str]:
    """
    Find XLLGO.toml in project directory or its immediate subdirectories.

    Returns the path to XLLGO.toml if found, None otherwise.
    """
    config_file = os.path.join(project_dir, CONFIG_FILE_NAME)
    if os.path.isfile(config_file):
        return config_file

    try:
        for subdir in sorted(os.listdir(project_dir)):
            potential_config = os.path.join(project_dir, subdir, CONFIG_FILE_NAME)
            if os.path.isfile(potential_config):
                return potential_config
    except (OSError, PermissionError):
        pass

    return None


def load_toml(config_file: str) -> Dict[str, Any]:
    # Must open in rb mode for tomllib
    try:
        with open(config_file, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise AddInBuildError(f"Invalid {os.path.basename(config_file)}: {e}") from e


def load_addin_config(config: Dict[str, Any], overrides: Optional[Dict[str, Any]] = None) -> AddInBuildConfig:
    """
    Build the add-in configuration from an XLLGO.toml dict.

    Args:
        config: Configuration dictionary from XLLGO.toml (may be empty)
        overrides: Values taking precedence over the file, keyed like the
            [addin] table; None values are ignored

    Returns:
        AddInBuildConfig instance
    """
    values = dict(config.get('addin', {}))
    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value
    for key in ('out_dir', 'xll32', 'xll64', 'suffix32', 'suffix64', 'packed_suffix'):
        if key in values:
            values[key] = _to_str(values[key], key)
    values = {key: _expand_env(value) for key, value in values.items()}

    missing = [key for key in ('xll32', 'xll64') if not values.get(key)]
    if missing:
        raise AddInBuildError(
            f"Missing loader path(s) {', '.join(missing)}: set them in [addin] of "
            f"{CONFIG_FILE_NAME} or on the command line"
        )

    return AddInBuildConfig(
        out_directory=values.get('out_dir') or DEFAULT_OUT_DIR,
        xll32_file_path=values['xll32'],
        xll64_file_path=values['xll64'],
        create_32bit_addin=_to_bool(values.get('create32', True), 'create32'),
        create_64bit_addin=_to_bool(values.get('create64', True), 'create64'),
        file_suffix_32bit=values.get('suffix32', DEFAULT_SUFFIX_32BIT),
        file_suffix_64bit=values.get('suffix64', DEFAULT_SUFFIX_64BIT),
        pack_is_enabled=_to_bool(values.get('pack', True), 'pack'),
        packed_file_suffix=values.get('packed_suffix', DEFAULT_PACKED_SUFFIX),
    )
