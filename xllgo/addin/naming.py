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
File name helpers for add-in staging.

The bitness suffix of a name is normalized by stripping every known suffix from
the base name and appending the requested one, so that "Book.dna", "Book64.dna"
and "Book32.dna" all derive the same 32-bit name "Book32.dna".
"""

import os

DESCRIPTOR_EXTENSION = ".dna"
CONFIG_EXTENSION = ".config"
LOADER_EXTENSION = ".xll"
LOADER_CONFIG_EXTENSION = ".xll.config"

# Project wide config used when a descriptor has no config of its own
DEFAULT_CONFIG_FILE_NAME = "App.config"


def is_blank(value) -> bool:
    return value is None or not str(value).strip()


def split_file_name(path: str):
    """
    Split a path into directory, base name and extension.

    The extension starts at the last dot of the file name and keeps the dot.
    A trailing dot yields an empty extension.

    Returns:
        Tuple of (directory, base_name, extension)
    """
    directory, file_name = os.path.split(path)
    index = file_name.rfind(".")
    if index == -1:
        return directory, file_name, ""
    extension = file_name[index:] if index < len(file_name) - 1 else ""
    return directory, file_name[:index], extension


def get_extension(path: str) -> str:
    return split_file_name(path)[2]


def has_extension(path: str, extension: str) -> bool:
    """Case-insensitive extension check, e.g. has_extension("A.DNA", ".dna")"""
    return get_extension(path).lower() == extension.lower()


def join_path(directory: str, file_name: str) -> str:
    if not directory:
        return file_name
    return os.path.join(directory, file_name)


def change_extension(path: str, extension: str) -> str:
    """
    Replace the extension of a path.

    The new extension may be compound (".xll.config"); only the last extension
    of the original name is replaced.
    """
    if extension and not extension.startswith("."):
        extension = "." + extension
    directory, base_name, _ = split_file_name(path)
    return join_path(directory, base_name + extension)


def strip_suffix(base_name: str, suffix: str) -> str:
    """
    Remove the last case-insensitive occurrence of suffix from base_name.

    An occurrence at position 0 is the whole identity of the name rather than a
    marker, and is left alone. Blank suffixes never match.
    """
    if is_blank(suffix):
        return base_name
    index = base_name.lower().rfind(suffix.lower())
    if index > 0:
        return base_name[:index] + base_name[index + len(suffix):]
    return base_name


def with_bitness_suffix(file_name: str, suffix: str, known_suffixes) -> str:
    """
    Derive the bitness specific name of a file.

    Args:
        file_name: Input path, e.g. "addins/Book64.dna"
        suffix: Suffix to append, e.g. "32"
        known_suffixes: All bitness suffixes in stripping order (32-bit first);
            each one is stripped from the base name before suffix is appended

    Returns:
        The derived path, e.g. "addins/Book32.dna"
    """
    directory, base_name, extension = split_file_name(file_name)
    for known_suffix in known_suffixes:
        base_name = strip_suffix(base_name, known_suffix)
    return join_path(directory, base_name + (suffix or "") + extension)


def packed_file_name(loader_path: str, packed_suffix: str) -> str:
    """
    Name of the loader after packing, "Book64.xll" -> "Book64-packed.xll".

    Without a packed suffix the loader keeps its name.
    """
    if is_blank(packed_suffix):
        return loader_path
    directory, base_name, _ = split_file_name(loader_path)
    return join_path(directory, base_name + packed_suffix + LOADER_EXTENSION)
