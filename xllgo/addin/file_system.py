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
File system access used while staging add-ins.

Staging only talks to the FileSystem interface, so the whole pipeline can run
against an in-memory fake in tests.
"""

import os
import shutil
from typing import Iterable, List

from .naming import CONFIG_EXTENSION, DESCRIPTOR_EXTENSION, has_extension


class FileSystem:
    """Operations the staging pipeline needs from the file system"""

    def file_exists(self, path: str) -> bool:
        raise NotImplementedError

    def directory_exists(self, path: str) -> bool:
        raise NotImplementedError

    def create_directory(self, path: str):
        raise NotImplementedError

    def copy_file(self, source: str, destination: str, overwrite: bool = True):
        raise NotImplementedError

    def get_relative_path(self, path: str) -> str:
        return path


class PhysicalFileSystem(FileSystem):
    """The local disk, with relative paths resolved against root"""

    def __init__(self, root: str = None):
        """
        Initialize the file system.

        Args:
            root: Directory relative paths are resolved against (default: cwd)
        """
        self.root = os.path.abspath(root or os.getcwd())

    def _resolve(self, path: str) -> str:
        if os.path.isabs(path):
            return path
        return os.path.join(self.root, path)

    def file_exists(self, path: str) -> bool:
        return bool(path) and os.path.isfile(self._resolve(path))

    def directory_exists(self, path: str) -> bool:
        return bool(path) and os.path.isdir(self._resolve(path))

    def create_directory(self, path: str):
        os.makedirs(self._resolve(path), exist_ok=True)

    def copy_file(self, source: str, destination: str, overwrite: bool = True):
        src = self._resolve(source)
        dst = self._resolve(destination)
        if not overwrite and os.path.exists(dst):
            raise FileExistsError(f"Destination file already exists: {destination}")
        shutil.copy(src, dst)

    def get_relative_path(self, path: str) -> str:
        try:
            return os.path.relpath(self._resolve(path), self.root)
        except ValueError:
            # different drive on Windows
            return path

    def list_project_files(self, exclude_dirs: Iterable[str] = ()) -> List[str]:
        """
        Enumerate the descriptor and config files of the project.

        Args:
            exclude_dirs: Directories (relative to root or absolute) to skip,
                typically the output directory

        Returns:
            Paths relative to root, in no particular order
        """
        excluded = {os.path.normcase(os.path.abspath(self._resolve(d))) for d in exclude_dirs if d}
        files = []
        for dirpath, dirnames, filenames in os.walk(self.root):
            dirnames[:] = [
                d for d in dirnames
                if not d.startswith(".")
                and os.path.normcase(os.path.join(dirpath, d)) not in excluded
            ]
            for filename in filenames:
                if has_extension(filename, DESCRIPTOR_EXTENSION) or has_extension(filename, CONFIG_EXTENSION):
                    files.append(os.path.relpath(os.path.join(dirpath, filename), self.root))
        return files
