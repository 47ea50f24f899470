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
Add-in staging entry point.

    classify project files -> resolve build items -> decide per bitness -> stage

Nothing is copied until every decision is made. A failure stops the run; files
staged before the failure are left in place.
"""

import traceback
from typing import Iterable, Optional

from xllgo.utils.context.result import CliResult

from .classifier import classify_inputs
from .config import ALL_BITNESS, AddInBuildConfig, AddInBuildError
from .decision import plan_emission
from .diagnostics import ConsoleLog, Importance, error_code
from .file_system import FileSystem, PhysicalFileSystem
from .resolver import BuildItemResolver
from .stager import OutputStager


def run_sanity_checks(config: AddInBuildConfig, file_system: FileSystem):
    if not file_system.file_exists(config.xll32_file_path):
        raise AddInBuildError("File does not exist (Xll32FilePath): " + str(config.xll32_file_path))

    if not file_system.file_exists(config.xll64_file_path):
        raise AddInBuildError("File does not exist (Xll64FilePath): " + str(config.xll64_file_path))

    if config.suffixes_conflict():
        raise AddInBuildError("32-bit add-in suffix and 64-bit add-in suffix cannot be identical")


def create_addin(
    config: AddInBuildConfig,
    files_in_project: Optional[Iterable[str]],
    file_system: Optional[FileSystem] = None,
    log=None,
) -> CliResult:
    """
    Stage the add-ins of a project into config.out_directory.

    Args:
        config: Settings of this run
        files_in_project: Paths of the project files; anything that is neither
            a .dna nor a .config file is ignored
        file_system: Where files are read and written (default: local disk)
        log: Diagnostic sink with a log(message, importance) method
            (default: ConsoleLog)

    Returns:
        CliResult whose value is the manifest, a tuple of ManifestEntry, or
        whose error is the exception that stopped the run
    """
    file_system = file_system or PhysicalFileSystem()
    log = log or ConsoleLog()

    try:
        files_in_project = list(files_in_project or [])

        for line in config.summary(len(files_in_project)):
            log.log(line, Importance.LOW)

        run_sanity_checks(config, file_system)

        log.log("Number of files in project: " + str(len(files_in_project)), Importance.LOW)

        inputs = classify_inputs(files_in_project)
        log.log("Number of config files in project: " + str(len(inputs.config_files)), Importance.LOW)
        build_items = BuildItemResolver(config).resolve_all(inputs.descriptor_files)
        plan = plan_emission(build_items, config)

        stager = OutputStager(config, file_system, inputs.config_files, log)
        for index, bitness in enumerate(ALL_BITNESS):
            if index:
                log.log("---")
            for item in plan[bitness]:
                stager.stage(item, bitness)

        return CliResult.success(stager.manifest)
    except Exception as e:
        code = error_code(e)
        log.log(f"{code}: {e}", Importance.ERROR)
        log.log(f"{code}: {traceback.format_exc()}", Importance.ERROR)
        return CliResult.failure(e)
