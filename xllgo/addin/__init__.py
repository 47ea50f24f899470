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
Excel add-in staging for xllgo.

Turns the .dna descriptors of a project into 32-bit and 64-bit add-ins in the
output directory and reports what was staged for the packing step.
"""

from .config import AddInBuildConfig, AddInBuildError, load_addin_config
from .pipeline import create_addin
from .stager import ManifestEntry

__all__ = [
    'AddInBuildConfig',
    'AddInBuildError',
    'ManifestEntry',
    'create_addin',
    'load_addin_config',
]
