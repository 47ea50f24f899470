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
Which bitness variants of the build items get staged.

A generic descriptor must not overwrite a descriptor the project author wrote
for one bitness. With suffixes "32"/"64" and the project files Book.dna and
Book32.dna, the 32-bit add-in comes from Book32.dna only, while Book.dna still
provides the 64-bit one.
"""

from typing import Dict, List, Sequence, Tuple

from .config import ALL_BITNESS, AddInBuildConfig
from .resolver import BuildItemSpec


class EmissionDecisionEngine:
    def __init__(self, build_items: Sequence[BuildItemSpec]):
        self.build_items = tuple(build_items)
        self._items_by_name: Dict[str, List[BuildItemSpec]] = {}
        for item in self.build_items:
            self._items_by_name.setdefault(item.input_descriptor_name.lower(), []).append(item)

    def should_emit(self, item: BuildItemSpec, bitness: int) -> bool:
        """
        Whether the bitness variant of item is staged.

        True when the descriptor is already named for this bitness, or when no
        other descriptor of the project carries the derived name (ignoring case).
        """
        name_as_bitness = item.variant(bitness).input_descriptor_name_as_bitness
        if item.input_descriptor_name == name_as_bitness:
            return True

        siblings = self._items_by_name.get(name_as_bitness.lower(), ())
        return not any(sibling is not item for sibling in siblings)

    def accepted_items(self, bitness: int) -> Tuple[BuildItemSpec, ...]:
        return tuple(item for item in self.build_items if self.should_emit(item, bitness))


def plan_emission(build_items: Sequence[BuildItemSpec], config: AddInBuildConfig) -> Dict[int, Tuple[BuildItemSpec, ...]]:
    """
    Decide everything that will be staged, before any file is touched.

    Returns:
        Accepted items per bitness, in build item order. A disabled bitness
        maps to an empty tuple.
    """
    engine = EmissionDecisionEngine(build_items)
    plan = {}
    for bitness in ALL_BITNESS:
        plan[bitness] = engine.accepted_items(bitness) if config.is_enabled(bitness) else ()
    return plan
