# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Per-schema registries of property and association descriptors.

One pair of registries is constructed for every schema being declared and is
handed explicitly to the layout builder, the operation generator and the
introspection facade. There is no process-wide registry.
"""

from __future__ import annotations

import logging
from typing import Generic, Iterator, List, Tuple, TypeVar

from .descriptors import AssociationDescriptor, PropertyDescriptor

logger = logging.getLogger(__name__)

D = TypeVar("D", PropertyDescriptor, AssociationDescriptor)


class _DescriptorRegistry(Generic[D]):
    """Append-only, declaration-ordered list of descriptors."""

    def __init__(self) -> None:
        self._descriptors: List[D] = []
        self._frozen = False

    def append(self, descriptor: D) -> None:
        if self._frozen:
            raise RuntimeError(f"{type(self).__name__} is frozen")
        self._descriptors.append(descriptor)
        logger.debug(f"{type(self).__name__}: appended {descriptor!r}")

    def freeze(self) -> Tuple[D, ...]:
        """Close the registry and return its descriptors in declaration order."""
        self._frozen = True
        return tuple(self._descriptors)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def names(self) -> List[str]:
        return [descriptor.name for descriptor in self._descriptors]

    def __iter__(self) -> Iterator[D]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)


class PropertyRegistry(_DescriptorRegistry[PropertyDescriptor]):
    """Collects property descriptors (name, default, index kind)."""


class AssociationRegistry(_DescriptorRegistry[AssociationDescriptor]):
    """Collects association descriptors (name, target, cardinality, reflect)."""
