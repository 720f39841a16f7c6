# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Field descriptors of a node type schema.

Descriptors are immutable once created; a schema only ever appends them to its
registries while it is being declared.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Type, Union

from .constants import Cardinality, IndexKind

if TYPE_CHECKING:
    from .node_type import NodeType

# A target type is referenced by node type, by class or by (dotted) type name.
TargetReference = Union["NodeType", Type[Any], str]


def target_name(target: TargetReference) -> str:
    """
    Return the name a target reference designates.

    Node types and classes give their name, strings are returned as written.
    """
    if isinstance(target, str):
        return target
    if isinstance(target, type):
        return target.__name__
    return target.name


@dataclass(frozen=True)
class PropertyDescriptor:
    """
    Metadata of a declared property.

    :class: PropertyDescriptor
    :synopsis: Frozen dataclass for property metadata
    """
    name: str
    default: Any = None
    index: IndexKind = IndexKind.NONE

    @property
    def is_indexed(self) -> bool:
        return self.index.is_indexed

    @property
    def is_unique(self) -> bool:
        return self.index.is_unique


@dataclass(frozen=True)
class AssociationDescriptor:
    """
    Metadata of a declared association (a named edge to another node type).

    The target and the reflect partner are named, never dereferenced: the
    repository resolves them when edges are traversed or kept in sync.

    :class: AssociationDescriptor
    :synopsis: Frozen dataclass for association metadata
    """
    name: str
    target: TargetReference
    cardinality: Cardinality
    reflect: Optional[str] = None

    @property
    def is_multiple(self) -> bool:
        return self.cardinality is Cardinality.MULTIPLE

    @property
    def target_name(self) -> str:
        return target_name(self.target)

    @property
    def default(self) -> Any:
        """Value of the association on a fresh node value."""
        return () if self.is_multiple else None


def normalize_index(index: Any) -> IndexKind:
    """
    Normalize the ``index`` option of a property declaration.

    ``IndexKind`` members pass through, ``"primary"`` and ``"unique"`` map to
    their kinds, any other truthy value is a non-unique index and anything
    falsy is no index.

    :param index: Raw ``index`` option value
    :returns: Normalized index kind
    :rtype: IndexKind
    """
    if isinstance(index, IndexKind):
        return index
    if index == IndexKind.PRIMARY.value:
        return IndexKind.PRIMARY
    if index == IndexKind.UNIQUE.value:
        return IndexKind.UNIQUE
    return IndexKind.NON_UNIQUE if index else IndexKind.NONE
