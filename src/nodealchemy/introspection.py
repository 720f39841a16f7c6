# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Runtime introspection of a built schema.

:class:`NodeSchema` is the surface the storage, index and query layers read a
node type through. Every lookup is a pure function over frozen tables; unknown
names yield ``None`` rather than an error.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import List, Optional, Sequence, Tuple, Union

from .constants import Cardinality, IndexKind
from .descriptors import AssociationDescriptor, PropertyDescriptor, TargetReference


class NodeSchema:
    """
    Frozen descriptor tables of one node type.

    :class: NodeSchema
    :synopsis: Introspection facade with O(1) name lookups

    Example:
        >>> schema.properties()
        ['title', 'body']
        >>> schema.index_of("title")
        <IndexKind.UNIQUE: 'unique'>
        >>> schema.index_of("missing") is None
        True
    """

    __slots__ = ("_name", "_properties", "_associations", "_by_property", "_by_association", "_fields")

    def __init__(
        self,
        name: str,
        properties: Sequence[PropertyDescriptor],
        associations: Sequence[AssociationDescriptor],
        fields: Sequence[str],
    ) -> None:
        self._name = name
        self._properties: Tuple[PropertyDescriptor, ...] = tuple(properties)
        self._associations: Tuple[AssociationDescriptor, ...] = tuple(associations)
        self._by_property = MappingProxyType({p.name: p for p in self._properties})
        self._by_association = MappingProxyType({a.name: a for a in self._associations})
        self._fields: Tuple[str, ...] = tuple(fields)

    def __setattr__(self, key: str, value: object) -> None:
        if hasattr(self, "_fields"):
            raise AttributeError(f"{type(self).__name__} is immutable")
        object.__setattr__(self, key, value)

    def __repr__(self) -> str:
        return f"NodeSchema({self._name!r}, properties={self.properties()}, associations={self.associations()})"

    @property
    def name(self) -> str:
        return self._name

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    def properties(self) -> List[str]:
        """Return all property names in declaration order."""
        return [p.name for p in self._properties]

    def property_descriptors(self) -> Tuple[PropertyDescriptor, ...]:
        return self._properties

    def indexes(self) -> List[str]:
        """Return the names of all indexed properties (any index kind)."""
        return [p.name for p in self._properties if p.is_indexed]

    def index_of(self, name: str) -> Optional[IndexKind]:
        """
        Return how a property is indexed.

        :param name: Property name
        :returns: The index kind, or None if ``name`` is not a property
        """
        descriptor = self._by_property.get(name)
        return descriptor.index if descriptor is not None else None

    def indexes_unique(self) -> List[str]:
        """Return the names of unique or primary indexed properties."""
        return [p.name for p in self._properties if p.is_unique]

    def indexes_non_unique(self) -> List[str]:
        """Return the names of properties declared with ``index=True``."""
        return [p.name for p in self._properties if p.index is IndexKind.NON_UNIQUE]

    def primary_key(self) -> Optional[str]:
        """Return the first primary indexed property name, or None."""
        for p in self._properties:
            if p.index is IndexKind.PRIMARY:
                return p.name
        return None

    # -------------------------------------------------------------------------
    # Associations
    # -------------------------------------------------------------------------

    def associations(self) -> List[str]:
        """Return all association names in declaration order."""
        return [a.name for a in self._associations]

    def association_descriptors(self) -> Tuple[AssociationDescriptor, ...]:
        return self._associations

    def reflect_of(self, name: str) -> Optional[str]:
        """Return the reflected association name on the target, or None."""
        descriptor = self._by_association.get(name)
        return descriptor.reflect if descriptor is not None else None

    def target_of(self, name: str) -> Optional[TargetReference]:
        """Return the target type reference of an association, or None."""
        descriptor = self._by_association.get(name)
        return descriptor.target if descriptor is not None else None

    def cardinality(self, name: str) -> Optional[Cardinality]:
        descriptor = self._by_association.get(name)
        return descriptor.cardinality if descriptor is not None else None

    # -------------------------------------------------------------------------
    # Layout
    # -------------------------------------------------------------------------

    def fields(self) -> List[str]:
        """Return the record layout: meta fields, properties, then associations."""
        return list(self._fields)

    def descriptor(self, name: str) -> Optional[Union[PropertyDescriptor, AssociationDescriptor]]:
        """Return the descriptor declared under ``name``; meta fields have none."""
        return self._by_property.get(name) or self._by_association.get(name)
