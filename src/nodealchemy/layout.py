# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Record layout builder.

Turns the validated descriptor tables of a schema into the concrete pydantic
model every node value of that schema is an instance of. The field order is
fixed: meta fields first, then properties, then associations, each group in
declaration order.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar, Dict, Optional, Sequence, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, create_model

from .descriptors import AssociationDescriptor, PropertyDescriptor

if TYPE_CHECKING:
    from .node_type import NodeType

logger = logging.getLogger(__name__)


class NodeRecord(BaseModel):
    """
    Base model of every node value.

    Node values are immutable: the generated mutators return updated copies and
    never touch the value they were given.

    :class: NodeRecord
    :synopsis: Frozen pydantic base model holding the meta fields
    """

    model_config = ConfigDict(
        frozen=True,
        extra='forbid',
        arbitrary_types_allowed=True,
        use_enum_values=False,
    )

    # Assigned by the repository, None until persisted.
    id: Any = None
    # Owning repository, None until attached.
    repo: Any = Field(default=None, exclude=True, repr=False)

    __node_type__: ClassVar[Optional["NodeType"]] = None

    @classmethod
    def get_node_type(cls) -> Optional["NodeType"]:
        """Return the node type this record model was built for."""
        return cls.__node_type__


def reserved_record_names() -> frozenset:
    """Attribute names of the record base class that a field would shadow."""
    return frozenset(name for name in dir(NodeRecord) if not name.startswith("_"))


def _association_field(descriptor: AssociationDescriptor) -> Tuple[Any, Any]:
    if descriptor.is_multiple:
        return (Tuple[Any, ...], Field(default=()))
    return (Optional[Any], Field(default=None))


def build_record_model(
    name: str,
    properties: Sequence[PropertyDescriptor],
    associations: Sequence[AssociationDescriptor],
) -> Type[NodeRecord]:
    """
    Build the record model of a schema.

    Must only be called once every declaration of the schema has been accepted
    by the validator.

    Args:
        name: Schema name, used as the model class name
        properties: Property descriptors in declaration order
        associations: Association descriptors in declaration order

    Returns:
        A frozen pydantic model class deriving from :class:`NodeRecord`
    """
    # @@ STEP 1: Properties follow the meta fields inherited from NodeRecord
    fields: Dict[str, Any] = {}
    for prop in properties:
        fields[prop.name] = (Any, Field(default=prop.default))

    # @@ STEP 2: Associations follow the properties
    for assoc in associations:
        fields[assoc.name] = _association_field(assoc)

    model = create_model(name, __base__=NodeRecord, **fields)
    logger.debug(f"Built record model {name} with layout {record_layout(model)}")
    return model


def record_layout(model: Type[NodeRecord]) -> Tuple[str, ...]:
    """Return the ordered field names of a record model."""
    return tuple(model.model_fields)
