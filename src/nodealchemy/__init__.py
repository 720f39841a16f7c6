# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
NodeAlchemy: declarative node type schemas for graph repositories.

Declare node types with properties and associations, get immutable node values,
generated association getters and copy-on-write mutators, and a runtime
introspection surface for the storage, index and query layers.
"""

from .accessors import AssociationOperations, build_operations, identity_key, node_id, unique_nodes
from .constants import Cardinality, IndexKind
from .descriptors import AssociationDescriptor, PropertyDescriptor, TargetReference, normalize_index, target_name
from .errors import DefinitionError, DetachedNodeError, InvalidNodeReferenceError, NodeAlchemyError
from .introspection import NodeSchema
from .layout import NodeRecord, build_record_model, record_layout
from .node_type import NodeType, SchemaBuilder, is_node_type, node_schema
from .registry import AssociationRegistry, PropertyRegistry
from .repository import Repository
from .validation import FieldNamespace, check_name, check_options, check_type

__version__ = "0.1.0"

__all__ = [
    # Definition surface
    "SchemaBuilder",
    "NodeType",
    "node_schema",
    "is_node_type",
    # Descriptors
    "PropertyDescriptor",
    "AssociationDescriptor",
    "TargetReference",
    "IndexKind",
    "Cardinality",
    "normalize_index",
    "target_name",
    # Registries and validation
    "PropertyRegistry",
    "AssociationRegistry",
    "FieldNamespace",
    "check_options",
    "check_type",
    "check_name",
    # Layout and introspection
    "NodeRecord",
    "build_record_model",
    "record_layout",
    "NodeSchema",
    # Operations
    "AssociationOperations",
    "build_operations",
    "node_id",
    "identity_key",
    "unique_nodes",
    # Repository contract
    "Repository",
    # Errors
    "NodeAlchemyError",
    "DefinitionError",
    "InvalidNodeReferenceError",
    "DetachedNodeError",
]
