# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Constants module for NodeAlchemy.

This module centralizes all constants, configuration values, and literal strings
used throughout the NodeAlchemy codebase. No magic values are allowed elsewhere.

:module: constants
:synopsis: Centralized constants and configuration for NodeAlchemy
:author: NodeAlchemy Contributors
"""

from __future__ import annotations

from enum import Enum, StrEnum
from typing import Final, FrozenSet, Tuple


# ============================================================================
# INDEX KINDS
# ============================================================================

class IndexKind(StrEnum):
    """
    Classification of a property for lookup support.

    ``NON_UNIQUE`` stands for ``index=True`` and ``NONE`` for ``index=False``.

    :class: IndexKind
    :synopsis: Enumeration of property index kinds
    """

    NONE = "none"
    NON_UNIQUE = "non_unique"
    UNIQUE = "unique"
    PRIMARY = "primary"

    @property
    def is_indexed(self) -> bool:
        """Return whether the property is indexed at all."""
        return self is not IndexKind.NONE

    @property
    def is_unique(self) -> bool:
        """Return whether the index enforces uniqueness."""
        return self in (IndexKind.UNIQUE, IndexKind.PRIMARY)


# ============================================================================
# ASSOCIATION CARDINALITY
# ============================================================================

class Cardinality(Enum):
    """
    Association cardinality.

    :class: Cardinality
    :synopsis: Enumeration of association cardinalities
    """

    SINGLE = "single"      # nil or exactly one identifier
    MULTIPLE = "multiple"  # ordered tuple of identifiers


# ============================================================================
# SCHEMA CONSTANTS
# ============================================================================

class SchemaConstants:
    """Constants shared by the schema definition surface."""

    # @@ STEP 1: Define meta fields, always first in the record layout
    META_ID: Final[str] = "id"
    META_REPO: Final[str] = "repo"
    META_FIELDS: Final[Tuple[str, ...]] = (META_ID, META_REPO)

    # @@ STEP 2: Define recognized declaration options
    OPTION_DEFAULT: Final[str] = "default"
    OPTION_INDEX: Final[str] = "index"
    OPTION_REFLECT: Final[str] = "reflect"
    PROPERTY_OPTIONS: Final[FrozenSet[str]] = frozenset({OPTION_DEFAULT, OPTION_INDEX})
    ASSOCIATION_OPTIONS: Final[FrozenSet[str]] = frozenset({OPTION_REFLECT})

    # @@ STEP 3: Define declaration contexts used in error messages
    CONTEXT_PROPERTY: Final[str] = "property"
    CONTEXT_HAS_EDGE: Final[str] = "has_edge"
    CONTEXT_HAS_EDGES: Final[str] = "has_edges"


# ============================================================================
# OPERATION CONSTANTS
# ============================================================================

class OperationConstants:
    """Prefixes of the generated association operations."""

    SET_PREFIX: Final[str] = "set_"
    CLEAR_PREFIX: Final[str] = "clear_"
    ADD_PREFIX: Final[str] = "add_"
    DELETE_PREFIX: Final[str] = "delete_"

    SINGLE_MUTATORS: Final[Tuple[str, ...]] = (SET_PREFIX, CLEAR_PREFIX)
    MULTIPLE_MUTATORS: Final[Tuple[str, ...]] = (ADD_PREFIX, DELETE_PREFIX, SET_PREFIX, CLEAR_PREFIX)


# ============================================================================
# TYPE REFERENCE CONSTANTS
# ============================================================================

class TypeReferenceConstants:
    """Constants for the syntactic check of association target references."""

    PATH_SEPARATOR: Final[str] = "."


# ============================================================================
# ERROR MESSAGE CONSTANTS
# ============================================================================

class ErrorMessages:
    """Error message constants."""

    # @@ STEP 1: Define definition errors
    INVALID_OPTION: Final[str] = "invalid option {option!r} for {context}"
    INVALID_TYPE: Final[str] = "invalid type {target!r} for {context}"
    FIELD_ALREADY_SET: Final[str] = "property/association {name!r} is already set on schema {schema}"
    OPERATION_ALREADY_SET: Final[str] = "operation {name!r} is already generated on schema {schema}"
    INVALID_FIELD_NAME: Final[str] = "invalid field name {name!r} for {context}: must be a public Python identifier"
    RESERVED_FIELD_NAME: Final[str] = "field name {name!r} for {context} is reserved"
    SCHEMA_ALREADY_BUILT: Final[str] = "schema {schema} is already built; declarations are closed"
    SCHEMA_FAILED: Final[str] = "schema {schema} has a failed declaration and cannot be built or extended"
    INVALID_SCHEMA_NAME: Final[str] = "invalid schema name {name!r}: must be a Python identifier"

    # @@ STEP 2: Define node value errors
    NOT_A_NODE: Final[str] = "expected a node value, got {value!r}"
    WRONG_NODE_TYPE: Final[str] = "expected a {expected} node value, got {actual}"
    DETACHED_NODE: Final[str] = "{schema} node {node_id!r} is not attached to a repository; cannot resolve {association}"

    # @@ STEP 3: Define operation lookup errors
    UNKNOWN_OPERATION: Final[str] = "{schema!r} has no association operation {name!r}"


# ============================================================================
# LOGGING CONSTANTS
# ============================================================================

class LoggingConstants:
    """Log message templates."""

    MULTIPLE_PRIMARY: Final[str] = "Schema {schema} declares more than one primary property: {names}"
