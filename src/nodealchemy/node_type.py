# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Node type definition surface.

A node type is declared through a :class:`SchemaBuilder` and frozen into a
:class:`NodeType` by :meth:`SchemaBuilder.build`:

    >>> Book = (
    ...     SchemaBuilder("Book")
    ...     .property("title", index="unique")
    ...     .property("body")
    ...     .has_edge("authored_by", "Author", reflect="author_of")
    ...     .has_edges("published_by", "Publisher", reflect="publisher_of")
    ...     .build()
    ... )
    >>> book = Book(title="Dune")
    >>> book = Book.add_published_by(book, [publisher_a, publisher_b])
    >>> Book.published_by(book)
    [publisher_a, publisher_b]

The :func:`node_schema` decorator offers the same through a declaration
function, named after the node type.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Type

from .accessors import Operation, build_operations
from .constants import (
    Cardinality,
    ErrorMessages,
    IndexKind,
    LoggingConstants,
    OperationConstants,
    SchemaConstants,
)
from .descriptors import AssociationDescriptor, PropertyDescriptor, TargetReference, normalize_index
from .errors import DefinitionError
from .introspection import NodeSchema
from .layout import NodeRecord, build_record_model, record_layout, reserved_record_names
from .registry import AssociationRegistry, PropertyRegistry
from .validation import FieldNamespace, check_name, check_options, check_type

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Node type
# -----------------------------------------------------------------------------

class NodeType:
    """
    A built, immutable node type.

    Calling the node type creates a node value. Introspection is forwarded to
    :attr:`schema`; association operations are looked up by name in the
    operation table generated at build time.

    :class: NodeType
    :synopsis: Frozen node type with introspection and association operations
    """

    __slots__ = ("_name", "_schema", "_model", "_operations")

    def __init__(
        self,
        name: str,
        schema: NodeSchema,
        model: Type[NodeRecord],
        operations: Mapping[str, Operation],
    ) -> None:
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_schema", schema)
        object.__setattr__(self, "_model", model)
        object.__setattr__(self, "_operations", operations)

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} {self._name} is immutable")

    def __delattr__(self, key: str) -> None:
        raise AttributeError(f"{type(self).__name__} {self._name} is immutable")

    def __getattr__(self, name: str) -> Operation:
        # Only reached for names that are not regular attributes.
        try:
            operations = object.__getattribute__(self, "_operations")
        except AttributeError:
            raise AttributeError(name) from None
        try:
            return operations[name]
        except KeyError:
            raise AttributeError(
                ErrorMessages.UNKNOWN_OPERATION.format(schema=self._name, name=name)
            ) from None

    def __dir__(self) -> List[str]:
        return sorted(set(super().__dir__()) | set(self._operations))

    def __call__(self, **values: Any) -> NodeRecord:
        return self.new(**values)

    def __repr__(self) -> str:
        return f"<NodeType {self._name}>"

    @property
    def name(self) -> str:
        return self._name

    @property
    def schema(self) -> NodeSchema:
        """Introspection facade of this node type."""
        return self._schema

    @property
    def model(self) -> Type[NodeRecord]:
        """Record model every node value of this type is an instance of."""
        return self._model

    def new(self, **values: Any) -> NodeRecord:
        """
        Create a node value.

        Unset properties take their declared default, single associations are
        None and multiple associations are empty.

        :raises pydantic.ValidationError: for unknown fields
        """
        return self._model(**values)

    def is_instance(self, value: Any) -> bool:
        return isinstance(value, self._model)

    def operation(self, name: str) -> Optional[Operation]:
        """Return the generated operation called ``name``, or None."""
        return self._operations.get(name)

    def operations(self) -> List[str]:
        """Return the names of every generated association operation."""
        return list(self._operations)

    # -------------------------------------------------------------------------
    # Introspection shortcuts
    # -------------------------------------------------------------------------

    def properties(self) -> List[str]:
        return self._schema.properties()

    def indexes(self) -> List[str]:
        return self._schema.indexes()

    def index_of(self, name: str) -> Optional[IndexKind]:
        return self._schema.index_of(name)

    def indexes_unique(self) -> List[str]:
        return self._schema.indexes_unique()

    def indexes_non_unique(self) -> List[str]:
        return self._schema.indexes_non_unique()

    def primary_key(self) -> Optional[str]:
        return self._schema.primary_key()

    def associations(self) -> List[str]:
        return self._schema.associations()

    def reflect_of(self, name: str) -> Optional[str]:
        return self._schema.reflect_of(name)

    def target_of(self, name: str) -> Optional[TargetReference]:
        return self._schema.target_of(name)

    def fields(self) -> List[str]:
        return self._schema.fields()


def is_node_type(obj: Any) -> bool:
    """Check whether ``obj`` is a built node type."""
    return isinstance(obj, NodeType)


# Names a field could not take without shadowing the record or node type API.
_PROPERTY_RESERVED = reserved_record_names() - set(SchemaConstants.META_FIELDS)
_ASSOCIATION_RESERVED = _PROPERTY_RESERVED | frozenset(
    name for name in dir(NodeType) if not name.startswith("_")
)


# -----------------------------------------------------------------------------
# Schema builder
# -----------------------------------------------------------------------------

class SchemaBuilder:
    """
    Collects the declarations of one node type.

    Declarations are validated as they are made; the first invalid one raises
    :class:`~nodealchemy.errors.DefinitionError` and the node type can no
    longer be used. :meth:`build` freezes the declarations into a
    :class:`NodeType`.

    :param name: Node type name, a Python identifier
    :raises DefinitionError: if ``name`` is not an identifier
    """

    def __init__(self, name: str) -> None:
        if not isinstance(name, str) or not name.isidentifier():
            raise DefinitionError(ErrorMessages.INVALID_SCHEMA_NAME.format(name=name))
        self.name = name
        self._namespace = FieldNamespace(name)
        self._operation_names = FieldNamespace(name, ErrorMessages.OPERATION_ALREADY_SET)
        self._properties = PropertyRegistry()
        self._associations = AssociationRegistry()
        self._node_type: Optional[NodeType] = None
        self._failed = False

        # @@ STEP: Meta fields open the namespace
        for meta in SchemaConstants.META_FIELDS:
            self._namespace.register(meta)

    def __repr__(self) -> str:
        if self._failed:
            state = "failed"
        else:
            state = "built" if self._node_type is not None else "open"
        return f"SchemaBuilder({self.name!r}, {state}, fields={list(self._namespace)})"

    @property
    def failed(self) -> bool:
        """Whether a declaration was rejected; a failed builder never builds."""
        return self._failed

    def _ensure_open(self) -> None:
        if self._failed:
            raise DefinitionError(ErrorMessages.SCHEMA_FAILED.format(schema=self.name))
        if self._node_type is not None:
            raise DefinitionError(ErrorMessages.SCHEMA_ALREADY_BUILT.format(schema=self.name))

    @contextmanager
    def _declaration(self) -> Iterator[None]:
        self._ensure_open()
        try:
            yield
        except DefinitionError:
            self._failed = True
            raise

    def _check_field(self, name: str, reserved: frozenset, context: str) -> None:
        self._namespace.check_free([name])
        check_name(name, reserved, context)

    def has_edges(self, name: str, target: TargetReference, **options: Any) -> "SchemaBuilder":
        """
        Declare an association holding any number of edges.

        The node value stores an ordered tuple of target identifiers, empty by
        default.

        :param name: Association name
        :param target: Target node type, as a NodeType, a class or a dotted type name
        :param options: ``reflect`` - the association name on the target that
            mirrors this edge
        :returns: The builder, for chaining
        """
        return self._add_association(name, target, options, Cardinality.MULTIPLE, SchemaConstants.CONTEXT_HAS_EDGES)

    def has_edge(self, name: str, target: TargetReference, **options: Any) -> "SchemaBuilder":
        """
        Declare an association holding zero or one edge.

        The node value stores the target identifier, None by default.

        :param name: Association name
        :param target: Target node type, as a NodeType, a class or a dotted type name
        :param options: ``reflect`` - the association name on the target that
            mirrors this edge
        :returns: The builder, for chaining
        """
        return self._add_association(name, target, options, Cardinality.SINGLE, SchemaConstants.CONTEXT_HAS_EDGE)

    def _add_association(
        self,
        name: str,
        target: TargetReference,
        options: Dict[str, Any],
        cardinality: Cardinality,
        context: str,
    ) -> "SchemaBuilder":
        with self._declaration():
            # @@ STEP 1: Validate everything before registering anything
            if not isinstance(target, NodeType):
                check_type(target, context)
            check_options(options, SchemaConstants.ASSOCIATION_OPTIONS, context)
            self._check_field(name, _ASSOCIATION_RESERVED, context)

            # Generated operation names must not clash across associations
            prefixes = (
                OperationConstants.MULTIPLE_MUTATORS
                if cardinality is Cardinality.MULTIPLE
                else OperationConstants.SINGLE_MUTATORS
            )
            operation_names = [name] + [prefix + name for prefix in prefixes]
            self._operation_names.check_free(operation_names)

            # @@ STEP 2: Register the field, its operations and its descriptor
            self._namespace.register(name)
            for operation_name in operation_names:
                self._operation_names.register(operation_name)
            self._associations.append(
                AssociationDescriptor(
                    name=name,
                    target=target,
                    cardinality=cardinality,
                    reflect=options.get(SchemaConstants.OPTION_REFLECT),
                )
            )
        return self

    def build(self) -> NodeType:
        """
        Freeze the declarations into a node type.

        Building twice returns the same node type.

        :raises DefinitionError: if any declaration was rejected
        """
        if self._failed:
            raise DefinitionError(ErrorMessages.SCHEMA_FAILED.format(schema=self.name))
        if self._node_type is not None:
            return self._node_type

        properties = self._properties.freeze()
        associations = self._associations.freeze()

        # @@ STEP 1: At most one primary property is a convention, not a rule
        primaries = [p.name for p in properties if p.index is IndexKind.PRIMARY]
        if len(primaries) > 1:
            logger.warning(LoggingConstants.MULTIPLE_PRIMARY.format(schema=self.name, names=primaries))

        # @@ STEP 2: Layout, introspection tables, then operations
        model = build_record_model(self.name, properties, associations)
        schema = NodeSchema(self.name, properties, associations, record_layout(model))
        operations = build_operations(self.name, model, associations)

        node_type = NodeType(self.name, schema, model, operations)
        model.__node_type__ = node_type
        self._node_type = node_type
        logger.debug(f"Built node type {self.name}: {schema.fields()}")
        return node_type

    # Declared last: the method name shadows the ``property`` builtin in this
    # class body.
    def property(self, name: str, **options: Any) -> "SchemaBuilder":
        """
        Declare a property.

        The property is not typed; any value can be stored.

        :param name: Property name
        :param options:
            ``default`` - value of the property on new node values. It is
            evaluated once, when the schema is declared, and shared.

            ``index`` - ``True`` for a non-unique index, ``"unique"`` for a
            unique index, ``"primary"`` for the primary unique index, or an
            :class:`IndexKind`. Any other truthy value means ``True``.
        :returns: The builder, for chaining
        """
        with self._declaration():
            check_options(options, SchemaConstants.PROPERTY_OPTIONS, SchemaConstants.CONTEXT_PROPERTY)
            self._check_field(name, _PROPERTY_RESERVED, SchemaConstants.CONTEXT_PROPERTY)
            self._namespace.register(name)
            self._properties.append(
                PropertyDescriptor(
                    name=name,
                    default=options.get(SchemaConstants.OPTION_DEFAULT),
                    index=normalize_index(options.get(SchemaConstants.OPTION_INDEX)),
                )
            )
        return self


def node_schema(name: Optional[str] = None) -> Callable[[Callable[[SchemaBuilder], Any]], NodeType]:
    """
    Decorator building a node type from a declaration function.

    Example:
        >>> @node_schema()
        ... def Author(s):
        ...     s.property("name", index="unique")
        ...     s.has_edges("author_of", "Book", reflect="authored_by")

    :param name: Node type name. If not provided, uses the function name.
    :return: Decorator replacing the function with the built node type.
    """

    def decorator(declare: Callable[[SchemaBuilder], Any]) -> NodeType:
        builder = SchemaBuilder(name if name is not None else declare.__name__)
        declare(builder)
        return builder.build()

    return decorator


__all__ = [
    "NodeType",
    "SchemaBuilder",
    "is_node_type",
    "node_schema",
]
