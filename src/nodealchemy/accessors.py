# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Association accessors and mutators.

One generic :class:`AssociationOperations` object is created per declared
association; its behaviour is selected by the descriptor's cardinality, not by
code emitted per field. :func:`build_operations` turns a schema's association
table into the operation table a node type dispatches through:

* ``<name>`` - getter, the only operation calling the repository
* ``set_<name>`` / ``clear_<name>`` - every association
* ``add_<name>`` / ``delete_<name>`` - multiple cardinality only

Mutators are pure value transforms returning an updated copy of the node value.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Sequence, Tuple, Type

from .constants import ErrorMessages, OperationConstants, SchemaConstants
from .descriptors import AssociationDescriptor
from .errors import DetachedNodeError, InvalidNodeReferenceError
from .layout import NodeRecord
from .repository import Repository

logger = logging.getLogger(__name__)

Operation = Callable[..., Any]


def _as_list(target_or_targets: Any) -> List[Any]:
    if isinstance(target_or_targets, (list, tuple)):
        return list(target_or_targets)
    return [target_or_targets]


def node_id(target: Any) -> Any:
    """
    Return the identifier of a node value.

    A node that has not been persisted yet has the identifier None; it is
    returned as is and only rejected later by the repository.

    :raises InvalidNodeReferenceError: if ``target`` is not a node value
    """
    if not isinstance(target, NodeRecord):
        raise InvalidNodeReferenceError(ErrorMessages.NOT_A_NODE.format(value=target))
    return target.id


def identity_key(item: Any) -> Hashable:
    """
    Key under which fetched nodes are considered the same.

    Persisted nodes are identified by type and id, other hashable values by
    value, and anything else (including unhashable ids and tuples holding
    unhashable items) by object identity.
    """
    if isinstance(item, NodeRecord):
        key = (type(item), item.id) if item.id is not None else None
    elif isinstance(item, Hashable):
        key = ("value", item)
    else:
        key = None
    if key is not None:
        try:
            hash(key)
        except TypeError:
            key = None
    return key if key is not None else ("object", id(item))


def unique_nodes(items: Iterable[Any]) -> List[Any]:
    """Deduplicate by :func:`identity_key`, keeping first-seen order."""
    seen = set()
    result = []
    for item in items:
        key = identity_key(item)
        if key in seen:
            continue
        seen.add(key)
        result.append(item)
    return result


class AssociationOperations:
    """
    Getter and mutators of one association.

    :class: AssociationOperations
    :synopsis: Descriptor-driven operations over node values of one schema
    """

    def __init__(self, schema_name: str, model: Type[NodeRecord], descriptor: AssociationDescriptor) -> None:
        self.schema_name = schema_name
        self.model = model
        self.descriptor = descriptor

    @property
    def name(self) -> str:
        return self.descriptor.name

    def __repr__(self) -> str:
        return f"AssociationOperations({self.schema_name}.{self.name}, {self.descriptor.cardinality.value})"

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _check_value(self, value: Any) -> None:
        if not isinstance(value, self.model):
            actual = type(value).__name__
            raise InvalidNodeReferenceError(
                ErrorMessages.WRONG_NODE_TYPE.format(expected=self.schema_name, actual=actual)
            )

    def _replace(self, value: NodeRecord, stored: Any) -> NodeRecord:
        self._check_value(value)
        return value.model_copy(update={self.name: stored})

    def _identifiers(self, node: NodeRecord) -> Tuple[Any, ...]:
        stored = getattr(node, self.name)
        if self.descriptor.is_multiple:
            return tuple(ident for ident in stored if ident is not None)
        return () if stored is None else (stored,)

    def _repository(self, node: NodeRecord) -> Repository:
        repo = getattr(node, SchemaConstants.META_REPO)
        if repo is None:
            raise DetachedNodeError(
                ErrorMessages.DETACHED_NODE.format(
                    schema=self.schema_name, node_id=node.id, association=self.name
                )
            )
        return repo

    # -------------------------------------------------------------------------
    # Getter
    # -------------------------------------------------------------------------

    def get(self, node_or_nodes: Any) -> Any:
        """
        Resolve the association through the repository.

        A single node resolves to a node (single cardinality, None when the
        identifier is None) or a list of nodes (multiple cardinality). A list of
        nodes resolves every identifier with one batched fetch and returns the
        targets deduplicated in first-seen order.

        The repository is not called when there is nothing to resolve.
        """
        if isinstance(node_or_nodes, (list, tuple)):
            return self._get_many(node_or_nodes)
        return self._get_one(node_or_nodes)

    def _get_one(self, node: Any) -> Any:
        self._check_value(node)
        stored = getattr(node, self.name)
        target = self.descriptor.target

        if not self.descriptor.is_multiple:
            if stored is None:
                return None
            return self._repository(node).fetch(target, stored)

        identifiers = self._identifiers(node)
        if not identifiers:
            return []
        return list(self._repository(node).fetch(target, list(identifiers)))

    def _get_many(self, nodes: Sequence[Any]) -> List[Any]:
        # @@ STEP 1: Batch identifiers per repository, remembering their position
        batches: Dict[int, Tuple[Any, List[Any]]] = {}
        positions: List[Tuple[int, int]] = []
        for node in nodes:
            self._check_value(node)
            identifiers = self._identifiers(node)
            if not identifiers:
                continue
            repo = self._repository(node)
            repo_key = id(repo)
            _, batch = batches.setdefault(repo_key, (repo, []))
            for ident in identifiers:
                positions.append((repo_key, len(batch)))
                batch.append(ident)

        # @@ STEP 2: One fetch per repository
        fetched: Dict[int, List[Any]] = {}
        for repo_key, (repo, ids) in batches.items():
            logger.debug(f"Fetching {len(ids)} ids of {self.descriptor.target_name} for {self.schema_name}.{self.name}")
            fetched[repo_key] = list(repo.fetch(self.descriptor.target, ids))

        # @@ STEP 3: Restore input order, then deduplicate
        return unique_nodes(fetched[repo_key][index] for repo_key, index in positions)

    # -------------------------------------------------------------------------
    # Mutators
    # -------------------------------------------------------------------------

    def set_single(self, value: NodeRecord, target: Any) -> NodeRecord:
        """Point the association at ``target``."""
        return self._replace(value, node_id(target))

    def clear_single(self, value: NodeRecord) -> NodeRecord:
        return self._replace(value, None)

    def add(self, value: NodeRecord, target_or_targets: Any) -> NodeRecord:
        """
        Prepend the identifiers of ``target_or_targets``.

        The new identifiers keep the order they were supplied in and come ahead
        of the existing ones. Duplicates are kept.
        """
        self._check_value(value)
        ids = tuple(node_id(target) for target in _as_list(target_or_targets))
        return self._replace(value, ids + getattr(value, self.name))

    def delete(self, value: NodeRecord, target_or_targets: Any) -> NodeRecord:
        """
        Remove the identifiers of ``target_or_targets``.

        Each supplied target removes the first occurrence of its identifier, so
        deleting what was just added restores the previous value exactly.
        """
        self._check_value(value)
        remaining = list(getattr(value, self.name))
        for target in _as_list(target_or_targets):
            ident = node_id(target)
            if ident in remaining:
                remaining.remove(ident)
        return self._replace(value, tuple(remaining))

    def set_multiple(self, value: NodeRecord, target_or_targets: Any) -> NodeRecord:
        """Replace every identifier, keeping the supplied order."""
        ids = tuple(node_id(target) for target in _as_list(target_or_targets))
        return self._replace(value, ids)

    def clear_multiple(self, value: NodeRecord) -> NodeRecord:
        return self._replace(value, ())

    # -------------------------------------------------------------------------
    # Operation table
    # -------------------------------------------------------------------------

    def operations(self) -> Dict[str, Operation]:
        """Return this association's operations keyed by their public name."""
        name = self.name
        if self.descriptor.is_multiple:
            return {
                name: self.get,
                OperationConstants.ADD_PREFIX + name: self.add,
                OperationConstants.DELETE_PREFIX + name: self.delete,
                OperationConstants.SET_PREFIX + name: self.set_multiple,
                OperationConstants.CLEAR_PREFIX + name: self.clear_multiple,
            }
        return {
            name: self.get,
            OperationConstants.SET_PREFIX + name: self.set_single,
            OperationConstants.CLEAR_PREFIX + name: self.clear_single,
        }


def build_operations(
    schema_name: str,
    model: Type[NodeRecord],
    associations: Sequence[AssociationDescriptor],
) -> Mapping[str, Operation]:
    """
    Generate the operation table of a schema.

    :param schema_name: Name of the schema, used in error messages
    :param model: Record model of the schema
    :param associations: Association descriptors in declaration order
    :returns: Read-only mapping of operation name to callable
    """
    table: Dict[str, Operation] = {}
    for descriptor in associations:
        ops = AssociationOperations(schema_name, model, descriptor)
        table.update(ops.operations())
    logger.debug(f"Generated {len(table)} operations for {schema_name}")
    return MappingProxyType(table)
