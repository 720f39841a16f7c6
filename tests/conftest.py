# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Pytest configuration and shared fixtures for NodeAlchemy tests.
"""

from __future__ import annotations

import itertools
from typing import Any, Dict, List, Tuple

import pytest

from nodealchemy import NodeRecord, NodeType, SchemaBuilder, target_name


class EchoRepository:
    """Stub repository returning whatever it is asked to fetch."""

    def __init__(self) -> None:
        self.calls: List[Tuple[Any, Any]] = []

    def fetch(self, target: Any, ids: Any) -> Any:
        self.calls.append((target, ids))
        return ids


class MemoryRepository:
    """
    Minimal in-memory repository: assigns ids, attaches nodes and resolves
    them by target type name. Unknown ids raise KeyError.
    """

    def __init__(self) -> None:
        self.calls: List[Tuple[Any, Any]] = []
        self._nodes: Dict[Tuple[str, Any], NodeRecord] = {}
        self._ids = itertools.count(1)

    def insert(self, node_type: NodeType, **values: Any) -> NodeRecord:
        node = node_type(id=next(self._ids), repo=self, **values)
        self._nodes[(node_type.name, node.id)] = node
        return node

    def fetch(self, target: Any, ids: Any) -> Any:
        self.calls.append((target, ids))
        name = target_name(target).rsplit(".", 1)[-1]
        if isinstance(ids, list):
            return [self._nodes[(name, ident)] for ident in ids]
        return self._nodes[(name, ids)]


@pytest.fixture(scope="function")
def echo_repo() -> EchoRepository:
    return EchoRepository()


@pytest.fixture(scope="function")
def memory_repo() -> MemoryRepository:
    return MemoryRepository()


@pytest.fixture(scope="function")
def biblio() -> Dict[str, NodeType]:
    """Bibliography schemas: authors and publishers of books."""
    author = (
        SchemaBuilder("Author")
        .property("name", index="unique")
        .has_edges("author_of", "Book", reflect="authored_by")
        .build()
    )
    publisher = (
        SchemaBuilder("Publisher")
        .property("name", index="unique")
        .has_edges("publisher_of", "Book", reflect="published_by")
        .build()
    )
    book = (
        SchemaBuilder("Book")
        .property("title", index="unique")
        .property("body")
        .has_edge("authored_by", author, reflect="author_of")
        .has_edges("published_by", "Publisher", reflect="publisher_of")
        .build()
    )
    return {"Author": author, "Publisher": publisher, "Book": book}
