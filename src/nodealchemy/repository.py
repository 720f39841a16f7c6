# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Repository contract consumed by the generated getters.

Storage, indexing, persistence and identifier resolution live outside this
package. A repository is any object attached to a node value (its ``repo``
field) that resolves identifiers of a target type.
"""

from __future__ import annotations

from typing import Any, List, Protocol, Sequence, overload, runtime_checkable

from .descriptors import TargetReference


@runtime_checkable
class Repository(Protocol):
    """
    Resolves identifiers to node values.

    ``fetch`` takes the target type reference exactly as it was declared on
    the association (a class or a dotted type name). It must either return a
    complete result or raise; errors propagate to the getter's caller
    unchanged. Not-found semantics are entirely up to the repository.
    """

    @overload
    def fetch(self, target: TargetReference, ids: Sequence[Any]) -> List[Any]: ...

    @overload
    def fetch(self, target: TargetReference, ids: Any) -> Any: ...

    def fetch(self, target: TargetReference, ids: Any) -> Any:
        """Resolve one identifier to a node, or a list of identifiers to a list of nodes."""
        ...
