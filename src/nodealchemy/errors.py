# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Exception hierarchy for NodeAlchemy.

Definition errors are raised synchronously while a schema is declared and are
fatal to that schema. Runtime errors raised by the repository collaborator are
never wrapped; they propagate unchanged.
"""

from __future__ import annotations


class NodeAlchemyError(Exception):
    """Base class for every error raised by NodeAlchemy itself."""


class DefinitionError(NodeAlchemyError, ValueError):
    """
    A schema declaration was rejected.

    Raised for unknown option keys, invalid association target references,
    duplicate or invalid field names, and declarations on a built schema.
    """


class InvalidNodeReferenceError(NodeAlchemyError, TypeError):
    """A mutator was given something that is not a node value of the expected type."""


class DetachedNodeError(NodeAlchemyError, RuntimeError):
    """A getter needed the repository of a node that is not attached to one."""
