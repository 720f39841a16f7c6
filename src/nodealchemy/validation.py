# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Definition-time validation of schema declarations.

Every check raises :class:`~nodealchemy.errors.DefinitionError` on the first
violation; nothing is collected or deferred.
"""

from __future__ import annotations

import keyword
import logging
from typing import Any, Collection, Iterable, Iterator, List, Mapping

from .constants import ErrorMessages, TypeReferenceConstants
from .errors import DefinitionError

logger = logging.getLogger(__name__)


def check_options(opts: Mapping[str, Any], allowed: Collection[str], context: str) -> None:
    """
    Reject any option key outside ``allowed``.

    :param opts: Declared options
    :param allowed: Recognized option keys
    :param context: Declaration name used in the error message
    :raises DefinitionError: naming the first unknown key
    """
    for key in opts:
        if key not in allowed:
            raise DefinitionError(ErrorMessages.INVALID_OPTION.format(option=key, context=context))


def is_type_name(value: str) -> bool:
    """
    Check whether a string looks like a (dotted) type name such as ``"Author"``
    or ``"biblio.models.Author"``.

    Only catches the worst typos: every part must be an identifier and the last
    part must be capitalized.
    """
    parts = value.split(TypeReferenceConstants.PATH_SEPARATOR)
    for part in parts:
        if not part.isidentifier() or keyword.iskeyword(part):
            return False
    return parts[-1][0].isupper()


def check_type(target: Any, context: str) -> None:
    """
    Sanity check of an association target reference.

    Syntactic only: the referenced type is never imported or inspected, so a
    passing reference is not a guarantee that the target is a valid schema.

    :param target: A class or a dotted type name
    :param context: Declaration name used in the error message
    :raises DefinitionError: if the reference does not look like a type
    """
    if isinstance(target, type):
        return
    if isinstance(target, str) and is_type_name(target):
        return
    raise DefinitionError(ErrorMessages.INVALID_TYPE.format(target=target, context=context))


def check_name(name: Any, reserved: Collection[str], context: str) -> None:
    """
    Check that a field name is usable on both the record and the node type.

    :raises DefinitionError: if the name is not a public identifier or is reserved
    """
    if (
        not isinstance(name, str)
        or not name.isidentifier()
        or keyword.iskeyword(name)
        or name.startswith("_")
    ):
        raise DefinitionError(ErrorMessages.INVALID_FIELD_NAME.format(name=name, context=context))
    if name in reserved:
        raise DefinitionError(ErrorMessages.RESERVED_FIELD_NAME.format(name=name, context=context))


class FieldNamespace:
    """
    Flat namespace of every field name of one schema.

    Meta fields, properties and associations share a single namespace; a name
    can be registered once and the first registration wins.

    :class: FieldNamespace
    :synopsis: Duplicate detection across meta, property and association names
    """

    def __init__(self, schema_name: str, message: str = ErrorMessages.FIELD_ALREADY_SET) -> None:
        self.schema_name = schema_name
        self._message = message
        self._names: List[str] = []

    def register(self, name: str) -> None:
        """
        Register a name.

        :raises DefinitionError: if the name is already set on the schema
        """
        if name in self._names:
            raise DefinitionError(self._message.format(name=name, schema=self.schema_name))
        self._names.append(name)
        logger.debug(f"Registered {name!r} on schema {self.schema_name}")

    def check_free(self, names: Iterable[str]) -> None:
        """
        Fail if any of ``names`` is taken, registering nothing.

        :raises DefinitionError: for the first name already set
        """
        for name in names:
            if name in self._names:
                raise DefinitionError(self._message.format(name=name, schema=self.schema_name))

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)
