# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from collections.abc import Callable
from enum import Enum
from typing import overload

from .datamodel import DataAdapterType, xml_functions, zero_value
from .exceptions import ConversionError
from .python.types import Marker
from .tree import XMLAttribute, XMLSource, name_of, text_value

__all__ = 'typed_value', 'converted_value', 'enum_value'


@overload
def typed_value[T](source: XMLSource | None, data_type: type[T], /, *, adapter: DataAdapterType[T] | None = None) -> T: ...


@overload
def typed_value[T](source: XMLSource | None, data_type: type[T], /, default: T, *, adapter: DataAdapterType[T] | None = None) -> T: ...


@overload
def typed_value[T](source: XMLSource | None, data_type: type[T], /, default: None, *, adapter: DataAdapterType[T] | None = None) -> T | None: ...


def typed_value[T](source: XMLSource | None, data_type: type[T], /, default: T | None | Marker = Marker.MissingArgument, *, adapter: DataAdapterType[T] | None = None) -> T | None:
    """
    Convert the text of an element or attribute to data_type.

    A missing source (None) and a source with empty text are equivalent and
    both return default. When default is not provided, the zero value of the
    type is returned instead (0, '', False, the member with value 0 of an
    enumeration, or None for types that don't have one).

    Enumerations are parsed from member names, case-insensitively, and Flag
    enumerations accept a comma separated list of names. Other types use the
    adapter argument if provided, or the one associated with the type in the
    AdapterRegistry, or the type's constructor.

    Raises ConversionError if the text cannot be converted.
    """
    text = text_value(source)
    if source is None or not text:
        return zero_value(data_type) if default is Marker.MissingArgument else default
    xml_parse, _ = xml_functions(data_type, adapter)
    try:
        return xml_parse(text)
    except (ValueError, TypeError, ArithmeticError) as exc:
        raise ConversionError(name_of(source), text, data_type) from exc


def converted_value[T](source: XMLSource | None, converter: Callable[[str], T], /, default: T | None = None) -> T | None:
    """
    Convert the text of an element or attribute using converter.

    A missing source and a source with empty text both return default without
    calling converter. Exceptions raised by converter are propagated as they
    are.
    """
    text = text_value(source)
    if source is None or not text:
        return default
    return converter(text)


def enum_value[E: Enum](attribute: XMLAttribute | None, enum_type: type[E], /, default: E | None | Marker = Marker.MissingArgument) -> E | None:
    """Convert the value of an attribute to a member of enum_type (see typed_value)"""
    if not (isinstance(enum_type, type) and issubclass(enum_type, Enum)):
        raise TypeError(f'Type {enum_type!r} must be an enumeration.')
    if default is Marker.MissingArgument:
        return typed_value(attribute, enum_type)
    return typed_value(attribute, enum_type, default)
