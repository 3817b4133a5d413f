# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging
from collections.abc import Callable
from decimal import Decimal
from enum import Enum

from lxml import etree

from .datamodel import xml_functions
from .tree import ETreeElement, XMLAttribute, XMLName

__all__ = 'format_value', 'is_default', 'new_optional_element', 'new_optional_attribute', 'new_conditional_element'


log = logging.getLogger(__name__)


def format_value(value: object) -> str:
    """The text representation of value, as produced for elements and attributes"""
    if isinstance(value, str) and not isinstance(value, Enum):  # StrEnum members are written by name
        return value
    _, xml_build = xml_functions(type(value))
    return xml_build(value)


def _normalized(value: object) -> tuple[str, object]:
    # Enum members are checked first because IntEnum and IntFlag members are also ints.
    match value:
        case Enum():
            return 'value', value
        case bool():
            return 'bool', value
        case int() | float() | Decimal():
            number = Decimal(str(value))
            return ('nan', None) if number.is_nan() else ('number', number)
        case _:
            return 'value', value


def is_default(value: object, default: object) -> bool:
    """
    Check if value is the same as default.

    Numbers are compared by value, regardless of their type, so 1, 1.0 and
    Decimal('1.00') are all the same, and any NaN is the same as any other
    NaN. Booleans are only the same as other booleans.
    """
    if value is None or default is None:
        return value is default
    return _normalized(value) == _normalized(default)


def new_optional_element(name: XMLName, value: object, default: object = None) -> ETreeElement | None:
    """
    Create an element with value as its text, unless value is None or default.

    This is used to avoid adding empty or redundant elements to a document.
    Reading the missing element back with typed_value(..., default) gives the
    default value.
    """
    if value is None or is_default(value, default):
        log.debug('Omitting element %r with default value %r', str(name), value)
        return None
    element = etree.Element(str(name))
    element.text = format_value(value)
    return element


def new_optional_attribute(name: XMLName, value: object, default: object = None) -> XMLAttribute | None:
    """
    Create an attribute with the given value, unless value is None or default.

    This is used to avoid adding empty or redundant attributes to a document.
    """
    if value is None or is_default(value, default):
        log.debug('Omitting attribute %r with default value %r', str(name), value)
        return None
    return XMLAttribute(str(name), format_value(value))


def new_conditional_element(name: XMLName, predicate: Callable[[], bool], value: object) -> ETreeElement | None:
    """Create an element with value as its text, if predicate() is true"""
    if not predicate():
        log.debug('Omitting element %r because its condition is false', str(name))
        return None
    element = etree.Element(str(name))
    if value is not None:
        element.text = format_value(value)
    return element
