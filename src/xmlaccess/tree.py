# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Self

from lxml import etree

from .exceptions import MissingAttributeError, MissingElementError, NameMismatchError, NullInputError

__all__ = (  # noqa: RUF022
    'ETreeElement',
    'XMLName',
    'XMLAttribute',
    'XMLSource',

    'name_of',
    'text_value',

    'mandatory_element',
    'element_or_empty',
    'mandatory_attribute',
    'attribute_or_empty',
    'assert_name',
)


log = logging.getLogger(__name__)

# noinspection PyProtectedMember
type ETreeElement = etree._Element  # noqa: SLF001
type XMLName = str | etree.QName


@dataclass(frozen=True, slots=True)
class XMLAttribute:
    """
    An attribute of an element.

    lxml exposes attributes as plain strings in the element's attrib mapping,
    so this holds the attribute name and value together with the element it
    was read from (if any). The element is not part of the comparison.

    Iterating over an attribute yields its name and value, which allows
    element.set(*attribute) and dict(attributes).
    """

    name: str
    value: str = ''
    element: ETreeElement | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f'the value of the {self.name!r} attribute must be a string')

    def __iter__(self) -> Iterator[str]:
        yield self.name
        yield self.value

    def attach(self, element: ETreeElement) -> Self:
        """Set this attribute on element and return the attribute bound to it"""
        element.set(self.name, self.value)
        return self.__class__(self.name, self.value, element)


type XMLSource = ETreeElement | XMLAttribute


def name_of(source: XMLSource) -> str:
    """The name of an element (its tag, in Clark notation) or of an attribute"""
    if isinstance(source, XMLAttribute):
        return source.name
    return source.tag


def text_value(source: XMLSource | None) -> str:
    """The text value of an element (all its descendant text) or of an attribute"""
    match source:
        case None:
            return ''
        case XMLAttribute(value=value):
            return value
        case _:
            return ''.join(source.itertext())


def _first_child(element: ETreeElement, name: XMLName) -> ETreeElement | None:
    tag = str(name)
    return next((child for child in element if child.tag == tag), None)


def mandatory_element(element: ETreeElement | None, name: XMLName) -> ETreeElement:
    """Return the first child with the given name, which must exist"""
    if element is None:
        raise NullInputError('mandatory_element')
    child = _first_child(element, name)
    if child is None:
        raise MissingElementError(element.tag, str(name))
    return child


def element_or_empty(element: ETreeElement | None, name: XMLName) -> ETreeElement:
    """
    Return the first child with the given name.

    If there is no such child, or element is None, a new empty element with
    the given name is returned instead. The new element is not attached to
    element.
    """
    child = _first_child(element, name) if element is not None else None
    if child is None:
        log.debug('Element %r has no %r child, using an empty one', None if element is None else element.tag, str(name))
        return etree.Element(str(name))
    return child


def mandatory_attribute(element: ETreeElement | None, name: XMLName) -> XMLAttribute:
    """Return the attribute with the given name, which must exist"""
    if element is None:
        raise NullInputError('mandatory_attribute')
    value = element.get(str(name))
    if value is None:
        raise MissingAttributeError(element.tag, str(name))
    return XMLAttribute(str(name), value, element)


def attribute_or_empty(element: ETreeElement | None, name: XMLName, default: str | None = None) -> XMLAttribute:
    """
    Return the attribute with the given name.

    If the attribute is missing, or element is None, a new attribute is
    returned that has default as its value (or the empty string).
    """
    value = element.get(str(name)) if element is not None else None
    if value is None:
        log.debug('Element %r has no %r attribute, using %r', None if element is None else element.tag, str(name), default or '')
        return XMLAttribute(str(name), default or '')
    return XMLAttribute(str(name), value, element)


def assert_name(element: ETreeElement | None, expected_name: XMLName) -> None:
    """Check that element has the expected name (namespace included)"""
    if element is None:
        raise NameMismatchError(str(expected_name), None)
    if element.tag != str(expected_name):
        raise NameMismatchError(str(expected_name), element.tag)
