# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from .__info__ import __version__
from .building import format_value, is_default, new_conditional_element, new_optional_attribute, new_optional_element
from .conversion import converted_value, enum_value, typed_value
from .datamodel import AdapterRegistry, DataAdapter, DataConverter
from .exceptions import ConversionError, MissingAttributeError, MissingElementError, NameMismatchError, NullInputError, XMLAccessError
from .tree import (
    ETreeElement,
    XMLAttribute,
    assert_name,
    attribute_or_empty,
    element_or_empty,
    mandatory_attribute,
    mandatory_element,
    name_of,
    text_value,
)

__all__ = (  # noqa: RUF022
    '__version__',

    # lookup
    'ETreeElement',
    'XMLAttribute',
    'mandatory_element',
    'element_or_empty',
    'mandatory_attribute',
    'attribute_or_empty',
    'name_of',
    'text_value',
    'assert_name',

    # conversion
    'typed_value',
    'converted_value',
    'enum_value',
    'AdapterRegistry',
    'DataAdapter',
    'DataConverter',

    # building
    'format_value',
    'is_default',
    'new_optional_element',
    'new_optional_attribute',
    'new_conditional_element',

    # errors
    'XMLAccessError',
    'NullInputError',
    'MissingElementError',
    'MissingAttributeError',
    'ConversionError',
    'NameMismatchError',
)
