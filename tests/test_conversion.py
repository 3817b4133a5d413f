# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from datetime import UTC, date, datetime, time
from decimal import Decimal
from enum import Enum, Flag, IntFlag
from urllib.parse import ParseResult, urlparse

import pytest
from lxml import etree

from xmlaccess import ConversionError, XMLAttribute, attribute_or_empty, converted_value, enum_value, typed_value
from xmlaccess.datamodel import CharAdapter, HexBinaryAdapter, Int8Adapter, Int16Adapter, UInt8Adapter, UInt64Adapter


class Colors(Flag):
    NONE = 0
    RED = 1
    GREEN = 2
    BLUE = 4


class Permissions(IntFlag):
    READ = 4
    WRITE = 2
    EXECUTE = 1


class Shape(Enum):
    CIRCLE = 'circle'
    SQUARE = 'square'


def element(tag: str, text: str) -> etree._Element:
    result = etree.Element(tag)
    result.text = text
    return result


class TestBuiltinTypes:

    def test_builtin_types(self) -> None:
        assert typed_value(XMLAttribute('int', '10'), int) == 10
        assert typed_value(XMLAttribute('uint', '123'), int, adapter=UInt64Adapter) == 123
        assert typed_value(XMLAttribute('short', '-12'), int, adapter=Int16Adapter) == -12
        assert typed_value(XMLAttribute('byte', '0'), int, adapter=UInt8Adapter) == 0
        assert typed_value(XMLAttribute('sbyte', '-10'), int, adapter=Int8Adapter) == -10
        assert typed_value(XMLAttribute('char', 'c'), str, adapter=CharAdapter) == 'c'
        assert typed_value(XMLAttribute('str', 'text'), str) == 'text'
        assert typed_value(XMLAttribute('float', '90.9'), float) == 90.9
        assert typed_value(XMLAttribute('decimal', '10.10'), Decimal) == Decimal('10.10')
        assert typed_value(XMLAttribute('bool', 'true'), bool) is True
        assert typed_value(XMLAttribute('bool', 'False'), bool) is False
        assert typed_value(XMLAttribute('bool', '1'), bool) is True
        assert typed_value(XMLAttribute('bytes', 'dGVzdA=='), bytes) == b'test'
        assert typed_value(XMLAttribute('bytes', '74657374'), bytes, adapter=HexBinaryAdapter) == b'test'
        assert typed_value(XMLAttribute('datetime', '3000-01-01T00:00:00'), datetime) == datetime(3000, 1, 1)  # noqa: DTZ001
        assert typed_value(XMLAttribute('datetime', '3000-01-01T12:30:00+00:00'), datetime) == datetime(3000, 1, 1, 12, 30, tzinfo=UTC)
        assert typed_value(XMLAttribute('date', '3000-01-01'), date) == date(3000, 1, 1)
        assert typed_value(XMLAttribute('time', '12:30:15'), time) == time(12, 30, 15)

    def test_element_value(self) -> None:
        assert typed_value(element('int', '10'), int) == 10
        assert typed_value(etree.fromstring('<value>1<b>2</b>3</value>'), int) == 123

    def test_missing_and_empty(self) -> None:
        empty = XMLAttribute('number', '')

        assert typed_value(None, int) == 0
        assert typed_value(empty, int) == 0
        assert typed_value(empty, int, 7) == 7
        assert typed_value(None, int, 7) == 7
        assert typed_value(empty, int, None) is None
        assert typed_value(empty, str) == ''
        assert typed_value(empty, bool) is False
        assert typed_value(empty, Decimal) == Decimal(0)
        assert typed_value(empty, datetime) is None
        assert typed_value(etree.Element('number'), int, 3) == 3

        # a lookup of a missing attribute reads the same as a missing source
        missing = attribute_or_empty(etree.Element('root'), 'number')
        assert typed_value(missing, int, 5) == 5

    def test_conversion_errors(self) -> None:
        with pytest.raises(ConversionError, match=r"'number'.+'one'.+'int'") as exc_info:
            typed_value(XMLAttribute('number', 'one'), int)
        assert exc_info.value.source_name == 'number'
        assert exc_info.value.text == 'one'
        assert exc_info.value.data_type is int
        assert isinstance(exc_info.value.__cause__, ValueError)

        with pytest.raises(ConversionError, match=r"'byte'.+'256'"):
            typed_value(XMLAttribute('byte', '256'), int, adapter=UInt8Adapter)

        with pytest.raises(ConversionError, match=r"'decimal'.+'ten'.+'Decimal'"):
            typed_value(XMLAttribute('decimal', 'ten'), Decimal)

        with pytest.raises(ConversionError, match=r"'flag'.+'yes'.+'bool'"):
            typed_value(element('flag', 'yes'), bool)

        with pytest.raises(ConversionError, match=r"'char'.+'ab'"):
            typed_value(XMLAttribute('char', 'ab'), str, adapter=CharAdapter)

        with pytest.raises(ConversionError, match=r"'{urn:x}when'.+'tomorrow'.+'datetime'"):
            typed_value(element('{urn:x}when', 'tomorrow'), datetime)


class TestEnumerations:

    def test_single_value(self) -> None:
        assert typed_value(XMLAttribute('color', 'BLUE'), Colors) is Colors.BLUE
        assert typed_value(XMLAttribute('color', 'green'), Colors) is Colors.GREEN
        assert typed_value(XMLAttribute('shape', 'Square'), Shape) is Shape.SQUARE

    def test_multiple_values(self) -> None:
        assert typed_value(XMLAttribute('color', 'RED, GREEN'), Colors) == Colors.RED | Colors.GREEN
        assert typed_value(XMLAttribute('color', 'red,blue'), Colors) == Colors.RED | Colors.BLUE
        assert typed_value(element('color', 'Red, Green'), Colors) == Colors.RED | Colors.GREEN
        assert typed_value(XMLAttribute('permissions', 'read, write'), Permissions) == Permissions.READ | Permissions.WRITE

    def test_numeric_values(self) -> None:
        assert typed_value(XMLAttribute('color', '3'), Colors) == Colors.RED | Colors.GREEN
        assert typed_value(XMLAttribute('color', '0'), Colors) is Colors.NONE

    def test_default_value(self) -> None:
        empty = XMLAttribute('color', '')

        assert typed_value(empty, Colors) is Colors.NONE
        assert typed_value(empty, Colors, Colors.GREEN) is Colors.GREEN
        assert typed_value(None, Colors) is Colors.NONE
        assert typed_value(None, Shape) is None

    def test_errors(self) -> None:
        with pytest.raises(ConversionError, match=r"'colorAttribute'.+'Purple'.+'Colors'"):
            typed_value(XMLAttribute('colorAttribute', 'Purple'), Colors)

        with pytest.raises(ConversionError, match=r"'color'.+'Red, Purple'.+'Colors'"):
            typed_value(XMLAttribute('color', 'Red, Purple'), Colors)

        with pytest.raises(ConversionError, match=r"'color'.+'Red,'"):
            typed_value(XMLAttribute('color', 'Red,'), Colors)

        with pytest.raises(ConversionError, match=r"'color'.+'8'"):
            typed_value(XMLAttribute('color', '8'), Colors)

        # only Flag enumerations can combine values
        with pytest.raises(ConversionError, match=r"'shape'.+'circle, square'.+'Shape'"):
            typed_value(XMLAttribute('shape', 'circle, square'), Shape)

    def test_enum_value(self) -> None:
        assert enum_value(XMLAttribute('color', 'blue'), Colors) is Colors.BLUE
        assert enum_value(XMLAttribute('color', ''), Colors) is Colors.NONE
        assert enum_value(XMLAttribute('color', ''), Colors, Colors.RED) is Colors.RED
        assert enum_value(None, Colors, None) is None

        with pytest.raises(TypeError, match=r'must be an enumeration'):
            enum_value(XMLAttribute('number', '1'), int)  # type: ignore[type-var]


class TestCustomConversion:

    def test_converter(self) -> None:
        url = converted_value(XMLAttribute('url', 'http://google.com'), urlparse)
        assert url == urlparse('http://google.com')
        assert isinstance(url, ParseResult)

        url = converted_value(element('Url', 'http://google.com'), urlparse)
        assert url is not None
        assert url.netloc == 'google.com'

    def test_missing_and_empty(self) -> None:
        def converter(value: str) -> str:
            raise AssertionError(f'the converter should not be called for {value!r}')

        assert converted_value(None, converter) is None
        assert converted_value(XMLAttribute('url', ''), converter) is None
        assert converted_value(etree.Element('Url'), converter, 'default') == 'default'

    def test_converter_errors_are_propagated(self) -> None:
        def converter(value: str) -> int:
            raise LookupError(value)

        with pytest.raises(LookupError, match=r'text'):
            converted_value(XMLAttribute('value', 'text'), converter)

        with pytest.raises(ValueError, match=r'invalid literal'):
            converted_value(XMLAttribute('value', 'text'), int)
