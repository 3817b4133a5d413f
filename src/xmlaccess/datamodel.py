# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from binascii import a2b_base64 as base64decode
from binascii import a2b_hex as hexdecode
from binascii import b2a_base64 as base64encode
from binascii import b2a_hex as hexencode
from collections.abc import Callable, MutableMapping
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from enum import Enum, Flag
from functools import lru_cache, reduce
from math import inf
from operator import or_
from typing import ClassVar, Protocol, Self, cast, runtime_checkable

__all__ = (  # noqa: RUF022
    'DataConverter',
    'DataAdapter',
    'DataAdapterType',
    'AdapterRegistry',

    'xml_functions',
    'zero_value',

    'Base64BinaryAdapter',
    'HexBinaryAdapter',

    'BooleanAdapter',
    'CharAdapter',
    'DatetimeAdapter',
    'DateAdapter',
    'TimeAdapter',
    'DecimalAdapter',
    'FloatAdapter',

    'EnumAdapter',
    'enum_adapter',

    'IntegerAdapter',
    'PositiveIntegerAdapter',
    'NegativeIntegerAdapter',
    'NonNegativeIntegerAdapter',
    'NonPositiveIntegerAdapter',
    'Int8Adapter',
    'Int16Adapter',
    'Int32Adapter',
    'Int64Adapter',
    'UInt8Adapter',
    'UInt16Adapter',
    'UInt32Adapter',
    'UInt64Adapter',
)


@runtime_checkable
class DataConverter(Protocol):
    """A protocol that describes how a data type converts between itself and XML"""

    @classmethod
    def xml_parse(cls, value: str) -> Self:
        """Parse XML into the data type"""
        ...

    def xml_build(self: Self) -> str:
        """Build XML from the data type"""
        ...


@runtime_checkable
class DataAdapter[T](Protocol):
    """A protocol that describes an external adapter between a data type T and XML"""

    @staticmethod
    def xml_parse(value: str, /) -> T:
        """Parse XML into the data type"""
        ...

    @staticmethod
    def xml_build(value: T, /) -> str:
        """Build XML from the data type"""
        ...


type DataAdapterType[T] = type[DataAdapter[T]]


class AdapterRegistry[T]:
    _adapters: ClassVar[MutableMapping[type, type[DataAdapter]]] = {}

    @classmethod
    def associate(cls, data_type: type[T], adapter: type[DataAdapter[T]]) -> None:
        if issubclass(data_type, DataConverter):
            raise TypeError('Adapters for types that already support the DataConverter protocol must be explicitly provided when converting values.')
        if issubclass(data_type, Enum):
            raise TypeError('Enumeration types are handled by their own adapters and cannot be associated with a different one.')
        cls._adapters[data_type] = adapter

    @classmethod
    def get_adapter(cls, data_type: type[T]) -> type[DataAdapter[T]] | None:
        return cls._adapters.get(data_type, None)


def xml_functions[T](data_type: type[T], adapter: DataAdapterType[T] | None = None) -> tuple[Callable[[str], T], Callable[[T], str]]:
    """
    Return the (parse, build) pair used to convert data_type to and from text.

    An explicitly provided adapter takes precedence. Otherwise a type that
    implements the DataConverter protocol is its own adapter, enumerations
    use an adapter derived from their members, and all other types are looked
    up in the AdapterRegistry. Types without an adapter are parsed with their
    constructor and built with str().
    """
    if adapter is None:
        if issubclass(data_type, DataConverter):
            adapter = cast(DataAdapterType[T], data_type)  # A type that implements the DataConverter protocol is its own DataAdapter
        elif issubclass(data_type, Enum):
            adapter = cast(DataAdapterType[T], enum_adapter(data_type))
        else:
            adapter = AdapterRegistry.get_adapter(data_type)
    if adapter is not None:
        return adapter.xml_parse, adapter.xml_build
    return data_type, str


def zero_value[T](data_type: type[T]) -> T | None:
    """Return the value a missing or empty source stands for when no default is given"""
    if issubclass(data_type, Enum):
        try:
            return data_type(0)
        except ValueError:
            return None
    if issubclass(data_type, int | float | Decimal | str | bytes):
        return data_type()
    return None


class Base64BinaryAdapter:
    @staticmethod
    def xml_parse(value: str) -> bytes:
        return base64decode(value)

    @staticmethod
    def xml_build(value: bytes) -> str:
        return base64encode(value, newline=False).decode('ascii')


class HexBinaryAdapter:
    @staticmethod
    def xml_parse(value: str) -> bytes:
        return hexdecode(value)

    @staticmethod
    def xml_build(value: bytes) -> str:
        return hexencode(value).decode('ascii')


class BooleanAdapter:
    @staticmethod
    def xml_parse(value: str) -> bool:
        match value.strip().lower():
            case 'true' | '1':
                return True
            case 'false' | '0':
                return False
            case _:
                raise ValueError(f'Invalid boolean value: {value!r}')

    @staticmethod
    def xml_build(value: bool) -> str:  # noqa: FBT001
        return 'true' if value else 'false'


class CharAdapter:
    """Represents a single character. Use it explicitly, since it shares the str type."""

    @staticmethod
    def xml_parse(value: str) -> str:
        if len(value) != 1:
            raise ValueError(f'invalid value {value!r} for character')
        return value

    @staticmethod
    def xml_build(value: str) -> str:
        if len(value) != 1:
            raise ValueError(f'invalid value {value!r} for character')
        return value


class DatetimeAdapter:
    @staticmethod
    def xml_parse(value: str) -> datetime:
        return datetime.fromisoformat(value.strip())

    @staticmethod
    def xml_build(value: datetime) -> str:
        return value.isoformat()


class DateAdapter:
    @staticmethod
    def xml_parse(value: str) -> date:
        return date.fromisoformat(value.strip())

    @staticmethod
    def xml_build(value: date) -> str:
        return value.isoformat()


class TimeAdapter:
    @staticmethod
    def xml_parse(value: str) -> time:
        return time.fromisoformat(value.strip())

    @staticmethod
    def xml_build(value: time) -> str:
        return value.isoformat()


class DecimalAdapter:
    @staticmethod
    def xml_parse(value: str) -> Decimal:
        try:
            return Decimal(value)
        except InvalidOperation as exc:
            raise ValueError(f'Invalid decimal value: {value!r}') from exc

    @staticmethod
    def xml_build(value: Decimal) -> str:
        return str(value)


class FloatAdapter:
    @staticmethod
    def xml_parse(value: str) -> float:
        return float(value)

    @staticmethod
    def xml_build(value: float) -> str:
        return repr(float(value))


AdapterRegistry.associate(bool, BooleanAdapter)
AdapterRegistry.associate(bytes, Base64BinaryAdapter)
AdapterRegistry.associate(datetime, DatetimeAdapter)
AdapterRegistry.associate(date, DateAdapter)
AdapterRegistry.associate(time, TimeAdapter)
AdapterRegistry.associate(Decimal, DecimalAdapter)
AdapterRegistry.associate(float, FloatAdapter)


class EnumAdapter:
    """
    Converts enumeration members to and from their names.

    Names are matched case-insensitively. Flag members are represented as a
    comma separated list of names ('RED, GREEN') and combined with bitwise
    union when parsed. A number is accepted in place of the names and it is
    interpreted as the value of the member.
    """

    def __init_subclass__(cls, *, enum_type: type[Enum] | None = None, **kw: object) -> None:
        super().__init_subclass__(**kw)

        if enum_type is None:
            raise TypeError(f'{cls.__qualname__} must specify the enum_type it adapts')

        name = enum_type.__qualname__
        members = {member_name.casefold(): member for member_name, member in enum_type.__members__.items()}
        is_flag = issubclass(enum_type, Flag)

        def parse_member(value: str) -> Enum:
            member = members.get(value.casefold())
            if member is not None:
                return member
            if value.lstrip('+-').isdigit():
                return enum_type(int(value))
            raise ValueError(f'{value!r} is not a valid {name} member')

        def xml_parse(value: str) -> Enum:
            names = [item.strip() for item in value.split(',')]
            if len(names) > 1 and not is_flag:
                raise ValueError(f'{name} does not support multiple values: {value!r}')
            result = parse_member(names[0])
            for item in names[1:]:
                result |= parse_member(item)  # type: ignore[operator]  # only reached for Flag types
            return result

        def xml_build(value: Enum) -> str:
            if not isinstance(value, enum_type):
                raise TypeError(f'value must be of type {name}')
            if is_flag:
                members = list(value)  # type: ignore[call-overload]  # Flag values are iterable
                if members and reduce(or_, members) == value:
                    return ', '.join(member.name for member in members)
                if members:
                    return str(value.value)  # some bits have no member name
            return value.name if value.name is not None else str(value.value)

        cls.enum_type = enum_type  # type: ignore[attr-defined]
        cls.xml_parse = staticmethod(xml_parse)  # type: ignore[method-assign]
        cls.xml_build = staticmethod(xml_build)  # type: ignore[method-assign]

    @staticmethod
    def xml_parse(value: str) -> Enum:
        raise NotImplementedError

    @staticmethod
    def xml_build(value: Enum) -> str:
        raise NotImplementedError


@lru_cache
def enum_adapter(enum_type: type[Enum]) -> type[EnumAdapter]:
    """Return the adapter for enum_type, creating it on first use"""
    return cast(type[EnumAdapter], type(f'{enum_type.__name__}Adapter', (EnumAdapter,), {}, enum_type=enum_type))


class IntegerAdapter:
    def __init_subclass__(cls, *, min_value: int | None = None, max_value: int | None = None, name: str = 'integer', bits: int | None = None, unsigned: bool = False, **kw: object) -> None:
        super().__init_subclass__(**kw)

        # Subclasses should specify either min_value/max_value/name or bits/unsigned.
        # When bits is specified it overwrites the name and boundaries with computed values.

        lower_bound: int | float
        upper_bound: int | float

        if bits is not None:
            if bits <= 0:
                raise ValueError('when specified, bits must be a positive integer')
            name = f'{"unsigned" if unsigned else "signed"} {bits}-bit integer'
            offset: int = 0 if unsigned else 2 ** (bits - 1)
            lower_bound = 0 - offset
            upper_bound = 2**bits - 1 - offset
        else:
            lower_bound = min_value if min_value is not None else -inf
            upper_bound = max_value if max_value is not None else +inf

        def xml_parse(value: str) -> int:
            number = int(value)
            if lower_bound <= number <= upper_bound:
                return number
            raise ValueError(f"invalid value '{value}' for {name}")

        def xml_build(value: int) -> str:
            if lower_bound <= value <= upper_bound:
                return str(value)
            raise ValueError(f"invalid value '{value}' for {name}")

        cls.xml_parse = staticmethod(xml_parse)  # type: ignore[method-assign]
        cls.xml_build = staticmethod(xml_build)  # type: ignore[method-assign]

    @staticmethod
    def xml_parse(value: str) -> int:
        return int(value)

    @staticmethod
    def xml_build(value: int) -> str:
        return str(value)


class PositiveIntegerAdapter(IntegerAdapter, min_value=+1, name='positive integer'):
    pass


class NegativeIntegerAdapter(IntegerAdapter, max_value=-1, name='negative integer'):
    pass


class NonNegativeIntegerAdapter(IntegerAdapter, min_value=0, name='non-negative integer'):
    pass


class NonPositiveIntegerAdapter(IntegerAdapter, max_value=0, name='non-positive integer'):
    pass


class Int8Adapter(IntegerAdapter, bits=8):
    pass


class Int16Adapter(IntegerAdapter, bits=16):
    pass


class Int32Adapter(IntegerAdapter, bits=32):
    pass


class Int64Adapter(IntegerAdapter, bits=64):
    pass


class UInt8Adapter(IntegerAdapter, bits=8, unsigned=True):
    pass


class UInt16Adapter(IntegerAdapter, bits=16, unsigned=True):
    pass


class UInt32Adapter(IntegerAdapter, bits=32, unsigned=True):
    pass


class UInt64Adapter(IntegerAdapter, bits=64, unsigned=True):
    pass
