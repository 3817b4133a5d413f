# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from .python import reprproxy

__all__ = 'XMLAccessError', 'NullInputError', 'MissingElementError', 'MissingAttributeError', 'ConversionError', 'NameMismatchError'  # noqa: RUF022


class XMLAccessError(ValueError):
    """Base class for the errors raised while reading or checking a document."""


class NullInputError(XMLAccessError, TypeError):
    """Raised when an operation that needs an element received None instead."""

    def __init__(self, operation: str) -> None:
        super().__init__(f'{operation}() requires an element, but None was received.')
        self.operation = operation


class MissingElementError(XMLAccessError):
    """Raised when a mandatory child element is not present."""

    def __init__(self, element_name: str, name: str) -> None:
        super().__init__(f"The element '{element_name}' doesn't contain mandatory child element '{name}'.")
        self.element_name = element_name
        self.name = name


class MissingAttributeError(XMLAccessError):
    """Raised when a mandatory attribute is not present."""

    def __init__(self, element_name: str, name: str) -> None:
        super().__init__(f"Mandatory attribute '{name}' is missing in the element '{element_name}'.")
        self.element_name = element_name
        self.name = name


class ConversionError(XMLAccessError):
    """
    Raised when the text of an element or attribute cannot be converted.

    The error that triggered it, if any, is available as ``__cause__``.
    """

    def __init__(self, source_name: str, text: str, data_type: type) -> None:
        super().__init__(f"The '{source_name}' value '{text}' cannot be converted to the value of type '{reprproxy(data_type)}'.")
        self.source_name = source_name
        self.text = text
        self.data_type = data_type


class NameMismatchError(XMLAccessError):
    """Raised when an element does not have the expected name."""

    def __init__(self, expected_name: str, actual_name: str | None) -> None:
        actual = 'null' if actual_name is None else f"'{actual_name}'"
        super().__init__(f"Wrong XML element received. Expected element with name '{expected_name}', but was element with name {actual}.")
        self.expected_name = expected_name
        self.actual_name = actual_name
