"""Resource-string dispatch.

:func:`parse_address` is the entry point: it looks at the start of the
string to decide which :class:`~visa_address.kind.AddressKind` it names,
hands the whole string to that kind's parser, and wraps the result in an
:class:`Address`. The dispatcher does no parsing of its own.

Only USB has a parser today. Other kinds are recognized and rejected with
:class:`~visa_address.errors.UnsupportedAddressKind` until a parser is
registered for them::

    dispatcher = AddressDispatcher({
        AddressKind.USB: parse_usb_address,
        AddressKind.TCPIP: parse_tcpip_address,
    })
    address = dispatcher.parse("TCPIP::192.168.1.100::INSTR")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping, Protocol, cast, runtime_checkable

from visa_address.errors import UnknownAddressKind, UnsupportedAddressKind
from visa_address.kind import AddressKind
from visa_address.usb import UsbAddress, parse_usb_address

logger = logging.getLogger(__name__)


@runtime_checkable
class FormatAddress(Protocol):
    """Protocol for the value a format parser produces."""

    def render(self) -> str:
        """Return the canonical resource string."""
        ...

    def to_dict(self) -> dict[str, Any]:
        """Return the address fields as a JSON-friendly dictionary."""
        ...


FormatParser = Callable[[str], FormatAddress]
"""Parses a complete resource string of one kind.

Must raise an :class:`~visa_address.errors.AddressError` subclass on failure.
"""


@dataclass(frozen=True)
class Address:
    """A parsed resource string of any kind.

    Attributes:
        kind: The interface type, fixed at construction.
        resource: The kind-specific address value.
    """

    kind: AddressKind
    resource: FormatAddress

    @classmethod
    def parse(cls, address: str) -> Address:
        """Parse a resource string. See :func:`parse_address`."""
        return parse_address(address)

    @property
    def usb(self) -> UsbAddress:
        """The USB address fields.

        Raises:
            ValueError: If this is not a USB address.
        """
        if self.kind is not AddressKind.USB:
            raise ValueError(f"{self.kind.prefix} address has no USB fields")
        return cast(UsbAddress, self.resource)

    def render(self) -> str:
        """Return the canonical resource string."""
        return self.resource.render()

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary.

        Returns:
            ``kind``, ``canonical`` and the kind-specific ``fields``.
        """
        return {
            "kind": self.kind.prefix,
            "canonical": self.render(),
            "fields": self.resource.to_dict(),
        }


class AddressDispatcher:
    """Routes resource strings to the parser for their address kind.

    The parser table is fixed at construction; instances hold no other
    state and may be shared between threads.

    Args:
        parsers: Parser for each supported kind. Defaults to USB only.
    """

    def __init__(self, parsers: Mapping[AddressKind, FormatParser] | None = None) -> None:
        if parsers is None:
            parsers = {AddressKind.USB: parse_usb_address}
        self._parsers: Mapping[AddressKind, FormatParser] = MappingProxyType(dict(parsers))

    @property
    def supported_kinds(self) -> frozenset[AddressKind]:
        """Kinds that have a registered parser."""
        return frozenset(self._parsers)

    def classify(self, address: str) -> AddressKind:
        """Determine the kind named by *address*'s prefix.

        Args:
            address: A resource string.

        Returns:
            The matching address kind.

        Raises:
            UnknownAddressKind: If no known prefix matches.
        """
        kind = AddressKind.match(address)
        if kind is None:
            raise UnknownAddressKind(address)
        return kind

    def parse(self, address: str) -> Address:
        """Parse *address* with the parser for its kind.

        Args:
            address: A resource string.

        Returns:
            The parsed address.

        Raises:
            UnknownAddressKind: If no known prefix matches.
            UnsupportedAddressKind: If the kind has no registered parser.
            AddressError: Any error raised by the kind's parser.
        """
        kind = self.classify(address)
        parser = self._parsers.get(kind)
        if parser is None:
            raise UnsupportedAddressKind(address, kind)
        logger.debug("Parsing %r as a %s address", address, kind.prefix)
        return Address(kind=kind, resource=parser(address))


_DEFAULT_DISPATCHER = AddressDispatcher()


def parse_address(address: str) -> Address:
    """Parse a VISA resource string.

    Note that a successful parse says nothing about whether the resource
    exists.

    Args:
        address: A resource string such as ``"USB::0x1A34::0x5678::A22-5"``.

    Returns:
        The parsed address.

    Raises:
        AddressError: If the string cannot be parsed.
    """
    return _DEFAULT_DISPATCHER.parse(address)
