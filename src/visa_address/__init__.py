"""VISA resource string parsing.

This package parses VISA/IVI instrument resource strings into typed values
before any I/O is attempted, and renders them back to canonical text. It
includes:

- Address-kind classification by prefix (USB, TCPIP, GPIB, GPIB-VXI, VXI, PXI)
- A single-pass USB resource string parser with span-annotated errors
- Canonical rendering of parsed addresses
- YAML loading and bulk checking of named resource strings

Typical usage::

    from visa_address import AddressError, parse_address

    try:
        address = parse_address("USB0::0x0957::0x0407::MY12345678::INSTR")
    except AddressError as exc:
        print(exc.diagnostic())
    else:
        print(f"{address.kind.prefix} device, serial {address.usb.serial_number}")
"""

from visa_address.address import (
    Address,
    AddressDispatcher,
    FormatAddress,
    FormatParser,
    parse_address,
)
from visa_address.config import (
    ResourceCheck,
    ResourceConfig,
    ResourceEntry,
    check_config,
    load_config,
)
from visa_address.errors import (
    AddressError,
    IncompleteAddress,
    InvalidSeparator,
    NotHexadecimal,
    NotInstr,
    NotUsbPrefix,
    NumberParseError,
    UnknownAddressKind,
    UnsupportedAddressKind,
    UsbParseError,
)
from visa_address.kind import AddressKind
from visa_address.span import Span, SpanCursor
from visa_address.usb import UsbAddress, parse_usb_address

__all__ = [
    # Dispatch
    "Address",
    "AddressDispatcher",
    "AddressKind",
    "FormatAddress",
    "FormatParser",
    "parse_address",
    # USB
    "UsbAddress",
    "parse_usb_address",
    # Spans
    "Span",
    "SpanCursor",
    # Errors
    "AddressError",
    "IncompleteAddress",
    "InvalidSeparator",
    "NotHexadecimal",
    "NotInstr",
    "NotUsbPrefix",
    "NumberParseError",
    "UnknownAddressKind",
    "UnsupportedAddressKind",
    "UsbParseError",
    # Configuration
    "ResourceCheck",
    "ResourceConfig",
    "ResourceEntry",
    "check_config",
    "load_config",
]
