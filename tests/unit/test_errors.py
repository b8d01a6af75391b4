"""Tests for the address error hierarchy."""

from __future__ import annotations

import pytest

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
from visa_address.span import Span


class TestHierarchy:
    """All parse errors share one base class."""

    @pytest.mark.parametrize(
        "error_type",
        [NotUsbPrefix, NumberParseError, NotHexadecimal, IncompleteAddress, NotInstr, InvalidSeparator],
    )
    def test_usb_errors_are_usb_parse_errors(self, error_type: type[Exception]) -> None:
        assert issubclass(error_type, UsbParseError)
        assert issubclass(error_type, AddressError)

    def test_dispatch_errors_are_address_errors(self) -> None:
        assert issubclass(UnknownAddressKind, AddressError)
        assert issubclass(UnsupportedAddressKind, AddressError)
        assert not issubclass(UnknownAddressKind, UsbParseError)


class TestAddressError:
    """Tests for the AddressError base behaviour."""

    def test_found_is_span_slice(self) -> None:
        error = AddressError("boom", "USB1:0x1A34", Span(4, 6))
        assert error.found == ":0"
        assert error.address == "USB1:0x1A34"
        assert str(error) == "boom"

    def test_diagnostic_underlines_span(self) -> None:
        error = InvalidSeparator("USB1:0x1A34::0x5678::A22-5", Span(4, 6))
        lines = error.diagnostic().splitlines()
        assert lines[0] == str(error)
        assert lines[1] == "  USB1:0x1A34::0x5678::A22-5"
        assert lines[2] == "      ^^"

    def test_diagnostic_marks_empty_span_with_one_caret(self) -> None:
        error = IncompleteAddress("USB::", "Manufacture Code, Model Number, Serial Number")
        assert error.span == Span(5, 5)
        assert error.diagnostic().splitlines()[2] == "  " + " " * 5 + "^"


class TestMessages:
    """Tests for error message text."""

    def test_not_usb_prefix(self) -> None:
        assert str(NotUsbPrefix("GPIB::1::INSTR")) == "Expected 'USB' at address start, found 'GPI'"

    def test_not_hexadecimal(self) -> None:
        error = NotHexadecimal("USB34::x1H34::0x5678", Span(7, 12))
        assert str(error) == (
            "Invalid hexadecimal number 'x1H34' at position 7 to 12 of "
            "'USB34::x1H34::0x5678'; number must start with '0x'"
        )

    def test_not_instr(self) -> None:
        error = NotInstr("USB::0x1::0x2::SN::INST", Span(19, 23))
        assert str(error) == (
            "'INSTR' was indicated but 'INST' was found at position 19 to 23 of "
            "'USB::0x1::0x2::SN::INST'"
        )

    def test_number_parse_error_includes_source(self) -> None:
        source = ValueError("invalid base-16 literal 'TEST'")
        error = NumberParseError("USB::0xTEST", Span(7, 11), "manufacturer ID", source)
        assert error.source is source
        assert error.field == "manufacturer ID"
        assert "instead of a manufacturer ID number" in str(error)
        assert str(error).endswith(str(source))

    def test_unknown_address_kind(self) -> None:
        error = UnknownAddressKind("ASRL1::INSTR")
        assert error.span == Span(0, 12)
        assert "ASRL1::INSTR" in str(error)
        for kind in AddressKind:
            assert kind.prefix in str(error)

    def test_unsupported_address_kind(self) -> None:
        error = UnsupportedAddressKind("TCPIP::1.2.3.4::INSTR", AddressKind.TCPIP)
        assert error.kind is AddressKind.TCPIP
        assert error.found == "TCPIP"
        assert str(error) == "TCPIP addresses are not supported: 'TCPIP::1.2.3.4::INSTR'"
