"""USB instrument resource strings.

Grammar::

    USB[board]::manufacturer ID::model code::serial number[::interface][::INSTR]

``manufacturer ID`` and ``model code`` are ``0x``-prefixed 16-bit hex
numbers, ``board`` and ``interface`` are decimal, and the serial number is
opaque text. Example: ``USB0::0x0957::0x0407::MY12345678::0::INSTR``.

:func:`parse_usb_address` walks the string once with a finite-state machine
and raises a :class:`~visa_address.errors.UsbParseError` subclass pointing at
the exact offending span. :meth:`UsbAddress.render` is its inverse for
addresses already written in canonical form.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from visa_address.errors import (
    IncompleteAddress,
    InvalidSeparator,
    NotHexadecimal,
    NotInstr,
    NotUsbPrefix,
    NumberParseError,
)
from visa_address.span import Span, SpanCursor

BOARD_MAX = 0xFFFF_FFFF
U16_MAX = 0xFFFF

_DECIMAL_DIGITS = frozenset(string.digits)
_HEX_DIGITS = frozenset(string.hexdigits)


@dataclass(frozen=True)
class UsbAddress:
    """A validated USB INSTR resource address.

    Attributes:
        manufacturer_id: USB vendor ID (0x0000-0xFFFF).
        model_code: USB product ID (0x0000-0xFFFF).
        serial_number: Device serial number, stored verbatim.
        board: Controller board number. None selects the default board.
        interface_number: USB interface number. None selects the lowest
            matching interface.
        instr: True if the ``::INSTR`` suffix was given.

    Raises:
        ValueError: If any field is out of range, or the serial number is
            empty or contains a colon.
    """

    manufacturer_id: int
    model_code: int
    serial_number: str
    board: int | None = None
    interface_number: int | None = None
    instr: bool = False

    def __post_init__(self) -> None:
        """Validate field ranges.

        Raises:
            ValueError: If any field is invalid.
        """
        if self.board is not None and not 0 <= self.board <= BOARD_MAX:
            raise ValueError(f"board must be 0-{BOARD_MAX}, got {self.board}")
        if not 0 <= self.manufacturer_id <= U16_MAX:
            raise ValueError(f"manufacturer_id must be 0x0000-0xFFFF, got {self.manufacturer_id}")
        if not 0 <= self.model_code <= U16_MAX:
            raise ValueError(f"model_code must be 0x0000-0xFFFF, got {self.model_code}")
        if not self.serial_number:
            raise ValueError("serial_number must not be empty")
        if ":" in self.serial_number:
            raise ValueError(f"serial_number must not contain ':', got {self.serial_number!r}")
        if self.interface_number is not None and not 0 <= self.interface_number <= U16_MAX:
            raise ValueError(f"interface_number must be 0-{U16_MAX}, got {self.interface_number}")

    @classmethod
    def parse(cls, address: str) -> UsbAddress:
        """Parse a USB resource string. See :func:`parse_usb_address`."""
        return parse_usb_address(address)

    def render(self) -> str:
        """Return the canonical resource string.

        Board and interface numbers are decimal, IDs are ``0x`` followed by
        four uppercase hex digits, and the suffix is always ``INSTR``.

        Returns:
            e.g. ``"USB34::0x12A4::0xFF1A::A22-5::12314::INSTR"``.
        """
        board = "" if self.board is None else str(self.board)
        text = (
            f"USB{board}::0x{self.manufacturer_id:04X}::0x{self.model_code:04X}"
            f"::{self.serial_number}"
        )
        if self.interface_number is not None:
            text += f"::{self.interface_number}"
        if self.instr:
            text += "::INSTR"
        return text

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary.

        Returns:
            Field names mapped to values; IDs are given as hex strings.
        """
        return {
            "board": self.board,
            "manufacturer_id": f"0x{self.manufacturer_id:04X}",
            "model_code": f"0x{self.model_code:04X}",
            "serial_number": self.serial_number,
            "interface_number": self.interface_number,
            "instr": self.instr,
        }


def parse_usb_address(address: str) -> UsbAddress:
    """Parse a USB resource string into a :class:`UsbAddress`.

    Args:
        address: Resource string such as ``"USB::0x1A34::0x5678::A22-5"``.

    Returns:
        The parsed address.

    Raises:
        NotUsbPrefix: If *address* does not start with ``USB``.
        InvalidSeparator: If a field boundary is a single colon.
        NotHexadecimal: If an ID field lacks its ``0x`` marker.
        NumberParseError: If a numeric field is malformed or out of range.
        NotInstr: If the trailing segment is not ``INSTR``.
        IncompleteAddress: If the input ends before all required fields.

    Example:
        >>> parse_usb_address("USB0::0x0957::0x0407::MY123::INSTR").board
        0
    """
    return _UsbAddressParser(address).run()


class _State(Enum):
    """Parser states, in the order their fields appear."""

    USB = "USB"
    BOARD = "board"
    MANUFACTURER_ID = "manufacturer ID"
    MODEL_CODE = "model code"
    SERIAL_NUMBER = "serial number"
    USB_INTERFACE = "USB interface"
    INSTR = "INSTR"


# Fields still owed when the input ends while reading each required state.
_MISSING_AT_END: dict[_State, str] = {
    _State.USB: "USB flag, Manufacture Code, Model Number, Serial Number",
    _State.BOARD: "Manufacture Code, Model Number, Serial Number",
    _State.MANUFACTURER_ID: "Manufacture Code, Model Number, Serial Number",
    _State.MODEL_CODE: "Model Number, Serial Number",
}

_MISSING_OPTIONAL = "either USB Interface or INSTR"


class _UsbAddressParser:
    """Single-use state machine over one resource string.

    Each step consumes one character and returns the next state. When a
    field's closing colon is read, ``_separator_pending`` is set and the
    following character must be the second colon before the next field
    starts.
    """

    def __init__(self, address: str) -> None:
        self._address = address
        self._cursor = SpanCursor(address)
        self._state = _State.USB
        self._separator_pending = False

        self._board: int | None = None
        self._manufacturer_id = 0
        self._model_code = 0
        self._serial_number = ""
        self._interface_number: int | None = None
        self._instr = False

        self._transitions: dict[_State, Callable[[int, str], _State]] = {
            _State.USB: self._on_usb,
            _State.BOARD: self._on_board,
            _State.MANUFACTURER_ID: self._on_hex_field,
            _State.MODEL_CODE: self._on_hex_field,
            _State.SERIAL_NUMBER: self._on_serial_number,
            _State.USB_INTERFACE: self._on_usb_interface,
            _State.INSTR: self._on_instr,
        }

    def run(self) -> UsbAddress:
        """Consume the whole input and build the address."""
        while True:
            step = self._cursor.advance()
            if step is None:
                return self._finish()
            index, char = step
            if self._separator_pending:
                self._on_second_colon(index, char)
            else:
                self._state = self._transitions[self._state](index, char)

    # -- Transitions ---------------------------------------------------------

    def _on_second_colon(self, index: int, char: str) -> None:
        if char != ":":
            raise InvalidSeparator(self._address, Span(index - 1, index + 1))
        self._separator_pending = False
        self._cursor.mark()

    def _on_usb(self, index: int, char: str) -> _State:
        if char != "USB"[index]:
            raise NotUsbPrefix(self._address)
        if index < 2:
            return _State.USB
        self._cursor.mark()
        return _State.BOARD

    def _on_board(self, index: int, char: str) -> _State:
        if char != ":":
            return _State.BOARD
        field = self._cursor.span(index)
        if field:
            self._board = self._parse_integer(field, "board", 10, BOARD_MAX)
        self._separator_pending = True
        return _State.MANUFACTURER_ID

    def _on_hex_field(self, index: int, char: str) -> _State:
        offset = index - self._cursor.start
        if (offset == 0 and char != "0") or (offset == 1 and char not in "xX"):
            raise self._not_hexadecimal(index, char)
        if offset < 2 or char != ":":
            return self._state

        digits = Span(self._cursor.start + 2, index)
        value = self._parse_integer(digits, self._state.value, 16, U16_MAX)
        self._separator_pending = True
        if self._state is _State.MANUFACTURER_ID:
            self._manufacturer_id = value
            return _State.MODEL_CODE
        self._model_code = value
        return _State.SERIAL_NUMBER

    def _on_serial_number(self, index: int, char: str) -> _State:
        if char != ":":
            return _State.SERIAL_NUMBER
        field = self._cursor.span(index)
        if not field:
            raise IncompleteAddress(self._address, "Serial Number", field)
        self._serial_number = field.slice(self._address)

        # Two optional fields may follow; the first character after "::"
        # tells them apart.
        step = self._cursor.advance()
        if step is None:
            raise IncompleteAddress(
                self._address, _MISSING_OPTIONAL, Span(index, len(self._address))
            )
        if step[1] != ":":
            raise InvalidSeparator(self._address, Span(index, step[0] + 1))
        self._cursor.mark()
        following = self._cursor.peek()
        if following is None:
            raise IncompleteAddress(
                self._address, _MISSING_OPTIONAL, Span(index, len(self._address))
            )
        return _State.INSTR if following in "Ii" else _State.USB_INTERFACE

    def _on_usb_interface(self, index: int, char: str) -> _State:
        if char != ":":
            return _State.USB_INTERFACE
        field = self._cursor.span(index)
        self._interface_number = self._parse_integer(field, "USB interface", 10, U16_MAX)
        self._separator_pending = True
        return _State.INSTR

    def _on_instr(self, index: int, char: str) -> _State:
        return _State.INSTR

    # -- End of input --------------------------------------------------------

    def _finish(self) -> UsbAddress:
        end = len(self._address)
        missing = _MISSING_AT_END.get(self._state)
        if missing is not None:
            raise IncompleteAddress(self._address, missing, Span(self._cursor.start, end))

        field = self._cursor.span(end)
        if self._state is _State.SERIAL_NUMBER:
            if self._separator_pending or not field:
                raise IncompleteAddress(self._address, "Serial Number", Span(end, end))
            self._serial_number = field.slice(self._address)
        elif self._state is _State.USB_INTERFACE:
            self._interface_number = self._parse_integer(field, "USB interface", 10, U16_MAX)
        elif self._state is _State.INSTR:
            if self._separator_pending or not field:
                raise IncompleteAddress(self._address, "INSTR", Span(end, end))
            if field.slice(self._address).upper() != "INSTR":
                raise NotInstr(self._address, field)
            self._instr = True

        return UsbAddress(
            manufacturer_id=self._manufacturer_id,
            model_code=self._model_code,
            serial_number=self._serial_number,
            board=self._board,
            interface_number=self._interface_number,
            instr=self._instr,
        )

    # -- Field helpers -------------------------------------------------------

    def _parse_integer(self, span: Span, field: str, base: int, maximum: int) -> int:
        """Convert the text under *span* to an integer of *base*.

        Only ASCII digits of the base are accepted: no sign, whitespace,
        underscores or radix prefix.

        Raises:
            NumberParseError: If the text is empty, malformed or above *maximum*.
        """
        text = span.slice(self._address)
        allowed = _HEX_DIGITS if base == 16 else _DECIMAL_DIGITS
        if not text:
            source = ValueError(f"empty {field} number")
        elif not allowed.issuperset(text):
            source = ValueError(f"invalid base-{base} literal {text!r}")
        else:
            value = int(text, base)
            if value <= maximum:
                return value
            limit = f"{maximum:#x}" if base == 16 else str(maximum)
            source = ValueError(f"{text} exceeds the maximum of {limit}")
        raise NumberParseError(self._address, span, field, source) from source

    def _not_hexadecimal(self, index: int, char: str) -> NotHexadecimal:
        """Build the error for a hex field missing its ``0x`` marker.

        The scan to the next colon only widens the reported span so the
        whole field appears in the diagnostic; parsing stops afterwards.
        """
        end = index if char == ":" else self._cursor.skip_until(":")
        return NotHexadecimal(self._address, Span(self._cursor.start, end))
