"""Exception types for visa-address.

Every error raised while parsing a resource string carries the complete
input and the :class:`~visa_address.span.Span` responsible for the failure,
so a caller can point a diagnostic at the offending text without scanning
the input again.

Exception hierarchy:
    AddressError (base)
    +-- UnknownAddressKind: No known prefix starts the input
    +-- UnsupportedAddressKind: Prefix is known but has no parser
    +-- UsbParseError: Base for USB grammar failures
        +-- NotUsbPrefix: Input does not start with ``USB``
        +-- NumberParseError: Numeric field is not a valid literal
        +-- NotHexadecimal: Hex field lacks the ``0x`` marker
        +-- IncompleteAddress: Input ends before required fields
        +-- NotInstr: Trailing text is not ``INSTR``
        +-- InvalidSeparator: Field boundary is not ``::``
"""

from __future__ import annotations

from visa_address.kind import AddressKind
from visa_address.span import Span


class AddressError(Exception):
    """Base exception for all resource-string parse failures.

    Catch this to handle any error from :func:`visa_address.parse_address`.

    Attributes:
        address: The complete input string.
        span: Range of *address* responsible for the failure.
    """

    def __init__(self, message: str, address: str, span: Span) -> None:
        """Initialize the error.

        Args:
            message: Human-readable description.
            address: The complete input string.
            span: Range of *address* responsible for the failure.
        """
        super().__init__(message)
        self.address = address
        self.span = span

    @property
    def found(self) -> str:
        """The offending text, i.e. ``span`` sliced from ``address``."""
        return self.span.slice(self.address)

    def diagnostic(self) -> str:
        """Return the message followed by the input with the span underlined.

        Returns:
            A multi-line string such as::

                Double colons must separate address portions, found ':0' ...
                  USB1:0x1A34::0x5678::A22-5
                      ^^
        """
        marker = "^" * max(len(self.span), 1)
        return f"{self}\n  {self.address}\n  {' ' * self.span.start}{marker}"


class UnknownAddressKind(AddressError):
    """Raised when no known address-kind prefix starts the input."""

    def __init__(self, address: str) -> None:
        super().__init__(
            f"Unknown address kind in {address!r}; expected one of "
            + ", ".join(kind.prefix for kind in AddressKind),
            address,
            Span(0, len(address)),
        )


class UnsupportedAddressKind(AddressError):
    """Raised when the input names a known kind that has no parser.

    Attributes:
        kind: The recognized address kind.
    """

    def __init__(self, address: str, kind: AddressKind) -> None:
        self.kind = kind
        super().__init__(
            f"{kind.prefix} addresses are not supported: {address!r}",
            address,
            Span(0, len(kind.prefix)),
        )


class UsbParseError(AddressError):
    """Base exception for USB resource-string grammar failures."""


class NotUsbPrefix(UsbParseError):
    """Raised when the input does not start with the literal ``USB``."""

    def __init__(self, address: str) -> None:
        span = Span(0, min(3, len(address)))
        super().__init__(
            f"Expected 'USB' at address start, found {span.slice(address)!r}",
            address,
            span,
        )


class NumberParseError(UsbParseError):
    """Raised when a numeric field is not a valid literal of its base.

    The underlying conversion failure is kept in :attr:`source` and is also
    chained as ``__cause__`` when the parser raises this error.

    Attributes:
        field: Name of the field being parsed (e.g. ``"board"``).
        source: The underlying ``ValueError``.
    """

    def __init__(self, address: str, span: Span, field: str, source: ValueError) -> None:
        self.field = field
        self.source = source
        super().__init__(
            f"Found {span.slice(address)!r} instead of a {field} number "
            f"at position {span.start} to {span.end} of {address!r}: {source}",
            address,
            span,
        )


class NotHexadecimal(UsbParseError):
    """Raised when a hexadecimal field does not start with ``0x`` or ``0X``.

    The span covers the whole field up to the next colon.
    """

    def __init__(self, address: str, span: Span) -> None:
        super().__init__(
            f"Invalid hexadecimal number {span.slice(address)!r} "
            f"at position {span.start} to {span.end} of {address!r}; "
            "number must start with '0x'",
            address,
            span,
        )


class IncompleteAddress(UsbParseError):
    """Raised when the input ends before every required field is present.

    Attributes:
        missing: Comma-separated names of the missing fields.
    """

    def __init__(self, address: str, missing: str, span: Span | None = None) -> None:
        self.missing = missing
        super().__init__(
            f"{address!r} is an incomplete address missing: {missing}",
            address,
            span if span is not None else Span(len(address), len(address)),
        )


class NotInstr(UsbParseError):
    """Raised when the trailing segment is present but is not ``INSTR``."""

    def __init__(self, address: str, span: Span) -> None:
        super().__init__(
            f"'INSTR' was indicated but {span.slice(address)!r} was found "
            f"at position {span.start} to {span.end} of {address!r}",
            address,
            span,
        )


class InvalidSeparator(UsbParseError):
    """Raised when a field boundary is a single colon instead of ``::``.

    The span covers the colon and the character that follows it.
    """

    def __init__(self, address: str, span: Span) -> None:
        super().__init__(
            f"Double colons must separate address portions, found "
            f"{span.slice(address)!r} at position {span.start} to {span.end} "
            f"of {address!r}",
            address,
            span,
        )
