"""VISA address kinds.

The set of address families is closed: each member of :class:`AddressKind`
names one interface type and the resource-string prefix that selects it.
Supporting a new family means adding a member here and registering a parser
for it with :class:`~visa_address.address.AddressDispatcher`.
"""

from __future__ import annotations

from enum import Enum


class AddressKind(Enum):
    """Interface type named by a resource string's prefix.

    Attributes:
        USB: USB Test & Measurement Class devices.
        TCPIP: LAN instruments (VXI-11, HiSLIP, raw sockets).
        GPIB: IEEE 488 bus instruments.
        GPIB_VXI: VXI mainframes reached through a GPIB-VXI controller.
        VXI: VXI mainframes with an embedded or MXI controller.
        PXI: PXI and PCI instruments.
    """

    USB = "USB"
    TCPIP = "TCPIP"
    GPIB = "GPIB"
    GPIB_VXI = "GPIB-VXI"
    VXI = "VXI"
    PXI = "PXI"

    @property
    def prefix(self) -> str:
        """Canonical (uppercase) prefix for this kind."""
        return self.value

    @classmethod
    def match(cls, text: str) -> AddressKind | None:
        """Find the kind whose prefix starts *text*, ignoring case.

        Longer prefixes are tried first so ``GPIB-VXI0::9::INSTR`` is not
        taken for a GPIB address.

        Args:
            text: A resource string.

        Returns:
            The matching kind, or None if no prefix matches.
        """
        for kind in _PREFIX_ORDER:
            if text[: len(kind.value)].upper() == kind.value:
                return kind
        return None


_PREFIX_ORDER: tuple[AddressKind, ...] = tuple(
    sorted(AddressKind, key=lambda kind: len(kind.value), reverse=True)
)
