"""YAML resource lists.

This module loads named VISA resource strings from a YAML file and checks
that each one parses. Two sections are read, and both are optional:

Example YAML configuration:
    resources:
      bench_dmm:
        address: "USB0::0x2A8D::0x0101::MY57500001::INSTR"
        description: "Bench DMM"
      scope: "USB::0x0699::0x0368::C012345"

    instruments:
      dc_psu_slot_3:
        driver: "hwtest_bkprecision.psu:create_instrument"
        kwargs:
          visa_address: "TCPIP::192.168.1.100::5025::SOCKET"

The ``instruments`` section uses the rack configuration layout; only the
``kwargs.visa_address`` of each instrument is read, and instruments without
one are skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from visa_address.address import Address, AddressDispatcher, parse_address
from visa_address.errors import AddressError, UnsupportedAddressKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceEntry:
    """A named resource string from a configuration file.

    Attributes:
        name: Unique resource name within the file.
        address: The resource string, as written.
        description: Optional human-readable description.
    """

    name: str
    address: str
    description: str = ""


@dataclass(frozen=True)
class ResourceConfig:
    """Resource strings loaded from one configuration file.

    Attributes:
        resources: Entries in file order.
        source_path: File the entries were loaded from, if any.
    """

    resources: tuple[ResourceEntry, ...]
    source_path: Path | None = None

    def get(self, name: str) -> ResourceEntry | None:
        """Look up an entry by name.

        Args:
            name: Resource name.

        Returns:
            The entry, or None if no entry has that name.
        """
        for entry in self.resources:
            if entry.name == name:
                return entry
        return None

    def __len__(self) -> int:
        return len(self.resources)


@dataclass(frozen=True)
class ResourceCheck:
    """Outcome of parsing one configured resource string.

    Exactly one of ``address`` and ``error`` is set.

    Attributes:
        entry: The configured resource.
        address: The parsed address on success.
        error: The parse failure otherwise.
    """

    entry: ResourceEntry
    address: Address | None = None
    error: AddressError | None = None

    @property
    def ok(self) -> bool:
        """Return True if the resource string parsed."""
        return self.error is None

    @property
    def skipped(self) -> bool:
        """Return True if the string names a kind that has no parser."""
        return isinstance(self.error, UnsupportedAddressKind)


def _parse_resources(data: Any) -> list[ResourceEntry]:
    if not isinstance(data, dict):
        raise ValueError("resources must be a mapping")

    entries: list[ResourceEntry] = []
    for name, value in data.items():
        if isinstance(value, str):
            entries.append(ResourceEntry(name=str(name), address=value))
            continue
        if not isinstance(value, dict):
            raise ValueError(f"Resource '{name}' must be a string or a mapping")

        address = value.get("address")
        if not isinstance(address, str) or not address:
            raise ValueError(f"Resource '{name}' missing required field: address")
        entries.append(
            ResourceEntry(
                name=str(name),
                address=address,
                description=str(value.get("description", "")),
            )
        )
    return entries


def _parse_instruments(data: Any) -> list[ResourceEntry]:
    if not isinstance(data, dict):
        raise ValueError("instruments must be a mapping")

    entries: list[ResourceEntry] = []
    for name, inst_data in data.items():
        if not isinstance(inst_data, dict):
            raise ValueError(f"Instrument '{name}' must be a mapping")

        kwargs = inst_data.get("kwargs", {})
        if not isinstance(kwargs, dict):
            raise ValueError(f"Instrument '{name}' kwargs must be a mapping")

        address = kwargs.get("visa_address")
        if address is None:
            logger.debug("Instrument '%s' has no visa_address, skipping", name)
            continue
        if not isinstance(address, str):
            raise ValueError(f"Instrument '{name}' visa_address must be a string")
        entries.append(
            ResourceEntry(
                name=str(name),
                address=address,
                description=str(inst_data.get("driver", "")),
            )
        )
    return entries


def load_config(path: str | Path) -> ResourceConfig:
    """Load resource strings from a YAML file.

    The strings are not parsed here; see :func:`check_config`.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        The loaded configuration.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValueError: If the config is malformed or names a resource twice.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError("Config must be a YAML mapping")
    if "resources" not in data and "instruments" not in data:
        raise ValueError("Config must contain a 'resources' or 'instruments' section")

    entries: list[ResourceEntry] = []
    if "resources" in data:
        entries.extend(_parse_resources(data["resources"]))
    if "instruments" in data:
        entries.extend(_parse_instruments(data["instruments"]))

    seen: set[str] = set()
    for entry in entries:
        if entry.name in seen:
            raise ValueError(f"Duplicate resource name: {entry.name}")
        seen.add(entry.name)

    logger.info("Loaded %d resource(s) from %s", len(entries), path)
    return ResourceConfig(resources=tuple(entries), source_path=path)


def check_config(
    config: ResourceConfig,
    dispatcher: AddressDispatcher | None = None,
) -> list[ResourceCheck]:
    """Parse every resource string in *config*.

    Args:
        config: Loaded configuration.
        dispatcher: Dispatcher to parse with. Defaults to the built-in one.

    Returns:
        One result per entry, in file order.
    """
    parse = parse_address if dispatcher is None else dispatcher.parse
    results: list[ResourceCheck] = []
    for entry in config.resources:
        try:
            results.append(ResourceCheck(entry=entry, address=parse(entry.address)))
        except AddressError as exc:
            results.append(ResourceCheck(entry=entry, error=exc))
    return results
