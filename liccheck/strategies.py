"""Strategies that derive hardware identifiers from a snapshot of the machine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from .constants import EventType, Strategy
from .hw_identifier import PROPRIETARY_DATA_SIZE, HwIdentifier

_FILLER = 42


class IdentifierUnavailable(LookupError):
    """No hardware identifier could be computed with the requested strategy."""


@dataclass(frozen=True)
class AdapterInfo:
    """A network adapter as seen by the operating system."""

    id: str = ""
    description: str = ""
    ipv4_address: bytes = bytes(4)
    mac_address: bytes = bytes(6)


@dataclass(frozen=True)
class DiskInfo:
    """A disk; ``serial`` and ``label`` are None when they could not be read."""

    serial: bytes | None = None
    label: str | None = None
    preferred: bool = False


@dataclass(frozen=True)
class HardwareSnapshot:
    """What the identification strategies know about the machine.

    ``default_strategies`` lists, in order, the strategies the default
    strategy tries for the execution environment the machine runs in.
    """

    adapters: tuple[AdapterInfo, ...] = ()
    disks: tuple[DiskInfo, ...] = ()
    default_strategies: tuple[Strategy, ...] = ()


def _make_identifier(strategy: Strategy, data: bytes) -> HwIdentifier:
    pc_id = HwIdentifier()
    pc_id.strategy = strategy
    pc_id.assign_data(data)
    return pc_id


class IdentificationStrategy(ABC):
    """A way of computing hardware identifiers."""

    def __init__(self, hardware: HardwareSnapshot | None = None) -> None:
        self.hardware = hardware if hardware is not None else HardwareSnapshot()

    @property
    @abstractmethod
    def identification_strategy(self) -> Strategy:
        """The strategy this object implements."""

    @abstractmethod
    def alternative_ids(self) -> list[HwIdentifier]:
        """Every identifier this machine can be recognised by, best first."""

    def generate_pc_id(self) -> HwIdentifier:
        """Return the preferred identifier; raise IdentifierUnavailable if there is none."""
        ids = self.alternative_ids()
        if not ids:
            raise IdentifierUnavailable(
                f"no identifier available for strategy {int(self.identification_strategy)}"
            )
        return ids[0]

    def validate_identifier(self, identifier: HwIdentifier) -> EventType:
        """Tell whether an identifier belongs to this machine."""
        try:
            strategy = identifier.strategy
        except ValueError:
            return EventType.IDENTIFIERS_MISMATCH
        if strategy != self.identification_strategy:
            return EventType.IDENTIFIERS_MISMATCH
        if any(candidate == identifier for candidate in self.alternative_ids()):
            return EventType.LICENSE_OK
        return EventType.IDENTIFIERS_MISMATCH


class EthernetStrategy(IdentificationStrategy):
    """Identifiers built from the MAC or the IPv4 address of the network adapters."""

    def __init__(self, hardware: HardwareSnapshot | None = None, use_ip: bool = False) -> None:
        super().__init__(hardware)
        self.use_ip = use_ip

    @property
    def identification_strategy(self) -> Strategy:
        return Strategy.IP_ADDRESS if self.use_ip else Strategy.ETHERNET

    def _adapter_data(self, adapter: AdapterInfo) -> bytes | None:
        raw = bytes(adapter.ipv4_address if self.use_ip else adapter.mac_address)
        if not any(raw):
            return None
        payload = raw[: PROPRIETARY_DATA_SIZE - 1]
        filler = bytes([_FILLER]) * (PROPRIETARY_DATA_SIZE - 1 - len(payload))
        return bytes([0]) + payload + filler

    def alternative_ids(self) -> list[HwIdentifier]:
        strategy = self.identification_strategy
        return [
            _make_identifier(strategy, data)
            for data in map(self._adapter_data, self.hardware.adapters)
            if data is not None
        ]


def _serial_data(serial: bytes) -> bytes:
    return bytes(serial)[:PROPRIETARY_DATA_SIZE].ljust(PROPRIETARY_DATA_SIZE, b"\0")


def _label_data(label: str) -> bytes:
    raw = label.encode("utf-8").split(b"\0", 1)[0][: PROPRIETARY_DATA_SIZE - 1]
    return raw.ljust(PROPRIETARY_DATA_SIZE, b"\0")


class DiskStrategy(IdentificationStrategy):
    """Identifiers built from disk serial numbers and labels, preferred disks first."""

    @property
    def identification_strategy(self) -> Strategy:
        return Strategy.DISK

    def _disk_data(self):
        for preferred in (True, False):
            for disk in self.hardware.disks:
                if disk.preferred != preferred:
                    continue
                if disk.serial is not None:
                    yield _serial_data(disk.serial)
                if disk.label is not None:
                    yield _label_data(disk.label)

    def alternative_ids(self) -> list[HwIdentifier]:
        return [_make_identifier(Strategy.DISK, data) for data in self._disk_data()]


class DefaultStrategy(IdentificationStrategy):
    """Tries the strategies suited to the execution environment, in order."""

    @property
    def identification_strategy(self) -> Strategy:
        return Strategy.DEFAULT

    def _strategies(self):
        for strategy in self.hardware.default_strategies:
            yield get_strategy(strategy, self.hardware)

    def generate_pc_id(self) -> HwIdentifier:
        for strategy in self._strategies():
            try:
                return strategy.generate_pc_id()
            except IdentifierUnavailable:
                continue
        raise IdentifierUnavailable("no default strategy produced an identifier")

    def alternative_ids(self) -> list[HwIdentifier]:
        return [pc_id for strategy in self._strategies() for pc_id in strategy.alternative_ids()]

    def validate_identifier(self, identifier: HwIdentifier) -> EventType:
        """Identifiers are validated by the strategy that made them, never by this one."""
        return EventType.IDENTIFIERS_MISMATCH


def get_strategy(strategy: Strategy | int, hardware: HardwareSnapshot | None = None) -> IdentificationStrategy:
    """Create the strategy object for a strategy; ValueError if it is not supported."""
    try:
        kind = Strategy(strategy)
    except ValueError:
        raise ValueError("strategy not supported") from None
    if kind == Strategy.DEFAULT:
        return DefaultStrategy(hardware)
    if kind == Strategy.ETHERNET:
        return EthernetStrategy(hardware, use_ip=False)
    if kind == Strategy.IP_ADDRESS:
        return EthernetStrategy(hardware, use_ip=True)
    if kind == Strategy.DISK:
        return DiskStrategy(hardware)
    raise ValueError("strategy not supported")