"""Hardware identifier: eight bytes printed as dash-separated base64."""

from __future__ import annotations

from collections.abc import Sequence

from .b64 import base64_decode, base64_encode
from .constants import Strategy

PROPRIETARY_DATA_SIZE = 7
_ENV_VAR_BIT = 0x40
_DATA_MASK = 0x1F


class HwIdentifier:
    """A hardware identifier.

    Byte 0 holds flags (bit 6: an environment variable chose the strategy).
    The top three bits of byte 1 hold the strategy; the rest of byte 1 and
    bytes 2-7 hold strategy-specific data.
    """

    def __init__(self, data: bytes | None = None) -> None:
        if data is None:
            self._data = bytearray(PROPRIETARY_DATA_SIZE + 1)
        else:
            if len(data) != PROPRIETARY_DATA_SIZE + 1:
                raise ValueError(f"wrong identifier size {len(data)}")
            self._data = bytearray(data)

    @classmethod
    def parse(cls, text: str) -> HwIdentifier:
        """Build an identifier from its printed form; raise ValueError if malformed."""
        decoded = base64_decode(text.replace("-", "\n"))
        if len(decoded) != PROPRIETARY_DATA_SIZE + 1:
            raise ValueError(f"wrong identifier size {text}")
        return cls(decoded)

    @property
    def data(self) -> bytes:
        """The raw eight bytes."""
        return bytes(self._data)

    @property
    def strategy(self) -> Strategy:
        """The identification strategy; ValueError if the bits name no known one."""
        return Strategy(self._data[1] >> 5)

    @strategy.setter
    def strategy(self, value: Strategy) -> None:
        if value in (Strategy.NONE, Strategy.DEFAULT):
            raise ValueError("Only known strategies are permitted")
        self._data[1] = (self._data[1] & _DATA_MASK) | ((int(value) << 5) & 0xFF)

    @property
    def use_environment_var(self) -> bool:
        """Whether an environment variable selected the strategy."""
        return bool(self._data[0] & _ENV_VAR_BIT)

    @use_environment_var.setter
    def use_environment_var(self, value: bool) -> None:
        if value:
            self._data[0] |= _ENV_VAR_BIT
        else:
            self._data[0] &= ~_ENV_VAR_BIT & 0xFF

    def assign_data(self, data: Sequence[int]) -> None:
        """Store seven bytes of strategy data; only the low five bits of the first are kept."""
        if len(data) != PROPRIETARY_DATA_SIZE:
            raise ValueError(f"identifier data must be {PROPRIETARY_DATA_SIZE} bytes")
        self._data[1] = (self._data[1] & ~_DATA_MASK & 0xFF) | (data[0] & _DATA_MASK)
        self._data[2:] = bytes(data[1:])

    def data_match(self, data: Sequence[int]) -> bool:
        """Tell whether seven bytes of strategy data match those stored."""
        if len(data) != PROPRIETARY_DATA_SIZE:
            return False
        return (data[0] & _DATA_MASK) == (self._data[1] & _DATA_MASK) and bytes(data[1:]) == bytes(
            self._data[2:]
        )

    def _key(self) -> tuple:
        return (self._data[1] >> 5, self._data[1] & _DATA_MASK, bytes(self._data[2:]))

    def __str__(self) -> str:
        text = base64_encode(bytes(self._data), 5).replace("\n", "-")
        return text[:-1]

    def __repr__(self) -> str:
        return f"HwIdentifier({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HwIdentifier):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())