"""Generating and validating hardware signatures."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping

from .constants import EventType, Strategy
from .hw_identifier import HwIdentifier
from .logger import get_logger
from .strategies import HardwareSnapshot, IdentifierUnavailable, get_strategy

IDENTIFICATION_STRATEGY_ENV_VAR = "IDENTIFICATION_STRATEGY"

_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def validate_pc_signature(code: str, hardware: HardwareSnapshot | None = None) -> EventType:
    """Tell whether a printed hardware signature belongs to this machine."""
    try:
        pc_id = HwIdentifier.parse(code)
        strategy = get_strategy(pc_id.strategy, hardware)
    except ValueError as exc:
        get_logger().error("Error validating identifier %s: %s", code, exc)
        return EventType.IDENTIFIERS_MISMATCH
    return strategy.validate_identifier(pc_id)


def generate_user_pc_signature(
    strategy: Strategy | int = Strategy.DEFAULT,
    hardware: HardwareSnapshot | None = None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Compute the printed hardware signature of this machine.

    With the default strategy an environment variable may choose the strategy.
    Raise IdentifierUnavailable when no identifier can be computed and
    ValueError when the strategy is not supported.
    """
    env = os.environ if environ is None else environ
    use_env_var = False
    if strategy == Strategy.DEFAULT:
        value = env.get(IDENTIFICATION_STRATEGY_ENV_VAR, "")
        if value:
            chosen = _atoi(value)
            if chosen < 0 or chosen > 3:
                get_logger().warning("unknown %s %s", IDENTIFICATION_STRATEGY_ENV_VAR, value)
            else:
                strategy = chosen
                use_env_var = True

    implementation = get_strategy(strategy, hardware)
    try:
        pc_id = implementation.generate_pc_id()
    except IdentifierUnavailable as exc:
        raise IdentifierUnavailable(
            f"strategy {int(implementation.identification_strategy)} failed"
        ) from exc
    pc_id.use_environment_var = use_env_var
    return str(pc_id)