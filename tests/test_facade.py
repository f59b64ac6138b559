import pytest

from liccheck.constants import EventType, Strategy
from liccheck.facade import (
    IDENTIFICATION_STRATEGY_ENV_VAR,
    generate_user_pc_signature,
    validate_pc_signature,
)
from liccheck.hw_identifier import HwIdentifier
from liccheck.strategies import AdapterInfo, HardwareSnapshot, IdentifierUnavailable

MAC = bytes([0x02, 0x00, 0x00, 0x00, 0x00, 0x01])
OTHER_MAC = bytes([0x02, 0x00, 0x00, 0x00, 0x00, 0x02])
IP = bytes([10, 0, 0, 7])


@pytest.fixture(autouse=True)
def _log_in_tmp(tmp_path, monkeypatch):
    monkeypatch.setenv("TMPDIR", str(tmp_path))


def machine(mac=MAC, **kw):
    return HardwareSnapshot(
        adapters=(AdapterInfo(mac_address=mac, ipv4_address=IP),),
        default_strategies=(Strategy.ETHERNET,),
        **kw,
    )


def test_generate_then_validate():
    hardware = machine()
    signature = generate_user_pc_signature(Strategy.ETHERNET, hardware, environ={})
    assert validate_pc_signature(signature, hardware) == EventType.LICENSE_OK
    parsed = HwIdentifier.parse(signature)
    assert parsed.strategy == Strategy.ETHERNET
    assert parsed.use_environment_var is False
    assert str(parsed) == signature


def test_signature_from_other_machine_mismatches():
    signature = generate_user_pc_signature(Strategy.ETHERNET, machine(), environ={})
    assert validate_pc_signature(signature, machine(OTHER_MAC)) == EventType.IDENTIFIERS_MISMATCH


def test_default_strategy_uses_environment_defaults():
    signature = generate_user_pc_signature(Strategy.DEFAULT, machine(), environ={})
    parsed = HwIdentifier.parse(signature)
    assert parsed.strategy == Strategy.ETHERNET
    assert parsed.use_environment_var is False


def test_environment_variable_selects_strategy():
    hardware = machine()
    environ = {IDENTIFICATION_STRATEGY_ENV_VAR: "1"}
    signature = generate_user_pc_signature(Strategy.DEFAULT, hardware, environ=environ)
    parsed = HwIdentifier.parse(signature)
    assert parsed.strategy == Strategy.IP_ADDRESS
    assert parsed.use_environment_var is True
    assert validate_pc_signature(signature, hardware) == EventType.LICENSE_OK


def test_non_numeric_environment_value_reads_as_zero():
    environ = {IDENTIFICATION_STRATEGY_ENV_VAR: "abc"}
    parsed = HwIdentifier.parse(generate_user_pc_signature(Strategy.DEFAULT, machine(), environ=environ))
    assert parsed.strategy == Strategy.ETHERNET
    assert parsed.use_environment_var is True


def test_out_of_range_environment_value_is_ignored():
    environ = {IDENTIFICATION_STRATEGY_ENV_VAR: "7"}
    parsed = HwIdentifier.parse(generate_user_pc_signature(Strategy.DEFAULT, machine(), environ=environ))
    assert parsed.strategy == Strategy.ETHERNET
    assert parsed.use_environment_var is False


def test_environment_value_three_is_unsupported():
    environ = {IDENTIFICATION_STRATEGY_ENV_VAR: "3"}
    with pytest.raises(ValueError, match="strategy not supported"):
        generate_user_pc_signature(Strategy.DEFAULT, machine(), environ=environ)


def test_explicit_strategy_ignores_environment():
    environ = {IDENTIFICATION_STRATEGY_ENV_VAR: "1"}
    parsed = HwIdentifier.parse(generate_user_pc_signature(Strategy.ETHERNET, machine(), environ=environ))
    assert parsed.strategy == Strategy.ETHERNET
    assert parsed.use_environment_var is False


def test_unavailable_strategy_raises():
    with pytest.raises(IdentifierUnavailable, match="failed"):
        generate_user_pc_signature(Strategy.DISK, machine(), environ={})


def test_default_without_hardware_raises():
    with pytest.raises(IdentifierUnavailable, match="failed"):
        generate_user_pc_signature(environ={})


def test_validate_garbage_mismatches():
    assert validate_pc_signature("abc", machine()) == EventType.IDENTIFIERS_MISMATCH


def test_validate_unknown_strategy_bits_mismatches():
    code = str(HwIdentifier(bytes([0, 0xE0, 0, 0, 0, 0, 0, 0])))
    assert validate_pc_signature(code, machine()) == EventType.IDENTIFIERS_MISMATCH


def test_environment_flag_does_not_affect_validation():
    hardware = machine()
    environ = {IDENTIFICATION_STRATEGY_ENV_VAR: "0"}
    signature = generate_user_pc_signature(Strategy.DEFAULT, hardware, environ=environ)
    assert HwIdentifier.parse(signature).use_environment_var is True
    assert validate_pc_signature(signature, hardware) == EventType.LICENSE_OK