import pytest

from liccheck.constants import Strategy
from liccheck.hw_identifier import HwIdentifier


def _sample(strategy=Strategy.DISK):
    ident = HwIdentifier()
    ident.strategy = strategy
    ident.assign_data(bytes([0x12, 1, 2, 3, 4, 5, 6]))
    return ident


def test_empty_identifier_printed_form():
    assert str(HwIdentifier()) == "AAAA-AAAA-AAA="


def test_printed_form_shape():
    printed = str(_sample())
    assert [len(part) for part in printed.split("-")] == [4, 4, 4]
    assert printed != str(HwIdentifier())


@pytest.mark.parametrize("strategy", [Strategy.ETHERNET, Strategy.IP_ADDRESS, Strategy.DISK])
def test_round_trip(strategy):
    ident = _sample(strategy)
    parsed = HwIdentifier.parse(str(ident))
    assert parsed == ident
    assert parsed.strategy == strategy
    assert parsed.data == ident.data


@pytest.mark.parametrize("strategy", [Strategy.NONE, Strategy.DEFAULT])
def test_unknown_strategy_rejected(strategy):
    ident = HwIdentifier()
    ident.strategy = Strategy.DISK
    with pytest.raises(ValueError):
        ident.strategy = strategy
    assert ident.strategy == Strategy.DISK


def test_parse_wrong_size():
    with pytest.raises(ValueError):
        HwIdentifier.parse("AAAA")


def test_environment_bit_does_not_change_equality():
    plain = _sample()
    flagged = _sample()
    flagged.use_environment_var = True
    assert flagged.use_environment_var
    assert plain == flagged
    assert hash(plain) == hash(flagged)
    assert str(plain) != str(flagged)
    flagged.use_environment_var = False
    assert str(plain) == str(flagged)


def test_strategy_bits_preserved_by_assign_data():
    ident = HwIdentifier()
    ident.strategy = Strategy.DISK
    ident.assign_data(bytes([0xFF, 0, 0, 0, 0, 0, 0]))
    assert ident.strategy == Strategy.DISK
    assert ident.data[1] & 0x1F == 0x1F


def test_data_match():
    ident = _sample()
    assert ident.data_match(bytes([0x12, 1, 2, 3, 4, 5, 6]))
    assert ident.data_match(bytes([0xF2, 1, 2, 3, 4, 5, 6]))
    assert not ident.data_match(bytes([0x12, 1, 2, 3, 4, 5, 7]))


def test_different_strategy_not_equal():
    assert _sample(Strategy.ETHERNET) != _sample(Strategy.DISK)


def test_assign_data_wrong_length():
    with pytest.raises(ValueError):
        HwIdentifier().assign_data(b"\x00\x01")