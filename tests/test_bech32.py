import pytest

from multitest.bech32 import (
    MockApiBech32,
    MockApiBech32m,
    Variant,
    bech32_decode,
    bech32_encode,
)
from multitest.errors import GenericError

JUNO_CREATOR = "juno1h34lmpywh4upnjdg90cjf4j70aee6z8qqfspugamjp42e4q28kqsksmtyp"
OSMOSIS_SENDER = "osmosis1pgm8hyk0pvphmlvfjc8wsvk4daluz5tgrw6pu5mfpemk74uxnx9qgv9940"


def test_addr_make_bech32():
    api = MockApiBech32("juno")
    assert api.addr_make("creator") == JUNO_CREATOR


def test_addr_canonicalize_bech32():
    api = MockApiBech32("juno")
    canonical = api.addr_canonicalize(api.addr_make("creator"))
    assert canonical.hex().upper() == (
        "BC6BFD848EBD7819C9A82BF124D65E7F739D08E002601E23BB906AACD40A3D81"
    )


def test_addr_validate_returns_same_address():
    api = MockApiBech32("juno")
    addr = api.addr_make("creator")
    assert api.addr_validate(addr) == addr


def test_addr_humanize_inverts_canonicalize():
    api = MockApiBech32("juno")
    addr = api.addr_make("creator")
    assert api.addr_humanize(api.addr_canonicalize(addr)) == addr


def test_addr_make_bech32m():
    api = MockApiBech32m("osmosis")
    assert api.addr_make("sender") == OSMOSIS_SENDER


def test_bech32m_round_trip():
    api = MockApiBech32m("osmosis")
    addr = api.addr_make("sender")
    assert api.addr_validate(addr) == addr
    assert api.addr_humanize(api.addr_canonicalize(addr)) == addr


def test_canonical_bytes_do_not_depend_on_variant():
    bech32 = MockApiBech32("osmosis")
    bech32m = MockApiBech32m("osmosis")
    expected = "0A367B92CF0B037DFD89960EE832D56F7FC151681BB41E53690E776F5786998A"
    assert bech32.addr_canonicalize(bech32.addr_make("sender")).hex().upper() == expected
    assert bech32m.addr_canonicalize(OSMOSIS_SENDER).hex().upper() == expected


def test_canonicalize_rejects_other_prefix():
    api = MockApiBech32("osmosis")
    with pytest.raises(GenericError) as info:
        api.addr_canonicalize(JUNO_CREATOR)
    assert str(info.value) == "Generic error: Invalid input"


def test_canonicalize_rejects_other_variant():
    api = MockApiBech32("osmosis")
    with pytest.raises(GenericError):
        api.addr_canonicalize(OSMOSIS_SENDER)


def test_canonicalize_rejects_garbage():
    api = MockApiBech32("juno")
    with pytest.raises(GenericError):
        api.addr_validate("creator")


def test_canonicalize_rejects_broken_checksum():
    api = MockApiBech32("juno")
    broken = JUNO_CREATOR[:-1] + ("q" if JUNO_CREATOR[-1] != "q" else "p")
    with pytest.raises(GenericError):
        api.addr_canonicalize(broken)


def test_humanize_with_empty_prefix_fails():
    api = MockApiBech32("")
    with pytest.raises(GenericError) as info:
        api.addr_humanize(b"\x01\x02")
    assert str(info.value) == "Generic error: Invalid canonical address"


def test_addr_make_with_empty_prefix_fails():
    api = MockApiBech32("")
    with pytest.raises(ValueError, match="Generating address failed with reason"):
        api.addr_make("creator")


def test_decode_bech32_vector():
    assert bech32_decode("A12UEL5L") == ("a", [], Variant.BECH32)


def test_decode_bech32m_vector():
    assert bech32_decode("a1lqfn3a") == ("a", [], Variant.BECH32M)


@pytest.mark.parametrize("variant", list(Variant))
@pytest.mark.parametrize("data", [[], [0], list(range(32)), [31] * 40])
def test_encode_decode_round_trip(variant, data):
    encoded = bech32_encode("test", data, variant)
    assert bech32_decode(encoded) == ("test", data, variant)


def test_encode_lowercases_prefix():
    encoded = bech32_encode("ABC", [1, 2, 3], Variant.BECH32)
    assert encoded.startswith("abc1")
    assert bech32_decode(encoded.upper()) == ("abc", [1, 2, 3], Variant.BECH32)


def test_encode_rejects_values_above_five_bits():
    with pytest.raises(ValueError):
        bech32_encode("abc", [32], Variant.BECH32)


def test_encode_rejects_mixed_case_prefix():
    with pytest.raises(ValueError, match="mixed-case"):
        bech32_encode("aBc", [1], Variant.BECH32)


def test_decode_rejects_mixed_case():
    mixed = JUNO_CREATOR[:-1] + JUNO_CREATOR[-1].upper()
    with pytest.raises(ValueError, match="mixed-case"):
        bech32_decode(mixed)


def test_decode_requires_separator():
    with pytest.raises(ValueError, match="separator"):
        bech32_decode("qpzry9x8")


def test_decode_rejects_short_data():
    with pytest.raises(ValueError, match="length"):
        bech32_decode("a1qqq")


def test_decode_rejects_character_outside_charset():
    with pytest.raises(ValueError, match="invalid character"):
        bech32_decode("a1bqqqqqqq")