"""Bech32 and Bech32m encoding, and address APIs built on them."""

from __future__ import annotations

import hashlib
from enum import Enum
from typing import Iterable, Sequence

from .errors import GenericError

_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_CHARSET_REV = {char: value for value, char in enumerate(_CHARSET)}
_GENERATORS = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)
_SEPARATOR = "1"
_CHECKSUM_LENGTH = 6
_MAX_HRP_LENGTH = 83


class Variant(Enum):
    """Checksum variant, valued by the constant its checksum is xor-ed with."""

    BECH32 = 1
    BECH32M = 0x2BC830A3


def _polymod(values: Iterable[int]) -> int:
    chk = 1
    for value in values:
        top = chk >> 25
        chk = ((chk & 0x1FFFFFF) << 5) ^ value
        for bit, generator in enumerate(_GENERATORS):
            if (top >> bit) & 1:
                chk ^= generator
    return chk


def _hrp_expand(hrp: str) -> list[int]:
    return [ord(c) >> 5 for c in hrp] + [0] + [ord(c) & 31 for c in hrp]


def _check_hrp(hrp: str) -> tuple[str, str | None]:
    """Validates the human-readable part; returns it lower-cased and its case."""
    if not 1 <= len(hrp) <= _MAX_HRP_LENGTH:
        raise ValueError("invalid length")
    has_lower = has_upper = False
    for char in hrp:
        if not 33 <= ord(char) <= 126:
            raise ValueError(f"invalid character ({char!r})")
        has_lower = has_lower or char.islower()
        has_upper = has_upper or char.isupper()
    if has_lower and has_upper:
        raise ValueError("mixed-case strings not allowed")
    case = "upper" if has_upper else "lower" if has_lower else None
    return hrp.lower(), case


def bech32_encode(hrp: str, data: Sequence[int], variant: Variant) -> str:
    """Encodes 5-bit groups under a human-readable part with the given checksum."""
    hrp_lower, _ = _check_hrp(hrp)
    values = list(data)
    for value in values:
        if not 0 <= value < 32:
            raise ValueError(f"invalid 5-bit value {value}")
    polymod = _polymod(_hrp_expand(hrp_lower) + values + [0] * _CHECKSUM_LENGTH)
    polymod ^= variant.value
    checksum = [(polymod >> 5 * (5 - i)) & 31 for i in range(_CHECKSUM_LENGTH)]
    return hrp_lower + _SEPARATOR + "".join(_CHARSET[v] for v in values + checksum)


def bech32_decode(text: str) -> tuple[str, list[int], Variant]:
    """Decodes a string into its lower-cased prefix, 5-bit groups and variant."""
    sep = text.rfind(_SEPARATOR)
    if sep < 0:
        raise ValueError("missing human-readable separator")
    hrp_lower, case = _check_hrp(text[:sep])
    data: list[int] = []
    for char in text[sep + 1:]:
        if char.isupper():
            if case == "lower":
                raise ValueError("mixed-case strings not allowed")
            case = "upper"
        elif char.islower():
            if case == "upper":
                raise ValueError("mixed-case strings not allowed")
            case = "lower"
        value = _CHARSET_REV.get(char.lower())
        if value is None:
            raise ValueError(f"invalid character ({char!r})")
        data.append(value)
    if len(data) < _CHECKSUM_LENGTH:
        raise ValueError("invalid length")
    residue = _polymod(_hrp_expand(hrp_lower) + data)
    for variant in Variant:
        if residue == variant.value:
            return hrp_lower, data[:-_CHECKSUM_LENGTH], variant
    raise ValueError("invalid checksum")


def _convert_bits(data: Iterable[int], from_bits: int, to_bits: int, pad: bool) -> list[int]:
    acc = 0
    bits = 0
    out: list[int] = []
    max_value = (1 << to_bits) - 1
    for value in data:
        acc = (acc << from_bits) | value
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            out.append((acc >> bits) & max_value)
    if pad:
        if bits:
            out.append((acc << (to_bits - bits)) & max_value)
    elif bits >= from_bits or (acc << (to_bits - bits)) & max_value:
        raise ValueError("invalid padding")
    return out


class MockApiBech32:
    """Address API that humanizes canonical addresses in Bech32 format."""

    def __init__(self, prefix: str, variant: Variant = Variant.BECH32) -> None:
        self.prefix = prefix
        self.variant = variant

    def addr_validate(self, input: str) -> str:
        """Checks an address and returns it unchanged when valid."""
        return self.addr_humanize(self.addr_canonicalize(input))

    def addr_canonicalize(self, input: str) -> bytes:
        """Returns the canonical bytes of a human-readable address."""
        try:
            prefix, decoded, variant = bech32_decode(input)
            if prefix == self.prefix and variant == self.variant:
                return bytes(_convert_bits(decoded, 5, 8, pad=False))
        except ValueError:
            pass
        raise GenericError("Invalid input")

    def addr_humanize(self, canonical: bytes) -> str:
        """Returns the human-readable form of canonical address bytes."""
        try:
            return bech32_encode(
                self.prefix, _convert_bits(bytes(canonical), 8, 5, pad=True), self.variant
            )
        except ValueError as exc:
            raise GenericError("Invalid canonical address") from exc

    def addr_make(self, input: str) -> str:
        """Builds an address from the SHA-256 digest of the input."""
        digest = hashlib.sha256(input.encode("utf-8")).digest()
        try:
            return bech32_encode(self.prefix, _convert_bits(digest, 8, 5, pad=True), self.variant)
        except ValueError as exc:
            raise ValueError(f"Generating address failed with reason: {exc}") from exc


class MockApiBech32m(MockApiBech32):
    """Address API that humanizes canonical addresses in Bech32m format."""

    def __init__(self, prefix: str) -> None:
        super().__init__(prefix, Variant.BECH32M)