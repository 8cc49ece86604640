"""Address generator that reproduces the real chain's algorithms."""

from __future__ import annotations

import hashlib
from typing import Any

from .addresses import AddressGenerator

_MODULE_HASH = hashlib.sha256(b"module").digest()
_CHECKSUM_LENGTH = 32
_MAX_SALT_LENGTH = 64


def _module_hash(key: bytes) -> bytes:
    return hashlib.sha256(_MODULE_HASH + key).digest()


def _length_prefixed(data: bytes) -> bytes:
    return len(data).to_bytes(8, "big") + data


def instantiate_address(code_id: int, instance_id: int) -> bytes:
    """Returns the classic, non-predictable canonical contract address."""
    key = b"wasm\0" + code_id.to_bytes(8, "big") + instance_id.to_bytes(8, "big")
    return _module_hash(key)


def instantiate2_address(checksum: bytes, creator: bytes, salt: bytes) -> bytes:
    """Returns the predictable canonical contract address."""
    checksum, creator, salt = bytes(checksum), bytes(creator), bytes(salt)
    if len(checksum) != _CHECKSUM_LENGTH:
        raise ValueError("invalid checksum length")
    if not 1 <= len(salt) <= _MAX_SALT_LENGTH:
        raise ValueError("invalid salt length, must be between 1 and 64 bytes")
    key = (
        b"wasm\0"
        + _length_prefixed(checksum)
        + _length_prefixed(creator)
        + _length_prefixed(salt)
        + _length_prefixed(b"")
    )
    return _module_hash(key)


class MockAddressGenerator(AddressGenerator):
    """Generates contract addresses the way the real chain does."""

    def contract_address(
        self, api: Any, storage: Any, code_id: int, instance_id: int
    ) -> str:
        """Humanizes the classic address of the code and instance identifiers."""
        return api.addr_humanize(instantiate_address(code_id, instance_id))

    def predictable_contract_address(
        self,
        api: Any,
        storage: Any,
        code_id: int,
        instance_id: int,
        checksum: bytes,
        creator: bytes,
        salt: bytes,
    ) -> str:
        """Humanizes the address derived from checksum, creator and salt."""
        return api.addr_humanize(instantiate2_address(checksum, creator, salt))