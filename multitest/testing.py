"""In-memory storage, a simple address API and a mock block for tests."""

from __future__ import annotations

from typing import Iterator, Protocol

from .errors import GenericError
from .types import BlockInfo

_MIN_ADDRESS_LENGTH = 3
_MAX_ADDRESS_LENGTH = 54
_MAX_NAMESPACE_LENGTH = 0xFFFF


class _Storage(Protocol):
    def get(self, key: bytes) -> bytes | None: ...

    def set(self, key: bytes, value: bytes) -> None: ...

    def remove(self, key: bytes) -> None: ...

    def range(
        self, start: bytes | None = None, end: bytes | None = None, descending: bool = False
    ) -> Iterator[tuple[bytes, bytes]]: ...


def _length_prefixed(namespace: bytes) -> bytes:
    namespace = bytes(namespace)
    if len(namespace) > _MAX_NAMESPACE_LENGTH:
        raise ValueError("namespace too long for a length prefix")
    return len(namespace).to_bytes(2, "big") + namespace


def _upper_bound(prefix: bytes) -> bytes | None:
    """Returns the smallest key greater than every key starting with the prefix."""
    stripped = prefix.rstrip(b"\xff")
    if not stripped:
        return None
    return stripped[:-1] + bytes([stripped[-1] + 1])


class MemoryStorage:
    """Key-value store held in a dictionary, iterated in key order."""

    def __init__(self) -> None:
        self._data: dict[bytes, bytes] = {}

    def get(self, key: bytes) -> bytes | None:
        """Returns the value under the key, or None."""
        return self._data.get(bytes(key))

    def set(self, key: bytes, value: bytes) -> None:
        """Stores a non-empty value under the key."""
        value = bytes(value)
        if not value:
            raise ValueError("storage value must not be empty")
        self._data[bytes(key)] = value

    def remove(self, key: bytes) -> None:
        """Deletes the key if present."""
        self._data.pop(bytes(key), None)

    def range(
        self, start: bytes | None = None, end: bytes | None = None, descending: bool = False
    ) -> Iterator[tuple[bytes, bytes]]:
        """Yields pairs with start <= key < end, in key order."""
        items = sorted(
            (
                (key, value)
                for key, value in self._data.items()
                if (start is None or key >= start) and (end is None or key < end)
            ),
            reverse=descending,
        )
        yield from items

    def namespace(self, prefix: bytes) -> PrefixedStorage:
        """Returns a view of the storage restricted to a namespace."""
        return PrefixedStorage(self, prefix)


class PrefixedStorage:
    """View of another storage under a length-prefixed namespace."""

    def __init__(self, storage: _Storage, namespace: bytes) -> None:
        self._storage = storage
        self._prefix = _length_prefixed(namespace)

    def get(self, key: bytes) -> bytes | None:
        """Returns the value under the key, or None."""
        return self._storage.get(self._prefix + bytes(key))

    def set(self, key: bytes, value: bytes) -> None:
        """Stores a value under the key."""
        self._storage.set(self._prefix + bytes(key), value)

    def remove(self, key: bytes) -> None:
        """Deletes the key if present."""
        self._storage.remove(self._prefix + bytes(key))

    def range(
        self, start: bytes | None = None, end: bytes | None = None, descending: bool = False
    ) -> Iterator[tuple[bytes, bytes]]:
        """Yields pairs of this namespace with keys stripped of the prefix."""
        lower = self._prefix + (bytes(start) if start is not None else b"")
        upper = self._prefix + bytes(end) if end is not None else _upper_bound(self._prefix)
        size = len(self._prefix)
        for key, value in self._storage.range(lower, upper, descending):
            if key.startswith(self._prefix):
                yield key[size:], value


class MockApi:
    """Address API accepting any normalized, reasonably sized address."""

    def addr_validate(self, input: str) -> str:
        """Returns the address unchanged when it is valid."""
        if not input:
            raise GenericError("Invalid input: empty address")
        if len(input) < _MIN_ADDRESS_LENGTH:
            raise GenericError(
                "Invalid input: human address too short for this mock implementation "
                f"(must be >= {_MIN_ADDRESS_LENGTH})."
            )
        if len(input) > _MAX_ADDRESS_LENGTH:
            raise GenericError(
                "Invalid input: human address too long for this mock implementation "
                f"(must be <= {_MAX_ADDRESS_LENGTH})."
            )
        if input != input.lower():
            raise GenericError("Invalid input: address not normalized")
        return input


def mock_block() -> BlockInfo:
    """Returns the block used by default in tests."""
    return BlockInfo(
        height=12_345,
        time=1_571_797_419_879_305_533,
        chain_id="cosmos-testnet-14002",
    )