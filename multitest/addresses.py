"""Contract address generators."""

from __future__ import annotations

from typing import Any


class AddressGenerator:
    """Generates contract addresses; the defaults are fully predictable."""

    def contract_address(
        self, api: Any, storage: Any, code_id: int, instance_id: int
    ) -> str:
        """Returns an address built from the instance identifier."""
        return f"contract{instance_id}"

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
        """Returns an address built from the canonical creator and the salt."""
        return f"contract{bytes(creator).hex().upper()}{bytes(salt).hex()}"


class SimpleAddressGenerator(AddressGenerator):
    """Default contract address generator."""