"""Checksum generators for stored contract code."""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod


class ChecksumGenerator(ABC):
    """Calculates a checksum from the code creator and code identifier."""

    @abstractmethod
    def checksum(self, creator: str, code_id: int) -> bytes:
        """Returns the checksum; its length is not fixed by the interface."""


class SimpleChecksumGenerator(ChecksumGenerator):
    """Checksum from the code identifier alone, as a 32-byte SHA-256 digest."""

    def checksum(self, creator: str, code_id: int) -> bytes:
        return hashlib.sha256(f"contract code {code_id}".encode("utf-8")).digest()