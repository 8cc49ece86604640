"""Bank module: balances, transfers, minting, burning and denomination metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from .errors import Overflow
from .executor import AppResponse
from .testing import PrefixedStorage
from .types import BankBurn, BankSend, BlockInfo, Coin, Event, from_json, to_json_binary

NAMESPACE_BANK = b"bank"
_BALANCES = b"balances"
_DENOM_METADATA = b"metadata"


@dataclass
class BankMint:
    """Privileged action minting coins for an address."""

    to_address: str
    amount: list[Coin]


@dataclass
class DenomMetadata:
    """Metadata describing a denomination."""

    description: str = ""
    denom_units: list[Any] = field(default_factory=list)
    base: str = ""
    display: str = ""
    name: str = ""
    symbol: str = ""
    uri: str = ""
    uri_hash: str = ""


@dataclass
class AllBalancesQuery:
    """Asks for all balances of an address."""

    address: str


@dataclass
class BalanceQuery:
    """Asks for the balance of one denomination of an address."""

    address: str
    denom: str


@dataclass
class SupplyQuery:
    """Asks for the total supply of a denomination."""

    denom: str


@dataclass
class DenomMetadataQuery:
    """Asks for the metadata of a denomination."""

    denom: str


@dataclass
class AllDenomMetadataQuery:
    """Asks for the metadata of all denominations."""

    pagination: Any = None


def _normalize(coins: Iterable[Coin]) -> list[Coin]:
    """Merges coins of equal denomination, drops zeros and sorts by denomination."""
    totals: dict[str, int] = {}
    for c in coins:
        totals[c.denom] = totals.get(c.denom, 0) + c.amount
    return [Coin(amount, denom) for denom, amount in sorted(totals.items()) if amount]


def _subtract(balance: list[Coin], amount: list[Coin]) -> list[Coin]:
    remaining = {c.denom: c.amount for c in balance}
    for c in amount:
        have = remaining.get(c.denom, 0)
        if have < c.amount:
            raise Overflow("Sub", have, c.amount)
        remaining[c.denom] = have - c.amount
    return _normalize(Coin(value, denom) for denom, value in remaining.items())


def _coins_to_string(coins: Iterable[Coin]) -> str:
    return ",".join(f"{c.amount}{c.denom}" for c in coins)


def _decode_coins(raw: bytes) -> list[Coin]:
    return [Coin(int(item["amount"]), item["denom"]) for item in from_json(raw)]


class BankKeeper:
    """Default bank module keeping balances in storage."""

    @staticmethod
    def _balances(storage: Any) -> PrefixedStorage:
        return PrefixedStorage(PrefixedStorage(storage, NAMESPACE_BANK), _BALANCES)

    @staticmethod
    def _metadata(storage: Any) -> PrefixedStorage:
        return PrefixedStorage(storage, _DENOM_METADATA)

    def init_balance(self, storage: Any, account: str, amount: Iterable[Coin]) -> None:
        """Sets the balance of an account, as at genesis."""
        self._set_balance(storage, account, amount)

    def _set_balance(self, storage: Any, account: str, amount: Iterable[Coin]) -> None:
        self._balances(storage).set(account.encode("utf-8"), to_json_binary(_normalize(amount)))

    def set_denom_metadata(self, storage: Any, denom: str, metadata: DenomMetadata) -> None:
        """Stores the metadata of a denomination."""
        self._metadata(storage).set(denom.encode("utf-8"), to_json_binary(metadata))

    def _load_metadata(self, storage: Any, denom: str) -> DenomMetadata:
        raw = self._metadata(storage).get(denom.encode("utf-8"))
        return DenomMetadata(**from_json(raw)) if raw is not None else DenomMetadata()

    def get_balance(self, storage: Any, addr: str) -> list[Coin]:
        """Returns the normalized balance of an address."""
        raw = self._balances(storage).get(addr.encode("utf-8"))
        return _decode_coins(raw) if raw is not None else []

    def _get_supply(self, storage: Any, denom: str) -> Coin:
        total = sum(
            c.amount
            for _, raw in self._balances(storage).range()
            for c in _decode_coins(raw)
            if c.denom == denom
        )
        return Coin(total, denom)

    @staticmethod
    def _normalize_amount(amount: Iterable[Coin]) -> list[Coin]:
        result = [c for c in amount if c.amount]
        if not result:
            raise ValueError("Cannot transfer empty coins amount")
        return result

    def _mint(self, storage: Any, to_address: str, amount: Iterable[Coin]) -> None:
        amount = self._normalize_amount(amount)
        self._set_balance(storage, to_address, self.get_balance(storage, to_address) + amount)

    def _burn(self, storage: Any, from_address: str, amount: Iterable[Coin]) -> None:
        amount = self._normalize_amount(amount)
        balance = _subtract(self.get_balance(storage, from_address), amount)
        self._set_balance(storage, from_address, balance)

    def _send(self, storage: Any, from_address: str, to_address: str, amount: list[Coin]) -> None:
        self._burn(storage, from_address, amount)
        self._mint(storage, to_address, amount)

    def execute(
        self, api: Any, storage: Any, router: Any, block: BlockInfo, sender: str, msg: Any
    ) -> AppResponse:
        """Processes a send or burn message from the sender."""
        if isinstance(msg, BankSend):
            event = (
                Event("transfer")
                .add_attribute("recipient", msg.to_address)
                .add_attribute("sender", sender)
                .add_attribute("amount", _coins_to_string(msg.amount))
            )
            self._send(storage, sender, msg.to_address, list(msg.amount))
            return AppResponse(events=[event])
        if isinstance(msg, BankBurn):
            self._burn(storage, sender, msg.amount)
            return AppResponse()
        raise NotImplementedError(f"bank message: {msg!r}")

    def query(self, api: Any, storage: Any, querier: Any, block: BlockInfo, request: Any) -> bytes:
        """Answers a bank query with JSON bytes."""
        if isinstance(request, AllBalancesQuery):
            address = api.addr_validate(request.address)
            return to_json_binary({"amount": self.get_balance(storage, address)})
        if isinstance(request, BalanceQuery):
            address = api.addr_validate(request.address)
            found = next(
                (c for c in self.get_balance(storage, address) if c.denom == request.denom),
                Coin(0, request.denom),
            )
            return to_json_binary({"amount": found})
        if isinstance(request, SupplyQuery):
            return to_json_binary({"amount": self._get_supply(storage, request.denom)})
        if isinstance(request, DenomMetadataQuery):
            return to_json_binary({"metadata": self._load_metadata(storage, request.denom)})
        if isinstance(request, AllDenomMetadataQuery):
            metadata = [
                self._load_metadata(storage, key.decode("utf-8"))
                for key, _ in self._metadata(storage).range()
            ]
            return to_json_binary({"metadata": metadata, "next_key": None})
        raise NotImplementedError(f"bank query: {request!r}")

    def sudo(self, api: Any, storage: Any, router: Any, block: BlockInfo, msg: Any) -> AppResponse:
        """Processes a privileged bank action."""
        if isinstance(msg, BankMint):
            to_address = api.addr_validate(msg.to_address)
            self._mint(storage, to_address, msg.amount)
            return AppResponse()
        raise TypeError(f"unexpected bank sudo message: {msg!r}")