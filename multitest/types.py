"""Core chain data types and JSON helpers."""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Iterable

from .errors import GenericError, ParseError

_UINT128_MAX = 2**128 - 1


@dataclass(frozen=True)
class Coin:
    """An amount of a single denomination."""

    amount: int
    denom: str

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise TypeError(f"coin amount must be an integer, got {self.amount!r}")
        if not 0 <= self.amount <= _UINT128_MAX:
            raise ValueError(f"coin amount out of range: {self.amount}")

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


def coin(amount: int, denom: str) -> Coin:
    """Creates a single coin."""
    return Coin(amount, denom)


def coins(amount: int, denom: str) -> list[Coin]:
    """Creates a list holding one coin."""
    return [Coin(amount, denom)]


@dataclass(frozen=True)
class Attribute:
    """A key-value pair attached to an event."""

    key: str
    value: str


@dataclass
class Event:
    """An event of a given type with its attributes."""

    ty: str
    attributes: list[Attribute] = field(default_factory=list)

    def add_attribute(self, key: str, value: Any) -> Event:
        """Appends an attribute and returns the event."""
        self.attributes.append(Attribute(key, str(value)))
        return self

    def add_attributes(self, attributes: Iterable[Attribute | tuple[str, Any]]) -> Event:
        """Appends several attributes and returns the event."""
        for attr in attributes:
            if isinstance(attr, Attribute):
                self.attributes.append(attr)
            else:
                key, value = attr
                self.add_attribute(key, value)
        return self


@dataclass
class BlockInfo:
    """Block height, time in nanoseconds since the epoch and chain identifier."""

    height: int
    time: int
    chain_id: str


@dataclass
class BankSend:
    """Sends coins to an address."""

    to_address: str
    amount: list[Coin]


@dataclass
class BankBurn:
    """Burns coins of the sender."""

    amount: list[Coin]


@dataclass
class WasmExecute:
    """Executes a contract."""

    contract_addr: str
    msg: bytes
    funds: list[Coin] = field(default_factory=list)


@dataclass
class WasmInstantiate:
    """Instantiates a contract from stored code."""

    admin: str | None
    code_id: int
    msg: bytes
    funds: list[Coin]
    label: str


@dataclass
class WasmInstantiate2:
    """Instantiates a contract at a predictable address."""

    admin: str | None
    code_id: int
    msg: bytes
    funds: list[Coin]
    label: str
    salt: bytes


@dataclass
class WasmMigrate:
    """Migrates a contract to new code."""

    contract_addr: str
    new_code_id: int
    msg: bytes


@dataclass
class SubMsgResponse:
    """Result of a successfully processed sub-message."""

    events: list[Event] = field(default_factory=list)
    data: bytes | None = None


def _jsonable(obj: Any) -> Any:
    if isinstance(obj, Coin):
        return {"denom": obj.denom, "amount": str(obj.amount)}
    if isinstance(obj, Event):
        return {"type": obj.ty, "attributes": obj.attributes}
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in fields(obj)}
    raise TypeError(f"cannot serialize {type(obj).__name__}")


def to_json_binary(value: Any) -> bytes:
    """Serializes a value to compact JSON bytes."""
    try:
        return json.dumps(value, separators=(",", ":"), default=_jsonable).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise GenericError(f"Error serializing type {type(value).__name__}: {exc}") from exc


def from_json(data: bytes | bytearray | str) -> Any:
    """Parses JSON bytes or text."""
    try:
        text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
        return json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ParseError("JSON", str(exc)) from exc