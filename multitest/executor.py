"""Responses of processed messages and the executor interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, Sequence

from .errors import ParseError
from .types import (
    Attribute,
    BankSend,
    Coin,
    Event,
    SubMsgResponse,
    WasmExecute,
    WasmInstantiate,
    WasmInstantiate2,
    WasmMigrate,
    to_json_binary,
)

_VARINT_MAX_BYTES = 9
_WIRE_TYPE_LENGTH_DELIMITED = 2


@dataclass
class AppResponse:
    """Events and data returned by a processed message."""

    events: list[Event] = field(default_factory=list)
    data: bytes | None = None

    def custom_attrs(self, idx: int) -> list[Attribute]:
        """Returns the attributes of a wasm event, without the contract address."""
        event = self.events[idx]
        if event.ty != "wasm":
            raise ValueError(f"event {idx} has type {event.ty!r}, expected 'wasm'")
        return event.attributes[1:]

    def has_event(self, expected: Event) -> bool:
        """Tells whether an event of the same type holds all expected attributes."""
        return any(
            ev.ty == expected.ty and all(at in ev.attributes for at in expected.attributes)
            for ev in self.events
        )

    def assert_event(self, expected: Event) -> None:
        """Raises AssertionError when no matching event exists."""
        if not self.has_event(expected):
            raise AssertionError(
                f"Expected to find an event {expected!r}, but received: {self.events!r}"
            )

    @classmethod
    def from_sub_msg_response(cls, reply: SubMsgResponse) -> AppResponse:
        """Builds a response from a sub-message response."""
        return cls(events=list(reply.events), data=reply.data)


@dataclass(frozen=True)
class MsgInstantiateContractResponse:
    """Decoded data of an instantiation."""

    contract_address: str
    data: bytes | None = None


@dataclass(frozen=True)
class MsgExecuteContractResponse:
    """Decoded data of an execution."""

    data: bytes | None = None


class _ProtoReader:
    def __init__(self, data: bytes, target: str) -> None:
        self._data = bytes(data)
        self._pos = 0
        self._target = target

    def _error(self, msg: str) -> ParseError:
        return ParseError(self._target, msg)

    def _varint(self, field_number: int) -> int:
        value = 0
        for shift in range(0, 7 * _VARINT_MAX_BYTES, 7):
            if self._pos >= len(self._data):
                raise self._error(f"field #{field_number}: varint data too short")
            byte = self._data[self._pos]
            self._pos += 1
            value |= (byte & 0x7F) << shift
            if not byte & 0x80:
                return value
        raise self._error(f"field #{field_number}: invalid varint")

    def length_prefixed(self, field_number: int) -> bytes:
        if self._pos >= len(self._data):
            return b""
        tag = self._varint(field_number)
        wire_type = tag & 0x07
        if wire_type != _WIRE_TYPE_LENGTH_DELIMITED:
            raise self._error(f"field #{field_number}: invalid wire type {wire_type}")
        if tag >> 3 != field_number:
            raise self._error(f"invalid field number {tag >> 3}, expected {field_number}")
        length = self._varint(field_number)
        end = self._pos + length
        if end > len(self._data):
            raise self._error(f"field #{field_number}: message too short")
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def string(self, field_number: int) -> str:
        try:
            return self.length_prefixed(field_number).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise self._error(f"field #{field_number}: invalid utf-8") from exc

    def optional_bytes(self, field_number: int) -> bytes | None:
        return self.length_prefixed(field_number) or None


def parse_instantiate_response_data(data: bytes) -> MsgInstantiateContractResponse:
    """Decodes the protobuf data returned by an instantiation."""
    reader = _ProtoReader(data, "MsgInstantiateContractResponse")
    address = reader.string(1)
    return MsgInstantiateContractResponse(address, reader.optional_bytes(2))


def parse_execute_response_data(data: bytes) -> MsgExecuteContractResponse:
    """Decodes the protobuf data returned by an execution."""
    reader = _ProtoReader(data, "MsgExecuteContractResponse")
    return MsgExecuteContractResponse(reader.optional_bytes(1))


class Executor(ABC):
    """Runs chain messages; helpers build the common ones."""

    @abstractmethod
    def execute(self, sender: str, msg: Any) -> AppResponse:
        """Processes a message atomically."""

    def instantiate_contract(
        self,
        code_id: int,
        sender: str,
        init_msg: Any,
        send_funds: Sequence[Coin],
        label: str,
        admin: str | None = None,
    ) -> str:
        """Instantiates a contract and returns its address."""
        msg = WasmInstantiate(
            admin=admin,
            code_id=code_id,
            msg=to_json_binary(init_msg),
            funds=list(send_funds),
            label=label,
        )
        res = self.execute(sender, msg)
        return parse_instantiate_response_data(res.data or b"").contract_address

    def instantiate2_contract(
        self,
        code_id: int,
        sender: str,
        init_msg: Any,
        funds: Sequence[Coin],
        label: str,
        admin: str | None,
        salt: bytes,
    ) -> str:
        """Instantiates a contract at a predictable address and returns it."""
        msg = WasmInstantiate2(
            admin=admin,
            code_id=code_id,
            msg=to_json_binary(init_msg),
            funds=list(funds),
            label=label,
            salt=bytes(salt),
        )
        res = self.execute(sender, msg)
        return parse_instantiate_response_data(res.data or b"").contract_address

    def execute_contract(
        self,
        sender: str,
        contract_addr: str,
        msg: Any,
        send_funds: Sequence[Coin],
    ) -> AppResponse:
        """Executes a contract and unwraps the data it returned."""
        wrapped = WasmExecute(
            contract_addr=contract_addr, msg=to_json_binary(msg), funds=list(send_funds)
        )
        res = self.execute(sender, wrapped)
        if res.data is None:
            return res
        return replace(res, data=parse_execute_response_data(res.data).data)

    def migrate_contract(
        self, sender: str, contract_addr: str, msg: Any, new_code_id: int
    ) -> AppResponse:
        """Migrates a contract; the sender must be its admin."""
        migrate = WasmMigrate(
            contract_addr=contract_addr, new_code_id=new_code_id, msg=to_json_binary(msg)
        )
        return self.execute(sender, migrate)

    def send_tokens(self, sender: str, recipient: str, amount: Sequence[Coin]) -> AppResponse:
        """Sends coins to a recipient."""
        return self.execute(sender, BankSend(to_address=recipient, amount=list(amount)))