"""Contract entry points and a wrapper turning plain functions into a contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional

from .types import Attribute, BlockInfo, Coin, Event, SubMsgResponse, from_json

_REPLY_ON_VALUES = ("always", "success", "error", "never")


@dataclass
class Env:
    """Environment of a contract call: the block and the contract's address."""

    block: BlockInfo
    contract_address: str
    transaction_index: int | None = None


@dataclass
class MessageInfo:
    """Sender of a message and the funds sent along with it."""

    sender: str
    funds: list[Coin] = field(default_factory=list)


@dataclass
class Deps:
    """Dependencies handed to a contract: storage, address API and querier."""

    storage: Any
    api: Any
    querier: Any = None


@dataclass
class CustomMsg:
    """A chain-specific message carried inside a response."""

    value: Any


@dataclass
class SubMsg:
    """A message dispatched by a contract, with its reply settings."""

    msg: Any
    id: int = 0
    gas_limit: int | None = None
    reply_on: str = "never"

    def __post_init__(self) -> None:
        if self.reply_on not in _REPLY_ON_VALUES:
            raise ValueError(f"invalid reply_on value: {self.reply_on!r}")


@dataclass
class Reply:
    """Result of a sub-message, handed to the contract's reply entry point.

    The result is a SubMsgResponse on success or an error message on failure.
    """

    id: int
    result: SubMsgResponse | str

    @property
    def is_ok(self) -> bool:
        return isinstance(self.result, SubMsgResponse)


@dataclass
class Response:
    """What a contract entry point returns."""

    messages: list[SubMsg] = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)
    events: list[Event] = field(default_factory=list)
    data: bytes | None = None

    def add_message(self, msg: Any) -> Response:
        """Adds a message dispatched without a reply."""
        self.messages.append(SubMsg(msg))
        return self

    def add_submessage(self, msg: SubMsg) -> Response:
        """Adds a sub-message."""
        self.messages.append(msg)
        return self

    def add_attribute(self, key: str, value: Any) -> Response:
        """Adds an attribute to the contract's wasm event."""
        self.attributes.append(Attribute(key, str(value)))
        return self

    def add_event(self, event: Event) -> Response:
        """Adds a custom event."""
        self.events.append(event)
        return self

    def set_data(self, data: bytes) -> Response:
        """Sets the data returned by the contract."""
        self.data = bytes(data)
        return self


class Contract(ABC):
    """Entry points of a contract; messages arrive as JSON bytes."""

    @abstractmethod
    def execute(self, deps: Deps, env: Env, info: MessageInfo, msg: bytes) -> Response:
        """Evaluates the execute entry point."""

    @abstractmethod
    def instantiate(self, deps: Deps, env: Env, info: MessageInfo, msg: bytes) -> Response:
        """Evaluates the instantiate entry point."""

    @abstractmethod
    def query(self, deps: Deps, env: Env, msg: bytes) -> bytes:
        """Evaluates the query entry point."""

    @abstractmethod
    def sudo(self, deps: Deps, env: Env, msg: bytes) -> Response:
        """Evaluates the sudo entry point."""

    @abstractmethod
    def reply(self, deps: Deps, env: Env, msg: Reply) -> Response:
        """Evaluates the reply entry point."""

    @abstractmethod
    def migrate(self, deps: Deps, env: Env, msg: bytes) -> Response:
        """Evaluates the migrate entry point."""


def _customize_response(resp: Response) -> Response:
    """Checks that a response of a plain contract carries no custom messages."""
    for sub in resp.messages:
        if isinstance(sub.msg, CustomMsg):
            raise TypeError(f"unexpected custom message in response: {sub.msg!r}")
    return Response(
        messages=list(resp.messages),
        attributes=list(resp.attributes),
        events=list(resp.events),
        data=resp.data,
    )


def _customize(raw_fn: Callable[..., Response]) -> Callable[..., Response]:
    def customized(*args: Any) -> Response:
        return _customize_response(raw_fn(*args))

    return customized


@dataclass(frozen=True)
class ContractWrapper(Contract):
    """Contract built from plain functions that receive parsed JSON messages."""

    execute_fn: Callable[[Deps, Env, MessageInfo, Any], Response]
    instantiate_fn: Callable[[Deps, Env, MessageInfo, Any], Response]
    query_fn: Callable[[Deps, Env, Any], bytes]
    sudo_fn: Optional[Callable[[Deps, Env, Any], Response]] = None
    reply_fn: Optional[Callable[[Deps, Env, Reply], Response]] = None
    migrate_fn: Optional[Callable[[Deps, Env, Any], Response]] = None

    @classmethod
    def new_with_empty(
        cls,
        execute_fn: Callable[[Deps, Env, MessageInfo, Any], Response],
        instantiate_fn: Callable[[Deps, Env, MessageInfo, Any], Response],
        query_fn: Callable[[Deps, Env, Any], bytes],
    ) -> ContractWrapper:
        """Wraps functions of a contract that emits no custom messages."""
        return cls(_customize(execute_fn), _customize(instantiate_fn), query_fn)

    def with_sudo(self, sudo_fn: Callable[[Deps, Env, Any], Response]) -> ContractWrapper:
        """Returns a copy with the sudo entry point."""
        return replace(self, sudo_fn=sudo_fn)

    def with_sudo_empty(self, sudo_fn: Callable[[Deps, Env, Any], Response]) -> ContractWrapper:
        """Returns a copy with a sudo entry point that emits no custom messages."""
        return replace(self, sudo_fn=_customize(sudo_fn))

    def with_reply(self, reply_fn: Callable[[Deps, Env, Reply], Response]) -> ContractWrapper:
        """Returns a copy with the reply entry point."""
        return replace(self, reply_fn=reply_fn)

    def with_reply_empty(
        self, reply_fn: Callable[[Deps, Env, Reply], Response]
    ) -> ContractWrapper:
        """Returns a copy with a reply entry point that emits no custom messages."""
        return replace(self, reply_fn=_customize(reply_fn))

    def with_migrate(self, migrate_fn: Callable[[Deps, Env, Any], Response]) -> ContractWrapper:
        """Returns a copy with the migrate entry point."""
        return replace(self, migrate_fn=migrate_fn)

    def with_migrate_empty(
        self, migrate_fn: Callable[[Deps, Env, Any], Response]
    ) -> ContractWrapper:
        """Returns a copy with a migrate entry point that emits no custom messages."""
        return replace(self, migrate_fn=_customize(migrate_fn))

    def execute(self, deps: Deps, env: Env, info: MessageInfo, msg: bytes) -> Response:
        return self.execute_fn(deps, env, info, from_json(msg))

    def instantiate(self, deps: Deps, env: Env, info: MessageInfo, msg: bytes) -> Response:
        return self.instantiate_fn(deps, env, info, from_json(msg))

    def query(self, deps: Deps, env: Env, msg: bytes) -> bytes:
        return self.query_fn(deps, env, from_json(msg))

    def sudo(self, deps: Deps, env: Env, msg: bytes) -> Response:
        parsed = from_json(msg)
        if self.sudo_fn is None:
            raise NotImplementedError("sudo not implemented for contract")
        return self.sudo_fn(deps, env, parsed)

    def reply(self, deps: Deps, env: Env, msg: Reply) -> Response:
        if self.reply_fn is None:
            raise NotImplementedError("reply not implemented for contract")
        return self.reply_fn(deps, env, msg)

    def migrate(self, deps: Deps, env: Env, msg: bytes) -> Response:
        parsed = from_json(msg)
        if self.migrate_fn is None:
            raise NotImplementedError("migrate not implemented for contract")
        return self.migrate_fn(deps, env, parsed)