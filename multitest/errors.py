"""Errors reported by the simulator and by the standard library layer."""

from __future__ import annotations

from typing import Any


class _ValueEquality:
    """Makes exceptions compare equal when their type and arguments match."""

    args: tuple[Any, ...]

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.args == other.args  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), repr(self.args)))


class MultiTestError(_ValueEquality, Exception):
    """Base class of errors reported across the library."""


class EmptyAttributeKey(MultiTestError):
    """An attribute was given an empty key."""

    def __init__(self, value: str) -> None:
        super().__init__(value)
        self.value = value

    def __str__(self) -> str:
        return f"Empty attribute key. Value: {self.value}"


class EmptyAttributeValue(MultiTestError):
    """An attribute was given an empty value."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Empty attribute value. Key: {self.key}"


class ReservedAttributeKey(MultiTestError):
    """An attribute key starts with the reserved prefix."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Attribute key starts with reserved prefix _: {self.key}"


class EventTypeTooShort(MultiTestError):
    """An event type is too short."""

    def __init__(self, ty: str) -> None:
        super().__init__(ty)
        self.ty = ty

    def __str__(self) -> str:
        return f"Event type too short: {self.ty}"


class UnsupportedWasmQuery(MultiTestError):
    """A wasm query that cannot be processed."""

    def __init__(self, query: Any) -> None:
        super().__init__(query)
        self.query = query

    def __str__(self) -> str:
        return f"Unsupported wasm query: {self.query!r}"


class UnsupportedWasmMsg(MultiTestError):
    """A wasm message that cannot be processed."""

    def __init__(self, msg: Any) -> None:
        super().__init__(msg)
        self.msg = msg

    def __str__(self) -> str:
        return f"Unsupported wasm message: {self.msg!r}"


class InvalidCodeId(MultiTestError):
    """The contract code identifier is invalid."""

    def __init__(self) -> None:
        super().__init__()

    def __str__(self) -> str:
        return "code id: invalid"


class UnregisteredCodeId(MultiTestError):
    """No contract code is registered under the identifier."""

    def __init__(self, code_id: int) -> None:
        super().__init__(code_id)
        self.code_id = code_id

    def __str__(self) -> str:
        return f"code id {self.code_id}: no such code"


class DuplicatedContractAddress(MultiTestError):
    """A contract with the address already exists."""

    def __init__(self, address: str) -> None:
        super().__init__(address)
        self.address = address

    def __str__(self) -> str:
        return f"Contract with this address already exists: {self.address}"


class StdError(_ValueEquality, Exception):
    """Base class of errors raised by the chain standard layer."""


class GenericError(StdError):
    """A generic error carrying a message."""

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg

    def __str__(self) -> str:
        return f"Generic error: {self.msg}"


class Overflow(StdError):
    """An arithmetic operation went out of range."""

    def __init__(self, operation: str, operand1: Any, operand2: Any) -> None:
        super().__init__(operation, operand1, operand2)
        self.operation = operation
        self.operand1 = operand1
        self.operand2 = operand2

    def __str__(self) -> str:
        return f"Overflow: Cannot {self.operation} with {self.operand1} and {self.operand2}"


class ParseError(StdError):
    """Data could not be parsed into the target type."""

    def __init__(self, target_type: str, msg: str) -> None:
        super().__init__(target_type, msg)
        self.target_type = target_type
        self.msg = msg

    def __str__(self) -> str:
        return f"Error parsing into type {self.target_type}: {self.msg}"