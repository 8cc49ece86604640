"""Custom module that records every message and query it receives."""

from __future__ import annotations

from typing import Any

from .executor import AppResponse
from .types import BlockInfo


class CachingCustomHandlerState:
    """Shared record of processed custom messages and queries."""

    def __init__(self) -> None:
        self._execs: list[Any] = []
        self._queries: list[Any] = []

    @property
    def execs(self) -> tuple[Any, ...]:
        """Processed custom messages, oldest first."""
        return tuple(self._execs)

    @property
    def queries(self) -> tuple[Any, ...]:
        """Processed custom queries, oldest first."""
        return tuple(self._queries)

    def reset(self) -> None:
        """Forgets everything recorded so far."""
        self._execs.clear()
        self._queries.clear()


class CachingCustomHandler:
    """Custom module that accepts and records messages and queries.

    The state is shared, so it stays readable after the handler is given to an app.
    """

    def __init__(self) -> None:
        self._state = CachingCustomHandlerState()

    @property
    def state(self) -> CachingCustomHandlerState:
        """The shared recorded state."""
        return self._state

    def execute(
        self, api: Any, storage: Any, router: Any, block: BlockInfo, sender: str, msg: Any
    ) -> AppResponse:
        """Records the message and returns an empty response."""
        self._state._execs.append(msg)
        return AppResponse()

    def query(
        self, api: Any, storage: Any, querier: Any, block: BlockInfo, request: Any
    ) -> bytes:
        """Records the query and returns empty data."""
        self._state._queries.append(request)
        return b""

    def sudo(
        self, api: Any, storage: Any, router: Any, block: BlockInfo, msg: Any
    ) -> AppResponse:
        """Rejects every privileged message."""
        raise ValueError(f"Unexpected custom sudo message {msg!r}")