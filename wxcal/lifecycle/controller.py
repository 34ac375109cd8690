"""Request lifecycle for one query kind: issue on input change, drop stale results."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Generic, TypeVar

from wxcal.ingest.errors import CalendarQueryError, TransportOrServerError

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT")
DataT = TypeVar("DataT")


class QueryStatus(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(frozen=True)
class QueryState(Generic[InputT, DataT]):
    status: QueryStatus = QueryStatus.IDLE
    inputs: InputT | None = None
    data: DataT | None = None
    error: str | None = None
    generation: int = 0


class QueryController(Generic[InputT, DataT]):
    """Tracks the latest call for one query kind.

    Every change of inputs (compared by value) bumps the generation. A call
    only applies its outcome if its generation is still current, so a call
    superseded by a later input change never touches state, whatever order
    completions arrive in.
    """

    def __init__(
        self,
        name: str,
        fetch: Callable[[InputT], Awaitable[DataT]],
        on_change: Callable[["QueryController[InputT, DataT]"], None] | None = None,
    ):
        self.name = name
        self._fetch = fetch
        self._on_change = on_change
        self._state: QueryState[InputT, DataT] = QueryState()
        self._pending: dict[int, asyncio.Task[None]] = {}
        self.calls_issued = 0
        self.stale_dropped = 0

    @property
    def state(self) -> QueryState[InputT, DataT]:
        return self._state

    @property
    def status(self) -> QueryStatus:
        return self._state.status

    @property
    def data(self) -> DataT | None:
        return self._state.data

    @property
    def generation(self) -> int:
        return self._state.generation

    @property
    def is_pending(self) -> bool:
        return self._state.generation in self._pending

    def update(self, inputs: InputT | None) -> bool:
        """Apply new trigger inputs. Returns True if a new generation started.

        ``None`` means the inputs are absent or invalid: the query goes idle
        and issues nothing.
        """
        if inputs == self._state.inputs:
            return False

        generation = self._state.generation + 1
        if inputs is None:
            self._set(QueryState(status=QueryStatus.IDLE, generation=generation))
            return True

        self._set(
            QueryState(status=QueryStatus.LOADING, inputs=inputs, generation=generation)
        )
        self.calls_issued += 1
        task = asyncio.get_running_loop().create_task(
            self._run(generation, inputs), name=f"{self.name}-{generation}"
        )
        self._pending[generation] = task
        task.add_done_callback(lambda _t, g=generation: self._pending.pop(g, None))
        return True

    async def wait(self) -> QueryState[InputT, DataT]:
        """Wait for the current generation's call, if one is outstanding."""
        task = self._pending.get(self._state.generation)
        if task is not None:
            await asyncio.shield(task)
        return self._state

    async def aclose(self) -> None:
        """Cancel every outstanding call; their results will never apply."""
        tasks = list(self._pending.values())
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._pending.clear()

    async def _run(self, generation: int, inputs: InputT) -> None:
        try:
            data = await self._fetch(inputs)
        except CalendarQueryError as e:
            self._finish(generation, inputs, _failure_status(e), None, str(e))
        except asyncio.CancelledError:
            logger.debug("%s call #%d cancelled", self.name, generation)
            raise
        except Exception as e:
            logger.exception("%s call #%d crashed", self.name, generation)
            self._finish(generation, inputs, QueryStatus.ERROR, None, repr(e))
        else:
            self._finish(generation, inputs, QueryStatus.READY, data, None)

    def _finish(
        self,
        generation: int,
        inputs: InputT,
        status: QueryStatus,
        data: DataT | None,
        error: str | None,
    ) -> None:
        if generation != self._state.generation:
            self.stale_dropped += 1
            logger.debug(
                "%s dropping stale result #%d (current #%d)",
                self.name, generation, self._state.generation,
            )
            return
        if status in (QueryStatus.EMPTY, QueryStatus.ERROR):
            logger.warning("%s %s for %s: %s", self.name, status, inputs, error)
        self._set(
            QueryState(
                status=status,
                inputs=inputs,
                data=data,
                error=error,
                generation=generation,
            )
        )

    def _set(self, state: QueryState[InputT, DataT]) -> None:
        previous = self._state.status
        self._state = state
        logger.debug(
            "%s #%d %s -> %s", self.name, state.generation, previous, state.status
        )
        if self._on_change is not None:
            self._on_change(self)


def _failure_status(error: Any) -> QueryStatus:
    if isinstance(error, TransportOrServerError):
        return QueryStatus.ERROR
    return QueryStatus.EMPTY
