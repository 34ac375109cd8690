"""Tests for the request lifecycle controller: status transitions and stale drops."""

import asyncio

import pytest

from wxcal.ingest.errors import EmptyResult, NotFound, TransportOrServerError
from wxcal.lifecycle.controller import QueryController, QueryStatus


class Gate:
    """Fetch function whose calls resolve only when the test says so."""

    def __init__(self):
        self.calls: list[tuple[str, asyncio.Future]] = []

    async def __call__(self, inputs: str):
        fut = asyncio.get_running_loop().create_future()
        self.calls.append((inputs, fut))
        return await fut

    @property
    def inputs(self) -> list[str]:
        return [i for i, _ in self.calls]

    def resolve(self, inputs: str, value=None, error: Exception | None = None):
        for i, fut in self.calls:
            if i == inputs and not fut.done():
                if error is not None:
                    fut.set_exception(error)
                else:
                    fut.set_result(value)
                return
        raise AssertionError(f"no outstanding call for {inputs!r}")


async def drain():
    for _ in range(5):
        await asyncio.sleep(0)


class TestTransitions:
    def test_ready(self):
        async def scenario():
            gate = Gate()
            q = QueryController("test", gate)
            assert q.status == QueryStatus.IDLE

            assert q.update("A") is True
            assert q.status == QueryStatus.LOADING
            await drain()
            gate.resolve("A", "a-data")
            state = await q.wait()
            assert state.status == QueryStatus.READY
            assert state.data == "a-data"
            assert state.inputs == "A"
            assert q.calls_issued == 1

        asyncio.run(scenario())

    @pytest.mark.parametrize(
        "error,status",
        [
            (NotFound("none"), QueryStatus.EMPTY),
            (EmptyResult("nothing"), QueryStatus.EMPTY),
            (TransportOrServerError("HTTP 500", 500), QueryStatus.ERROR),
            (RuntimeError("bug"), QueryStatus.ERROR),
        ],
    )
    def test_failures(self, error, status):
        async def scenario():
            gate = Gate()
            q = QueryController("test", gate)
            q.update("A")
            await drain()
            gate.resolve("A", error=error)
            state = await q.wait()
            assert state.status == status
            assert state.data is None
            assert state.error

        asyncio.run(scenario())

    def test_absent_inputs_stay_idle(self):
        async def scenario():
            gate = Gate()
            q = QueryController("test", gate)
            assert q.update(None) is False
            assert q.status == QueryStatus.IDLE
            assert q.calls_issued == 0
            await drain()
            assert gate.calls == []

        asyncio.run(scenario())

    def test_inputs_to_none_clears_data(self):
        async def scenario():
            gate = Gate()
            q = QueryController("test", gate)
            q.update("A")
            await drain()
            gate.resolve("A", "a-data")
            await q.wait()

            q.update(None)
            assert q.status == QueryStatus.IDLE
            assert q.data is None

        asyncio.run(scenario())

    def test_same_value_issues_no_call(self):
        async def scenario():
            gate = Gate()
            q = QueryController("test", gate)
            q.update(("nyc", 1))
            assert q.update(("nyc", 1)) is False
            await drain()
            assert len(gate.calls) == 1

        asyncio.run(scenario())

    def test_on_change_sees_every_transition(self):
        async def scenario():
            seen = []
            gate = Gate()
            q = QueryController("test", gate, on_change=lambda c: seen.append(c.status))
            q.update("A")
            await drain()
            gate.resolve("A", 1)
            await q.wait()
            assert seen == [QueryStatus.LOADING, QueryStatus.READY]

        asyncio.run(scenario())


class TestStaleResults:
    def test_out_of_order_only_latest_applies(self):
        async def scenario():
            gate = Gate()
            q = QueryController("test", gate)
            q.update("A")
            q.update("B")
            q.update("C")
            await drain()
            assert gate.inputs == ["A", "B", "C"]

            gate.resolve("C", "c-data")
            await drain()
            assert q.status == QueryStatus.READY
            assert q.data == "c-data"

            gate.resolve("A", "a-data")
            gate.resolve("B", error=TransportOrServerError("late failure"))
            await drain()
            assert q.status == QueryStatus.READY
            assert q.data == "c-data"
            assert q.state.inputs == "C"
            assert q.stale_dropped == 2
            assert q.calls_issued == 3

        asyncio.run(scenario())

    def test_superseded_result_before_latest(self):
        async def scenario():
            gate = Gate()
            q = QueryController("test", gate)
            q.update("A")
            q.update("B")
            await drain()

            gate.resolve("A", "a-data")
            await drain()
            assert q.status == QueryStatus.LOADING
            assert q.data is None

            gate.resolve("B", "b-data")
            await q.wait()
            assert q.data == "b-data"

        asyncio.run(scenario())

    def test_result_after_inputs_cleared_is_dropped(self):
        async def scenario():
            gate = Gate()
            q = QueryController("test", gate)
            q.update("A")
            await drain()
            q.update(None)
            gate.resolve("A", "a-data")
            await drain()
            assert q.status == QueryStatus.IDLE
            assert q.data is None

        asyncio.run(scenario())

    def test_generation_increments_per_change(self):
        async def scenario():
            q = QueryController("test", Gate())
            q.update("A")
            q.update("B")
            q.update(None)
            assert q.generation == 3
            await q.aclose()

        asyncio.run(scenario())


class TestClose:
    def test_aclose_cancels_outstanding(self):
        async def scenario():
            gate = Gate()
            q = QueryController("test", gate)
            q.update("A")
            q.update("B")
            await drain()
            await q.aclose()
            assert all(fut.cancelled() for _, fut in gate.calls)
            assert not q.is_pending
            assert q.status == QueryStatus.LOADING

        asyncio.run(scenario())

    def test_wait_without_call(self):
        async def scenario():
            q = QueryController("test", Gate())
            state = await q.wait()
            assert state.status == QueryStatus.IDLE

        asyncio.run(scenario())
