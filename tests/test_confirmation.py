import asyncio

import pytest

from portal.core.errors import ConfirmationRequiredError, ConflictError
from portal.domains.common.confirmation import (
    ConfirmationRegistry, ConfirmationState, DeleteConfirmation, run_confirmed_delete
)


@pytest.mark.asyncio
async def test_confirm_runs_delete_and_returns_to_idle():
    calls = []

    async def delete():
        calls.append("deleted")

    flow = DeleteConfirmation("document", "doc-1", delete)
    flow.request()
    assert flow.state is ConfirmationState.CONFIRMING

    await flow.confirm()

    assert calls == ["deleted"]
    assert flow.state is ConfirmationState.IDLE
    assert flow.in_flight is False


@pytest.mark.asyncio
async def test_confirm_without_request_is_rejected():
    async def delete():
        raise AssertionError("must not be called")

    flow = DeleteConfirmation("document", "doc-1", delete)
    with pytest.raises(ConfirmationRequiredError):
        await flow.confirm()


@pytest.mark.asyncio
async def test_cancel_closes_without_deleting():
    async def delete():
        raise AssertionError("must not be called")

    flow = DeleteConfirmation("document", "doc-1", delete)
    flow.request()
    flow.cancel()

    assert flow.state is ConfirmationState.IDLE


@pytest.mark.asyncio
async def test_failed_delete_still_returns_to_idle():
    async def delete():
        raise RuntimeError("boom")

    flow = DeleteConfirmation("document", "doc-1", delete)
    flow.request()
    with pytest.raises(RuntimeError):
        await flow.confirm()

    assert flow.state is ConfirmationState.IDLE
    assert flow.in_flight is False


@pytest.mark.asyncio
async def test_second_confirm_while_in_flight_is_rejected():
    release = asyncio.Event()

    async def delete():
        await release.wait()

    flow = DeleteConfirmation("document", "doc-1", delete)
    flow.request()
    first = asyncio.create_task(flow.confirm())
    await asyncio.sleep(0)

    assert flow.in_flight is True
    flow.cancel()
    assert flow.state is ConfirmationState.CONFIRMING

    with pytest.raises(ConflictError):
        await flow.confirm()

    release.set()
    await first
    assert flow.state is ConfirmationState.IDLE


@pytest.mark.asyncio
async def test_unconfirmed_request_never_deletes():
    calls = []

    async def delete():
        calls.append("deleted")

    with pytest.raises(ConfirmationRequiredError):
        await run_confirmed_delete("notice", "n-1", delete, confirmed=False)
    assert calls == []

    await run_confirmed_delete("notice", "n-1", delete, confirmed=True)
    assert calls == ["deleted"]


@pytest.mark.asyncio
async def test_registry_rejects_second_confirm_for_same_record():
    registry = ConfirmationRegistry()
    release = asyncio.Event()
    calls = []

    async def slow_delete():
        calls.append("first")
        await release.wait()

    async def second_delete():
        calls.append("second")

    first = asyncio.create_task(registry.run("event", "e-1", slow_delete, confirmed=True))
    await asyncio.sleep(0)
    assert registry.is_in_flight("event", "e-1") is True

    with pytest.raises(ConflictError):
        await registry.run("event", "e-1", second_delete, confirmed=True)

    # 다른 대상은 막지 않는다
    await registry.run("event", "e-2", second_delete, confirmed=True)

    release.set()
    await first
    assert calls == ["first", "second"]
    assert registry.is_in_flight("event", "e-1") is False


@pytest.mark.asyncio
async def test_registry_releases_record_after_failed_delete():
    registry = ConfirmationRegistry()

    async def failing_delete():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        await registry.run("event", "e-1", failing_delete, confirmed=True)

    assert registry.is_in_flight("event", "e-1") is False
    calls = []

    async def delete():
        calls.append("deleted")

    await registry.run("event", "e-1", delete, confirmed=True)
    assert calls == ["deleted"]
