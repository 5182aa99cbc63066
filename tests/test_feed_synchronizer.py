"""
Tests for FeedSynchronizer: ordering, refresh coalescing, mutation rules.

Run with: pytest tests/test_feed_synchronizer.py -v
"""

import asyncio
import dataclasses

import pytest

from conftest import ALICE, BOB, InMemoryMessageRepository, make_message
from feed_client.application.services.feed_synchronizer import FeedSynchronizer, sort_feed
from feed_client.domain.exceptions import (
    AccessDeniedError,
    InvalidInputError,
    RemoteUnavailableError,
    UnauthenticatedError,
)
from feed_client.domain.value_objects import AccountId, MessageId, MutationOutcome


def synchronizer_for(repo, session, **kwargs):
    kwargs.setdefault("max_text_length", 255)
    return FeedSynchronizer(repo, session, **kwargs)


async def wait_for_calls(repo, name, count):
    while repo.count(name) < count:
        await asyncio.sleep(0)


class TestOrdering:
    def test_timestamps_newest_first(self):
        messages = [
            make_message(1, owner=1, ts=100),
            make_message(2, owner=1, ts=300),
            make_message(3, owner=1, ts=200),
        ]
        ordered = sort_feed(messages)
        assert [m.posted_at_epoch_ms for m in ordered] == [300, 200, 100]

    def test_ids_when_no_timestamps(self):
        messages = [make_message(i, owner=1) for i in (1, 2, 3)]
        assert [m.id.value for m in sort_feed(messages)] == [3, 2, 1]

    def test_ids_when_some_timestamps_missing(self):
        messages = [
            make_message(1, owner=1, ts=900),
            make_message(2, owner=1),
            make_message(3, owner=1, ts=100),
        ]
        assert [m.id.value for m in sort_feed(messages)] == [3, 2, 1]

    def test_equal_timestamps_fall_back_to_id(self):
        messages = [make_message(1, owner=1, ts=50), make_message(2, owner=1, ts=50)]
        assert [m.id.value for m in sort_feed(messages)] == [2, 1]

    def test_duplicate_ids_keep_first(self):
        messages = [make_message(1, owner=1, text="first"), make_message(1, owner=1, text="again")]
        ordered = sort_feed(messages)
        assert len(ordered) == 1
        assert ordered[0].text == "first"

    @pytest.mark.asyncio
    async def test_refresh_applies_ordering(self, session):
        repo = InMemoryMessageRepository(
            [make_message(1, 1, ts=100), make_message(2, 1, ts=300), make_message(3, 1, ts=200)]
        )
        synchronizer = synchronizer_for(repo, session)

        snapshot = await synchronizer.refresh()

        assert [m.posted_at_epoch_ms for m in snapshot] == [300, 200, 100]
        assert synchronizer.snapshot == snapshot


class TestRefresh:
    @pytest.mark.asyncio
    async def test_concurrent_refreshes_share_one_request(self, session):
        repo = InMemoryMessageRepository([make_message(1, 1)])
        repo.list_gate = asyncio.Event()
        synchronizer = synchronizer_for(repo, session)

        first = asyncio.ensure_future(synchronizer.refresh())
        second = asyncio.ensure_future(synchronizer.refresh())
        await asyncio.sleep(0)
        assert synchronizer.refresh_in_flight

        repo.list_gate.set()
        results = await asyncio.gather(first, second)

        assert repo.count("list") == 1
        assert results[0] == results[1]
        assert not synchronizer.refresh_in_flight

    @pytest.mark.asyncio
    async def test_sequential_refreshes_each_fetch(self, session, repo):
        synchronizer = synchronizer_for(repo, session)
        await synchronizer.refresh()
        await synchronizer.refresh()
        assert repo.count("list") == 2

    @pytest.mark.asyncio
    async def test_failure_keeps_snapshot_and_clears_flag(self, session):
        repo = InMemoryMessageRepository([make_message(1, 1)])
        synchronizer = synchronizer_for(repo, session)
        before = await synchronizer.refresh()

        repo.list_error = RemoteUnavailableError("down", status_code=503)
        with pytest.raises(RemoteUnavailableError):
            await synchronizer.refresh()

        assert synchronizer.snapshot == before
        assert not synchronizer.refresh_in_flight

    @pytest.mark.asyncio
    async def test_joined_refresh_sees_the_same_failure(self, session):
        repo = InMemoryMessageRepository()
        repo.list_gate = asyncio.Event()
        repo.list_error = RemoteUnavailableError("down", status_code=500)
        synchronizer = synchronizer_for(repo, session)

        first = asyncio.ensure_future(synchronizer.refresh())
        second = asyncio.ensure_future(synchronizer.refresh())
        await asyncio.sleep(0)
        repo.list_gate.set()
        results = await asyncio.gather(first, second, return_exceptions=True)

        assert all(isinstance(r, RemoteUnavailableError) for r in results)
        assert repo.count("list") == 1

    def test_clear_drops_snapshot(self, session):
        synchronizer = synchronizer_for(InMemoryMessageRepository(), session)
        synchronizer._snapshot = (make_message(1, 1),)
        synchronizer.clear()
        assert synchronizer.snapshot == ()

    @pytest.mark.asyncio
    async def test_clear_discards_refresh_in_flight(self, session):
        repo = InMemoryMessageRepository([make_message(1, BOB.id.value)])
        repo.list_gate = asyncio.Event()
        synchronizer = synchronizer_for(repo, session)

        pending = asyncio.ensure_future(synchronizer.refresh())
        await wait_for_calls(repo, "list", 1)
        synchronizer.clear()
        assert not synchronizer.refresh_in_flight

        repo.list_gate.set()
        await pending

        assert synchronizer.snapshot == ()
        assert not synchronizer.refresh_in_flight

    @pytest.mark.asyncio
    async def test_refresh_after_clear_starts_new_request(self, session):
        repo = InMemoryMessageRepository([make_message(1, BOB.id.value)])
        repo.list_gate = asyncio.Event()
        synchronizer = synchronizer_for(repo, session)

        stale = asyncio.ensure_future(synchronizer.refresh())
        await wait_for_calls(repo, "list", 1)
        synchronizer.clear()
        fresh = asyncio.ensure_future(synchronizer.refresh())
        await wait_for_calls(repo, "list", 2)

        repo.list_gate.set()
        await asyncio.gather(stale, fresh)

        assert [m.id.value for m in synchronizer.snapshot] == [1]
        assert not synchronizer.refresh_in_flight


class TestCreate:
    @pytest.mark.asyncio
    async def test_requires_identity_before_network(self, session, repo):
        synchronizer = synchronizer_for(repo, session)
        with pytest.raises(UnauthenticatedError):
            await synchronizer.create_and_refresh("hello")
        assert repo.calls == []

    @pytest.mark.asyncio
    async def test_created_message_appears_once_with_owner(self, session, repo):
        session.login(ALICE)
        synchronizer = synchronizer_for(repo, session)

        created = await synchronizer.create_and_refresh("  hello world ")

        matching = [m for m in synchronizer.snapshot if m.text == "hello world"]
        assert len(matching) == 1
        assert matching[0].owner_id == ALICE.id
        assert created.id == matching[0].id
        assert repo.calls == ["create", "list"]

    @pytest.mark.asyncio
    async def test_rejects_text_over_contract_limit(self, session, repo):
        session.login(ALICE)
        synchronizer = synchronizer_for(repo, session, max_text_length=10)
        with pytest.raises(InvalidInputError):
            await synchronizer.create_and_refresh("x" * 11)
        assert repo.calls == []

    @pytest.mark.asyncio
    async def test_does_not_reuse_refresh_sent_before_create(self, session):
        repo = InMemoryMessageRepository([make_message(1, ALICE.id.value)])
        repo.list_gate = asyncio.Event()
        session.login(ALICE)
        synchronizer = synchronizer_for(repo, session)

        earlier = asyncio.ensure_future(synchronizer.refresh())
        await wait_for_calls(repo, "list", 1)
        creating = asyncio.ensure_future(synchronizer.create_and_refresh("new post"))
        await wait_for_calls(repo, "create", 1)
        assert repo.count("list") == 1

        repo.list_gate.set()
        created = await creating
        await earlier

        assert repo.count("list") == 2
        assert any(m.id == created.id for m in synchronizer.snapshot)

    @pytest.mark.asyncio
    async def test_earlier_refresh_failure_does_not_fail_create(self, session):
        repo = InMemoryMessageRepository()
        repo.list_gate = asyncio.Event()
        repo.list_error = RemoteUnavailableError("down", status_code=503)
        session.login(ALICE)
        synchronizer = synchronizer_for(repo, session)

        earlier = asyncio.ensure_future(synchronizer.refresh())
        await wait_for_calls(repo, "list", 1)
        creating = asyncio.ensure_future(synchronizer.create_and_refresh("hello"))
        await wait_for_calls(repo, "create", 1)

        repo.list_error = None
        repo.list_gate.set()
        results = await asyncio.gather(earlier, creating, return_exceptions=True)

        assert isinstance(results[0], RemoteUnavailableError)
        assert [m.text for m in synchronizer.snapshot] == ["hello"]

    @pytest.mark.asyncio
    async def test_no_refresh_when_policy_disabled(self, session, repo):
        session.login(ALICE)
        synchronizer = synchronizer_for(repo, session, refresh_after_mutation=False)

        await synchronizer.create_and_refresh("hello")

        assert repo.calls == ["create"]
        assert synchronizer.snapshot == ()


class TestSnapshotObjects:
    @pytest.mark.asyncio
    async def test_caller_cannot_rewrite_snapshot_messages(self, session):
        repo = InMemoryMessageRepository([make_message(7, BOB.id.value, text="bob's")])
        session.login(ALICE)
        synchronizer = synchronizer_for(repo, session)
        feed = await synchronizer.refresh()

        with pytest.raises(dataclasses.FrozenInstanceError):
            feed[0].owner_id = ALICE.id
        with pytest.raises(dataclasses.FrozenInstanceError):
            feed[0].text = "edited locally"

        assert synchronizer.find(MessageId(7)).owner_id == BOB.id
        with pytest.raises(AccessDeniedError):
            await synchronizer.update_and_refresh(MessageId(7), "mine now")


class TestUpdate:
    @pytest.mark.asyncio
    async def test_edit_is_visible_despite_earlier_refresh(self, session):
        repo = InMemoryMessageRepository([make_message(1, ALICE.id.value, text="old")])
        session.login(ALICE)
        synchronizer = synchronizer_for(repo, session)
        await synchronizer.refresh()

        repo.list_gate = asyncio.Event()
        earlier = asyncio.ensure_future(synchronizer.refresh())
        await wait_for_calls(repo, "list", 2)
        editing = asyncio.ensure_future(synchronizer.update_and_refresh(MessageId(1), "new"))
        await wait_for_calls(repo, "update", 1)

        repo.list_gate.set()
        await asyncio.gather(earlier, editing)

        assert synchronizer.find(MessageId(1)).text == "new"
        assert repo.count("list") == 3
    @pytest.mark.asyncio
    async def test_owner_update_refreshes(self, session):
        repo = InMemoryMessageRepository([make_message(1, ALICE.id.value, text="old")])
        session.login(ALICE)
        synchronizer = synchronizer_for(repo, session)
        await synchronizer.refresh()

        result = await synchronizer.update_and_refresh(MessageId(1), "new")

        assert result.applied
        assert synchronizer.find(MessageId(1)).text == "new"
        assert repo.calls == ["list", "update", "list"]

    @pytest.mark.asyncio
    async def test_other_owner_is_denied_locally(self, session):
        repo = InMemoryMessageRepository([make_message(1, BOB.id.value)])
        session.login(ALICE)
        synchronizer = synchronizer_for(repo, session)
        await synchronizer.refresh()

        with pytest.raises(AccessDeniedError):
            await synchronizer.update_and_refresh(MessageId(1), "mine now")
        assert "update" not in repo.calls

    @pytest.mark.asyncio
    async def test_missing_target_is_reported_not_raised(self, session, repo):
        session.login(ALICE)
        synchronizer = synchronizer_for(repo, session)

        result = await synchronizer.update_and_refresh(MessageId(99), "text")

        assert result.affected_count == 0
        assert result.outcome is MutationOutcome.TARGET_GONE
        assert repo.calls == ["update", "list"]

    @pytest.mark.asyncio
    async def test_requires_identity(self, session, repo):
        synchronizer = synchronizer_for(repo, session)
        with pytest.raises(UnauthenticatedError):
            await synchronizer.update_and_refresh(MessageId(1), "text")
        assert repo.calls == []


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_twice(self, session):
        repo = InMemoryMessageRepository([make_message(7, ALICE.id.value)])
        session.login(ALICE)
        synchronizer = synchronizer_for(repo, session)
        await synchronizer.refresh()

        first = await synchronizer.delete_and_refresh(MessageId(7))
        second = await synchronizer.delete_and_refresh(MessageId(7))

        assert first.affected_count == 1
        assert second.affected_count == 0
        assert synchronizer.find(MessageId(7)) is None
        assert repo.count("list") == 3

    @pytest.mark.asyncio
    async def test_other_owner_is_denied_locally(self, session):
        repo = InMemoryMessageRepository([make_message(7, BOB.id.value)])
        session.login(ALICE)
        synchronizer = synchronizer_for(repo, session)
        await synchronizer.refresh()

        with pytest.raises(AccessDeniedError):
            await synchronizer.delete_and_refresh(MessageId(7))
        assert 7 in repo.messages

    @pytest.mark.asyncio
    async def test_refresh_failure_after_delete_propagates(self, session):
        repo = InMemoryMessageRepository([make_message(7, ALICE.id.value)])
        session.login(ALICE)
        synchronizer = synchronizer_for(repo, session)
        before = await synchronizer.refresh()

        repo.list_error = RemoteUnavailableError("down")
        with pytest.raises(RemoteUnavailableError):
            await synchronizer.delete_and_refresh(MessageId(7))

        assert 7 not in repo.messages
        assert synchronizer.snapshot == before
        assert not synchronizer.refresh_in_flight

    @pytest.mark.asyncio
    async def test_concurrent_deletes_are_not_deduplicated(self, session):
        repo = InMemoryMessageRepository([make_message(7, AccountId(1).value)])
        session.login(ALICE)
        synchronizer = synchronizer_for(repo, session, refresh_after_mutation=False)

        results = await asyncio.gather(
            synchronizer.delete_and_refresh(MessageId(7)),
            synchronizer.delete_and_refresh(MessageId(7)),
        )

        assert sorted(r.affected_count for r in results) == [0, 1]
        assert repo.count("delete") == 2
