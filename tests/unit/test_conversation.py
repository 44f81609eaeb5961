"""Unit tests for Message invariants and the ConversationStore."""

import pytest
from pydantic import ValidationError

from stratsync.core.conversation import ConversationStore
from stratsync.models.schemas import Message, PayloadBundle, Sender


def assistant(content: str = "reply", **kwargs) -> Message:
    return Message(content=content, sender=Sender.ASSISTANT, **kwargs)


class TestMessage:
    """Tests for Message construction rules."""

    def test_ids_increase_in_creation_order(self) -> None:
        """Each new message gets a larger id than the last."""
        first = Message.from_user("one")
        second = assistant()
        third = Message.from_user("two")

        assert first.id < second.id < third.id

    def test_user_message_rejects_table(self) -> None:
        """User messages cannot carry table rows."""
        with pytest.raises(ValidationError):
            Message(content="hi", sender=Sender.USER, table=[{"a": 1}])

    def test_user_message_rejects_payload_bundle(self) -> None:
        """User messages cannot carry a payload bundle."""
        bundle = PayloadBundle(query="hi", response="hello")

        with pytest.raises(ValidationError):
            Message(content="hi", sender=Sender.USER, original_request_payload=bundle)

    def test_table_rows_must_be_summarizable(self) -> None:
        """Non-empty tables cannot be flagged as not summarizable."""
        with pytest.raises(ValidationError):
            assistant("", table=[{"a": 1}], can_summarize=False)

    def test_message_is_immutable(self) -> None:
        message = assistant()

        with pytest.raises(ValidationError):
            message.content = "edited"

    def test_render_payload_for_text(self) -> None:
        assert assistant("hello").render_payload() == {"content": "hello"}

    def test_render_payload_for_table(self) -> None:
        rows = [{"name": "Acme"}]

        assert assistant("", table=rows).render_payload() == {"table": rows}

    def test_bundle_accepts_rows_or_text(self) -> None:
        """Bundle response keeps the shape it was given."""
        rows = PayloadBundle(query="q", response=[{"a": 1}])
        text = PayloadBundle(query="q", response="text")

        assert rows.response == [{"a": 1}]
        assert text.response == "text"


class TestConversationStore:
    """Tests for append-only conversation history."""

    def test_starts_empty(self) -> None:
        store = ConversationStore()

        assert len(store) == 0
        assert store.all() == ()
        assert not store.has_user_messages

    def test_append_preserves_order(self) -> None:
        """Messages come back in the order they were appended."""
        store = ConversationStore()
        messages = [Message.from_user("q"), assistant("a"), Message.from_user("q2")]

        for message in messages:
            store.append(message)

        assert list(store.all()) == messages
        assert list(store) == messages
        assert store.has_user_messages

    def test_arrival_order_beats_creation_order(self) -> None:
        """A reply created earlier but appended later stays later."""
        store = ConversationStore()
        older = assistant("slow reply")
        newer = assistant("fast reply")

        store.append(newer)
        store.append(older)

        assert [m.content for m in store.all()] == ["fast reply", "slow reply"]

    def test_duplicate_id_rejected(self) -> None:
        store = ConversationStore()
        message = assistant()
        store.append(message)

        with pytest.raises(ValueError, match="already in the conversation"):
            store.append(message)

    def test_snapshot_is_detached(self) -> None:
        """Snapshots do not change when more messages arrive."""
        store = ConversationStore()
        store.append(assistant())
        snapshot = store.all()

        store.append(assistant())

        assert len(snapshot) == 1
        assert len(store) == 2
