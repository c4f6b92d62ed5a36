"""Tests for the in-memory chat store and chat records."""

from datetime import datetime, timedelta

from codeful.history.models import ChatMessage, ChatRecord
from codeful.history.store import InMemoryChatStore


def test_get_unknown_chat(chat_store):
    assert chat_store.get("missing") is None


def test_get_or_create_returns_same_record(chat_store):
    r1 = chat_store.get_or_create("chat-1")
    r2 = chat_store.get_or_create("chat-1")
    assert r1 is r2
    assert r1.id == "chat-1"
    assert r1.messages == []


def test_add_message_appends_and_updates_activity(chat_store):
    ts = datetime(2026, 1, 2, 3, 4, 5)
    chat_store.add_message("c", ChatMessage(content="Q", is_user=True, timestamp=ts))

    record = chat_store.get("c")
    assert [m.content for m in record.messages] == ["Q"]
    assert record.last_message_at == ts


def test_list_chats_most_recent_first(chat_store):
    base = datetime(2026, 5, 1)
    chat_store.add_message("old", ChatMessage(content="a", is_user=True, timestamp=base))
    chat_store.add_message(
        "new", ChatMessage(content="b", is_user=True, timestamp=base + timedelta(hours=1))
    )
    assert [r.id for r in chat_store.list_chats()] == ["new", "old"]


def test_delete(chat_store):
    chat_store.get_or_create("c")
    assert chat_store.delete("c") is True
    assert chat_store.get("c") is None
    assert chat_store.delete("c") is False


def test_clear_removes_every_chat(chat_store):
    chat_store.get_or_create("a")
    chat_store.add_message("b", ChatMessage(content="hi", is_user=True))

    assert chat_store.clear() == 2
    assert chat_store.list_chats() == []
    assert chat_store.get("a") is None


def test_clear_empty_store(chat_store):
    assert chat_store.clear() == 0


def test_maxsize_evicts_oldest():
    store = InMemoryChatStore(ttl=3600, maxsize=2)
    store.get_or_create("a")
    store.get_or_create("b")
    store.get_or_create("c")
    assert store.get("a") is None
    assert store.get("c") is not None


def test_display_title_uses_explicit_title():
    assert ChatRecord(title="Refactoring").display_title == "Refactoring"


def test_display_title_from_first_prompt():
    record = ChatRecord(messages=[ChatMessage(content="How do I reverse a list?", is_user=True)])
    assert record.display_title == "How do I reverse a list?"


def test_display_title_truncates_long_prompt():
    prompt = "Explain the difference between threads and processes in Python"
    record = ChatRecord(messages=[ChatMessage(content=prompt, is_user=True)])
    assert record.display_title == prompt[:30] + "..."


def test_display_title_default():
    assert ChatRecord().display_title == "New Chat"
    assert ChatRecord(title="   ").display_title == "New Chat"


def test_find_message():
    message = ChatMessage(content="x", is_user=False)
    record = ChatRecord(messages=[message])
    assert record.find_message(message.id) is message
    assert record.find_message("nope") is None


def test_record_json_includes_display_title():
    record = ChatRecord(id="c1", title="Mine")
    assert '"display_title":"Mine"' in record.model_dump_json()
