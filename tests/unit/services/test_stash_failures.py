"""Tests for error propagation and store ordering, using in-memory fakes."""

from unittest.mock import MagicMock, call

import pytest

from tagstash.core.exceptions import NotSupportedError
from tagstash.core.types import Entry
from tagstash.services.stash import TagStash
from tests.fakes import ForgedError, InMemoryTagStore

PAGE1 = "https://www.example.org/page1"
PAGE2 = "https://www.example.org/page2"
PAGE3 = "https://www.example.org/page3"


@pytest.fixture
def cache() -> InMemoryTagStore:
    return InMemoryTagStore()


@pytest.fixture
def index() -> InMemoryTagStore:
    return InMemoryTagStore(supports_tag_lookup=True)


@pytest.fixture
def stash(cache: InMemoryTagStore, index: InMemoryTagStore) -> TagStash:
    return TagStash(cache, index)


class TestReadFailures:
    """Failures while answering a query."""

    def test_storage_read_fails(self, stash: TagStash, cache: InMemoryTagStore, index: InMemoryTagStore):
        stash.set(PAGE1, "foo", "bar", "baz")
        stash.set(PAGE2, "foo", "bar", "qux")
        cache.delete("foo")

        index.fail_next = True
        with pytest.raises(ForgedError):
            stash.get_all("foo")

    def test_cache_read_fails(self, stash: TagStash, cache: InMemoryTagStore):
        stash.set(PAGE1, "foo")

        cache.fail_next = True
        with pytest.raises(ForgedError):
            stash.get("foo")

    def test_cache_write_fails_on_warmup(self, stash: TagStash, cache: InMemoryTagStore):
        """Data already read from storage is not returned if it cannot be cached."""
        stash.set("https://www.example.org", "foo")
        cache.delete("foo")

        cache.fail_next_write = True
        with pytest.raises(ForgedError):
            stash.get("foo")

    def test_storage_not_consulted_for_cached_tags(self, cache: InMemoryTagStore):
        index = MagicMock()
        index.get.return_value = []
        stash = TagStash(cache, index)
        cache.set(Entry(PAGE1, "foo", 0))

        assert stash.get("foo", "bar") == PAGE1
        index.get.assert_called_once_with(["bar"])


class TestSetFailures:
    """Failures while tagging a value."""

    def test_set_fails_in_storage(self, stash: TagStash, index: InMemoryTagStore):
        """Nothing is cached for an association storage rejected."""
        index.fail_next = True

        with pytest.raises(ForgedError):
            stash.set("https://www.example.org", "foo", "bar", "baz")

        assert stash.get("foo") is None
        assert stash.get("bar") is None

    def test_partial_set_not_rolled_back(self, stash: TagStash, cache: InMemoryTagStore, index: InMemoryTagStore):
        """Tags applied before a failure are kept."""
        stash.set(PAGE1, "foo")
        cache.fail_next_write = True

        with pytest.raises(ForgedError):
            stash.set(PAGE2, "bar", "baz")

        assert [e.tag for e in index.entries if e.value == PAGE2] == ["bar"]
        assert stash.get("baz") is None

    def test_storage_before_cache(self):
        stores = MagicMock()
        stash = TagStash(stores.cache, stores.index)

        stash.set(PAGE1, "foo", "bar")

        assert stores.mock_calls == [
            call.index.set(Entry(PAGE1, "foo", 0)),
            call.cache.set(Entry(PAGE1, "foo", 0)),
            call.index.set(Entry(PAGE1, "bar", 1)),
            call.cache.set(Entry(PAGE1, "bar", 1)),
        ]


class TestGetTags:
    """Reverse lookup capability."""

    def test_from_storage(self, stash: TagStash):
        stash.set(PAGE1, "foo", "bar", "baz")
        stash.set(PAGE2, "foo", "bar", "qux")
        stash.set(PAGE3, "bar", "baz", "qux")

        assert stash.get_tags(PAGE1) == ["foo", "bar", "baz"]

    def test_from_cache(self, index: InMemoryTagStore):
        """A cache supporting reverse lookup is preferred."""
        cache = InMemoryTagStore(supports_tag_lookup=True)
        stash = TagStash(cache, index)
        stash.set(PAGE1, "foo", "bar", "baz")
        index.entries.clear()

        assert stash.get_tags(PAGE1) == ["foo", "bar", "baz"]

    def test_not_supported(self, cache: InMemoryTagStore):
        stash = TagStash(cache, InMemoryTagStore())
        stash.set(PAGE1, "foo", "bar", "baz")

        with pytest.raises(NotSupportedError):
            stash.get_tags(PAGE1)


class TestRemoveFailures:
    """Failures while removing an association."""

    def test_fail_on_cache(self, stash: TagStash, cache: InMemoryTagStore, index: InMemoryTagStore):
        """A cache failure stops the removal before storage is touched."""
        stash.set("https://www.example.org", "foo", "bar", "baz")

        cache.fail_next = True
        with pytest.raises(ForgedError):
            stash.remove("https://www.example.org", "foo")

        assert len(index.get(["foo"])) == 1

    def test_fail_on_storage(self, stash: TagStash, index: InMemoryTagStore):
        stash.set("https://www.example.org", "foo", "bar", "baz")

        index.fail_next = True
        with pytest.raises(ForgedError):
            stash.remove("https://www.example.org", "foo")

    def test_cache_before_storage(self):
        stores = MagicMock()
        TagStash(stores.cache, stores.index).remove(PAGE1, "foo")

        assert stores.mock_calls == [
            call.cache.remove(Entry(PAGE1, "foo")),
            call.index.remove(Entry(PAGE1, "foo")),
        ]


class TestDeleteFailures:
    """Failures while clearing a tag."""

    def test_fail_on_cache(self, stash: TagStash, cache: InMemoryTagStore):
        stash.set(PAGE1, "foo", "bar")
        stash.set(PAGE2, "foo", "baz")

        cache.fail_next = True
        with pytest.raises(ForgedError):
            stash.delete("foo")

    def test_fail_on_storage(self, stash: TagStash, index: InMemoryTagStore):
        stash.set(PAGE1, "foo", "bar")
        stash.set(PAGE2, "foo", "baz")

        index.fail_next = True
        with pytest.raises(ForgedError):
            stash.delete("foo")

    def test_cache_before_storage(self):
        stores = MagicMock()
        TagStash(stores.cache, stores.index).delete("foo")

        assert stores.mock_calls == [call.cache.delete("foo"), call.index.delete("foo")]


class TestClose:
    """Closing the stash."""

    def test_closes_both_stores(self, stash: TagStash, cache: InMemoryTagStore, index: InMemoryTagStore):
        stash.close()
        assert cache.closed
        assert index.closed

    def test_index_closed_when_cache_close_fails(self, index: InMemoryTagStore):
        cache = MagicMock()
        cache.close.side_effect = ForgedError("forged")

        with pytest.raises(ForgedError):
            TagStash(cache, index).close()

        assert index.closed
