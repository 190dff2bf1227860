"""Local content store tests"""

import pytest

from strapi_loader.content.store import DataStore, MetaStore, generate_digest


class TestDataStore:
    """Collection-scoped entry storage"""

    @pytest.fixture
    def store(self, db_session):
        return DataStore(db_session, "strapi_posts")

    def test_set_and_get(self, store):
        assert store.set(id=1, data={"id": 1, "title": "Hello"}) is True

        entry = store.get(1)
        assert entry.data == {"id": 1, "title": "Hello"}
        assert entry.digest == generate_digest({"id": 1, "title": "Hello"})

    def test_set_unchanged_returns_false(self, store):
        store.set(id=1, data={"id": 1, "title": "Hello"})
        assert store.set(id=1, data={"title": "Hello", "id": 1}) is False

    def test_set_overwrites_changed_data(self, store):
        store.set(id=1, data={"id": 1, "title": "Hello"})
        assert store.set(id=1, data={"id": 1, "title": "Updated"}) is True
        assert store.get("1").data["title"] == "Updated"

    def test_clear_only_touches_own_collection(self, db_session, store):
        other = DataStore(db_session, "strapi_pages")
        store.set(id=1, data={"id": 1})
        other.set(id=1, data={"id": 1})

        store.clear()

        assert store.count() == 0
        assert other.count() == 1

    def test_clear_drops_loaded_entries(self, store):
        store.set(id=1, data={"id": 1})
        assert store.get(1) is not None

        store.clear()

        assert store.get(1) is None
        assert store.keys() == []

    def test_set_after_clear_reinserts(self, store):
        store.set(id=1, data={"id": 1, "v": 1})
        store.clear()
        store.set(id=1, data={"id": 1, "v": 2})
        assert store.get(1).data == {"id": 1, "v": 2}

    def test_delete_and_has(self, store):
        store.set(id="abc", data={"documentId": "abc"})
        assert store.has("abc")
        store.delete("abc")
        assert not store.has("abc")

    def test_entries_are_ordered_and_paged(self, store):
        for i in (3, 1, 2):
            store.set(id=i, data={"id": i})
        assert [e.entry_id for e in store.entries()] == ["1", "2", "3"]
        assert [e.entry_id for e in store.entries(limit=1, offset=1)] == ["2"]


class TestMetaStore:
    """Loader metadata"""

    @pytest.fixture
    def meta(self, db_session):
        return MetaStore(db_session, "strapi_posts")

    def test_missing_key(self, meta):
        assert meta.get("lastSynced") is None
        assert not meta.has("lastSynced")

    def test_set_twice_overwrites(self, meta):
        meta.set("lastSynced", "1000")
        meta.set("lastSynced", "2000")
        assert meta.get("lastSynced") == "2000"

    def test_values_are_strings(self, meta):
        meta.set("count", 5)
        assert meta.get("count") == "5"

    def test_delete(self, meta):
        meta.set("lastSynced", "1000")
        meta.delete("lastSynced")
        assert meta.get("lastSynced") is None

    def test_update_survives_clear(self, db_session, session_factory, meta):
        meta.set("lastSynced", "1000")
        db_session.commit()

        meta.set("lastSynced", "2000")
        DataStore(db_session, "strapi_posts").clear()
        db_session.commit()

        with session_factory() as fresh:
            assert MetaStore(fresh, "strapi_posts").get("lastSynced") == "2000"
