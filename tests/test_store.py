"""
Tests for the entity store: the persistence primitives every service uses.
"""

import pytest
from unittest.mock import MagicMock
from sqlalchemy.exc import OperationalError

from app.core.exception import NotFound, StoreUnavailable
from app.core.roles import Role
from app.db.store import ACCOUNTS, BOOTHS, Delete, EntityStore, Insert, Update


def _account(name, role=Role.ADMIN, created_by=None):
    return {
        "display_name": name,
        "hashed_credential": "not-a-real-hash",
        "role": role,
        "created_by": created_by,
    }


def test_insert_assigns_id(store):
    """Insert assigns an id when the record has none"""
    account = store.insert(ACCOUNTS, _account("alice"))

    assert account.id is not None
    assert account.active is True  # Default value
    assert store.get(ACCOUNTS, account.id) is account


def test_get_missing_record_raises_not_found(store):
    with pytest.raises(NotFound):
        store.get(BOOTHS, 404)
    assert store.find(BOOTHS, 404) is None


def test_query_equality_and_membership(store):
    """Scalar filters test equality, collections test membership"""
    # Arrange
    a = store.insert(ACCOUNTS, _account("a"))
    b = store.insert(ACCOUNTS, _account("b"))
    c = store.insert(ACCOUNTS, _account("c", Role.SUB_ADMIN, created_by=a.id))

    # Act & Assert
    assert [x.id for x in store.query(ACCOUNTS, role=Role.ADMIN)] == [a.id, b.id]
    assert [x.id for x in store.query(ACCOUNTS, created_by=a.id)] == [c.id]
    assert [x.id for x in store.query(ACCOUNTS, id={a.id, c.id})] == [a.id, c.id]
    assert [x.id for x in store.query(ACCOUNTS, created_by=None)] == [a.id, b.id]
    assert store.query(ACCOUNTS, id=set()) == []


def test_query_rejects_unknown_field(store):
    with pytest.raises(ValueError):
        store.query(ACCOUNTS, favourite_colour="blue")


def test_unknown_collection(store):
    with pytest.raises(ValueError):
        store.query("polls")


def test_update_merges_fields(store):
    account = store.insert(ACCOUNTS, _account("alice"))

    store.update(ACCOUNTS, account.id, {"active": False})

    refreshed = store.get(ACCOUNTS, account.id)
    assert refreshed.active is False
    assert refreshed.display_name == "alice"


def test_update_missing_record_raises_not_found(store):
    with pytest.raises(NotFound):
        store.update(ACCOUNTS, 999, {"active": False})


def test_delete_is_idempotent(store):
    account = store.insert(ACCOUNTS, _account("alice"))

    store.delete(ACCOUNTS, account.id)
    store.delete(ACCOUNTS, account.id)

    assert store.find(ACCOUNTS, account.id) is None


def test_batch_applies_all_operations(store):
    admin = store.insert(ACCOUNTS, _account("alice"))
    booth = store.insert(BOOTHS, {"name": "Hall", "vote_count": 10, "created_by": admin.id})

    store.batch([
        Insert(ACCOUNTS, _account("bob")),
        Update(BOOTHS, booth.id, {"name": "Main Hall"}),
        Delete(ACCOUNTS, admin.id),
    ])

    assert store.get(BOOTHS, booth.id).name == "Main Hall"
    assert store.find(ACCOUNTS, admin.id) is None
    assert [a.display_name for a in store.query(ACCOUNTS)] == ["bob"]


def test_batch_is_all_or_nothing(store):
    """A failing operation rolls back the ones before it"""
    # Arrange
    admin = store.insert(ACCOUNTS, _account("alice"))
    admin_id = admin.id
    booth = store.insert(BOOTHS, {"name": "Hall", "vote_count": 10, "created_by": admin_id})
    booth_id = booth.id

    # Act
    with pytest.raises(NotFound):
        store.batch([
            Update(BOOTHS, booth_id, {"name": "Renamed"}),
            Delete(ACCOUNTS, admin_id),
            Update(ACCOUNTS, 12345, {"active": False}),
        ])

    # Assert
    assert store.get(BOOTHS, booth_id).name == "Hall"
    assert store.find(ACCOUNTS, admin_id) is not None


def test_batch_rejects_unknown_operation(store):
    with pytest.raises(TypeError):
        store.batch([("insert", ACCOUNTS, {})])


def test_selected_votes_default_to_empty(store):
    booth = store.insert(BOOTHS, {"name": "Hall", "vote_count": 10, "created_by": 1})

    assert booth.selected_votes == []
    assert booth.assigned_to is None


class TestStoreUnavailable:
    """Database failures surface as StoreUnavailable without retries"""

    @staticmethod
    def _failure():
        return OperationalError("SELECT 1", {}, Exception("database is locked"))

    def test_get_failure(self):
        session = MagicMock()
        session.get.side_effect = self._failure()

        with pytest.raises(StoreUnavailable) as exc_info:
            EntityStore(session).get(ACCOUNTS, 1)

        assert isinstance(exc_info.value.__cause__, OperationalError)
        assert session.get.call_count == 1

    def test_query_failure(self):
        session = MagicMock()
        session.query.side_effect = self._failure()

        with pytest.raises(StoreUnavailable):
            EntityStore(session).query(BOOTHS)

    def test_insert_failure_rolls_back(self):
        session = MagicMock()
        session.commit.side_effect = self._failure()

        with pytest.raises(StoreUnavailable):
            EntityStore(session).insert(ACCOUNTS, _account("alice"))

        session.rollback.assert_called_once()

    def test_refresh_failure_after_insert(self):
        session = MagicMock()
        session.refresh.side_effect = self._failure()

        with pytest.raises(StoreUnavailable) as exc_info:
            EntityStore(session).insert(ACCOUNTS, _account("alice"))

        assert isinstance(exc_info.value.__cause__, OperationalError)

    def test_batch_failure_rolls_back(self):
        session = MagicMock()
        session.flush.side_effect = self._failure()

        with pytest.raises(StoreUnavailable):
            EntityStore(session).batch([Delete(ACCOUNTS, 1)])

        session.rollback.assert_called_once()
        session.commit.assert_not_called()


def test_name_key_follows_display_name(store):
    """The lookup key is kept in step with the display name on insert and update"""
    account = store.insert(ACCOUNTS, _account("Émile"))
    assert account.display_name_key == "émile"

    store.update(ACCOUNTS, account.id, {"display_name": "Straße"})

    assert store.get(ACCOUNTS, account.id).display_name_key == "strasse"
    assert [a.id for a in store.query(ACCOUNTS, display_name_key="strasse")] == [account.id]
