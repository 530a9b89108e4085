"""
Tests for the mutation engine: account and booth writes, uniqueness rules,
cascading deletes and scope enforcement.
"""

import pytest
from sqlalchemy.exc import OperationalError

from app.core.exception import (
    DuplicateName,
    InvalidRole,
    NotAuthorized,
    NotFound,
    OutOfRange,
    StoreUnavailable,
)
from app.core.roles import Role
from app.core.security import verify_credential
from app.db.store import ACCOUNTS, BOOTHS
from app.services.mutations import MutationEngine


def _account_count(store):
    return len(store.query(ACCOUNTS))


class TestCreateAccount:

    @pytest.mark.parametrize("actor_name,role", [
        ("root", Role.ADMIN),
        ("alice", Role.SUB_ADMIN),
        ("bob", Role.LEAF),
    ])
    def test_each_role_creates_the_next_one(self, engine, hierarchy, actor_name, role):
        actor = getattr(hierarchy, actor_name)

        account = engine.create_account(actor, "newbie", "99999", role)

        assert account.id is not None
        assert account.role is role
        assert account.created_by == actor.id
        assert account.active is True
        assert verify_credential("99999", account.hashed_credential)

    @pytest.mark.parametrize("actor_name,role", [
        ("root", Role.SUB_ADMIN),
        ("root", Role.LEAF),
        ("root", Role.ROOT),
        ("alice", Role.ADMIN),
        ("alice", Role.LEAF),
        ("bob", Role.SUB_ADMIN),
        ("charlie", Role.LEAF),
    ])
    def test_any_other_edge_is_invalid_role(self, engine, store, hierarchy, actor_name, role):
        before = _account_count(store)

        with pytest.raises(InvalidRole):
            engine.create_account(getattr(hierarchy, actor_name), "newbie", "99999", role)

        assert _account_count(store) == before

    def test_duplicate_name_under_same_creator(self, engine, store, hierarchy):
        before = _account_count(store)

        with pytest.raises(DuplicateName):
            engine.create_account(hierarchy.bob, "CHARLIE", "99999", Role.LEAF)

        assert _account_count(store) == before

    def test_duplicate_check_uses_full_case_folding(self, engine, store, hierarchy):
        engine.create_account(hierarchy.bob, "Straße", "99999", Role.LEAF)
        before = _account_count(store)

        with pytest.raises(DuplicateName):
            engine.create_account(hierarchy.bob, "STRASSE", "88888", Role.LEAF)
        with pytest.raises(DuplicateName):
            engine.create_account(hierarchy.bob, "straße", "88888", Role.LEAF)

        assert _account_count(store) == before

    def test_same_name_under_different_creators_is_allowed(self, engine, hierarchy):
        """Users are namespaced by their sub admin"""
        twin = engine.create_account(hierarchy.eve, "charlie", "99999", Role.LEAF)

        assert twin.created_by == hierarchy.eve.id

    def test_admin_names_are_globally_unique(self, engine, store, hierarchy, root):
        before = _account_count(store)

        with pytest.raises(DuplicateName):
            engine.create_account(root, "Alice", "99999", Role.ADMIN)

        assert _account_count(store) == before

    def test_sub_admin_name_may_repeat_across_admins(self, engine, hierarchy, root):
        zoe = engine.create_account(root, "zoe", "22222", Role.ADMIN)

        other_bob = engine.create_account(zoe, "bob", "55555", Role.SUB_ADMIN)

        assert other_bob.created_by == zoe.id


class TestUpdateAccount:

    def test_partial_update_keeps_other_fields(self, engine, hierarchy):
        original_hash = hierarchy.charlie.hashed_credential

        updated = engine.update_account(hierarchy.bob, hierarchy.charlie.id, display_name="chuck")

        assert updated.display_name == "chuck"
        assert updated.hashed_credential == original_hash
        assert updated.active is True

    def test_credential_update(self, engine, hierarchy):
        updated = engine.update_account(hierarchy.bob, hierarchy.charlie.id, credential="77777")

        assert updated.display_name == "charlie"
        assert verify_credential("77777", updated.hashed_credential)
        assert not verify_credential("12345", updated.hashed_credential)

    def test_rename_to_sibling_name_fails(self, engine, hierarchy):
        with pytest.raises(DuplicateName):
            engine.update_account(hierarchy.bob, hierarchy.charlie.id, display_name="Diana")

        assert hierarchy.charlie.display_name == "charlie"

    def test_rename_case_only_is_allowed(self, engine, hierarchy):
        """The account itself is excluded from the uniqueness check"""
        updated = engine.update_account(hierarchy.bob, hierarchy.charlie.id, display_name="Charlie")

        assert updated.display_name == "Charlie"

    def test_rename_to_cousin_name_is_allowed(self, engine, hierarchy):
        updated = engine.update_account(hierarchy.bob, hierarchy.charlie.id, display_name="frank")

        assert updated.display_name == "frank"

    def test_missing_target(self, engine, hierarchy):
        with pytest.raises(NotFound):
            engine.update_account(hierarchy.bob, 9999, display_name="ghost")


class TestDeleteAccount:

    def test_deletes_exact_closure(self, engine, store, hierarchy):
        """Deleting a sub admin removes it and its users, nothing else"""
        bob_id, charlie_id, diana_id = hierarchy.bob.id, hierarchy.charlie.id, hierarchy.diana.id
        remaining_before = {a.id for a in store.query(ACCOUNTS)} - {bob_id, charlie_id, diana_id}

        result = engine.delete_account(hierarchy.alice, bob_id)

        assert set(result.deleted_account_ids) == {bob_id, charlie_id, diana_id}
        assert {a.id for a in store.query(ACCOUNTS)} == remaining_before
        assert store.find(ACCOUNTS, hierarchy.alice.id) is not None
        assert store.find(ACCOUNTS, hierarchy.eve.id) is not None

    def test_deleting_admin_removes_whole_branch(self, engine, store, hierarchy, root):
        alice_id = hierarchy.alice.id

        result = engine.delete_account(root, alice_id)

        assert len(result.deleted_account_ids) == 6
        assert [a.id for a in store.query(ACCOUNTS)] == [root.id]
        # Booths survive and all of them lost their assignee
        booths = store.query(BOOTHS)
        assert len(booths) == 4
        assert all(booth.assigned_to is None for booth in booths)

    def test_orphans_booths_without_touching_selection(self, engine, store, hierarchy):
        charlie_id, hall_a_id = hierarchy.charlie.id, hierarchy.hall_a.id

        result = engine.delete_account(hierarchy.bob, charlie_id)

        booth = store.get(BOOTHS, hall_a_id)
        assert result.deleted_account_ids == [charlie_id]
        assert result.orphaned_booth_ids == [hall_a_id]
        assert booth.assigned_to is None
        assert booth.selected_votes == [5, 12, 25]
        assert booth.vote_count == 100
        assert booth.created_by == hierarchy.bob.id

    def test_booths_of_deleted_sub_admin_are_kept(self, engine, store, hierarchy):
        bob_id, hall_b_id = hierarchy.bob.id, hierarchy.hall_b.id

        engine.delete_account(hierarchy.alice, bob_id)

        booth = store.get(BOOTHS, hall_b_id)
        assert booth.created_by == bob_id
        assert booth.assigned_to is None

    def test_failed_cascade_applies_nothing(self, engine, store, hierarchy, monkeypatch):
        """A store failure midway leaves every account and booth as it was"""
        # Arrange
        bob_id, charlie_id, hall_a_id = hierarchy.bob.id, hierarchy.charlie.id, hierarchy.hall_a.id
        before = {a.id for a in store.query(ACCOUNTS)}
        original_delete = store._apply_delete
        calls = []

        def flaky_delete(collection, record_id):
            calls.append(record_id)
            if len(calls) == 2:
                raise OperationalError("DELETE", {}, Exception("disk I/O error"))
            return original_delete(collection, record_id)

        monkeypatch.setattr(store, "_apply_delete", flaky_delete)

        # Act
        with pytest.raises(StoreUnavailable):
            engine.delete_account(hierarchy.alice, bob_id)

        # Assert
        monkeypatch.undo()
        assert {a.id for a in store.query(ACCOUNTS)} == before
        assert store.get(BOOTHS, hall_a_id).assigned_to == charlie_id

    def test_missing_target(self, engine, hierarchy):
        with pytest.raises(NotFound):
            engine.delete_account(hierarchy.root, 9999)


class TestToggleAccountStatus:

    def test_toggle_twice_restores_status(self, engine, hierarchy):
        charlie_id = hierarchy.charlie.id

        first = engine.toggle_account_status(hierarchy.bob, charlie_id)
        assert first.active is False

        second = engine.toggle_account_status(hierarchy.bob, charlie_id)
        assert second.active is True

    def test_toggle_does_not_cascade(self, engine, store, hierarchy):
        engine.toggle_account_status(hierarchy.alice, hierarchy.bob.id)

        assert store.get(ACCOUNTS, hierarchy.bob.id).active is False
        assert store.get(ACCOUNTS, hierarchy.charlie.id).active is True
        assert store.get(ACCOUNTS, hierarchy.diana.id).active is True

    def test_missing_target(self, engine, hierarchy):
        with pytest.raises(NotFound):
            engine.toggle_account_status(hierarchy.bob, 9999)


class TestCreateBooth:

    def test_creates_empty_booth(self, engine, hierarchy):
        booth = engine.create_booth(hierarchy.bob, "Lobby", 25, hierarchy.diana.id)

        assert booth.id is not None
        assert booth.created_by == hierarchy.bob.id
        assert booth.assigned_to == hierarchy.diana.id
        assert booth.selected_votes == []

    def test_unassigned_booth(self, engine, hierarchy):
        booth = engine.create_booth(hierarchy.bob, "Lobby", 25)

        assert booth.assigned_to is None

    def test_assignee_must_exist(self, engine, hierarchy):
        with pytest.raises(NotFound):
            engine.create_booth(hierarchy.bob, "Lobby", 25, 9999)

    def test_assignee_must_be_a_user(self, engine, hierarchy):
        with pytest.raises(InvalidRole):
            engine.create_booth(hierarchy.bob, "Lobby", 25, hierarchy.eve.id)

    @pytest.mark.parametrize("vote_count", [0, -1, 10001])
    def test_vote_count_bounds(self, engine, store, hierarchy, vote_count):
        before = len(store.query(BOOTHS))

        with pytest.raises(OutOfRange):
            engine.create_booth(hierarchy.bob, "Lobby", vote_count)

        assert len(store.query(BOOTHS)) == before


class TestScopeEnforcement:
    """Ownership checks the engine adds on top of existence checks"""

    def test_cannot_update_account_outside_scope(self, engine, hierarchy):
        with pytest.raises(NotAuthorized):
            engine.update_account(hierarchy.eve, hierarchy.charlie.id, display_name="stolen")

    def test_cannot_delete_self_or_ancestor(self, engine, store, hierarchy):
        with pytest.raises(NotAuthorized):
            engine.delete_account(hierarchy.bob, hierarchy.bob.id)
        with pytest.raises(NotAuthorized):
            engine.delete_account(hierarchy.bob, hierarchy.alice.id)

        assert store.find(ACCOUNTS, hierarchy.bob.id) is not None

    def test_cannot_toggle_grandchild(self, engine, hierarchy):
        with pytest.raises(NotAuthorized):
            engine.toggle_account_status(hierarchy.alice, hierarchy.charlie.id)

    def test_only_sub_admins_create_booths(self, engine, hierarchy):
        with pytest.raises(InvalidRole):
            engine.create_booth(hierarchy.alice, "Lobby", 25)

    def test_cannot_assign_booth_to_another_sub_admins_user(self, engine, hierarchy):
        with pytest.raises(NotAuthorized):
            engine.create_booth(hierarchy.bob, "Lobby", 25, hierarchy.frank.id)

    def test_selection_by_assignee_or_creator_only(self, engine, hierarchy):
        engine.update_booth_selection(hierarchy.charlie, hierarchy.hall_a.id, [1])
        engine.update_booth_selection(hierarchy.bob, hierarchy.hall_a.id, [2])

        with pytest.raises(NotAuthorized):
            engine.update_booth_selection(hierarchy.diana, hierarchy.hall_a.id, [3])

    def test_unenforced_engine_checks_existence_only(self, store, hierarchy):
        """With enforcement off any actor may touch any existing record"""
        lax = MutationEngine(store, enforce_scope=False)

        renamed = lax.update_account(hierarchy.frank, hierarchy.charlie.id, display_name="chuck")
        booth = lax.create_booth(hierarchy.alice, "Lobby", 25, hierarchy.frank.id)
        selected = lax.update_booth_selection(hierarchy.diana, hierarchy.hall_a.id, [7])

        assert renamed.display_name == "chuck"
        assert booth.created_by == hierarchy.alice.id
        assert selected.selected_votes == [7]

        with pytest.raises(NotFound):
            lax.update_account(hierarchy.frank, 9999, display_name="ghost")
