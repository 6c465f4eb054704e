"""Unit tests for ContactRepository CRUD, favorites, refresh semantics and filtering."""

from typing import Dict, List, Union, get_type_hints

import pytest

import simple_contacts.repository.contacts as repo_module
from simple_contacts import Contact, ContactRepository, ContactStore, ImportResult, MutationResult
from simple_contacts.errors import StoreWriteError


def _assert_listing_order(contacts: List[Contact]) -> None:
    keys = [(not c.favorite, c.name.lower()) for c in contacts]
    assert keys == sorted(keys)


def _by_id(repo: ContactRepository, contact_id: int) -> Contact:
    matches = [c for c in repo.contacts if c.id == contact_id]
    assert len(matches) == 1
    return matches[0]


async def test_initial_load_returns_seed_contacts(repo) -> None:
    assert [c.name for c in repo.contacts] == ["Alice Nguyen", "Bao Tran", "Cuong Le"]
    assert repo.loading is False
    assert repo.error is None


async def test_add_trims_fields_and_defaults(repo, clock) -> None:
    result = await repo.add("  Bob  ", phone="123")

    assert result.ok
    assert result.refreshed
    bob = _by_id(repo, result.contact_id)
    assert bob.name == "Bob"
    assert bob.phone == "123"
    assert bob.email is None
    assert bob.favorite is False
    assert bob.created_at == clock.now


async def test_add_turns_blank_optionals_into_none(repo) -> None:
    result = await repo.add("Dana", phone="   ", email=" dana@example.com ")

    dana = _by_id(repo, result.contact_id)
    assert dana.phone is None
    assert dana.email == "dana@example.com"


async def test_add_ids_increase(repo) -> None:
    first = await repo.add("Eve")
    second = await repo.add("Frank")
    assert second.contact_id > first.contact_id


async def test_add_rejects_blank_name(repo) -> None:
    before = list(repo.contacts)

    result = await repo.add("   ", phone="555")

    assert not result.ok
    assert "name" in result.field_errors
    assert repo.mutation_error == result.error
    assert repo.contacts == before
    assert len(await repo.list_contacts()) == 3


async def test_add_rejects_email_without_at(repo) -> None:
    result = await repo.add("Gina", email="gina.example.com")

    assert not result.ok
    assert set(result.field_errors) == {"email"}
    assert len(await repo.list_contacts()) == 3


async def test_listing_is_favorites_first_then_name_case_insensitive(repo) -> None:
    await repo.add("zed")
    await repo.add("Anna")
    await repo.add("bob")
    zed = next(c for c in repo.contacts if c.name == "zed")
    await repo.toggle_favorite(zed)

    contacts = await repo.list_contacts()
    _assert_listing_order(contacts)
    assert [c.name for c in contacts if c.favorite] == ["Alice Nguyen", "zed"]
    assert [c.name for c in contacts if not c.favorite] == [
        "Anna", "Bao Tran", "bob", "Cuong Le",
    ]


async def test_update_rewrites_fields_only(repo) -> None:
    alice = repo.contacts[0]

    result = await repo.update(alice.id, " Alice N. ", phone="0900000000", email="a@example.com")

    assert result.ok
    assert result.rows_affected == 1
    updated = _by_id(repo, alice.id)
    assert updated.name == "Alice N."
    assert updated.phone == "0900000000"
    assert updated.email == "a@example.com"
    assert updated.created_at == alice.created_at
    assert updated.favorite == alice.favorite


async def test_update_can_clear_optional_fields(repo) -> None:
    bao = next(c for c in repo.contacts if c.name == "Bao Tran")

    await repo.update(bao.id, "Bao Tran", phone="", email=None)

    assert _by_id(repo, bao.id).phone is None


async def test_update_unknown_id_is_silent_noop(repo) -> None:
    before = list(repo.contacts)

    result = await repo.update(9999, "Nobody")

    assert result.ok
    assert result.rows_affected == 0
    assert repo.contacts == before


async def test_update_rejects_blank_name(repo) -> None:
    alice = repo.contacts[0]

    result = await repo.update(alice.id, "")

    assert not result.ok
    assert _by_id(repo, alice.id).name == "Alice Nguyen"


async def test_delete_removes_row(repo) -> None:
    target = repo.contacts[1]

    result = await repo.delete(target.id)

    assert result.ok
    assert result.rows_affected == 1
    assert target.id not in {c.id for c in await repo.list_contacts()}


async def test_delete_unknown_id_is_noop(repo) -> None:
    result = await repo.delete(12345)
    assert result.ok
    assert result.rows_affected == 0
    assert len(repo.contacts) == 3


async def test_deleted_ids_are_not_reused(repo) -> None:
    added = await repo.add("Temp")
    await repo.delete(added.contact_id)

    again = await repo.add("Temp again")
    assert again.contact_id > added.contact_id


async def test_toggle_favorite_flips_only_target(repo) -> None:
    before = {c.id: c.favorite for c in repo.contacts}
    target = next(c for c in repo.contacts if c.name == "Cuong Le")

    result = await repo.toggle_favorite(target)

    assert result.ok
    after = {c.id: c.favorite for c in repo.contacts}
    for contact_id, favorite in before.items():
        expected = (not favorite) if contact_id == target.id else favorite
        assert after[contact_id] == expected


async def test_toggle_with_stale_copy_overwrites_current_state(repo) -> None:
    stale = next(c for c in repo.contacts if c.name == "Bao Tran")
    assert stale.favorite is False

    await repo.toggle_favorite(stale)
    assert _by_id(repo, stale.id).favorite is True

    # Same stale copy again: sets favorite from the copy, not from the row
    await repo.toggle_favorite(stale)
    assert _by_id(repo, stale.id).favorite is True

    fresh = _by_id(repo, stale.id)
    await repo.toggle_favorite(fresh)
    assert _by_id(repo, stale.id).favorite is False


async def test_atomic_toggle_uses_stored_value(repo) -> None:
    stale = next(c for c in repo.contacts if c.name == "Bao Tran")

    await repo.toggle_favorite(stale, atomic=True)
    assert _by_id(repo, stale.id).favorite is True

    await repo.toggle_favorite(stale, atomic=True)
    assert _by_id(repo, stale.id).favorite is False


async def test_refresh_failure_is_reported_apart_from_write(repo, monkeypatch) -> None:
    before = list(repo.contacts)

    async def broken_fetch(conn):
        raise StoreWriteError("Could not load contacts: disk I/O error")

    monkeypatch.setattr(repo_module, "fetch_contacts", broken_fetch)
    result = await repo.add("Hank", phone="777")

    assert result.ok
    assert result.contact_id is not None
    assert not result.refreshed
    assert "disk I/O error" in result.refresh_error
    assert repo.error == result.refresh_error
    assert repo.mutation_error is None
    assert repo.contacts == before

    monkeypatch.undo()
    contacts = await repo.list_contacts()
    assert "Hank" in {c.name for c in contacts}
    assert repo.error is None


async def test_write_failure_keeps_snapshot(repo, monkeypatch) -> None:
    before = list(repo.contacts)

    async def broken_insert(conn, draft, created_at, favorite=False):
        raise StoreWriteError("Could not write contact: database is locked")

    monkeypatch.setattr(repo_module, "insert_contact", broken_insert)
    result = await repo.add("Ivy")

    assert not result.ok
    assert not result.refreshed
    assert "locked" in repo.mutation_error
    assert repo.error is None
    assert repo.contacts == before


async def test_store_open_failure_sets_load_error(tmp_path, clock) -> None:
    bad_path = tmp_path / "not-a-file"
    bad_path.mkdir()
    repo = ContactRepository(ContactStore(bad_path, clock=clock), clock=clock)

    assert await repo.refresh() is False
    assert repo.error is not None
    assert repo.loading is False
    assert repo.contacts == []

    result = await repo.delete(1)
    assert not result.ok
    assert repo.mutation_error is not None


async def test_filter_state_changes_do_not_touch_store(repo, monkeypatch) -> None:
    async def no_store_access(conn):
        pytest.fail("filtering must not read the store")

    monkeypatch.setattr(repo_module, "fetch_contacts", no_store_access)

    repo.set_query("bao")
    assert [c.name for c in repo.filtered_contacts] == ["Bao Tran"]

    repo.set_query("0912")
    assert [c.name for c in repo.filtered_contacts] == ["Cuong Le"]

    repo.set_query("")
    repo.toggle_favorites_only()
    assert [c.name for c in repo.filtered_contacts] == ["Alice Nguyen"]

    repo.set_query("bao")
    assert repo.filtered_contacts == []

    repo.set_favorites_only(False)
    assert len(repo.filtered_contacts) == 1


async def test_rows_with_blank_names_still_load(repo, store) -> None:
    conn = await store.connection()
    await conn.execute(
        "INSERT INTO contacts (name, phone, favorite, created_at) VALUES ('', '000', 0, 1)"
    )
    await conn.commit()

    assert await repo.refresh() is True
    assert repo.error is None
    assert len(repo.contacts) == 4
    assert "" in {c.name for c in repo.contacts}


def test_result_helpers_are_annotated() -> None:
    invalid_hints = get_type_hints(ContactRepository._invalid)
    assert invalid_hints["field_errors"] == Dict[str, str]
    assert invalid_hints["return"] is MutationResult

    refresh_hints = get_type_hints(ContactRepository._with_refresh)
    assert refresh_hints["result"] == Union[MutationResult, ImportResult]
    assert refresh_hints["return"] == Union[MutationResult, ImportResult]
