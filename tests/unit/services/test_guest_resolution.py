"""Unit tests for guest resolution."""

from __future__ import annotations

import pytest

from hotelhub.errors import DataUnavailable
from hotelhub.services.guests import resolve_guest


@pytest.mark.unit
def test_same_email_returns_same_guest(store) -> None:
    first = resolve_guest(store, "Ana Lima", email="ana@example.com")
    second = resolve_guest(store, "Ana L.", email="ana@example.com", phone="555-0101")

    assert first == second
    assert len(store.guests) == 1


@pytest.mark.unit
def test_reused_guest_is_not_modified(store) -> None:
    guest_id = resolve_guest(store, "Ana Lima", email="ana@example.com")

    resolve_guest(store, "Someone Else", email="ana@example.com", phone="555-0101")

    assert store.guests[guest_id]["name"] == "Ana Lima"
    assert store.guests[guest_id]["phone"] is None


@pytest.mark.unit
def test_no_email_always_creates_a_guest(store) -> None:
    first = resolve_guest(store, "Ana Lima")
    second = resolve_guest(store, "Ana Lima")

    assert first != second
    assert len(store.guests) == 2
    assert "find_guest_by_email" not in store.calls


@pytest.mark.unit
def test_blank_email_counts_as_absent(store) -> None:
    guest_id = resolve_guest(store, "Bo", email="   ", phone=" 555-0199 ")

    assert store.guests[guest_id]["email"] is None
    assert store.guests[guest_id]["phone"] == "555-0199"
    assert "find_guest_by_email" not in store.calls


@pytest.mark.unit
def test_new_email_creates_guest_with_all_fields(store) -> None:
    guest_id = resolve_guest(store, "Cy", email="cy@example.com", phone="555-0102")

    assert store.guests[guest_id] == {
        "id": guest_id,
        "name": "Cy",
        "email": "cy@example.com",
        "phone": "555-0102",
        "total_stays": 0,
        "last_visit": None,
    }


@pytest.mark.unit
@pytest.mark.parametrize("failing", ["find_guest_by_email", "insert_guest"])
def test_store_failure_propagates(store, failing: str) -> None:
    store.fail_on.add(failing)

    with pytest.raises(DataUnavailable):
        resolve_guest(store, "Dee", email="dee@example.com")

    assert store.guests == {}
