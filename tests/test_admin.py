from dataclasses import replace

import pytest

from logic.admin import (
    ITEMS_PER_PAGE,
    SUMMARY_CARDS,
    delete_user,
    filter_users,
    initial_users,
    paginate,
    update_user,
)


def test_initial_users():
    users = initial_users()
    assert len(users) == 15
    assert [u.id for u in users] == list(range(1, 16))


def test_filter_by_name_and_email():
    users = initial_users()
    assert len(filter_users(users, "")) == 15
    assert {u.id for u in filter_users(users, "KIM")} == {1, 11, 15}
    assert [u.id for u in filter_users(users, "iu@")] == [13]


def test_paginate():
    users = initial_users()
    page, number, total = paginate(users, 1)
    assert len(page) == ITEMS_PER_PAGE
    assert (number, total) == (1, 3)

    page, number, total = paginate(users, 99)
    assert number == 3
    assert [u.id for u in page] == [11, 12, 13, 14, 15]


def test_paginate_empty():
    assert paginate([], 5) == ([], 1, 1)


def test_update_user():
    users = initial_users()
    edited = replace(users[0], role="admin", status="banned")
    updated = update_user(users, edited)
    assert updated[0].role == "admin"
    assert updated[0].status == "banned"
    assert users[0].role == "user"


def test_update_user_rejects_unknown_values():
    users = initial_users()
    with pytest.raises(ValueError):
        update_user(users, replace(users[0], role="root"))
    with pytest.raises(ValueError):
        update_user(users, replace(users[0], status="gone"))


def test_delete_user():
    users = delete_user(initial_users(), 3)
    assert len(users) == 14
    assert 3 not in {u.id for u in users}


def test_summary_cards():
    assert SUMMARY_CARDS[0][:2] == ("Total users", "1,234")
