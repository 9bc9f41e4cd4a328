"""Tests for the client commands and their conflict reporting."""

from __future__ import annotations

import logging

import pytest

from fitflow.domain.models import (
    Client,
    ClientEditRequest,
    RecurringSchedule,
    TimeRange,
)
from fitflow.repos.memory import ClientRepository
from fitflow.services.clients import (
    DuplicateClientError,
    DuplicatePhoneError,
    InvalidClientIndexError,
    NothingToEditError,
    add_client,
    delete_client,
    edit_client,
    find_clients,
    list_clients,
)


def _monday(start: str, end: str) -> RecurringSchedule:
    return RecurringSchedule(day="Monday", time_range=TimeRange(start=start, end=end))


@pytest.fixture()
def repo() -> ClientRepository:
    repo = ClientRepository()
    repo.add(Client(name="Alice Tan", phone="91111111", recurring_schedules=[_monday("0900", "1000")]))
    repo.add(Client(name="Bob Lee", phone="92222222", location="Gym A"))
    return repo


# ---------------------------------------------------------------------------
# add
# ---------------------------------------------------------------------------


def test_add_without_conflicts(repo):
    client = Client(name="Carol Ng", phone="93333333", recurring_schedules=[_monday("1000", "1100")])

    response = add_client(repo, client)

    assert response.conflicts == []
    assert response.message == "New client added: Carol Ng; Phone: 93333333"
    assert repo.list_all()[-1] == client


def test_add_with_conflict_still_saves(repo, caplog):
    client = Client(name="Carol Ng", phone="93333333", recurring_schedules=[_monday("0930", "1030")])

    with caplog.at_level(logging.WARNING, logger="fitflow.services.clients"):
        response = add_client(repo, client)

    assert response.conflicts == [
        "Recurring schedule conflict between 0900-1000 with Alice Tan and 0930-1030 with Carol Ng"
    ]
    assert response.message == (
        "Note: The client has been added, but there are schedule conflicts:\n\n"
        "Recurring schedule conflict between 0900-1000 with Alice Tan and 0930-1030 with Carol Ng\n\n"
        "New client added: Carol Ng; Phone: 93333333"
    )
    assert client in repo.list_all()
    assert "1 schedule conflict" in caplog.text


def test_add_duplicate_name_rejected(repo):
    with pytest.raises(DuplicateClientError):
        add_client(repo, Client(name="Alice Tan", phone="99999999"))
    assert len(repo.list_all()) == 2


def test_add_duplicate_phone_rejected(repo):
    with pytest.raises(DuplicatePhoneError):
        add_client(repo, Client(name="Someone Else", phone="91111111"))


# ---------------------------------------------------------------------------
# edit
# ---------------------------------------------------------------------------


def test_edit_keeps_unspecified_fields(repo):
    response = edit_client(repo, 2, ClientEditRequest(phone="98888888"))

    edited = repo.list_all()[1]
    assert edited.name == "Bob Lee"
    assert edited.phone == "98888888"
    assert edited.location == "Gym A"
    assert response.message == "Edited Client: Bob Lee; Phone: 98888888; Location: Gym A"


def test_edit_does_not_conflict_with_replaced_record(repo):
    response = edit_client(
        repo, 1, ClientEditRequest(recurring_schedules=[_monday("0900", "0930")])
    )

    assert response.conflicts == []
    assert repo.list_all()[0].recurring_schedules == (_monday("0900", "0930"),)


def test_edit_reports_internal_and_external_conflicts(repo):
    response = edit_client(
        repo,
        2,
        ClientEditRequest(recurring_schedules=[_monday("0930", "1030"), _monday("1000", "1100")]),
    )

    assert response.conflicts == [
        "Recurring schedule conflict between Monday 0930-1030 and Monday 1000-1100 for Bob Lee",
        "Recurring schedule conflict between 0900-1000 with Alice Tan and 0930-1030 with Bob Lee",
    ]
    assert response.message.startswith(
        "Note: The client has been edited, but there are schedule conflicts:\n\n"
    )
    assert response.message.endswith("Edited Client: Bob Lee; Phone: 92222222; Location: Gym A")
    assert repo.list_all()[1].recurring_schedules == (
        _monday("0930", "1030"),
        _monday("1000", "1100"),
    )


def test_edit_requires_a_field(repo):
    with pytest.raises(NothingToEditError):
        edit_client(repo, 1, ClientEditRequest())


def test_edit_invalid_index(repo):
    with pytest.raises(InvalidClientIndexError):
        edit_client(repo, 3, ClientEditRequest(phone="90000000"))
    with pytest.raises(InvalidClientIndexError):
        edit_client(repo, 0, ClientEditRequest(phone="90000000"))


def test_edit_to_existing_name_rejected(repo):
    with pytest.raises(DuplicateClientError):
        edit_client(repo, 2, ClientEditRequest(name="Alice Tan"))


def test_edit_to_existing_phone_rejected(repo):
    with pytest.raises(DuplicatePhoneError):
        edit_client(repo, 2, ClientEditRequest(phone="91111111"))


def test_edit_index_follows_displayed_list(repo):
    find_clients(repo, ["bob"])

    edit_client(repo, 1, ClientEditRequest(goals="Run a 10k"))

    assert repo.list_all()[1].goals == "Run a 10k"
    assert repo.list_all()[0].goals is None
    assert len(repo.list_filtered()) == 2


# ---------------------------------------------------------------------------
# delete / list / find
# ---------------------------------------------------------------------------


def test_delete_client(repo):
    response = delete_client(repo, 1)

    assert response.client.name == "Alice Tan"
    assert response.message.startswith("Deleted Client: Alice Tan")
    assert [c.name for c in repo.list_all()] == ["Bob Lee"]


def test_delete_invalid_index(repo):
    with pytest.raises(InvalidClientIndexError):
        delete_client(repo, 5)


def test_list_clients(repo):
    response = list_clients(repo)
    assert response.message == "Listed all clients"
    assert len(response.clients) == 2


def test_list_empty_roster():
    response = list_clients(ClientRepository())
    assert response.message == "No clients found, start adding clients using the Add command!"
    assert response.clients == []


def test_find_matches_whole_words_ignoring_case(repo):
    response = find_clients(repo, ["TAN"])
    assert [c.name for c in response.clients] == ["Alice Tan"]
    assert response.message == "1 clients listed!"

    assert find_clients(repo, ["Ta"]).clients == []
