"""Client commands: add, edit, delete, list and find."""

from __future__ import annotations

import logging

from fitflow.domain.models import (
    Client,
    ClientCommandResponse,
    ClientEditRequest,
    ClientListResponse,
)
from fitflow.repos.memory import ClientRepository, NameContainsKeywords, show_all_clients
from fitflow.services.conflict_report import (
    build_conflict_message,
    find_all_schedule_conflicts,
)

logger = logging.getLogger(__name__)

MESSAGE_ADD_SUCCESS = "New client added: {}"
MESSAGE_ADD_CONFLICT = "Note: The client has been added, but there are schedule conflicts:\n\n"
MESSAGE_EDIT_SUCCESS = "Edited Client: {}"
MESSAGE_EDIT_CONFLICT = "Note: The client has been edited, but there are schedule conflicts:\n\n"
MESSAGE_DELETE_SUCCESS = "Deleted Client: {}"
MESSAGE_LIST_SUCCESS = "Listed all clients"
MESSAGE_EMPTY_LIST = "No clients found, start adding clients using the Add command!"
MESSAGE_FIND_SUCCESS = "{} clients listed!"


class CommandError(Exception):
    """Base class for errors that reject a command without changing the roster."""


class InvalidClientIndexError(CommandError):
    def __init__(self, index: int) -> None:
        super().__init__(f"The client index provided is invalid: {index}")
        self.index = index


class DuplicateClientError(CommandError):
    def __init__(self) -> None:
        super().__init__("This client already exists in the FitFlow.")


class DuplicatePhoneError(CommandError):
    def __init__(self) -> None:
        super().__init__("The phone number provided already exists in FitFlow.")


class NothingToEditError(CommandError):
    def __init__(self) -> None:
        super().__init__("At least one field to edit must be provided.")


def format_client(client: Client) -> str:
    parts = [client.name, f"Phone: {client.phone}"]
    if client.location:
        parts.append(f"Location: {client.location}")
    if client.goals:
        parts.append(f"Goals: {client.goals}")
    if client.medical_history:
        parts.append(f"Medical History: {client.medical_history}")
    if client.tags:
        parts.append("Tags: " + "".join(f"[{tag}]" for tag in client.tags))
    return "; ".join(parts)


def add_client(repo: ClientRepository, client: Client) -> ClientCommandResponse:
    """Add *client* to the roster and report any schedule conflicts it introduces.

    Conflicts are advisory: the client is stored either way.
    """
    if repo.has_client(client):
        raise DuplicateClientError()
    if repo.has_phone(client):
        raise DuplicatePhoneError()

    conflicts = find_all_schedule_conflicts(repo.list_all(), client)
    repo.add(client)
    logger.info("Added client %s", client.name)

    return _committed(
        client,
        conflicts,
        header=MESSAGE_ADD_CONFLICT,
        success=MESSAGE_ADD_SUCCESS.format(format_client(client)),
    )


def edit_client(
    repo: ClientRepository, index: int, request: ClientEditRequest
) -> ClientCommandResponse:
    """Overwrite the fields given in *request* on the client at 1-based *index*.

    *index* refers to the currently displayed list. The edited record is
    checked for conflicts against every other client, never against the
    record it replaces.
    """
    target = _client_at(repo, index)
    updates = request.updates()
    if not updates:
        raise NothingToEditError()

    edited = create_edited_client(target, updates)
    if not target.is_same_client(edited) and repo.has_client(edited):
        raise DuplicateClientError()
    if not target.has_same_phone(edited) and repo.has_phone(edited):
        raise DuplicatePhoneError()

    conflicts = find_all_schedule_conflicts(repo.list_all(), edited, replaced=target)
    repo.set_client(target, edited)
    repo.update_filter(show_all_clients)
    logger.info("Edited client %s", edited.name)

    return _committed(
        edited,
        conflicts,
        header=MESSAGE_EDIT_CONFLICT,
        success=MESSAGE_EDIT_SUCCESS.format(format_client(edited)),
    )


def create_edited_client(target: Client, updates: dict) -> Client:
    fields = {name: getattr(target, name) for name in Client.model_fields}
    fields.update(updates)
    return Client(**fields)


def delete_client(repo: ClientRepository, index: int) -> ClientCommandResponse:
    target = _client_at(repo, index)
    repo.delete(target)
    logger.info("Deleted client %s", target.name)
    return ClientCommandResponse(
        message=MESSAGE_DELETE_SUCCESS.format(format_client(target)), client=target
    )


def list_clients(repo: ClientRepository) -> ClientListResponse:
    repo.update_filter(show_all_clients)
    clients = repo.list_filtered()
    message = MESSAGE_LIST_SUCCESS if clients else MESSAGE_EMPTY_LIST
    return ClientListResponse(message=message, clients=clients)


def find_clients(repo: ClientRepository, keywords: list[str]) -> ClientListResponse:
    repo.update_filter(NameContainsKeywords(keywords))
    clients = repo.list_filtered()
    return ClientListResponse(
        message=MESSAGE_FIND_SUCCESS.format(len(clients)), clients=clients
    )


def _client_at(repo: ClientRepository, index: int) -> Client:
    shown = repo.list_filtered()
    if index < 1 or index > len(shown):
        raise InvalidClientIndexError(index)
    return shown[index - 1]


def _committed(
    client: Client, conflicts: list[str], header: str, success: str
) -> ClientCommandResponse:
    if conflicts:
        logger.warning(
            "Saved %s with %d schedule conflict(s)", client.name, len(conflicts)
        )
    return ClientCommandResponse(
        message=build_conflict_message(header, conflicts, success),
        client=client,
        conflicts=conflicts,
    )
