"""In-memory roster of clients."""

from __future__ import annotations

from typing import Callable

from fitflow.domain.models import Client

ClientPredicate = Callable[[Client], bool]


def show_all_clients(client: Client) -> bool:
    return True


class NameContainsKeywords:
    """Matches clients whose name contains any keyword as a whole word, ignoring case."""

    def __init__(self, keywords: list[str]) -> None:
        self.keywords = [k.lower() for k in keywords if k.strip()]

    def __call__(self, client: Client) -> bool:
        words = client.name.lower().split()
        return any(keyword in words for keyword in self.keywords)


class ClientRepository:
    """List-backed store for Client instances, kept in insertion order.

    Also tracks the predicate for the currently displayed list, which is
    what user-facing indices refer to.
    """

    def __init__(self) -> None:
        self._clients: list[Client] = []
        self._predicate: ClientPredicate = show_all_clients

    def add(self, client: Client) -> None:
        self._clients.append(client)

    def list_all(self) -> list[Client]:
        return list(self._clients)

    def has_client(self, client: Client) -> bool:
        return any(c.is_same_client(client) for c in self._clients)

    def has_phone(self, client: Client) -> bool:
        return any(c.has_same_phone(client) for c in self._clients)

    def set_client(self, target: Client, edited: Client) -> None:
        """Replace *target* with *edited*, keeping its position in the roster."""
        index = self._clients.index(target)
        self._clients[index] = edited

    def delete(self, client: Client) -> None:
        self._clients.remove(client)

    def update_filter(self, predicate: ClientPredicate) -> None:
        self._predicate = predicate

    def list_filtered(self) -> list[Client]:
        return [c for c in self._clients if self._predicate(c)]

    def clear(self) -> None:
        self._clients.clear()
        self._predicate = show_all_clients
