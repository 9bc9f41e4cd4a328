"""FastAPI application: entry point for the FitFlow client service."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException, Query

from fitflow.config import configure_logging
from fitflow.domain.models import (
    Client,
    ClientCommandResponse,
    ClientEditRequest,
    ClientListResponse,
)
from fitflow.repos.memory import ClientRepository
from fitflow.services.clients import (
    CommandError,
    InvalidClientIndexError,
    add_client,
    delete_client,
    edit_client,
    find_clients,
    list_clients,
)

configure_logging()

app = FastAPI(title="FitFlow Client Service")

# ── Singletons (created at import time for simplicity) ────────────────
client_repo = ClientRepository()


def _http_error(exc: CommandError) -> HTTPException:
    status_code = 404 if isinstance(exc, InvalidClientIndexError) else 400
    return HTTPException(status_code=status_code, detail=str(exc))


# ── Routes ────────────────────────────────────────────────────────────


@app.get("/clients", response_model=ClientListResponse)
def get_clients() -> ClientListResponse:
    """Return every client and reset the displayed list to show all."""
    return list_clients(client_repo)


@app.get("/clients/find", response_model=ClientListResponse)
def find(keyword: list[str] = Query()) -> ClientListResponse:
    """Narrow the displayed list to clients whose name contains a keyword."""
    return find_clients(client_repo, keyword)


@app.post("/clients", response_model=ClientCommandResponse)
def create_client(client: Client) -> ClientCommandResponse:
    """Add a client. Schedule conflicts are reported but never block the add."""
    try:
        return add_client(client_repo, client)
    except CommandError as exc:
        raise _http_error(exc) from exc


@app.patch("/clients/{index}", response_model=ClientCommandResponse)
def update_client(index: int, body: ClientEditRequest) -> ClientCommandResponse:
    """Edit the client at the 1-based *index* of the displayed list."""
    try:
        return edit_client(client_repo, index, body)
    except CommandError as exc:
        raise _http_error(exc) from exc


@app.delete("/clients/{index}", response_model=ClientCommandResponse)
def remove_client(index: int) -> ClientCommandResponse:
    try:
        return delete_client(client_repo, index)
    except CommandError as exc:
        raise _http_error(exc) from exc
