"""Client operations."""

from __future__ import annotations

import logging
from typing import Any

from database import db
from forms import ClientForm, bind_payload
from models.client import Client
from models.project import Project
from services.errors import IntegrityViolationError
from services.store import fetch_or_raise, unit_of_work

logger = logging.getLogger(__name__)


def list_clients() -> list[Client]:
    with unit_of_work("listing clients", commit=False):
        return Client.query.order_by(Client.created_at.desc(), Client.id.desc()).all()


def get_client(client_id: int) -> Client:
    with unit_of_work(f"loading client {client_id}", commit=False):
        return fetch_or_raise(Client, client_id)


def create_client(payload: Any) -> Client:
    with unit_of_work("creating client"):
        form = bind_payload(ClientForm, payload)
        client = Client(name=form.name.data, address=form.address.data)
        db.session.add(client)
    return client


def update_client(client_id: int, payload: Any) -> Client:
    with unit_of_work(f"updating client {client_id}"):
        client = fetch_or_raise(Client, client_id)
        form = bind_payload(ClientForm, payload, current=client.to_dict())
        client.name = form.name.data
        client.address = form.address.data
    return client


def delete_client(client_id: int) -> dict[str, Any]:
    """Delete a client that owns no projects."""

    with unit_of_work(f"deleting client {client_id}"):
        client = fetch_or_raise(Client, client_id)
        project_count = Project.query.filter_by(client_id=client.id).count()
        if project_count:
            raise IntegrityViolationError(
                "Cannot delete client with associated projects. Delete projects first."
            )
        snapshot = client.to_dict()
        db.session.delete(client)

    logger.info("Deleted client %s", client_id)
    return {"deleted_client": snapshot}
