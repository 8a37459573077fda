"""Transaction and lookup helpers shared by the entity services."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Type, TypeVar

from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    OperationalError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)

from database import db
from services.errors import (
    IntegrityViolationError,
    NotFoundError,
    ServiceError,
    StoreUnavailableError,
)

ModelT = TypeVar("ModelT")

# Largest primary key a signed 64-bit integer column holds
MAX_ENTITY_ID = 2**63 - 1

STORE_UNAVAILABLE_MESSAGE = "The database is temporarily unavailable. Please try again."


@contextmanager
def unit_of_work(action: str, *, commit: bool = True) -> Iterator[None]:
    """Run the enclosed reads and writes as a single transaction.

    The session is committed once when the block exits cleanly and rolled
    back on any failure, so a cascade is either fully applied or not at all.
    SQLAlchemy errors are translated into typed service errors.

    Arguments:
        action -- short description used in log messages ("deleting project 3")
        commit -- False for read-only blocks
    """
    try:
        yield
        if commit:
            db.session.commit()
    except ServiceError:
        db.session.rollback()
        raise
    except (OperationalError, DisconnectionError, PoolTimeoutError) as exc:
        db.session.rollback()
        logging.error("Database unavailable while %s: %s", action, exc, exc_info=True)
        raise StoreUnavailableError(STORE_UNAVAILABLE_MESSAGE) from exc
    except IntegrityError as exc:
        db.session.rollback()
        logging.error("Integrity error while %s: %s", action, exc, exc_info=True)
        raise IntegrityViolationError(
            "The change conflicts with related records and was not applied."
        ) from exc
    except SQLAlchemyError as exc:
        db.session.rollback()
        logging.exception("Database error while %s", action)
        raise ServiceError(f"An unexpected database error occurred while {action}.") from exc


def id_in_range(entity_id: Optional[int]) -> bool:
    """True when ``entity_id`` can be stored in a primary key column."""
    return entity_id is not None and 1 <= entity_id <= MAX_ENTITY_ID


def fetch_or_raise(model: Type[ModelT], entity_id: Optional[int], label: str | None = None) -> ModelT:
    """Return the record with ``entity_id`` or raise :class:`NotFoundError`."""

    entity = None
    if id_in_range(entity_id):
        entity = db.session.get(model, entity_id)
    if entity is None:
        raise NotFoundError(f"{label or model.__name__} not found")
    return entity


__all__ = ["MAX_ENTITY_ID", "fetch_or_raise", "id_in_range", "unit_of_work"]
