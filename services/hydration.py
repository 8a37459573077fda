"""Serialize records with their related records inlined.

Relations are named explicitly by the caller, one dotted path per nesting
level, so ``hydrate(project, ("client", "tasks.assigned_team_member"))``
returns the project with its client and with each task carrying its
assigned team member. Related records not named stay as plain ids.
"""

from __future__ import annotations

from typing import Any, Iterable


def _split_paths(include: Iterable[str]) -> dict[str, list[str]]:
    nested: dict[str, list[str]] = {}
    for path in include:
        relation, _, rest = path.partition(".")
        children = nested.setdefault(relation, [])
        if rest:
            children.append(rest)
    return nested


def hydrate(entity: Any, include: Iterable[str] = ()) -> dict[str, Any]:
    """Return ``entity.to_dict()`` with the relations in ``include`` inlined."""

    payload = entity.to_dict()
    for relation, children in _split_paths(include).items():
        if not hasattr(type(entity), relation):
            raise ValueError(f"{type(entity).__name__} has no relation '{relation}'")
        value = getattr(entity, relation)
        if value is None:
            payload[relation] = None
        elif isinstance(value, list):
            payload[relation] = [hydrate(item, children) for item in value]
        else:
            payload[relation] = hydrate(value, children)
    return payload


def hydrate_all(entities: Iterable[Any], include: Iterable[str] = ()) -> list[dict[str, Any]]:
    include = tuple(include)
    return [hydrate(entity, include) for entity in entities]


__all__ = ["hydrate", "hydrate_all"]
