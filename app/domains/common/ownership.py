import logging
from typing import Any, Optional

from app.core.errors import forbidden, not_found

logger = logging.getLogger(__name__)


async def find_owned(
    repository: Any, owner: str, *key: Any, label: str = "item", **lookup: Any
) -> Optional[Any]:
    """Fetches an entity through repository.get(*key, **lookup) and checks its owner.

    Returns None when nothing matches the key. Raises a forbidden error when
    the entity belongs to somebody else.
    """
    entity = await repository.get(*key, **lookup)
    if entity is None:
        return None

    if entity.owner != owner:
        logger.error(
            "User %s attempted to access %s %s, which belongs to %s",
            owner, label, key, entity.owner
        )
        raise forbidden(f"Can not access {label} {_format_key(key)}, as it belongs to another user.")

    return entity


async def validate_ownership(
    repository: Any, owner: str, *key: Any, label: str = "item", **lookup: Any
) -> Any:
    """Same as find_owned, but a missing entity is a not found error"""
    entity = await find_owned(repository, owner, *key, label=label, **lookup)
    if entity is None:
        logger.error("%s %s not found for %s", label.capitalize(), key, owner)
        raise not_found(f"Can not find {label} {_format_key(key)}.")
    return entity


def _format_key(key) -> str:
    if len(key) == 1:
        return f"with ID {key[0]}"
    return "with key (" + ", ".join(str(part) for part in key) + ")"
