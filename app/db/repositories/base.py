from typing import Any, Dict, Iterable, NoReturn, Optional

from sqlalchemy.exc import IntegrityError

from app.core.db import Constraint, classify_integrity_error
from app.core.errors import bad_request, not_found


def check_fields(props: Dict[str, Any], allowed: Iterable[str]) -> None:
    """Rejects any key that is not an updatable column"""
    unknown = sorted(set(props) - set(allowed))
    if unknown:
        raise bad_request(f"Can not update field(s): {', '.join(unknown)}.")


def raise_for_integrity_error(
    err: IntegrityError,
    unique_message: Optional[str] = None,
    foreign_key_message: Optional[str] = None,
) -> NoReturn:
    """Re-raises a constraint violation as an AppError where a message is given"""
    constraint = classify_integrity_error(err)
    if constraint is Constraint.UNIQUE and unique_message:
        raise bad_request(unique_message) from err
    if constraint is Constraint.FOREIGN_KEY and foreign_key_message:
        raise not_found(foreign_key_message) from err
    raise err
