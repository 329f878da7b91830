import logging
import sqlite3

from freightdesk.db.repositories.load_repo import get_load_by_id
from freightdesk.db.repositories.organization_repo import is_member
from freightdesk.errors import AuthorizationError
from freightdesk.models.auth import AuthContext

log = logging.getLogger(__name__)


def authorize(conn: sqlite3.Connection, ctx: AuthContext) -> None:
    """Raise unless the actor belongs to the organization they act for."""
    if not is_member(conn, ctx.org_id, ctx.user_id):
        log.warning("Rejected actor: user_id=%s is not a member of org_id=%s",
                    ctx.user_id, ctx.org_id)
        raise AuthorizationError(
            f"User {ctx.user_id} is not a member of organization {ctx.org_id}"
        )


def get_scoped_load(
    conn: sqlite3.Connection, ctx: AuthContext, load_id: str
) -> dict | None:
    """Fetch a load, refusing loads owned by another organization."""
    load = get_load_by_id(conn, load_id)
    if load is None:
        return None
    if load["org_id"] != ctx.org_id:
        log.warning("Cross-tenant access: load_id=%s org_id=%s requested by org_id=%s",
                    load_id, load["org_id"], ctx.org_id)
        raise AuthorizationError(
            f"Load {load_id} does not belong to organization {ctx.org_id}"
        )
    return load
