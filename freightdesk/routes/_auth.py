from fastapi import Header, HTTPException, Security
from fastapi.security import APIKeyHeader
from freightdesk.config import get_settings
from freightdesk.models.auth import AuthContext

_api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def verify_api_key(api_key: str = Security(_api_key_header)) -> str:
    if not api_key or api_key != get_settings().api_key:
        raise HTTPException(401, "Invalid or missing API key")
    return api_key


async def auth_context(
    x_org_id: str = Header(..., min_length=1),
    x_user_id: str = Header(..., min_length=1),
) -> AuthContext:
    """Caller identity. Membership is checked by the services."""
    return AuthContext(org_id=x_org_id, user_id=x_user_id)
