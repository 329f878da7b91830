from pydantic import BaseModel, ConfigDict, Field


class AuthContext(BaseModel):
    """Who is acting, and on behalf of which organization.

    Built by the API layer from request headers; services check the
    membership before touching any record.
    """

    model_config = ConfigDict(frozen=True)

    org_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
