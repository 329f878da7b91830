from fastapi import APIRouter
from freightdesk.config import get_settings

router = APIRouter()


@router.get("/health", tags=["Health"])
async def health():
    s = get_settings()
    return {
        "status": "healthy",
        "service": s.app_name,
    }
