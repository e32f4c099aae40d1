from fastapi import APIRouter, Request
from app.core.config import settings

router = APIRouter()

@router.get("/health")
async def health_check(request: Request):
    return {
        "status": "ok",
        "service": settings.PROJECT_NAME,
        "sessions": len(request.app.state.sessions.account_ids())
    }
