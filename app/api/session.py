from fastapi import APIRouter, Depends
import logging
from app.api.deps import get_account_id, get_session_registry
from app.db.memory import SessionRegistry

router = APIRouter()
logger = logging.getLogger(__name__)

@router.delete("/session", status_code=204)
async def end_session(
    account_id: str = Depends(get_account_id),
    registry: SessionRegistry = Depends(get_session_registry)
):
    """Drop the account's pay-fees store and its alerts (e.g. on logout or account switch)."""
    registry.drop(account_id)
    registry.alerts.clear(account_id)
    logger.info(f"Pay fees session closed for account: {account_id}")
