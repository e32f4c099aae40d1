from fastapi import APIRouter, Depends
from typing import List
from app.api.deps import get_account_id
from app.core.alerts import alert_repo
from app.schemas.alert import Alert

router = APIRouter()

@router.get("/alerts", response_model=List[Alert])
async def get_alerts(account_id: str = Depends(get_account_id)):
    return alert_repo.get_all(account_id)

@router.delete("/alerts", status_code=204)
async def clear_alerts(account_id: str = Depends(get_account_id)):
    alert_repo.clear(account_id)
