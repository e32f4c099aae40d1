from fastapi import Depends, HTTPException, Request
from app.core.pay_fees import PayFeesStore
from app.db.memory import SessionRegistry

def get_session_registry(request: Request) -> SessionRegistry:
    return request.app.state.sessions

def get_account_id(request: Request) -> str:
    account_id = getattr(request.state, "account_id", None)
    if not account_id:
        raise HTTPException(status_code=400, detail="Missing account identifier")
    return account_id

def get_pay_fees_store(
    account_id: str = Depends(get_account_id),
    registry: SessionRegistry = Depends(get_session_registry),
) -> PayFeesStore:
    return registry.get_or_create(account_id)
