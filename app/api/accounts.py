from fastapi import APIRouter, Body
import logging
from app.schemas.account import AccountCreateRequest

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/accounts/validate", response_model=AccountCreateRequest)
async def validate_account_form(form: AccountCreateRequest = Body(...)):
    """
    Validate the account-creation form and return it normalised.
    Field errors come back as a 422 from request validation.
    """
    logger.debug(f"Account form valid for '{form.account_name}'")
    return form
