from enum import Enum
from pydantic import BaseModel
from typing import List, Optional
from app.schemas.fees import CamelModel

class PaymentMethod(str, Enum):
    DIRECT_PAY = "DIRECT_PAY"
    PAD = "PAD"

class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PENDING_PAD_ACTIVATION = "PENDING_PAD_ACTIVATION"
    ACTIVE = "ACTIVE"

PAD_PENDING_STATES = (PaymentStatus.PENDING, PaymentStatus.PENDING_PAD_ACTIVATION)

class PaymentMethodState(str, Enum):
    UNINITIALIZED = "UNINITIALIZED"
    INITIALIZING = "INITIALIZING"
    READY = "READY"
    FAILED = "FAILED"

class CfsAccount(CamelModel):
    bank_account_number: Optional[str] = None
    bank_institution_number: Optional[str] = None
    bank_transit_number: Optional[str] = None
    cfs_account_number: Optional[str] = None
    cfs_party_number: Optional[str] = None
    cfs_site_number: Optional[str] = None
    # Backend may report states we do not model, so keep the raw string
    status: Optional[str] = None

class PaymentAccount(CamelModel):
    account_id: Optional[int] = None
    account_name: Optional[str] = None
    payment_method: Optional[str] = None
    cfs_account: Optional[CfsAccount] = None

    def is_pad_pending(self) -> bool:
        status = self.cfs_account.status if self.cfs_account else None
        return status in [s.value for s in PAD_PENDING_STATES]

class PaymentMethodOption(BaseModel):
    label: str
    value: PaymentMethod

class SelectPaymentMethodRequest(CamelModel):
    payment_method: PaymentMethod

class PaymentOptionsResponse(CamelModel):
    state: PaymentMethodState
    user_payment_account: PaymentAccount
    user_selected_payment_method: PaymentMethod
    allowed_payment_methods: List[PaymentMethodOption] = []
    allow_alternate_payment_method: bool = False
