from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, timezone
import uuid
from enum import Enum

class AlertSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

class AlertCategory(str, Enum):
    PAYMENT_METHOD = "PAYMENT_METHOD"
    FEE_INFO = "FEE_INFO"

class Alert(BaseModel):
    alert_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    account_id: Optional[str] = None
    severity: AlertSeverity
    category: AlertCategory
