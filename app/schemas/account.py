from pydantic import Field, field_validator, ValidationInfo
from app.schemas.fees import CamelModel
from typing import Optional
import re

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$"

class AccountPhone(CamelModel):
    country_code: str = "+1"
    number: str
    extension: Optional[str] = None

    @field_validator('country_code')
    @classmethod
    def validate_country_code(cls, v):
        if not re.match(r"^\+\d{1,3}$", v):
            raise ValueError("Country code must be '+' followed by 1 to 3 digits")
        return v

    @field_validator('number')
    @classmethod
    def validate_number(cls, v):
        # Accept (250) 555-1234, 250 555 1234, 2505551234 ...
        digits = re.sub(r"[\s()\-.]", "", v)
        if not re.match(r"^\d{10}$", digits):
            raise ValueError("Phone number must contain exactly 10 digits")
        return f"{digits[:3]}-{digits[3:6]}-{digits[6:]}"

    @field_validator('extension', mode='before')
    @classmethod
    def validate_extension(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        v = str(v).strip()
        if not re.match(r"^\d{1,6}$", v):
            raise ValueError("Extension must be 1 to 6 digits")
        return v

class AccountCreateRequest(CamelModel):
    account_name: str = Field(..., max_length=100)
    email: str
    phone: AccountPhone

    @field_validator('account_name', 'email', mode='before')
    @classmethod
    def strip_required(cls, v, info: ValidationInfo):
        if isinstance(v, str):
            v = v.strip()
        if not v:
            raise ValueError(f"{info.field_name} is required")
        return v

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        if not re.match(EMAIL_PATTERN, v):
            raise ValueError("Invalid email format")
        return v.lower()
