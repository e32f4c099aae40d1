from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional
import uuid

# Field names follow the pay API payloads (camelCase on the wire).

class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class FeeData(CamelModel):
    """Filing-data descriptor used to look up a fee schedule entry."""
    entity_type: str
    filing_type_code: str
    future_effective: Optional[bool] = None
    priority: Optional[bool] = None
    waive_fees: Optional[bool] = None

    def same_lookup(self, other: "FeeData") -> bool:
        return self.entity_type == other.entity_type and self.filing_type_code == other.filing_type_code

class FeeTax(CamelModel):
    gst: float = 0.0
    pst: float = 0.0

class FeeInfo(CamelModel):
    filing_fees: Optional[float] = None
    filing_type: Optional[str] = None
    filing_type_code: Optional[str] = None
    total: Optional[float] = None
    future_effective_fees: float = 0.0
    priority_fees: float = 0.0
    processing_fees: float = 0.0
    service_fees: float = 0.0
    tax: FeeTax = Field(default_factory=FeeTax)

class FeeLineItem(FeeInfo):
    quantity: Optional[int] = 1
    ui_uuid: str = Field(default_factory=lambda: str(uuid.uuid4()))

    def same_fee(self, other: FeeInfo) -> bool:
        return self.filing_type == other.filing_type and self.filing_type_code == other.filing_type_code

class FeeInfoCacheEntry(CamelModel):
    filing_data: FeeData
    fee_info: FeeInfo

class LoadFeesRequest(CamelModel):
    folio_number: str = ""
    filing_data: List[FeeData] = []

class FeesResponse(CamelModel):
    fees: List[FeeLineItem] = []
    folio_number: str = ""
    fee_info: List[FeeInfoCacheEntry] = []
    total: float = 0.0
