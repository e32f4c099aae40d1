"""Shared pytest fixtures for the test suite.

Fixture overview
----------------
alerts           fresh in-memory alert repository
pay_api          fake fee schedule service with a BC annual report fee
bar_api          fake account service returning an ACTIVE PAD account
store            PayFeesStore for account "123" wired to the fakes above
annual_report    the BCANN annual report fee as returned by the pay API
bcann            descriptor for the BC annual report fee
network_error    BarApiError as raised by a failed account lookup
"""

import asyncio

import pytest

from app.core.alerts import InMemoryAlertRepository
from app.core.pay_fees import PayFeesStore
from app.schemas.fees import FeeData, FeeInfo
from app.schemas.payment import PaymentAccount
from app.services.exceptions import BarApiError, PayApiError


class FakePayApi:
    def __init__(self, fees=None, fee_type=None):
        self.fees = dict(fees or {})
        self.fee_type = dict(fee_type or {})
        self.failing = set()
        self.calls = []
        self.on_fetch = None

    async def fetch_fee(self, filing_data: FeeData):
        key = (filing_data.entity_type, filing_data.filing_type_code)
        self.calls.append(key)
        if self.on_fetch:
            self.on_fetch(filing_data)
        # Yield like a real network call so concurrent lookups interleave
        await asyncio.sleep(0)
        if key in self.failing:
            raise PayApiError(f"503 for {key}", status_code=503)
        return self.fees.get(key)


class FakeBarApi:
    def __init__(self, account=None):
        self.account = account
        self.error = None
        self.calls = []
        self.on_call = None

    async def get_payment_account(self, account_id, token=None):
        self.calls.append((account_id, token))
        if self.on_call:
            self.on_call()
        if self.error:
            raise self.error
        return self.account


@pytest.fixture
def annual_report() -> FeeInfo:
    return FeeInfo(filing_type="ANNUAL_REPORT", filing_type_code="BCANN", total=20, filing_fees=20)


@pytest.fixture
def bcann() -> FeeData:
    return FeeData(entity_type="BC", filing_type_code="BCANN")


@pytest.fixture
def alerts():
    return InMemoryAlertRepository()


@pytest.fixture
def pay_api(annual_report, bcann):
    return FakePayApi(fees={("BC", "BCANN"): annual_report}, fee_type={"BCANN": bcann})


@pytest.fixture
def bar_api():
    return FakeBarApi(PaymentAccount.model_validate({
        "accountId": 123,
        "accountName": "Test Account",
        "paymentMethod": "PAD",
        "cfsAccount": {"bankAccountNumber": "*****123", "status": "ACTIVE"},
    }))


@pytest.fixture
def store(pay_api, bar_api, alerts) -> PayFeesStore:
    return PayFeesStore("123", pay_api, bar_api, alerts)


@pytest.fixture
def network_error():
    return BarApiError("Error getting payment account details", status_code=500)
