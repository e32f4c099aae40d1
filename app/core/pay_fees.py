import logging
from typing import List, Optional

from app.core.alerts import AlertRepository, alert_repo
from app.schemas.alert import AlertCategory, AlertSeverity
from app.schemas.fees import FeeData, FeeInfo, FeeInfoCacheEntry, FeeLineItem
from app.schemas.payment import (
    PaymentAccount,
    PaymentMethod,
    PaymentMethodOption,
    PaymentMethodState,
)
from app.services.exceptions import BarApiError, PayApiError

logger = logging.getLogger(__name__)


class PayFeesStore:
    """
    Per-account fee ledger and payment method selector.

    One instance belongs to one account session. Remote collaborators are
    injected: ``pay_api`` needs ``fetch_fee(FeeData)`` and a ``fee_type``
    mapping, ``bar_api`` needs ``get_payment_account(account_id, token)``.
    Failures of either never propagate; they are logged and surfaced as
    alerts on ``alerts``.
    """

    def __init__(self, account_id: str, pay_api, bar_api, alerts: AlertRepository = alert_repo):
        self.account_id = account_id
        self.pay_api = pay_api
        self.bar_api = bar_api
        self.alerts = alerts

        self.fees: List[FeeLineItem] = []
        self.folio_number: str = ""
        self.fee_info: List[FeeInfoCacheEntry] = []
        # Bumped by reset so late fee lookups cannot refill a cleared cache
        self._fees_generation = 0

        self.user_payment_account = PaymentAccount()
        self._user_selected_payment_method = PaymentMethod.DIRECT_PAY
        self.allow_alternate_payment_method = False
        self.allowed_payment_methods: List[PaymentMethodOption] = []
        self.payment_state = PaymentMethodState.UNINITIALIZED
        self._payment_generation = 0
        self._correcting_payment_method = False

    # ------------------------------------------------------------------
    # Fee ledger
    # ------------------------------------------------------------------

    def _find_fee(self, fee: FeeInfo) -> Optional[FeeLineItem]:
        return next((f for f in self.fees if f.same_fee(fee)), None)

    @property
    def total_fees(self) -> float:
        return round(sum((f.total or 0.0) * (f.quantity or 1) for f in self.fees), 2)

    def add_fee(self, new_fee: Optional[FeeInfo]) -> None:
        if new_fee is None or new_fee.total is None or new_fee.filing_fees is None or new_fee.filing_type_code is None:
            logger.error(f"Trying to add INVALID FEE; Fee is missing details. Fee: {new_fee}")
            return

        fee = self._find_fee(new_fee)
        if fee:
            fee.quantity = 1 if fee.quantity is None else fee.quantity + 1
            logger.debug(f"Fee {fee.filing_type_code} quantity now {fee.quantity}")
        else:
            data = new_fee.model_dump(include=set(FeeInfo.model_fields))
            self.fees.append(FeeLineItem(**data, quantity=1))
            logger.debug(f"Fee {new_fee.filing_type_code} added to ledger")

    def remove_fee(self, fee_to_remove: FeeInfo) -> None:
        fee = self._find_fee(fee_to_remove)
        if fee is None:
            return

        if fee.quantity and fee.quantity > 1:
            fee.quantity -= 1
        else:
            self.fees.remove(fee)
            logger.debug(f"Fee {fee.filing_type_code} removed from ledger")

    def _cached_entry(self, filing_data: FeeData) -> Optional[FeeInfoCacheEntry]:
        return next((e for e in self.fee_info if e.filing_data.same_lookup(filing_data)), None)

    async def load_fee_types_and_charges(self, folio_number: str, filing_data: List[FeeData]) -> None:
        """
        Record the folio number and cache fee info for each descriptor.

        Lookups run one after another and skip keys that are already cached;
        a failed or empty lookup is skipped and the rest of the batch still runs.
        """
        self.folio_number = folio_number
        generation = self._fees_generation

        for filing_data_item in filing_data:
            if self._cached_entry(filing_data_item):
                continue
            try:
                fee = await self.pay_api.fetch_fee(filing_data_item)
            except PayApiError as e:
                logger.error(f"Fee lookup failed for {filing_data_item.filing_type_code}: {e}")
                continue

            if generation != self._fees_generation:
                logger.info("Ledger was reset during fee lookup; discarding results")
                return
            # Another request may have cached the same key while this one waited
            if fee and not self._cached_entry(filing_data_item):
                self.fee_info.append(FeeInfoCacheEntry(filing_data=filing_data_item, fee_info=fee))

    async def get_fee_info(self, search_filing_data: FeeData, try_load_if_not_cached: bool = True) -> Optional[FeeInfo]:
        entry = self._cached_entry(search_filing_data)
        if entry:
            return entry.fee_info
        if try_load_if_not_cached:
            await self.load_fee_types_and_charges(self.folio_number, [search_filing_data])
            return await self.get_fee_info(search_filing_data, False)
        return None

    async def add_pay_fees(self, fee_code: str) -> None:
        """Look up the fee for a short fee code and add it to the ledger."""
        try:
            filing_data = self.pay_api.fee_type[fee_code]
            fee_info = await self.get_fee_info(filing_data)
            if fee_info is None:
                raise LookupError(f"No fee info for fee code {fee_code}")
            self.add_fee(fee_info)
        except Exception as e:
            logger.error(f"Error adding pay fees for {fee_code}: {e}")
            self.alerts.add_alert(AlertSeverity.ERROR, AlertCategory.FEE_INFO, self.account_id)

    def reset(self) -> None:
        self.fees = []
        self.folio_number = ""
        self.fee_info = []
        self._fees_generation += 1

    # ------------------------------------------------------------------
    # Payment method selector
    # ------------------------------------------------------------------

    @property
    def user_selected_payment_method(self) -> PaymentMethod:
        return self._user_selected_payment_method

    @user_selected_payment_method.setter
    def user_selected_payment_method(self, value: PaymentMethod) -> None:
        previous = self._user_selected_payment_method
        self._user_selected_payment_method = PaymentMethod(value)
        if self._user_selected_payment_method != previous:
            self._on_payment_method_change()

    def _on_payment_method_change(self) -> None:
        # Corrective assignment below lands here again; it must not re-alert
        if self._correcting_payment_method:
            return
        if self._user_selected_payment_method == PaymentMethod.DIRECT_PAY:
            return
        if not self.user_payment_account.is_pad_pending():
            return

        self._correcting_payment_method = True
        try:
            logger.info(f"PAD pending for account {self.account_id}; reverting selection to {PaymentMethod.DIRECT_PAY.value}")
            self.user_selected_payment_method = PaymentMethod.DIRECT_PAY
            self.alerts.add_alert(AlertSeverity.ERROR, AlertCategory.PAYMENT_METHOD, self.account_id)
        finally:
            self._correcting_payment_method = False

    def reset_payment_options(self) -> None:
        self.user_payment_account = PaymentAccount()
        # Assigned directly: the empty snapshot cannot be pending
        self._user_selected_payment_method = PaymentMethod.PAD
        self.allow_alternate_payment_method = False
        self.allowed_payment_methods = []
        self.payment_state = PaymentMethodState.UNINITIALIZED
        self._payment_generation += 1

    async def init_payment_method(self, token: Optional[str] = None) -> None:
        self.reset_payment_options()
        generation = self._payment_generation
        self.payment_state = PaymentMethodState.INITIALIZING

        try:
            account = await self.bar_api.get_payment_account(self.account_id, token)
        except BarApiError as e:
            if generation != self._payment_generation:
                return
            logger.error(f"Error initializing payment method: {e}")
            self.payment_state = PaymentMethodState.FAILED
            self.alerts.add_alert(AlertSeverity.ERROR, AlertCategory.PAYMENT_METHOD, self.account_id)
            return

        if generation != self._payment_generation:
            logger.info(f"Discarding stale payment account response for account {self.account_id}")
            return

        self.user_payment_account = account
        default_method = self._user_selected_payment_method
        if account.payment_method in PaymentMethod.__members__:
            default_method = PaymentMethod(account.payment_method)
        elif account.payment_method:
            logger.warning(f"Unsupported account payment method {account.payment_method}; keeping {default_method.value}")

        self.allowed_payment_methods = [self._payment_option(PaymentMethod.DIRECT_PAY)]
        if default_method != PaymentMethod.DIRECT_PAY:
            self.allowed_payment_methods.append(self._payment_option(default_method))

        if account.is_pad_pending():
            default_method = PaymentMethod.DIRECT_PAY

        self._user_selected_payment_method = default_method
        self.allow_alternate_payment_method = True
        self.payment_state = PaymentMethodState.READY
        logger.info(f"Payment method initialized for account {self.account_id}: {default_method.value}")

    def _payment_option(self, method: PaymentMethod) -> PaymentMethodOption:
        if method == PaymentMethod.PAD:
            account_num = ""
            if self.user_payment_account.cfs_account:
                account_num = self.user_payment_account.cfs_account.bank_account_number or ""
            return PaymentMethodOption(label=f"PAD Account {account_num}".rstrip(), value=method)
        return PaymentMethodOption(label="Credit Card", value=method)
