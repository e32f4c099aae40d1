from typing import Dict, List
import logging

from app.core.alerts import AlertRepository, alert_repo
from app.core.pay_fees import PayFeesStore

logger = logging.getLogger(__name__)

# In-memory only: a session lives as long as the process.
class SessionRegistry:
    """Holds one PayFeesStore per account id."""

    def __init__(self, pay_api, bar_api, alerts: AlertRepository = alert_repo):
        self.pay_api = pay_api
        self.bar_api = bar_api
        self.alerts = alerts
        self._stores: Dict[str, PayFeesStore] = {}

    def get_or_create(self, account_id: str) -> PayFeesStore:
        store = self._stores.get(account_id)
        if store is None:
            store = PayFeesStore(account_id, self.pay_api, self.bar_api, self.alerts)
            self._stores[account_id] = store
            logger.info(f"Pay fees session opened for account: {account_id}")
        return store

    def drop(self, account_id: str) -> None:
        self._stores.pop(account_id, None)

    def account_ids(self) -> List[str]:
        return list(self._stores)

    def clear(self) -> None:
        self._stores.clear()
