from abc import ABC, abstractmethod
from typing import List, Optional
from app.schemas.alert import Alert, AlertCategory, AlertSeverity
import logging

logger = logging.getLogger(__name__)

class AlertRepository(ABC):
    @abstractmethod
    def save(self, alert: Alert):
        pass

    @abstractmethod
    def get_all(self, account_id: Optional[str] = None) -> List[Alert]:
        pass

    @abstractmethod
    def clear(self, account_id: Optional[str] = None):
        pass

    def add_alert(self, severity: AlertSeverity, category: AlertCategory, account_id: Optional[str] = None) -> Alert:
        alert = Alert(severity=severity, category=category, account_id=account_id)
        self.save(alert)
        return alert

class InMemoryAlertRepository(AlertRepository):
    def __init__(self):
        self._storage: List[Alert] = []

    def save(self, alert: Alert):
        self._storage.append(alert)
        logger.info(f"Alert raised: {alert.category.value} ({alert.severity.value}) for account {alert.account_id}")

    def get_all(self, account_id: Optional[str] = None) -> List[Alert]:
        if account_id is None:
            return list(self._storage)
        return [a for a in self._storage if a.account_id == account_id]

    def clear(self, account_id: Optional[str] = None):
        if account_id is None:
            self._storage.clear()
        else:
            self._storage[:] = [a for a in self._storage if a.account_id != account_id]

# Global Accessor
alert_repo = InMemoryAlertRepository()
