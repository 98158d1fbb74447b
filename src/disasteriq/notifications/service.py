"""Simulated email notification service.

Nothing is sent or stored: every operation logs, waits for a configured
delay standing in for the email provider round-trip, and reports success.
"""

import random
import time
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from ..config.loader import NotificationSettings
from ..utils.id_generator import new_message_id, new_subscriber_id, new_test_alert_id
from ..utils.logging import get_logger
from ..utils.time import to_utc_z, utc_now

logger = get_logger(__name__)

DEFAULT_PREFERENCES: Dict[str, Any] = {
    "alert_types": ["all"],
    "frequency": "immediate",
    "regions": ["global"],
}

# Per-message delay for individual and batched sends
SEND_DELAY_SECONDS = 0.1
BATCH_DELAY_SECONDS = 0.2


class InvalidEmailError(ValueError):
    """Email address failed validation."""


class Subscriber(BaseModel):
    id: str
    email: str
    subscription_date: str
    preferences: Dict[str, Any] = Field(default_factory=dict)


class AlertDeliveryLog(BaseModel):
    id: str
    email: str
    timestamp: str
    type: str = "test"
    delivered: bool = True


class DeliveryReport(BaseModel):
    success: bool
    messages_sent: int = 0
    message_ids: List[str] = Field(default_factory=list)


class BatchResult(BaseModel):
    batch_id: str
    recipients_processed: int
    success: bool = True


class BulkReport(BaseModel):
    success: bool
    batches_processed: int
    total_recipients: int
    results: List[BatchResult] = Field(default_factory=list)


class UnsubscribeReceipt(BaseModel):
    success: bool
    email: str
    unsubscribe_date: str


def validate_email(email: Any) -> str:
    """Minimal check: a string containing '@'."""
    if not isinstance(email, str) or "@" not in email:
        raise InvalidEmailError("Invalid email address")
    return email


class NotificationService:
    """Simulated notification delivery with an injectable sleep and clock."""

    def __init__(
        self,
        settings: Optional[NotificationSettings] = None,
        sleep: Optional[Callable[[float], None]] = None,
        clock: Optional[Callable[[], datetime]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or NotificationSettings()
        self._sleep = sleep or time.sleep
        self._clock = clock or utc_now
        self._rng = rng or random.Random()

    def _simulate(self, seconds: float) -> None:
        if seconds > 0:
            self._sleep(seconds)

    def subscribe_email(self, email: Any, preferences: Optional[Dict[str, Any]] = None) -> Subscriber:
        """
        Register an address for alerts.

        Raises:
            InvalidEmailError: If email is missing or has no '@'
        """
        email = validate_email(email)
        logger.info(f"Subscription request received for email: {email}")
        self._simulate(self.settings.subscribe_delay_seconds)

        now = self._clock()
        subscriber = Subscriber(
            id=new_subscriber_id(now),
            email=email,
            subscription_date=to_utc_z(now),
            preferences={**DEFAULT_PREFERENCES, **(preferences or {})},
        )
        logger.info(f"New subscriber: {subscriber.id}")
        return subscriber

    def send_test_alert(self, email: Any) -> AlertDeliveryLog:
        email = validate_email(email)
        logger.info(f"Sending test alert to email: {email}")
        self._simulate(self.settings.test_alert_delay_seconds)

        now = self._clock()
        log = AlertDeliveryLog(id=new_test_alert_id(now), email=email, timestamp=to_utc_z(now))
        logger.info(f"Alert sent successfully: {log.id}")
        return log

    def send_disaster_alert(self, title: Optional[str], recipients: Iterable[str]) -> DeliveryReport:
        recipients = list(recipients)
        logger.info(f"Sending disaster alert for {title} to {len(recipients)} recipients")
        message_ids = []
        for _email in recipients:
            self._simulate(SEND_DELAY_SECONDS)
            message_ids.append(new_message_id(self._clock(), self._rng))
        return DeliveryReport(success=True, messages_sent=len(message_ids), message_ids=message_ids)

    def send_bulk_notification(
        self,
        message: Any,
        recipients: Iterable[str],
        batch_size: Optional[int] = None,
    ) -> BulkReport:
        """Split recipients into fixed-size batches and "deliver" each one."""
        recipients = list(recipients)
        batch_size = batch_size or self.settings.bulk_batch_size
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")

        logger.info(f"Sending bulk notification to {len(recipients)} recipients")
        batches = [recipients[i:i + batch_size] for i in range(0, len(recipients), batch_size)]
        results = []
        for index, batch in enumerate(batches):
            logger.info(f"Processing batch {index + 1} of {len(batches)}")
            self._simulate(BATCH_DELAY_SECONDS)
            results.append(BatchResult(batch_id=f"batch-{index}", recipients_processed=len(batch)))

        return BulkReport(
            success=True,
            batches_processed=len(batches),
            total_recipients=len(recipients),
            results=results,
        )

    def unsubscribe_email(self, email: str, token: Optional[str] = None) -> UnsubscribeReceipt:
        # TODO: verify the token once subscriptions are stored somewhere
        return UnsubscribeReceipt(success=True, email=email, unsubscribe_date=to_utc_z(self._clock()))
