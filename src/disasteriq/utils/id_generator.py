import random
import string
from datetime import datetime
from typing import Optional

from .time import epoch_millis

_BASE36 = string.digits + string.ascii_lowercase


def new_webhook_alert_id(now: Optional[datetime] = None) -> str:
    return f"alert-{epoch_millis(now)}"


def new_test_alert_id(now: Optional[datetime] = None) -> str:
    return f"test-{epoch_millis(now)}"


def new_subscriber_id(now: Optional[datetime] = None) -> str:
    return f"sub-{epoch_millis(now)}"


def new_message_id(now: Optional[datetime] = None, rng: Optional[random.Random] = None) -> str:
    rng = rng or random
    suffix = "".join(rng.choice(_BASE36) for _ in range(5))
    return f"msg-{epoch_millis(now)}-{suffix}"
