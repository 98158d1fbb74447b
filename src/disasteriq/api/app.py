"""FastAPI application exposing the disasters, alerts, notification and metrics routes.

Run:
    disasteriq serve
    uvicorn disasteriq.api.app:create_app --factory --reload
"""

import random
from datetime import datetime
from typing import Any, Callable, Optional

from fastapi import FastAPI, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse

from .. import __version__
from ..alerts.alert_builder import ingest_webhook_alert
from ..config.loader import Settings, load_settings
from ..notifications.service import InvalidEmailError, NotificationService
from ..ops.metrics import generate_metrics
from ..retrieval.eonet_client import EonetClient
from ..utils.logging import configure_logging, get_logger
from .alerts_api import list_alerts
from .disasters_api import EventSource, list_disasters
from .models import (
    ErrorResponse,
    SendTestAlertResponse,
    SubscribeResponse,
    SubscriberInfo,
    WebhookAck,
)

logger = get_logger(__name__)

CACHE_HEADERS = {"Cache-Control": "max-age=60"}


def _json(model: Any, status_code: int = 200, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        content=model.model_dump(mode="json", by_alias=True, exclude_none=False),
        status_code=status_code,
        headers=headers,
    )


def _error(message: str, status_code: int, details: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=message, details=details).model_dump(exclude_none=True)
    return JSONResponse(content=body, status_code=status_code)


async def _read_email(request: Request) -> Any:
    """Return the 'email' field of a JSON body. Raises ValueError on malformed JSON."""
    body = await request.json()
    if not isinstance(body, dict):
        return None
    return body.get("email")


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[EventSource] = None,
    notifier: Optional[NotificationService] = None,
    rng: Optional[random.Random] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> FastAPI:
    """
    Build the app. Collaborators are injectable so tests can pin the feed,
    the alert-age RNG and the clock.
    """
    settings = settings or load_settings()
    configure_logging(settings.log_level)
    client = client or EonetClient(settings.eonet)
    notifier = notifier or NotificationService(settings.notifications)

    app = FastAPI(title="DisasterIQ", version=__version__)
    app.state.settings = settings
    app.state.client = client
    app.state.notifier = notifier

    def _now() -> Optional[datetime]:
        return clock() if clock else None

    @app.get("/api/health")
    def health():
        return {"status": "ok"}

    @app.get("/api/disasters")
    def get_disasters(
        disaster_type: Optional[str] = Query(None, alias="type"),
        time_range: Optional[str] = Query(None, alias="timeRange"),
    ):
        try:
            response = list_disasters(client, disaster_type, time_range, now=_now())
            return _json(response, headers=CACHE_HEADERS)
        except Exception as e:
            logger.error(f"Error in disasters API: {e}", exc_info=True)
            return _error("Failed to fetch disaster data from NASA EONET API", 500, details=str(e))

    @app.get("/api/alerts")
    def get_alerts(alert_type: Optional[str] = Query(None, alias="type")):
        try:
            response = list_alerts(client, alert_type, rng=rng, now=_now())
            return _json(response, headers=CACHE_HEADERS)
        except Exception as e:
            logger.error(f"Error in alerts API: {e}", exc_info=True)
            return _error("Failed to fetch alert data", 500, details=str(e))

    @app.post("/api/alerts")
    async def receive_alert(request: Request):
        try:
            payload = await request.json()
        except ValueError as e:
            logger.error(f"Error in alert webhook: {e}")
            return _error("Failed to process alert", 400)
        alert_id = ingest_webhook_alert(payload, now=_now())
        return _json(WebhookAck(alert_id=alert_id), status_code=201)

    @app.post("/api/notification/subscribe")
    async def subscribe(request: Request):
        try:
            email = await _read_email(request)
        except ValueError as e:
            logger.error(f"Subscription error: {e}")
            return _error("Invalid request body", 400)
        try:
            subscriber = await run_in_threadpool(notifier.subscribe_email, email)
        except InvalidEmailError:
            return _error("Invalid email address", 400)
        except Exception as e:
            logger.error(f"Subscription error: {e}", exc_info=True)
            return _error("Failed to process subscription", 500)
        return _json(
            SubscribeResponse(
                subscriber=SubscriberInfo(
                    email=subscriber.email,
                    subscription_date=subscriber.subscription_date,
                )
            )
        )

    @app.post("/api/notification/test-alert")
    async def send_test_alert(request: Request):
        try:
            email = await _read_email(request)
        except ValueError as e:
            logger.error(f"Error sending test alert: {e}")
            return _error("Invalid request body", 400)
        try:
            log = await run_in_threadpool(notifier.send_test_alert, email)
        except InvalidEmailError:
            return _error("Invalid email address", 400)
        except Exception as e:
            logger.error(f"Error sending test alert: {e}", exc_info=True)
            return _error("Failed to send test alert", 500)
        return _json(SendTestAlertResponse(alert_id=log.id))

    @app.get("/api/metrics")
    def metrics():
        try:
            body = generate_metrics(now=_now())
        except Exception as e:
            logger.error(f"Error generating metrics: {e}", exc_info=True)
            return PlainTextResponse("# Error generating metrics\n", status_code=500)
        return PlainTextResponse(body)

    return app

