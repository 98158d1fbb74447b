"""CLI entrypoint for DisasterIQ."""

import argparse
import json
import random
from pathlib import Path
from typing import List, Optional

from disasteriq.api.alerts_api import list_alerts
from disasteriq.api.disasters_api import list_disasters
from disasteriq.api.stats_api import summarize
from disasteriq.config.loader import load_settings
from disasteriq.notifications.service import NotificationService
from disasteriq.ops.metrics import generate_metrics
from disasteriq.retrieval.eonet_client import EonetClient, EonetFetchError
from disasteriq.styling.markers import has_location, marker_style
from disasteriq.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def _load(args: argparse.Namespace):
    settings = load_settings(Path(args.config) if args.config else None)
    configure_logging(settings.log_level)
    return settings, EonetClient(settings.eonet)


def cmd_disasters(args: argparse.Namespace) -> None:
    """Print normalized disasters with their marker styling."""
    _settings, client = _load(args)
    try:
        response = list_disasters(client, args.type, args.time_range)
    except EonetFetchError as e:
        logger.error(f"Failed to fetch disasters: {e}")
        print(f"Error: {e}")
        raise SystemExit(1)

    if args.format == "json":
        print(json.dumps(response.model_dump(mode="json", by_alias=True), indent=2))
        return

    if not response.data:
        print("No open disasters.")
        return

    print(f"{'ID':<16} {'Type':<12} {'Severity':<10} {'Lat':>9} {'Lng':>10} {'Color':<8} {'Radius':>6}  Name")
    print("-" * 100)
    for disaster in response.data:
        style = marker_style(disaster)
        lat = f"{disaster.lat:.3f}" if has_location(disaster) else "-"
        lng = f"{disaster.lng:.3f}" if has_location(disaster) else "-"
        print(
            f"{disaster.id or '':<16} {disaster.type:<12} {disaster.severity:<10} {lat:>9} {lng:>10} "
            f"{style.color:<8} {style.radius:>6.1f}  {disaster.name or ''}"
        )
    print(f"\n{response.meta.count} disasters (type={response.meta.type}, timeRange={response.meta.time_range})")


def cmd_alerts(args: argparse.Namespace) -> None:
    _settings, client = _load(args)
    rng = random.Random(args.seed) if args.seed is not None else None
    try:
        response = list_alerts(client, args.type, rng=rng)
    except EonetFetchError as e:
        logger.error(f"Failed to fetch alerts: {e}")
        print(f"Error: {e}")
        raise SystemExit(1)

    if args.format == "json":
        print(json.dumps(response.model_dump(mode="json", by_alias=True), indent=2))
        return

    for alert in response.data:
        print(f"[{alert.severity.upper():<8}] {alert.time:<14} {alert.id:<24} {alert.title or ''}")
        print(f"    {alert.details}")
    print(f"\n{response.meta.count} alerts (type={response.meta.type})")


def cmd_summary(args: argparse.Namespace) -> None:
    """Dashboard stat cards: counts per type and recent disaster alerts."""
    _settings, client = _load(args)
    try:
        disasters = list_disasters(client, "all", args.time_range).data
        alerts = list_alerts(client).data
    except EonetFetchError as e:
        logger.error(f"Failed to build summary: {e}")
        print(f"Error: {e}")
        raise SystemExit(1)

    summary = summarize(disasters, alerts, recent=args.recent)
    print("DisasterIQ Summary")
    print("=" * 50)
    print(f"  Wildfires:   {summary.wildfires}")
    print(f"  Earthquakes: {summary.earthquakes}")
    print(f"  Floods:      {summary.floods}")
    print(f"  Storms:      {summary.storms}")
    print(f"  Volcanoes:   {summary.volcanoes}")
    print(f"  Total:       {summary.total} ({summary.critical} critical)")
    print("\nRecent disaster alerts:")
    if not summary.recent_alerts:
        print("  (none)")
    for alert in summary.recent_alerts:
        print(f"  - [{alert.severity}] {alert.title} ({alert.time})")


def cmd_metrics(args: argparse.Namespace) -> None:
    print(generate_metrics(), end="")


def _notifier(args: argparse.Namespace) -> NotificationService:
    settings = load_settings(Path(args.config) if args.config else None)
    configure_logging(settings.log_level)
    return NotificationService(settings.notifications)


def cmd_notify(args: argparse.Namespace) -> None:
    """Simulated delivery: a disaster alert with --alert-title, otherwise a batched bulk message."""
    notifier = _notifier(args)

    if args.alert_title:
        report = notifier.send_disaster_alert(args.alert_title, args.recipients)
        print(f"Sent {report.messages_sent} messages")
        for message_id in report.message_ids:
            print(f"  {message_id}")
        return

    report = notifier.send_bulk_notification(args.message, args.recipients, batch_size=args.batch_size)
    for result in report.results:
        print(f"  {result.batch_id}: {result.recipients_processed} recipients")
    print(f"\n{report.total_recipients} recipients in {report.batches_processed} batches")


def cmd_serve(args: argparse.Namespace) -> None:
    import uvicorn

    from disasteriq.api.app import create_app

    settings = load_settings(Path(args.config) if args.config else None)
    host = args.host or settings.server.host
    port = args.port or settings.server.port
    logger.info(f"Starting DisasterIQ API on {host}:{port}")
    uvicorn.run(create_app(settings), host=host, port=port, log_level=settings.log_level.lower())


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="DisasterIQ: NASA EONET disaster monitoring")
    parser.add_argument(
        "--config",
        type=str,
        help="Path to config YAML (default: disasteriq.config.yaml if present)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # disasters command
    disasters_parser = subparsers.add_parser("disasters", help="List normalized open disasters")
    disasters_parser.add_argument(
        "--type",
        type=str,
        default="all",
        choices=["all", "wildfire", "earthquake", "flood", "storm", "volcano"],
        help="Disaster type filter (default: all)",
    )
    disasters_parser.add_argument(
        "--time-range",
        type=str,
        default="24h",
        choices=["12h", "24h", "7d", "30d"],
        help="Time range; sizes the request to 5/10/20/30 events (default: 24h)",
    )
    disasters_parser.add_argument(
        "--format",
        type=str,
        choices=["table", "json"],
        default="table",
        help="Output format (default: table)",
    )
    disasters_parser.set_defaults(func=cmd_disasters)

    # alerts command
    alerts_parser = subparsers.add_parser("alerts", help="Show the merged alert feed")
    alerts_parser.add_argument(
        "--type",
        type=str,
        choices=["disaster", "system"],
        help="Only show alerts of this type",
    )
    alerts_parser.add_argument(
        "--seed",
        type=int,
        help="Seed for synthetic alert ages (reproducible output)",
    )
    alerts_parser.add_argument(
        "--format",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    alerts_parser.set_defaults(func=cmd_alerts)

    # summary command
    summary_parser = subparsers.add_parser("summary", help="Dashboard summary")
    summary_parser.add_argument(
        "--time-range",
        type=str,
        default="24h",
        choices=["12h", "24h", "7d", "30d"],
        help="Time range for disaster counts (default: 24h)",
    )
    summary_parser.add_argument(
        "--recent",
        type=int,
        default=5,
        help="Number of recent disaster alerts to show (default: 5)",
    )
    summary_parser.set_defaults(func=cmd_summary)

    # metrics command
    metrics_parser = subparsers.add_parser("metrics", help="Print Prometheus exposition text")
    metrics_parser.set_defaults(func=cmd_metrics)

    # notify command
    notify_parser = subparsers.add_parser("notify", help="Send a simulated notification to recipients")
    notify_parser.add_argument("recipients", nargs="+", help="Recipient email addresses")
    notify_group = notify_parser.add_mutually_exclusive_group(required=True)
    notify_group.add_argument("--message", type=str, help="Bulk message text")
    notify_group.add_argument("--alert-title", type=str, help="Send a disaster alert with this title")
    notify_parser.add_argument(
        "--batch-size",
        type=int,
        help="Recipients per batch for bulk messages (default: from config)",
    )
    notify_parser.set_defaults(func=cmd_notify)

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", type=str, help="Bind host (default: from config)")
    serve_parser.add_argument("--port", type=int, help="Bind port (default: from config)")
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    try:
        args.func(args)
    except Exception as e:
        logger.error(f"Error running command '{args.command}': {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
