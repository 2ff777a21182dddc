"""CLI for operating a running AgriBooks API.

Usage:
  agribooks-cli health
  agribooks-cli --user-id <admin-id> sweep
  agribooks-cli --user-id <admin-id> status
  agribooks-cli --user-id <user-id> reminders --completed false
  agribooks-cli --user-id <user-id> alerts --unread
"""
import argparse
import json
import sys

import httpx

from agribooks import config


def print_json(data: object) -> None:
    print(json.dumps(data, indent=2, default=str))


def cmd_health(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.get("/api/health")
    print_json(r.json())
    return 0 if r.status_code == 200 else 1


def cmd_sweep(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.post("/api/admin/reminders/sweep")
    r.raise_for_status()
    reports = r.json()
    for report in reports:
        state = "skipped" if report["skipped"] else "done"
        print(
            f"{report['reminder_type']}: {state}, checked={report['checked']} "
            f"triggered={report['triggered']} failed={report['failed']}"
        )
    return 0


def cmd_status(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.get("/api/admin/reminders/status")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_reminders(client: httpx.Client, args: argparse.Namespace) -> int:
    params = {}
    if args.completed is not None:
        params["completed"] = args.completed
    r = client.get("/api/reminders", params=params)
    r.raise_for_status()
    data = r.json()
    print(f"Found {len(data)} reminders")
    print_json(data[: args.head] if args.head else data)
    return 0


def cmd_alerts(client: httpx.Client, args: argparse.Namespace) -> int:
    params = {"isRead": "false"} if args.unread else {}
    r = client.get("/api/alerts", params=params)
    r.raise_for_status()
    data = r.json()
    print(f"Found {len(data)} alerts")
    print_json(data[: args.head] if args.head else data)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Operate the AgriBooks API and reminder scheduler.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--base-url",
        default=config.API_URL,
        help=f"API base URL (default: {config.API_URL})",
    )
    parser.add_argument("--user-id", default=None, help="Sent as the X-User-Id header")
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Request timeout in seconds (default: 30)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command")

    subparsers.add_parser("health", help="GET /api/health")
    subparsers.add_parser("sweep", help="POST /api/admin/reminders/sweep (admin)")
    subparsers.add_parser("status", help="GET /api/admin/reminders/status (admin)")

    p = subparsers.add_parser("reminders", help="GET /api/reminders")
    p.add_argument(
        "--completed",
        choices=["true", "false"],
        default=None,
        help="Filter by completion state",
    )
    p.add_argument("--head", type=int, default=0, help="Show only first N (0 = all)")

    p = subparsers.add_parser("alerts", help="GET /api/alerts")
    p.add_argument("--unread", action="store_true", help="Only unread alerts")
    p.add_argument("--head", type=int, default=0, help="Show only first N (0 = all)")
    return parser


HANDLERS = {
    "health": cmd_health,
    "sweep": cmd_sweep,
    "status": cmd_status,
    "reminders": cmd_reminders,
    "alerts": cmd_alerts,
}


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    headers = {"X-User-Id": args.user_id} if args.user_id else {}
    handler = HANDLERS[args.command]

    try:
        with httpx.Client(
            base_url=args.base_url.rstrip("/"), headers=headers, timeout=args.timeout
        ) as client:
            return handler(client, args)
    except httpx.HTTPStatusError as e:
        print(f"HTTP error: {e.response.status_code}", file=sys.stderr)
        if e.response.content:
            try:
                print(e.response.json(), file=sys.stderr)
            except ValueError:
                print(e.response.text, file=sys.stderr)
        return 1
    except httpx.RequestError as e:
        print(f"Request error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
