import argparse

import httpx

from agribooks.cli import admin


def _client(handler) -> httpx.Client:
    return httpx.Client(base_url="http://testserver", transport=httpx.MockTransport(handler))


def test_sweep_prints_reports(capsys):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.url.path == "/api/admin/reminders/sweep"
        return httpx.Response(
            200,
            json=[
                {"reminder_type": "TRANSACTION", "checked": 2, "triggered": 1, "failed": 0, "skipped": False},
                {"reminder_type": "GENERAL", "checked": 0, "triggered": 0, "failed": 0, "skipped": True},
            ],
        )

    with _client(handler) as client:
        assert admin.cmd_sweep(client, argparse.Namespace()) == 0

    out = capsys.readouterr().out
    assert "TRANSACTION: done, checked=2 triggered=1 failed=0" in out
    assert "GENERAL: skipped" in out


def test_alerts_unread_filter(capsys):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(200, json=[{"id": "a1", "message": "Reminder: x"}])

    with _client(handler) as client:
        assert admin.cmd_alerts(client, argparse.Namespace(unread=True, head=0)) == 0

    assert seen == {"isRead": "false"}
    assert "Found 1 alerts" in capsys.readouterr().out


def test_parser_requires_command():
    parser = admin.build_parser()
    args = parser.parse_args(["--user-id", "admin-1", "reminders", "--completed", "false"])
    assert (args.command, args.user_id, args.completed) == ("reminders", "admin-1", "false")


def test_connection_error_returns_1(capsys):
    assert admin.main(["--base-url", "http://127.0.0.1:9", "--timeout", "0.5", "health"]) == 1
    assert "Request error" in capsys.readouterr().err
