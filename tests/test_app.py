"""App-level tests.

Covers:
- /health with a reachable and an unreachable database
- JSON error envelope for unknown routes, wrong methods, internal errors
- Security headers
- Operator CLI commands (seed-demo, pending-queue, set-status)
"""

import logging
from unittest.mock import patch

from sqlalchemy.exc import OperationalError as DBOperationalError


class TestHealth:

    def test_healthy(self, client):
        resp = client.get("/health")

        assert resp.status_code == 200
        body = resp.get_json()
        assert body["status"] == "ok"
        assert body["services"] == {"api": "healthy", "database": "healthy"}
        assert "timestamp" in body
        assert body["uptime"] >= 0

    def test_database_unreachable_returns_503(self, client):
        error = DBOperationalError("SELECT 1", {}, Exception("connection refused"))
        with patch("cloudself.blueprints.health.db") as mock_db:
            mock_db.session.execute.side_effect = error
            resp = client.get("/health")

        assert resp.status_code == 503
        body = resp.get_json()
        assert body["status"] == "degraded"
        assert body["services"]["database"] == "unhealthy"


class TestErrorEnvelope:

    def test_unknown_route(self, client):
        resp = client.get("/api/nope")

        assert resp.status_code == 404
        assert resp.get_json() == {
            "success": False,
            "error": {"message": "Route /api/nope not found"},
        }

    def test_method_not_allowed(self, client):
        resp = client.delete("/api/websites/1")

        assert resp.status_code == 405
        assert resp.get_json()["success"] is False

    @patch("cloudself.services.website_store.list_by_status")
    def test_internal_error_hides_detail(self, mock_list, client, caplog):
        mock_list.side_effect = RuntimeError("db password is hunter2")

        with caplog.at_level(logging.ERROR, logger="cloudself"):
            resp = client.get("/api/provisioner/websites/pending")

        assert resp.status_code == 500
        assert resp.get_json() == {
            "success": False,
            "error": {"message": "Internal Server Error"},
        }
        assert b"hunter2" not in resp.data
        assert "hunter2" in caplog.text


class TestSecurityHeaders:

    def test_headers_on_api_response(self, client):
        resp = client.get("/health")

        assert resp.headers.get("X-Content-Type-Options") == "nosniff"
        assert resp.headers.get("X-Frame-Options") == "DENY"
        assert resp.headers.get("Referrer-Policy") == "strict-origin-when-cross-origin"

    def test_headers_on_error_response(self, client):
        resp = client.get("/nonexistent-page")
        assert resp.headers.get("X-Content-Type-Options") == "nosniff"


class TestCli:

    def test_seed_demo(self, cli_runner):
        result = cli_runner.invoke(args=["seed-demo"])

        assert result.exit_code == 0
        assert "Created website request: demo-site" in result.output

    def test_seed_demo_twice_reports_conflict(self, cli_runner):
        cli_runner.invoke(args=["seed-demo"])
        result = cli_runner.invoke(args=["seed-demo"])

        assert result.exit_code != 0
        assert "already exists" in result.output

    def test_seed_demo_invalid_name(self, cli_runner):
        result = cli_runner.invoke(args=["seed-demo", "--name", "Bad_Name"])

        assert result.exit_code != 0
        assert "lowercase" in result.output

    def test_pending_queue_empty(self, cli_runner):
        result = cli_runner.invoke(args=["pending-queue"])

        assert result.exit_code == 0
        assert "No pending websites." in result.output

    def test_pending_queue_lists_oldest_first(self, cli_runner, seed_data):
        result = cli_runner.invoke(args=["pending-queue"])

        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert [line.split("\t")[1] for line in lines] == [
            "alice-old",
            "bob-site",
            "alice-new",
        ]

    def test_set_status_provisioned(self, cli_runner, seed_data):
        result = cli_runner.invoke(args=[
            "set-status", str(seed_data["alice_old_id"]), "provisioned",
            "--pod-ip", "10.0.0.3",
        ])

        assert result.exit_code == 0
        assert "alice-old" in result.output
        assert "provisioned" in result.output

    def test_set_status_missing_pod_ip(self, cli_runner, seed_data):
        result = cli_runner.invoke(args=[
            "set-status", str(seed_data["alice_old_id"]), "provisioned",
        ])

        assert result.exit_code != 0
        assert "podIpAddress is required" in result.output
