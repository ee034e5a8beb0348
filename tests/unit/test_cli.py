"""Unit tests for the approute CLI."""

import json

from typer.testing import CliRunner

from approute import __version__
from approute.cli import app

runner = CliRunner()


class TestRoutesCommand:
    """Test the routes command."""

    def test_routes_mermaid_to_stdout(self, catalog_file):
        result = runner.invoke(app, [
            "routes", "--route", "payment_route", "--start", "AppA", "--goal", "AppD",
            "--catalog", str(catalog_file),
        ])

        assert result.exit_code == 0
        assert "```mermaid" in result.stdout
        assert "AppA -->|REST API - Method: GET - Endpoint: /api/data| AppB" in result.stdout
        assert "AppB -->|Kafka - Topic: topic1| AppC" in result.stdout
        assert "AppC -->|Kafka - Topic: topic2| AppD" in result.stdout

    def test_routes_json_to_file(self, catalog_file, tmp_path):
        out = tmp_path / "routes.json"
        result = runner.invoke(app, [
            "routes", "--route", "payment_route", "--catalog", str(catalog_file),
            "--format", "json", "--out", str(out),
        ])

        assert result.exit_code == 0
        assert json.loads(out.read_text(encoding="utf-8"))["count"] == 3

    def test_routes_json_carries_query(self, catalog_file, tmp_path):
        out = tmp_path / "r.json"
        result = runner.invoke(app, [
            "routes", "--route", "payment_route", "--start", "AppA", "--catalog", str(catalog_file),
            "--format", "json", "--out", str(out),
        ])

        assert result.exit_code == 0
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["routeTag"] == "payment_route"
        assert data["start"] == "AppA"
        assert data["goal"] is None
        assert data["count"] == 1

    def test_routes_relative_out_uses_output_dir(self, catalog_file, tmp_path):
        output_dir = tmp_path / "diagrams"
        config_file = tmp_path / ".approute.json"
        config_file.write_text(json.dumps({"output": {"dir": str(output_dir)}}))

        result = runner.invoke(app, [
            "routes", "--route", "payment_route", "--start", "AppA", "--goal", "AppD",
            "--catalog", str(catalog_file), "--config", str(config_file), "--out", "payment.md",
        ])

        assert result.exit_code == 0
        written = output_dir / "payment.md"
        assert written.exists()
        assert written.read_text(encoding="utf-8").startswith("```mermaid\ngraph TD\n")

    def test_routes_without_bound_fails(self, catalog_file):
        result = runner.invoke(app, ["routes", "--catalog", str(catalog_file)])

        assert result.exit_code == 1
        assert "route tag is required" in result.output

    def test_routes_unknown_start(self, catalog_file):
        result = runner.invoke(app, [
            "routes", "--route", "payment_route", "--start", "Nope", "--catalog", str(catalog_file),
        ])

        assert result.exit_code == 1
        assert "Unknown start" in result.output

    def test_routes_none_found(self, catalog_file):
        result = runner.invoke(app, ["routes", "--route", "refund_route", "--catalog", str(catalog_file)])

        assert result.exit_code == 0
        assert "No routes found" in result.output

    def test_missing_catalog(self, tmp_path):
        result = runner.invoke(app, [
            "routes", "--route", "payment_route", "--catalog", str(tmp_path / "none.json"),
        ])

        assert result.exit_code == 1
        assert "not found" in result.output


class TestAppsCommand:
    """Test the apps command."""

    def test_apps_table(self, catalog_file):
        result = runner.invoke(app, ["apps", "--catalog", str(catalog_file)])

        assert result.exit_code == 0
        for name in ["AppA", "AppB", "AppC", "AppD"]:
            assert name in result.stdout
        assert "audit_route" in result.stdout


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout
