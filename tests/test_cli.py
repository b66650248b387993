"""Tests for the typer CLI entry point, run against saved HTML files."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from main import cli

URL = "https://github.com/org/repo"


class TestExtractCommand:
    """Tests for ``content-vault --url ... --file ...``."""

    def setup_method(self):
        self.runner = CliRunner()

    def _write(self, tmp_path: Path, html: str) -> Path:
        path = tmp_path / "page.html"
        path.write_text(html, encoding="utf-8")
        return path

    def test_no_arguments_prints_usage(self):
        result = self.runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "--url" in result.stdout

    def test_file_as_json(self, tmp_path: Path, article_html: str):
        page = self._write(tmp_path, article_html)
        result = self.runner.invoke(cli, ["--url", URL, "--file", str(page), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["title"] == "Title"
        assert data["contentType"] == "code"
        assert data["metadata"]["domain"] == "github.com"

    def test_file_as_table(self, tmp_path: Path, article_html: str):
        page = self._write(tmp_path, article_html)
        result = self.runner.invoke(cli, ["--url", URL, "--file", str(page)])
        assert result.exit_code == 0
        assert "Title" in result.stdout

    def test_extraction_failure_exits_1(self, tmp_path: Path, nav_only_html: str):
        page = self._write(tmp_path, nav_only_html)
        result = self.runner.invoke(cli, ["--url", URL, "--file", str(page)])
        assert result.exit_code == 1
        assert "EXTRACTION FAILED" in result.stdout

    def test_invalid_url_exits_2(self, tmp_path: Path, article_html: str):
        page = self._write(tmp_path, article_html)
        result = self.runner.invoke(cli, ["--url", "ftp://example.com/file", "--file", str(page)])
        assert result.exit_code == 2

    def test_missing_file_exits_2(self, tmp_path: Path):
        result = self.runner.invoke(cli, ["--url", URL, "--file", str(tmp_path / "absent.html")])
        assert result.exit_code == 2
