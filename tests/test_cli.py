"""Tests for the command-line interface."""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from gemina.cli import app
from gemina.errors import PollingTimeoutError, UnexpectedStatusError
from gemina.models import Outcome, Prediction, UploadResponse, WorkflowResult

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_env(monkeypatch, tmp_path):
    """Credentials in the environment and no global logging setup."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GEMINA_API_KEY", "test-key")
    monkeypatch.setenv("GEMINA_CLIENT_ID", "client-123")
    with patch("gemina.cli.configure_logging"):
        yield


@pytest.fixture
def workflow_result(prediction_body):
    return WorkflowResult(
        external_id="doc-1",
        upload_outcome=Outcome.CREATED,
        upload=UploadResponse(external_id="doc-1"),
        prediction=Prediction.model_validate(prediction_body),
        raw_prediction=prediction_body,
        poll_attempts=3,
    )


class TestProcess:
    """Tests for the process command."""

    @patch("gemina.cli.run_workflow")
    def test_success(self, mock_run, invoice_file, workflow_result):
        mock_run.return_value = workflow_result

        result = runner.invoke(app, ["process", str(invoice_file), "--external-id", "doc-1"])

        assert result.exit_code == 0, result.output
        assert "total_amount" in result.output
        assert "Acme Ltd" in result.output
        request = mock_run.call_args.args[1]
        assert request.external_id == "doc-1"
        assert request.client_id == "client-123"
        assert request.use_llm is True

    @patch("gemina.cli.run_workflow")
    def test_no_llm_flag(self, mock_run, invoice_file, workflow_result):
        mock_run.return_value = workflow_result

        result = runner.invoke(app, ["process", str(invoice_file), "--no-llm"])

        assert result.exit_code == 0, result.output
        assert mock_run.call_args.args[1].use_llm is False

    @patch("gemina.cli.run_workflow")
    def test_poll_overrides(self, mock_run, invoice_file, workflow_result):
        mock_run.return_value = workflow_result

        result = runner.invoke(
            app,
            ["process", str(invoice_file), "--max-attempts", "5", "--poll-interval-ms", "250"],
        )

        assert result.exit_code == 0, result.output
        poller = mock_run.call_args.args[2]
        assert poller.max_attempts == 5
        assert poller.poll_interval_seconds == 0.25

    @patch("gemina.cli.run_workflow")
    def test_writes_output(self, mock_run, invoice_file, workflow_result, prediction_body, tmp_path):
        mock_run.return_value = workflow_result
        output = tmp_path / "out" / "prediction.json"

        result = runner.invoke(app, ["process", str(invoice_file), "--output", str(output)])

        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text(encoding="utf-8")) == prediction_body

    @patch("gemina.cli.run_workflow")
    def test_upstream_error_exits_nonzero(self, mock_run, invoice_file):
        mock_run.side_effect = UnexpectedStatusError(500, "/uploads", "boom")

        result = runner.invoke(app, ["process", str(invoice_file)])

        assert result.exit_code == 1
        assert "error message" in result.output
        assert "500" in result.output

    @patch("gemina.cli.run_workflow")
    def test_missing_file(self, mock_run, tmp_path):
        result = runner.invoke(app, ["process", str(tmp_path / "missing.png")])

        assert result.exit_code == 1
        mock_run.assert_not_called()

    @patch("gemina.cli.run_workflow")
    def test_missing_credentials(self, mock_run, invoice_file, monkeypatch):
        monkeypatch.delenv("GEMINA_API_KEY")

        result = runner.invoke(app, ["process", str(invoice_file)])

        assert result.exit_code == 1
        assert "API key" in result.output
        mock_run.assert_not_called()


class TestProcessUrl:
    """Tests for the process-url command."""

    @patch("gemina.cli.run_workflow")
    def test_web_upload(self, mock_run, workflow_result):
        mock_run.return_value = workflow_result

        result = runner.invoke(app, ["process-url", "https://example.com/inv.png"])

        assert result.exit_code == 0, result.output
        request = mock_run.call_args.args[1]
        assert request.url == "https://example.com/inv.png"
        assert request.file is None


class TestFetch:
    """Tests for the fetch command."""

    @patch("gemina.cli.fetch_prediction")
    def test_fetch(self, mock_fetch, workflow_result):
        mock_fetch.return_value = workflow_result.model_copy(update={"upload_outcome": None, "upload": None})

        result = runner.invoke(app, ["fetch", "doc-1"])

        assert result.exit_code == 0, result.output
        assert mock_fetch.call_args.args[1] == "doc-1"
        assert "Poll attempts: 3" in result.output

    @patch("gemina.cli.fetch_prediction")
    def test_timeout(self, mock_fetch):
        mock_fetch.side_effect = PollingTimeoutError("doc-1", 120, 202)

        result = runner.invoke(app, ["fetch", "doc-1"])

        assert result.exit_code == 1
        assert "not ready" in result.output

    @patch("gemina.cli.fetch_prediction")
    def test_empty_prediction(self, mock_fetch):
        mock_fetch.return_value = WorkflowResult(
            external_id="doc-1",
            prediction=Prediction(),
            raw_prediction={},
            poll_attempts=1,
        )

        result = runner.invoke(app, ["fetch", "doc-1"])

        assert result.exit_code == 0, result.output
        assert "no extracted fields" in result.output
