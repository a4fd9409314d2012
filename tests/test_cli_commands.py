"""Tests for CLI command parsing and output."""

from __future__ import annotations

from unittest.mock import AsyncMock, Mock, patch

import pytest
from typer.testing import CliRunner

from bitbankcc.api.models import Assets, Candlestick, Depth, Ticker, Transactions
from bitbankcc.cli import app, run_cli
from bitbankcc.errors import AuthenticationError, ConfigurationError, TransportError
from bitbankcc.settings import Settings


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def mock_client():
    client = Mock()
    client.close = AsyncMock()
    with patch("bitbankcc.cli._load_settings", return_value=Settings()), patch(
        "bitbankcc.cli._configure_logging"
    ), patch("bitbankcc.cli._create_client", return_value=client):
        yield client


def test_cli_help(runner):
    """Test that CLI shows help correctly."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "bitbank.cc" in result.output


def test_cli_commands_available(runner):
    """Test that all expected CLI commands are available."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for command in ("ticker", "depth", "candlestick", "transactions", "assets"):
        assert command in result.output


def test_run_cli_help():
    """Test run_cli with explicit argv."""
    with pytest.raises(SystemExit) as exc_info:
        run_cli(["--help"])
    assert exc_info.value.code == 0


def test_ticker(runner, mock_client, ticker_data):
    """Test ticker output and client cleanup."""
    mock_client.get_ticker = AsyncMock(return_value=Ticker.model_validate(ticker_data))

    result = runner.invoke(app, ["ticker", "btc_jpy"])

    assert result.exit_code == 0
    assert "4500050.5" in result.output
    mock_client.get_ticker.assert_awaited_once_with("btc_jpy")
    mock_client.close.assert_awaited_once()


def test_depth_levels(runner, mock_client, depth_data):
    """Test that --levels limits the ladder."""
    mock_client.get_depth = AsyncMock(return_value=Depth.model_validate(depth_data))

    result = runner.invoke(app, ["depth", "btc_jpy", "--levels", "1"])

    assert result.exit_code == 0
    assert "4500100" in result.output
    assert "4500200" not in result.output


def test_depth_levels_must_be_positive(runner, mock_client):
    """Test that --levels below one is a usage error."""
    mock_client.get_depth = AsyncMock()

    result = runner.invoke(app, ["depth", "btc_jpy", "--levels", "0"])

    assert result.exit_code == 2
    mock_client.get_depth.assert_not_awaited()


def test_candlestick(runner, mock_client, candlestick_data):
    """Test candlestick arguments are passed through."""
    mock_client.get_candlestick = AsyncMock(return_value=Candlestick.model_validate(candlestick_data))

    result = runner.invoke(app, ["candlestick", "btc_jpy", "1hour", "20230328"])

    assert result.exit_code == 0
    mock_client.get_candlestick.assert_awaited_once_with("btc_jpy", "1hour", "20230328")
    assert "12.3456" in result.output


def test_transactions(runner, mock_client, transactions_data):
    """Test transactions with a date option."""
    mock_client.get_transactions = AsyncMock(return_value=Transactions.model_validate(transactions_data))

    result = runner.invoke(app, ["transactions", "btc_jpy", "--date", "20230328"])

    assert result.exit_code == 0
    mock_client.get_transactions.assert_awaited_once_with("btc_jpy", "20230328")
    assert "100001" in result.output


def test_transactions_side_printed_literally(runner, mock_client, transactions_data):
    """Test that markup in a trade side is shown as text."""
    transactions_data["transactions"][1]["side"] = "[bold]sell"
    mock_client.get_transactions = AsyncMock(return_value=Transactions.model_validate(transactions_data))

    result = runner.invoke(app, ["transactions", "btc_jpy"])

    assert result.exit_code == 0
    assert "[bold]sell" in result.output


def test_assets_hides_zero_balances(runner, mock_client, assets_data):
    """Test that empty balances are hidden by default."""
    assets_data["assets"].append(
        {
            "asset": "xrp",
            "free_amount": "0",
            "amount_precision": 6,
            "onhand_amount": "0",
            "locked_amount": "0",
        }
    )
    mock_client.get_assets = AsyncMock(return_value=Assets.model_validate(assets_data))

    result = runner.invoke(app, ["assets"])

    assert result.exit_code == 0
    assert "btc" in result.output
    assert "xrp" not in result.output

    result = runner.invoke(app, ["assets", "--show-zero"])
    assert "xrp" in result.output


def test_assets_without_credentials(runner, mock_client):
    """Test that library errors exit with status 1."""
    mock_client.get_assets = AsyncMock(side_effect=AuthenticationError("private endpoint requires an API key and secret"))

    result = runner.invoke(app, ["assets"])

    assert result.exit_code == 1
    assert "Error" in result.output
    mock_client.close.assert_awaited_once()


def test_transport_failure(runner, mock_client):
    """Test that transport failures are reported, not raised."""
    mock_client.get_ticker = AsyncMock(side_effect=TransportError("timed out"))

    result = runner.invoke(app, ["ticker", "btc_jpy"])

    assert result.exit_code == 1
    assert "timed out" in result.output


def test_config_option_passed(runner, tmp_path, ticker_data):
    """Test that --config reaches the settings loader."""
    client = Mock()
    client.close = AsyncMock()
    client.get_ticker = AsyncMock(return_value=Ticker.model_validate(ticker_data))
    path = tmp_path / "config.yml"

    with patch("bitbankcc.cli._load_settings", return_value=Settings()) as load, patch(
        "bitbankcc.cli._configure_logging"
    ) as configure, patch("bitbankcc.cli._create_client", return_value=client):
        result = runner.invoke(app, ["ticker", "btc_jpy", "--config", str(path)])

    assert result.exit_code == 0
    load.assert_called_once_with(path)
    configure.assert_called_once_with([])


def test_invalid_config_reported(runner):
    """Test that configuration errors exit with status 1."""
    with patch("bitbankcc.cli._load_settings", side_effect=ConfigurationError("Invalid configuration: http.timeout")):
        result = runner.invoke(app, ["ticker", "btc_jpy"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
