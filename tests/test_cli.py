from click.testing import CliRunner

from fraudquery.cli import main


def test_parse_timeframe_command() -> None:
    result = CliRunner().invoke(main, ["parse-timeframe", "5", "minutes"])

    assert result.exit_code == 0
    assert "300000" in result.output


def test_parse_timeframe_command_rejects_unknown_unit() -> None:
    result = CliRunner().invoke(main, ["parse-timeframe", "5", "fortnights"])

    assert result.exit_code != 0
    assert "Unknown time unit: fortnights" in result.output


def test_query_command_reports_bad_config(tmp_path) -> None:
    config = tmp_path / "application.properties"
    config.write_text("nats.port=not-a-number\n", encoding="utf-8")

    result = CliRunner().invoke(
        main, ["--config", str(config), "query", "k", "-t", "1 day", "-s", "card"]
    )

    assert result.exit_code != 0
    assert "nats.port" in result.output


def test_parse_timeframe_command_rejects_oversized_number() -> None:
    result = CliRunner().invoke(main, ["parse-timeframe", "1" * 5000, "seconds"])

    assert result.exit_code == 1
    assert not isinstance(result.exception, ValueError)
    assert "Invalid number" in result.output


def test_query_command_reports_blank_topic(tmp_path) -> None:
    config = tmp_path / "application.properties"
    config.write_text("fraud.query.topic=   \n", encoding="utf-8")

    result = CliRunner().invoke(
        main, ["--config", str(config), "query", "k", "-t", "1 day", "-s", "card"]
    )

    assert result.exit_code == 1
    assert "Invalid gateway settings" in result.output
