"""Tests for structured logging."""

import json
import logging

import pytest


def json_lines(text):
    return [json.loads(line) for line in text.strip().splitlines()]


class TestConfigureLogging:
    """Tests for the package JSON handler."""

    def test_disabled_by_default(self, package_logger):
        """Test no handler is attached unless log_handler is set."""
        from actionbridge.config import Settings
        from actionbridge.logging_config import HANDLER_NAME, configure_logging

        assert configure_logging(Settings()) is None
        assert all(h.get_name() != HANDLER_NAME for h in package_logger.handlers)

    def test_logs_json_to_stdout(self, capsys, package_logger):
        """Test records are emitted as JSON with standard fields."""
        from actionbridge.config import Settings
        from actionbridge.logging_config import configure_logging

        configure_logging(Settings(log_handler=True, log_level="DEBUG"))
        logging.getLogger("actionbridge.test").debug("hello")

        record = json_lines(capsys.readouterr().out)[-1]

        assert record["message"] == "hello"
        assert record["level"] == "DEBUG"
        assert record["logger"] == "actionbridge.test"
        assert "time" in record
        assert "event" not in record

    def test_level_and_stream_from_settings(self, capsys, package_logger):
        """Test the handler honors log_level and log_to_stderr."""
        from actionbridge.config import Settings
        from actionbridge.logging_config import configure_logging

        configure_logging(Settings(
            log_handler=True, log_level="warning", log_to_stderr=True
        ))
        logging.getLogger("actionbridge.test").info("quiet")
        logging.getLogger("actionbridge.test").warning("loud")

        captured = capsys.readouterr()
        assert package_logger.level == logging.WARNING
        assert captured.out == ""
        assert [r["message"] for r in json_lines(captured.err)] == ["loud"]

    def test_reconfigure_replaces_handler(self, package_logger):
        """Test configuring twice leaves a single handler."""
        from actionbridge.config import Settings
        from actionbridge.logging_config import HANDLER_NAME, configure_logging

        configure_logging(Settings(log_handler=True))
        handler = configure_logging(Settings(log_handler=True))

        installed = [h for h in package_logger.handlers if h.get_name() == HANDLER_NAME]
        assert installed == [handler]

        configure_logging(Settings())
        assert all(h.get_name() != HANDLER_NAME for h in package_logger.handlers)


class TestLogInvocation:
    """Tests for invocation logging."""

    def test_start_and_success_records(self, caplog):
        """Test start and success records carry the action fields."""
        from actionbridge.logging_config import log_invocation

        caplog.set_level(logging.INFO, logger="actionbridge.test")

        with log_invocation(
            logging.getLogger("actionbridge.test"), "getWeather", arity="unary"
        ) as outcome:
            outcome["return_type"] = "dict"

        start, success = caplog.records[-2:]
        assert start.event == "action_start"
        assert start.action == "getWeather"
        assert start.arity == "unary"
        assert not hasattr(start, "duration_ms")
        assert success.event == "action_success"
        assert success.return_type == "dict"
        assert success.duration_ms >= 0

    def test_failure_logs_start_only(self, caplog):
        """Test a raising body propagates without a success record."""
        from actionbridge.logging_config import log_invocation

        caplog.set_level(logging.INFO, logger="actionbridge.test")

        with pytest.raises(RuntimeError):
            with log_invocation(logging.getLogger("actionbridge.test"), "ping"):
                raise RuntimeError("handler failed")

        events = [getattr(r, "event", None) for r in caplog.records]
        assert events == ["action_start"]

    def test_event_fields_grouped_in_json(self, capsys, package_logger):
        """Test the JSON output nests the action fields under event."""
        from actionbridge.config import Settings
        from actionbridge.logging_config import configure_logging, log_invocation

        configure_logging(Settings(log_handler=True))

        with log_invocation(
            logging.getLogger("actionbridge.test"), "getWeather", arity="unary"
        ) as outcome:
            outcome["return_type"] = "dict"

        start, success = json_lines(capsys.readouterr().out)[-2:]

        assert start["event"] == {
            "name": "action_start", "action": "getWeather", "arity": "unary",
        }
        assert success["message"] == "Action invocation succeeded"
        assert success["event"]["name"] == "action_success"
        assert success["event"]["return_type"] == "dict"
        assert success["event"]["duration_ms"] >= 0
        assert "action" not in success

    @pytest.mark.asyncio
    async def test_call_function_logs_invocation(self, caplog, actions):
        """Test the executor records each handler invocation."""
        from actionbridge.adapters.openai import call_function

        caplog.set_level(logging.INFO, logger="actionbridge")

        await call_function({"name": "ping"}, actions)

        invocation = [r for r in caplog.records if getattr(r, "event", None)]
        assert [r.event for r in invocation] == ["action_start", "action_success"]
        assert invocation[-1].action == "ping"
        assert invocation[-1].return_type == "str"
        assert all(not hasattr(r, "result") for r in caplog.records)
