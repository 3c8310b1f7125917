import json
import logging
import os
from unittest import mock

from agent_traces.telemetry import JsonFormatter, get_tracer, setup_logging


def test_get_tracer():
    with mock.patch("agent_traces.telemetry.trace.get_tracer") as mock_get_tracer:
        mock_tracer = mock.Mock()
        mock_get_tracer.return_value = mock_tracer

        tracer = get_tracer("test_module")

        mock_get_tracer.assert_called_with("test_module")
        assert tracer == mock_tracer


def test_json_formatter():
    record = logging.LogRecord(
        name="agent_traces.test",
        level=logging.INFO,
        pathname="path",
        lineno=1,
        msg="Generated %d sessions",
        args=(3,),
        exc_info=None,
    )
    log_obj = json.loads(JsonFormatter().format(record))
    assert log_obj["message"] == "Generated 3 sessions"
    assert log_obj["severity"] == "INFO"
    assert log_obj["logger"] == "agent_traces.test"
    assert "trace_id" not in log_obj


def test_setup_logging_honours_log_level_env():
    with (
        mock.patch.dict(os.environ, {"LOG_LEVEL": "debug"}, clear=True),
        mock.patch("agent_traces.telemetry.logging.basicConfig") as mock_basic,
    ):
        setup_logging()
    assert mock_basic.call_args.kwargs["level"] == logging.DEBUG


def test_setup_logging_json_format():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        with mock.patch.dict(os.environ, {"LOG_FORMAT": "json"}, clear=True):
            setup_logging(logging.WARNING)
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert root.level == logging.WARNING
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
