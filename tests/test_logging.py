import logging

from starlette.requests import Request

from metricmeta.core.logging import (
    RequestLoggerAdapter,
    configure_logging,
    get_log_context,
    record_error,
    request_logger,
)


def _request() -> Request:
    return Request(
        {
            "type": "http",
            "method": "POST",
            "scheme": "http",
            "server": ("testserver", 80),
            "path": "/api/v1/series",
            "root_path": "",
            "query_string": b"",
            "headers": [],
        }
    )


def test_get_log_context_binds_adapter_when_missing():
    log = get_log_context(_request())

    assert isinstance(log, RequestLoggerAdapter)
    assert log.logger is request_logger
    assert log.extra["method"] == "POST"
    assert log.extra["path"] == "/api/v1/series"
    assert len(log.extra["request_id"]) == 32


def test_get_log_context_reuses_request_id():
    request = _request()
    request.state.request_id = "abc"

    assert get_log_context(request).extra["request_id"] == "abc"


def test_record_error_logs_with_prefix_and_traceback(caplog):
    log = RequestLoggerAdapter(
        request_logger, {"request_id": "abc", "method": "GET", "path": "/x"}
    )
    try:
        raise RuntimeError("boom")
    except RuntimeError as e:
        error = e

    with caplog.at_level(logging.ERROR, logger="metricmeta.request"):
        record_error(error, log)

    record = caplog.records[-1]
    assert record.levelno == logging.ERROR
    assert record.getMessage() == "[abc] GET /x Unhandled RuntimeError while processing request"
    assert record.request_id == "abc"
    assert record.exc_info[1] is error


def test_configure_logging_quiets_uvicorn_info():
    configure_logging("DEBUG")
    try:
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
        assert logging.getLogger("uvicorn.error").level == logging.WARNING
    finally:
        configure_logging("INFO")
