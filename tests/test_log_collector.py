import logging
import threading

from request_review.utils.log_collector import ApplicationLogHandler


def make_logger(handler):
    logger = logging.getLogger("request_review.tests.collector")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.handlers = [handler]
    return logger


def test_collects_and_filters():
    handler = ApplicationLogHandler(max_size=10)
    logger = make_logger(handler)

    logger.info("loaded %d request(s)", 2)
    logger.error("backend unavailable")
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        logger.exception("approve failed")

    logs = handler.get_logs()
    assert [log["message"] for log in logs] == ["loaded 2 request(s)", "backend unavailable", "approve failed"]
    assert logs[2]["exc_info"] and "RuntimeError" in logs[2]["exc_info"]

    assert [log["message"] for log in handler.get_logs(level="error")] == ["backend unavailable", "approve failed"]
    assert [log["message"] for log in handler.get_logs(search="LOADED")] == ["loaded 2 request(s)"]
    assert handler.get_logs(logger_name="other") == []
    assert len(handler.get_logs(limit=1)) == 1

    assert handler.get_stats() == {"total_logs": 3, "by_level": {"INFO": 1, "ERROR": 2}}
    handler.clear()
    assert handler.get_logs() == []


def test_bounded_size():
    handler = ApplicationLogHandler(max_size=2)
    logger = make_logger(handler)
    for i in range(5):
        logger.warning(f"entry {i}")
    assert [log["message"] for log in handler.get_logs()] == ["entry 3", "entry 4"]


def test_logging_from_thread_does_not_block():
    handler = ApplicationLogHandler(max_size=10)
    logger = make_logger(handler)

    worker = threading.Thread(target=lambda: logger.info("from worker"), daemon=True)
    worker.start()
    worker.join(timeout=5)

    assert not worker.is_alive()
    assert [log["message"] for log in handler.get_logs()] == ["from worker"]
