import logging

from procurement_app import logging as app_logging


def test_configure_logging_is_idempotent(monkeypatch):
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    monkeypatch.setattr(app_logging, "_configured", False)
    monkeypatch.setenv("LOG_LEVEL", "warning")
    try:
        app_logging.configure_logging()
        app_logging.configure_logging()
        added = [h for h in root.handlers if h not in before]
        assert len(added) == 1
        assert root.level == logging.WARNING
        assert added[0].formatter._fmt == app_logging.LOG_FORMAT
    finally:
        root.setLevel(level)
        for handler in root.handlers[:]:
            if handler not in before:
                root.removeHandler(handler)


def test_get_logger_and_flush():
    logger = app_logging.get_logger("procurement.test")
    assert logger.name == "procurement.test"
    app_logging.flush_logs()
