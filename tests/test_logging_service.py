import logging

import pytest

from overlay.services.logging_service import LoggingService

NAME = "overlay.test_logging"


@pytest.fixture
def service():
    svc = LoggingService(capacity=3)
    svc.attach(NAME)
    try:
        yield svc
    finally:
        svc.detach()
        logging.getLogger(NAME).setLevel(logging.NOTSET)


def test_captures_records_into_ring_buffer(service):
    log = logging.getLogger(NAME + ".child")
    for i in range(5):
        log.info("message %d", i)
    entries = service.recent()
    assert [e.message for e in entries] == ["message 2", "message 3", "message 4"]
    assert entries[0].name == NAME + ".child"
    assert [e.message for e in service.recent(limit=1)] == ["message 4"]


def test_debug_preference_controls_level(service):
    log = logging.getLogger(NAME)
    log.debug("hidden")
    assert service.recent() == []
    service.debug_logging = True
    assert log.level == logging.DEBUG
    log.debug("shown")
    assert [e.level for e in service.recent()] == ["DEBUG"]
    service.debug_logging = False
    assert log.level == logging.INFO


def test_filters_and_clear(service):
    logging.getLogger(NAME + ".cache").warning("evicted")
    logging.getLogger(NAME + ".generator").info("generated")
    assert [e.message for e in service.recent(level="WARNING")] == ["evicted"]
    assert [e.message for e in service.recent(name_contains="generator")] == ["generated"]
    service.clear()
    assert service.recent() == []


def test_listener_and_detach():
    seen = []
    svc = LoggingService(listener=seen.append)
    svc.attach(NAME)
    try:
        logging.getLogger(NAME).info("hello")
        svc.detach()
        assert logging.getLogger(NAME).handlers == []
        logging.getLogger(NAME).info("after")
    finally:
        logging.getLogger(NAME).setLevel(logging.NOTSET)
    assert [e.message for e in seen] == ["hello"]
