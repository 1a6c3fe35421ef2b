# tests/core/events/test_event_log.py
"""
Testes do log estruturado de eventos.

Os testes asseguram que:
- todo evento inclui `file`, `level`, `message` e `timestamp`
- campos extras são preservados
- warnings são agrupados por chave e também viram eventos
- o log descarta os eventos mais antigos ao atingir o limite
"""

import pytest

from yamlbind.core.events import EventLog


def test_log_records_structured_event():
    log = EventLog(source="/tmp/c.yml")
    log.log(level="info", message="saved", key="a.b")

    assert len(log.events) == 1
    event = log.events[0]
    assert event["file"] == "/tmp/c.yml"
    assert event["level"] == "info"
    assert event["message"] == "saved"
    assert event["key"] == "a.b"
    assert event["timestamp"].endswith("+00:00")


def test_warnings_are_grouped_by_key():
    log = EventLog(source="c.yml")
    log.add_warning(key="server.port", message="bad port")
    log.add_warning(key="server.port", message="still bad")
    log.add_warning(key="world.pvp", message="bad bool")

    assert log.warnings == {
        "server.port": ["bad port", "still bad"],
        "world.pvp": ["bad bool"],
    }
    assert [e["level"] for e in log.events] == ["warning"] * 3


def test_of_filters_by_message():
    log = EventLog(source="c.yml")
    log.log(level="info", message="saved")
    log.log(level="info", message="loaded")
    log.log(level="info", message="saved")
    assert len(log.of("saved")) == 2
    assert log.of("missing") == []


def test_event_log_is_bounded():
    log = EventLog(source="c.yml", max_events=10)
    for i in range(25):
        log.log(level="info", message="value_set", index=i)

    assert len(log.events) == 10
    assert log.events[0]["index"] == 15
    assert log.events[-1]["index"] == 24


def test_clear_warnings_drops_only_that_key():
    log = EventLog(source="c.yml")
    log.add_warning(key="a", message="bad")
    log.add_warning(key="b", message="bad")
    log.clear_warnings("a")
    log.clear_warnings("missing")
    assert log.warnings == {"b": ["bad"]}


def test_invalid_bound_is_rejected():
    with pytest.raises(ValueError):
        EventLog(source="c.yml", max_events=0)
