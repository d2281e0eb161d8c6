"""Tests for identifier canonicalization."""

import pytest

from amqpgen.naming import camel_case, capitalize, constant_name, pascal_case


@pytest.mark.parametrize("name, expected", [
    ("queue-name", "queueName"),
    ("queue", "queue"),
    ("basic.qos-ok", "basicQosOk"),
    ("reserved-1", "reserved1"),
    ("auto-delete", "autoDelete"),
])
def test_camel_case(name: str, expected: str):
    assert camel_case(name) == expected


@pytest.mark.parametrize("name, expected", [
    ("queue-name", "QueueName"),
    ("start-ok", "StartOk"),
    ("basic.qos-ok", "BasicQosOk"),
    ("connection", "Connection"),
])
def test_pascal_case(name: str, expected: str):
    assert pascal_case(name) == expected


@pytest.mark.parametrize("name, expected", [
    ("queue-name", "QUEUE_NAME"),
    ("frame-min-size", "FRAME_MIN_SIZE"),
    ("FRAME-METHOD", "FRAME_METHOD"),
    ("reply-success", "REPLY_SUCCESS"),
])
def test_constant_name(name: str, expected: str):
    assert constant_name(name) == expected


def test_capitalize_only_touches_first_letter():
    assert capitalize("qos") == "Qos"
    assert capitalize("xMatch") == "XMatch"
    assert capitalize("") == ""


def test_canonical_forms_agree_on_segments():
    """All three forms are built from the same segments."""
    name = "consumer-cancel-notify"
    assert camel_case(name) == "consumerCancelNotify"
    assert pascal_case(name) == capitalize(camel_case(name))
    assert constant_name(name) == "CONSUMER_CANCEL_NOTIFY"


@pytest.mark.parametrize("func", [camel_case, pascal_case, constant_name])
def test_empty_identifier_is_rejected(func):
    with pytest.raises(ValueError):
        func("")


@pytest.mark.parametrize("func, name", [
    (camel_case, "queueName"),
    (pascal_case, "QueueName"),
    (constant_name, "QUEUE_NAME"),
])
def test_canonical_input_is_unchanged(func, name: str):
    assert func(name) == name
    assert func(func(name)) == func(name)
