"""Identifier conventions shared by every generated symbol.

Schema identifiers are lowercase words joined with ``-`` or ``.``
(``queue-name``, ``basic.qos-ok``). They are rewritten into three forms:

* lower camel (``queueName``) for dictionary keys,
* upper camel (``QueueName``) for shape and function names,
* upper snake (``QUEUE_NAME``) for constants.
"""
import re

_DELIMITER = re.compile(r"[-.]")


def _segments(name: str) -> list[str]:
    if not name:
        raise ValueError("Identifier must not be empty")
    return _DELIMITER.split(name)


def capitalize(word: str) -> str:
    """Upper-case the first letter of ``word`` and leave the rest untouched."""
    return word[:1].upper() + word[1:]


def camel_case(name: str) -> str:
    first, *rest = _segments(name)
    return first + "".join(capitalize(segment) for segment in rest)


def pascal_case(name: str) -> str:
    return "".join(capitalize(segment) for segment in _segments(name))


def constant_name(name: str) -> str:
    return "_".join(_segments(name)).upper()


__all__ = ["camel_case", "capitalize", "constant_name", "pascal_case"]
