"""Shared fixtures for the amqpgen test suite."""

import json
from pathlib import Path

import pytest

from amqpgen.codegen import compile_module
from amqpgen.schema.loader import load_schema

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def schema_path() -> Path:
    """Path to a subset of the AMQP 0-9-1 protocol schema."""
    return DATA_DIR / "amqp-subset.json"


@pytest.fixture
def schema_document(schema_path: Path) -> dict:
    return json.loads(schema_path.read_text(encoding="utf-8"))


@pytest.fixture
def amqp_schema(schema_document: dict):
    return load_schema(schema_document)


@pytest.fixture
def amqp_module(amqp_schema):
    """The generated module for the AMQP subset, compiled and executed."""
    return compile_module(amqp_schema)
