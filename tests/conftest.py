# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - SampleDocument     → class mirroring a typical application model
# - sample_document    → a populated SampleDocument instance
# - sample_record      → the same data as a plain dict
# - schema_store       → SchemaStore rooted in tmp_path
# - clean_config       → resets the config singleton around a test
#
# ==============================================

from datetime import datetime
from decimal import Decimal

import pytest
from bson.decimal128 import Decimal128
from bson.objectid import ObjectId

from docschema.config import reset_config
from docschema.persistence import SchemaStore


class SampleDocument:
    """Application model with one attribute of every supported kind."""

    def __init__(self, string_property, number_property=None):
        self.string_property = string_property
        self.number_property = number_property
        self.buffer_property = b"xyz"
        self.boolean_property = False
        self.mixed_property = None
        self.object_id = ObjectId()
        self.created_at = datetime(2022, 1, 1, 12, 0, 0)
        self.array_property_with_primitives = ["string1", "string2"]
        self.array_property_with_objects = [{"name": "name1"}, {"name": "name2"}]
        self.decimal128_property = Decimal128("1.234")
        self.map_property = MapProperty({"key1": "value1", "key2": "value2"})

    @staticmethod
    def static_method(a):
        return a

    def instance_method(self, b):
        return b * 2


class MapProperty(dict):
    """Key-value map (a dict subclass, so not a plain nested object)."""


@pytest.fixture
def sample_document():
    return SampleDocument("name1", 100)


@pytest.fixture
def sample_record():
    return {
        "username": "johndoe",
        "name": "John Doe",
        "steps": 11994,
        "sleep_hours": 4.1,
        "is_active": True,
        "item": None,
        "balance": Decimal("10.50"),
        "metadata": {
            "sensor_data": {
                "version": "2.1",
                "calibrated": False,
                "readings": [10, 8, 10],
            },
            "tags": ["fitness"],
        },
    }


@pytest.fixture
def schema_store(tmp_path):
    return SchemaStore(str(tmp_path / "metadata"))


@pytest.fixture
def clean_config():
    reset_config()
    yield
    reset_config()
