"""
Pytest configuration and fixtures for firestore_rest tests.

Provides raw wire documents and a mocked transport shared by the accessor,
transport and CLI tests.
"""

import os
from unittest.mock import Mock
import pytest

PREFIX = "projects/test-project/databases/(default)/documents"


def make_raw_document(collection, doc_id, fields=None, create_time="2024-01-05T10:11:12.123456789Z",
                      update_time="2024-02-01T08:00:00Z"):
    """Build a raw document body as the store returns it."""
    return {
        "name": f"{PREFIX}/{collection}/{doc_id}",
        "fields": fields or {},
        "createTime": create_time,
        "updateTime": update_time,
    }


@pytest.fixture
def raw_document_factory():
    """Factory for raw document bodies."""
    return make_raw_document


@pytest.fixture
def raw_vocab_set():
    """Raw 'sets' document with nested terms."""
    return make_raw_document(
        "sets",
        "abc123",
        {
            "name": {"stringValue": "Spanish 1"},
            "description": {"stringValue": "Unit one"},
            "uid": {"stringValue": "user-1"},
            "public": {"booleanValue": True},
            "terms": {
                "arrayValue": {
                    "values": [
                        {
                            "mapValue": {
                                "fields": {
                                    "term": {"stringValue": "hola"},
                                    "definition": {"stringValue": "hello"},
                                }
                            }
                        }
                    ]
                }
            },
        },
    )


@pytest.fixture
def raw_meta_set():
    return make_raw_document(
        "meta_sets",
        "meta-1",
        {
            "name": {"stringValue": "Spanish 1"},
            "nameWords": {"arrayValue": {"values": [{"stringValue": "spanish"}, {"stringValue": "1"}]}},
            "creator": {"stringValue": "Ana"},
            "uid": {"stringValue": "user-1"},
            "public": {"booleanValue": False},
            "numTerms": {"integerValue": "42"},
            "collections": {"arrayValue": {}},
            "likes": {"integerValue": "0"},
        },
    )


@pytest.fixture
def mock_transport():
    """Mock document transport for testing."""
    mock = Mock()
    mock.get_document.return_value = None
    mock.run_query.return_value = []
    mock.batch_get.return_value = []
    return mock


@pytest.fixture
def clean_environment():
    """Clean environment variables for testing."""
    env_vars_to_clean = [
        "FIRESTORE_PROJECT_ID",
        "FIRESTORE_DATABASE",
        "FIRESTORE_EMULATOR_HOST",
        "FIRESTORE_ENV",
        "FIRESTORE_HTTP_TIMEOUT",
        "FS_LOG_LEVEL",
    ]

    original_env = {}
    for var in env_vars_to_clean:
        if var in os.environ:
            original_env[var] = os.environ[var]
            del os.environ[var]

    yield

    for var in env_vars_to_clean:
        os.environ.pop(var, None)
    for var, value in original_env.items():
        os.environ[var] = value


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )
    config.addinivalue_line(
        "markers", "cli: mark test as CLI command test"
    )
    config.addinivalue_line(
        "markers", "env: mark test as environment resolution test"
    )
