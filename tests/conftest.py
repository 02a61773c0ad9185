import os

import pytest
from fastapi.testclient import TestClient

from buildergen.core.metadata import Metadata
from buildergen.core.observability.metrics import reset_metrics


@pytest.fixture(scope="session", autouse=True)
def _force_test_env():
    # Make runtime behave deterministically in tests
    os.environ.setdefault("BUILDERGEN_ENV", "dev")


@pytest.fixture(autouse=True)
def _clean_metrics():
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture()
def client():
    from buildergen.api.main import app

    return TestClient(app)


@pytest.fixture()
def person_metadata():
    return Metadata.for_type("com.example.Person")
