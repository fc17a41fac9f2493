"""Pytest fixtures for the kanban API and board client."""

import os

import pytest


# Disable OpenTelemetry for tests
os.environ["OTEL_SDK_DISABLED"] = "true"


@pytest.fixture
def app():
    """Create test application."""
    from kanban import create_app
    from kanban.config import TestConfig

    app = create_app(TestConfig)
    app.config["TESTING"] = True

    yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def db(app):
    """Create test database."""
    from kanban.extensions import db as _db

    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def task(db):
    """Create a task through the service."""
    from kanban.services.tasks import create_task

    return create_task("Write spec")


@pytest.fixture
def local_store(tmp_path):
    """Local fallback store backed by a temporary file."""
    from kanban.client.storage import LocalStorage, LocalTaskStore

    return LocalTaskStore(LocalStorage(str(tmp_path / "local_storage.json")))
