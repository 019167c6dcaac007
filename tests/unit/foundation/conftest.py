"""Fixtures for foundation tests."""

import pytest

from .fakes import FakeOptimizer, RecordingTransport

# pylint: disable=redefined-outer-name


@pytest.fixture
def bucket_path(tmp_path, monkeypatch):
    """Where the fake optimizer places the bucket-backed storage root."""
    path = tmp_path / "bucket"
    monkeypatch.setattr(FakeOptimizer, "TEMPORARY_PATH", path)
    return path


@pytest.fixture
def optimizers():
    """Every FakeOptimizer built by `optimizer_factory`, in order."""
    return []


@pytest.fixture
def optimizer_paths():
    """Paths the fake optimizer reports; tests fill this in."""
    return {}


@pytest.fixture
def optimizer_factory(optimizers, optimizer_paths):
    """Factory matching the `(base_path, interactive)` constructor protocol."""

    def factory(base_path, interactive):
        optimizer = FakeOptimizer(base_path, interactive, optimizer_paths)
        optimizers.append(optimizer)
        return optimizer

    return factory


@pytest.fixture
def transport():
    """A fresh recording transport."""
    return RecordingTransport()
