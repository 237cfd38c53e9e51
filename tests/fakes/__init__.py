"""Reusable persistence fakes for builder tests."""

from .persisters import FailingPersister, RecordingPersister

__all__ = ["FailingPersister", "RecordingPersister"]
