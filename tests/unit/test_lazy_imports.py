# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Tests for lazy import patterns in __init__.py modules.

These tests cover the __getattr__ lazy import mechanisms used for the
optional Redis snapshot backend.
"""

import pytest


class TestTopLevelLazyImports:
    """Test lazy imports from the top-level tracewise module."""

    def test_lazy_redis_backend_import(self):
        """Cover __getattr__ lazy import of RedisSnapshotBackend from top-level module."""
        from tracewise import RedisSnapshotBackend
        from tracewise.backends.base import SnapshotBackend

        assert issubclass(RedisSnapshotBackend, SnapshotBackend)

    def test_unknown_attribute_raises_attribute_error(self):
        import tracewise

        with pytest.raises(AttributeError, match=r"has no attribute"):
            _ = tracewise.NonExistentAttribute

    def test_unknown_attribute_error_message_format(self):
        """Verify the error message format for unknown attributes."""
        import tracewise

        with pytest.raises(
            AttributeError,
            match=r"module 'tracewise' has no attribute 'FakeClass'",
        ):
            _ = tracewise.FakeClass

    def test_version(self):
        import tracewise

        assert tracewise.__version__ == "1.0.0"


class TestBackendsLazyImports:
    """Test lazy imports from the backends submodule."""

    def test_lazy_redis_backend_import(self):
        from tracewise.backends import RedisSnapshotBackend

        assert RedisSnapshotBackend.backend_type == "redis"

    def test_same_class_from_both_paths(self):
        from tracewise import RedisSnapshotBackend as top_level
        from tracewise.backends import RedisSnapshotBackend as from_backends
        from tracewise.backends.redis import RedisSnapshotBackend as direct

        assert top_level is from_backends is direct

    def test_unknown_attribute_raises_attribute_error(self):
        import tracewise.backends

        with pytest.raises(
            AttributeError,
            match=r"module 'tracewise.backends' has no attribute 'Missing'",
        ):
            _ = tracewise.backends.Missing
