"""
Unit tests for the import preview cache.

Run: pytest tests/unit/test_preview_cache_service.py -v
"""

from datetime import datetime, timedelta

from services import preview_cache_service


class TestPreviewCache:
    """Tests for store/retrieve/delete."""

    def test_store_and_retrieve(self):
        preview_id = preview_cache_service.store_preview("trips", {"rows": [1, 2]})

        assert preview_cache_service.retrieve_preview("trips", preview_id) == {"rows": [1, 2]}

    def test_ids_are_unique(self):
        first = preview_cache_service.store_preview("trips", {})
        second = preview_cache_service.store_preview("trips", {})

        assert first != second

    def test_unknown_id(self):
        assert preview_cache_service.retrieve_preview("trips", "missing") is None

    def test_kind_must_match(self):
        preview_id = preview_cache_service.store_preview("vehicles", {"rows": []})

        assert preview_cache_service.retrieve_preview("trips", preview_id) is None
        assert preview_cache_service.retrieve_preview("vehicles", preview_id) is not None

    def test_expired_preview_removed(self):
        preview_id = preview_cache_service.store_preview("trips", {})
        _, kind, payload = preview_cache_service._cache[preview_id]
        preview_cache_service._cache[preview_id] = (datetime.now() - timedelta(seconds=1), kind, payload)

        assert preview_cache_service.retrieve_preview("trips", preview_id) is None
        assert preview_id not in preview_cache_service._cache

    def test_delete(self):
        preview_id = preview_cache_service.store_preview("trips", {})

        preview_cache_service.delete_preview(preview_id)
        preview_cache_service.delete_preview(preview_id)

        assert preview_cache_service.retrieve_preview("trips", preview_id) is None

    def test_store_clears_expired_entries(self):
        stale = preview_cache_service.store_preview("trips", {})
        preview_cache_service._cache[stale] = (datetime.now() - timedelta(minutes=1), "trips", {})

        preview_cache_service.store_preview("trips", {})

        assert stale not in preview_cache_service._cache
