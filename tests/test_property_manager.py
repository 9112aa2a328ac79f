"""Tests for the deletion workflow across notes."""

import pytest

from obsidian_properties.core.property_manager import PropertyValueManager
from obsidian_properties.data_models import ManagerSettings

TYPES = {"tags": "multitext", "status": "text"}


@pytest.fixture
def store(fake_store_factory):
    return fake_store_factory(
        {
            "doc1": "---\ntags: [draft, python]\n---\nOne\n",
            "doc2": "---\ntags:\n  - draft\n---\nTwo\n",
            "doc3": "---\ntitle: Three\ntags: draft\n---\nThree\n",
            "doc4": "---\ntags: [python]\n---\nFour\n",
        },
        types=TYPES,
    )


class TestScan:
    def test_scan_builds_index(self, store):
        manager = PropertyValueManager(store)
        index = manager.scan()
        assert list(index) == ["tags"]
        assert index["tags"].sorted_values() == ["draft", "python"]
        assert index["tags"].file_count("draft") == 3

    def test_index_scans_lazily(self, store):
        manager = PropertyValueManager(store)
        assert manager.index["tags"].file_count("python") == 2

    def test_unknown_property_raises(self, store):
        manager = PropertyValueManager(store)
        with pytest.raises(ValueError, match="status"):
            manager.get_property("status")


class TestDeleteValue:
    def test_deletes_value_from_every_note(self, store):
        manager = PropertyValueManager(store)
        result = manager.delete_value("tags", "draft")

        assert result.targeted_count == 3
        assert result.updated_count == 3
        assert result.failed_files == []
        assert result.modified_files == ["doc1", "doc2", "doc3"]
        assert not result.orphaned

        assert store.texts["doc1"] == "---\ntags: [python]\n---\nOne\n"
        assert store.texts["doc2"] == "---\n---\nTwo\n"
        assert store.texts["doc3"] == "---\ntitle: Three\n---\nThree\n"
        assert store.texts["doc4"] == "---\ntags: [python]\n---\nFour\n"

    def test_index_rebuilt_after_batch(self, store):
        manager = PropertyValueManager(store)
        before = manager.index
        manager.delete_value("tags", "draft")

        assert manager.index is not before
        assert manager.index["tags"].sorted_values() == ["python"]

    def test_partial_failure_continues_batch(self, fake_store_factory):
        store = fake_store_factory(
            {
                "doc1": "---\ntags: [gone]\n---\n",
                "doc2": "---\ntags: [gone, kept]\n---\n",
                "doc3": "---\ntags:\n  - gone\n  - kept\n---\n",
            },
            types=TYPES,
        )
        store.failing_writes.add("doc2")
        manager = PropertyValueManager(store)

        result = manager.delete_value("tags", "gone")

        assert result.targeted_count == 3
        assert result.updated_count == 2
        assert result.failed_files == ["doc2"]
        assert result.modified_files == ["doc1", "doc3"]
        assert store.writes == ["doc1", "doc3"]
        assert store.texts["doc3"] == "---\ntags:\n  - kept\n---\n"
        # The failed note still carries the value after the rescan.
        assert manager.index["tags"].file_count("gone") == 1

    def test_read_failure_is_recorded(self, store):
        store.failing_reads.add("doc2")
        manager = PropertyValueManager(store)
        result = manager.delete_value("tags", "draft")
        assert result.failed_files == ["doc2"]
        assert result.updated_count == 2

    def test_notes_processed_in_index_order(self, store):
        manager = PropertyValueManager(store)
        manager.scan()
        store.reads.clear()
        manager.delete_value("tags", "draft")
        assert store.reads == ["doc1", "doc2", "doc3"]

    def test_note_without_matching_text_is_not_written(self, store):
        manager = PropertyValueManager(store)
        manager.scan()
        # Edited outside the manager after the scan.
        store.texts["doc2"] = "---\ntags:\n  - other\n---\nTwo\n"

        result = manager.delete_value("tags", "draft")

        assert result.unchanged_files == ["doc2"]
        assert result.updated_count == 2
        assert "doc2" not in store.writes

    def test_repeated_value_patched_once(self, fake_store_factory):
        store = fake_store_factory({"doc": "---\ntags: [a, a, b]\n---\n"}, types=TYPES)
        manager = PropertyValueManager(store)
        result = manager.delete_value("tags", "a")
        assert result.targeted_count == 1
        assert store.writes == ["doc"]
        assert store.texts["doc"] == "---\ntags: [b]\n---\n"

    def test_yaml_lookalike_values_keep_their_spelling(self, fake_store_factory):
        store = fake_store_factory(
            {"doc": "---\ntags:\n  - yes\n  - 010\n  - keep\n---\n"}, types=TYPES
        )
        manager = PropertyValueManager(store)
        assert manager.index["tags"].sorted_values() == ["010", "keep", "yes"]

        assert manager.delete_value("tags", "yes").updated_count == 1
        assert manager.delete_value("tags", "010").updated_count == 1
        assert store.texts["doc"] == "---\ntags:\n  - keep\n---\n"
        assert manager.index["tags"].sorted_values() == ["keep"]

    def test_unchanged_notes_not_counted_as_updated(self, store):
        manager = PropertyValueManager(store)
        manager.scan()
        store.texts["doc3"] = "---\ntitle: Three\ntags: \"draft\"\n---\nThree\n"

        payload = manager.delete_value("tags", "draft").as_payload()

        assert payload["updated_count"] == 2
        assert payload["unchanged_files"] == ["doc3"]

    def test_unknown_value_raises(self, store):
        manager = PropertyValueManager(store)
        with pytest.raises(ValueError, match="missing"):
            manager.delete_value("tags", "missing")
        assert store.writes == []


class TestOrphanedValues:
    def test_orphan_reported_with_zero_files(self, store):
        manager = PropertyValueManager(store, known_values={"tags": ["stale"]})
        entry = manager.index["tags"]
        assert entry.file_count("stale") == 0
        assert entry.is_orphaned("stale")

    def test_orphan_removed_without_io(self, store):
        manager = PropertyValueManager(store, known_values={"tags": ["stale", "python"]})
        manager.scan()
        store.reads.clear()

        result = manager.delete_value("tags", "stale")

        assert result.orphaned
        assert result.targeted_count == 0
        assert result.updated_count == 0
        assert store.reads == []
        assert store.writes == []
        assert "stale" not in manager.index["tags"].values
        assert manager.known_values == {"tags": {"python"}}

    def test_orphan_stays_gone_after_rescan(self, store):
        manager = PropertyValueManager(store, known_values={"tags": ["stale"]})
        manager.delete_value("tags", "stale")
        assert "stale" not in manager.scan()["tags"].values

    def test_deleted_value_leaves_known_values_cache(self, store):
        manager = PropertyValueManager(store, known_values={"tags": ["draft"]})
        manager.delete_value("tags", "draft")
        assert manager.known_values == {}
        assert "draft" not in manager.index["tags"].values


class TestPreview:
    def test_preview_for_used_value(self, store):
        manager = PropertyValueManager(store, settings=ManagerSettings(confirm_before_delete=True))
        preview = manager.preview_deletion("tags", "draft")
        assert preview["file_count"] == 3
        assert not preview["orphaned"]
        assert "3 note(s)" in preview["message"]
        assert store.writes == []

    def test_preview_for_orphan(self, store):
        manager = PropertyValueManager(store, known_values={"tags": ["stale"]})
        preview = manager.preview_deletion("tags", "stale")
        assert preview["orphaned"]
        assert "orphaned" in preview["message"]
