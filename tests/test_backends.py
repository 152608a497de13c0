"""
Tests for settings backends — in-memory and YAML-file storage
"""

import pytest
import yaml

from hubline.settings import GLOBAL, MemoryBackend, SettingError, VariableStore, YamlBackend


class TestMemoryBackend:

    def test_set_and_get(self):
        backend = MemoryBackend()
        backend.set(0, "nick", "alice")
        assert backend.get(0, "nick") == "alice"
        assert backend.get(1, "nick") is None

    def test_none_removes(self):
        backend = MemoryBackend({3: {"nick": "bob"}})
        backend.set(3, "nick", None)
        assert backend.get(3, "nick") is None
        assert backend.scopes() == []

    def test_scopes_exclude_global(self):
        backend = MemoryBackend({0: {"nick": "a"}, 9: {"x": "1"}, 2: {"y": "2"}})
        assert backend.scopes() == [2, 9]

    def test_initial_data_is_copied(self):
        data = {0: {"nick": "a"}}
        backend = MemoryBackend(data)
        backend.set(0, "nick", "b")
        assert data[0]["nick"] == "a"


class TestYamlBackend:

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "settings.yaml"
        backend = YamlBackend(path)
        backend.set(0, "nick", "alice")
        backend.set(42, "hubname", "#example")

        reloaded = YamlBackend(path)
        assert reloaded.get(0, "nick") == "alice"
        assert reloaded.get(42, "hubname") == "#example"
        assert reloaded.scopes() == [42]

    def test_file_layout(self, tmp_path):
        path = tmp_path / "settings.yaml"
        backend = YamlBackend(path)
        backend.set(0, "slots", "4")
        backend.set(7, "hubname", "#h")

        doc = yaml.safe_load(path.read_text())
        assert doc["global"] == {"slots": "4"}
        assert doc["hubs"] == {7: {"hubname": "#h"}}

    def test_remove_scope_persists(self, tmp_path):
        path = tmp_path / "settings.yaml"
        backend = YamlBackend(path)
        backend.set(7, "hubname", "#h")
        backend.remove_scope(7)
        assert YamlBackend(path).scopes() == []

    def test_missing_file_is_empty(self, tmp_path):
        backend = YamlBackend(tmp_path / "nope" / "settings.yaml")
        assert backend.scopes() == []
        assert backend.get(0, "nick") is None

    def test_corrupt_file_is_ignored(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("global: [unclosed\n")
        assert YamlBackend(path).get(0, "nick") is None

    def test_non_mapping_is_ignored(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("- just\n- a list\n")
        assert YamlBackend(path).scopes() == []

    def test_values_read_as_text(self, tmp_path):
        """Hand-edited numbers and booleans come back as raw strings."""
        path = tmp_path / "settings.yaml"
        path.write_text("global:\n  slots: 4\n  active: true\n")
        backend = YamlBackend(path)
        assert backend.get(0, "slots") == "4"
        assert backend.get(0, "active") == "true"

    def test_empty_value_is_unset(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("global:\n  nick:\n  slots: 4\n")
        backend = YamlBackend(path)
        assert backend.get(0, "nick") is None
        assert backend.get(0, "slots") == "4"

    def test_bad_hub_keys_are_skipped(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(
            "global:\n  nick: alice\n"
            "hubs:\n"
            "  foo:\n    hubname: '#foo'\n"
            "  0:\n    hubname: '#zero'\n"
            "  12:\n    hubname: '#ok'\n"
            "  13: not a mapping\n"
        )
        backend = YamlBackend(path)
        assert backend.scopes() == [12]
        assert backend.get(0, "nick") == "alice"
        assert backend.get(0, "hubname") is None

    def test_hubs_not_a_mapping(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("global:\n  nick: alice\nhubs: [1, 2]\n")
        backend = YamlBackend(path)
        assert backend.scopes() == []
        assert backend.get(0, "nick") == "alice"


class TestYamlWriteFailure:
    """A failed write leaves memory as it was on disk."""

    @pytest.fixture
    def unwritable(self, tmp_path):
        path = tmp_path / "settings.yaml"
        backend = YamlBackend(path)
        path.mkdir()
        return backend

    def test_set_rolls_back(self, unwritable):
        with pytest.raises(OSError):
            unwritable.set(0, "nick", "alice")
        assert unwritable.get(0, "nick") is None

    def test_remove_scope_rolls_back(self, tmp_path):
        path = tmp_path / "settings.yaml"
        backend = YamlBackend(path)
        backend.set(7, "hubname", "#h")
        path.unlink()
        path.mkdir()
        with pytest.raises(OSError):
            backend.remove_scope(7)
        assert backend.get(7, "hubname") == "#h"

    def test_store_reports_setting_error(self, unwritable):
        store = VariableStore(unwritable)
        seen = []
        store.add_listener(lambda *change: seen.append(change))
        with pytest.raises(SettingError, match="Unable to save settings"):
            store.assign(GLOBAL, "slots", "4")
        assert store.raw(GLOBAL, "slots") == "10"
        assert seen == []
