"""Tests for preference stores."""

import json

from tripline.services.preferences import JsonPreferenceStore, MemoryPreferenceStore
from tripline.services.zoom import ZOOM_PREFERENCE_KEY, ZoomController


class TestMemoryPreferenceStore:
    """Tests for MemoryPreferenceStore."""

    def test_get_set(self):
        store = MemoryPreferenceStore({"a": 1})
        assert store.get("a") == 1
        assert store.get("b", "x") == "x"
        store.set("b", 2)
        assert store.get("b") == 2


class TestJsonPreferenceStore:
    """Tests for JsonPreferenceStore."""

    def test_missing_file(self, tmp_path):
        store = JsonPreferenceStore(tmp_path / "prefs.json")
        assert store.get(ZOOM_PREFERENCE_KEY) is None

    def test_set_persists(self, tmp_path):
        path = tmp_path / "nested" / "prefs.json"
        JsonPreferenceStore(path).set(ZOOM_PREFERENCE_KEY, 90)
        assert json.loads(path.read_text(encoding="utf-8")) == {ZOOM_PREFERENCE_KEY: 90}
        assert JsonPreferenceStore(path).get(ZOOM_PREFERENCE_KEY) == 90

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("{not json", encoding="utf-8")
        assert JsonPreferenceStore(path).get(ZOOM_PREFERENCE_KEY) is None

    def test_zoom_survives_restart(self, tmp_path):
        path = tmp_path / "prefs.json"
        ZoomController(store=JsonPreferenceStore(path)).zoom_to_rung(6)
        assert ZoomController(store=JsonPreferenceStore(path)).day_width == 180

    def test_fit_survives_restart(self, tmp_path):
        path = tmp_path / "prefs.json"
        ZoomController(store=JsonPreferenceStore(path)).zoom_to_fit(1000, 10, 200)
        assert ZoomController(store=JsonPreferenceStore(path)).is_fit_zoom

    def test_failed_write_is_reported(self, tmp_path, monkeypatch):
        warnings = []
        monkeypatch.setattr("tripline.services.preferences.log_warning", warnings.append)
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")

        store = JsonPreferenceStore(blocker / "prefs.json")
        store.set(ZOOM_PREFERENCE_KEY, 90)

        assert store.get(ZOOM_PREFERENCE_KEY) == 90
        assert len(warnings) == 1
        assert "preferences not saved" in warnings[0]
