# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for location/config store adapters."""
import json
import logging

import pytest

from daylamp.adapters.location_store import InMemoryLocationStore, JsonLocationStore
from daylamp.domain.ephemeris import InvalidLocation
from daylamp.ports import LocationStore


def _write(path, document):
    path.write_text(json.dumps(document), encoding='utf-8')


class TestInMemoryLocationStore:

    def test_implements_port(self):
        assert isinstance(InMemoryLocationStore(), LocationStore)

    def test_defaults(self):
        store = InMemoryLocationStore()
        assert store.get_location() == (0.0, 0.0)
        assert store.get_timezone_offset() == 0.0

    def test_set_location(self):
        store = InMemoryLocationStore()
        store.set_location(52.37, 4.9)
        assert store.get_location() == (52.37, 4.9)

    def test_set_timezone_offset(self):
        store = InMemoryLocationStore()
        store.set_timezone_offset(5.5)
        assert store.get_timezone_offset() == 5.5

    def test_rejects_out_of_range(self):
        store = InMemoryLocationStore(10.0, 20.0)
        with pytest.raises(InvalidLocation):
            store.set_location(95.0, 0.0)
        assert store.get_location() == (10.0, 20.0)
        with pytest.raises(InvalidLocation):
            store.set_timezone_offset(40.0)

    def test_constructor_validates(self):
        with pytest.raises(InvalidLocation):
            InMemoryLocationStore(0.0, 181.0)


class TestJsonLocationStoreLoad:

    def test_implements_port(self, tmp_path):
        assert isinstance(JsonLocationStore(tmp_path / "lamp.json"), LocationStore)

    def test_reads_values(self, tmp_path):
        path = tmp_path / "lamp.json"
        _write(path, {"latitude": 52.37, "longitude": 4.9, "tz_offset": 1})
        store = JsonLocationStore(path)
        assert store.get_location() == (52.37, 4.9)
        assert store.get_timezone_offset() == 1.0
        assert store.path == path

    def test_missing_keys_default(self, tmp_path):
        path = tmp_path / "lamp.json"
        _write(path, {"latitude": -33.9})
        store = JsonLocationStore(path)
        assert store.get_location() == (-33.9, 0.0)
        assert store.get_timezone_offset() == 0.0

    def test_missing_file_warns_and_defaults(self, tmp_path, caplog):
        path = tmp_path / "absent.json"
        with caplog.at_level(logging.WARNING, logger="daylamp.adapters.location_store"):
            store = JsonLocationStore(path)
        assert store.get_location() == (0.0, 0.0)
        assert any("not found" in r.getMessage() for r in caplog.records)
        assert not path.exists()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "lamp.json"
        path.write_text("{latitude: 52", encoding='utf-8')
        with pytest.raises(ValueError, match="not valid JSON"):
            JsonLocationStore(path)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "lamp.json"
        _write(path, [52.37, 4.9])
        with pytest.raises(ValueError, match="JSON object"):
            JsonLocationStore(path)

    @pytest.mark.parametrize("bad", ["52.37", None, True, [1]])
    def test_non_numeric_field(self, tmp_path, bad):
        path = tmp_path / "lamp.json"
        _write(path, {"latitude": bad, "longitude": 4.9})
        with pytest.raises(ValueError, match="latitude"):
            JsonLocationStore(path)

    def test_out_of_range_field(self, tmp_path):
        path = tmp_path / "lamp.json"
        _write(path, {"latitude": 123.0, "longitude": 4.9})
        with pytest.raises(InvalidLocation):
            JsonLocationStore(path)


class TestJsonLocationStoreSave:

    def test_round_trip(self, tmp_path):
        path = tmp_path / "lamp.json"
        store = JsonLocationStore(path)
        store.set_location(60.17, 24.94)
        store.set_timezone_offset(2.0)
        store.save()

        reloaded = JsonLocationStore(path)
        assert reloaded.get_location() == (60.17, 24.94)
        assert reloaded.get_timezone_offset() == 2.0

    def test_preserves_foreign_keys(self, tmp_path):
        path = tmp_path / "lamp.json"
        intervals = [{"on": "sunset", "off": "23:00"}]
        _write(path, {"latitude": 1.0, "longitude": 2.0, "ssid": "lamp", "intervals": intervals})
        store = JsonLocationStore(path)
        store.set_location(3.0, 4.0)
        store.save()

        document = json.loads(path.read_text(encoding='utf-8'))
        assert document["ssid"] == "lamp"
        assert document["intervals"] == intervals
        assert document["latitude"] == 3.0

    def test_no_temp_file_left(self, tmp_path):
        path = tmp_path / "lamp.json"
        store = JsonLocationStore(path)
        store.save()
        assert [p.name for p in tmp_path.iterdir()] == ["lamp.json"]

    def test_unsaved_changes_not_persisted(self, tmp_path):
        path = tmp_path / "lamp.json"
        _write(path, {"latitude": 1.0, "longitude": 2.0, "tz_offset": 0.0})
        store = JsonLocationStore(path)
        store.set_location(5.0, 6.0)
        assert JsonLocationStore(path).get_location() == (1.0, 2.0)

    def test_save_logged(self, tmp_path, caplog):
        path = tmp_path / "lamp.json"
        store = JsonLocationStore(path)
        with caplog.at_level(logging.INFO, logger="daylamp.adapters.location_store"):
            store.save()
        assert any("Saved" in r.getMessage() for r in caplog.records)
