# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Location/config store adapters.

JsonLocationStore keeps latitude, longitude and timezone offset in a JSON
document. Keys it does not own (the interval table, network settings)
are preserved untouched on save.
"""
import json
import logging
import os
from pathlib import Path
from typing import Any

from daylamp.domain.ephemeris import validate_location
from daylamp.ports import LocationStore

logger = logging.getLogger(__name__)

_DEFAULTS = {'latitude': 0.0, 'longitude': 0.0, 'tz_offset': 0.0}


class InMemoryLocationStore(LocationStore):
    """Location store without persistence."""

    def __init__(self, latitude: float = 0.0, longitude: float = 0.0, tz_offset: float = 0.0):
        validate_location(latitude, longitude, tz_offset)
        self._latitude = float(latitude)
        self._longitude = float(longitude)
        self._tz_offset = float(tz_offset)

    def get_location(self) -> tuple[float, float]:
        return self._latitude, self._longitude

    def get_timezone_offset(self) -> float:
        return self._tz_offset

    def set_location(self, latitude: float, longitude: float) -> None:
        validate_location(latitude, longitude, self._tz_offset)
        self._latitude = float(latitude)
        self._longitude = float(longitude)

    def set_timezone_offset(self, hours: float) -> None:
        validate_location(self._latitude, self._longitude, hours)
        self._tz_offset = float(hours)

    def save(self) -> None:
        pass


class JsonLocationStore(InMemoryLocationStore):
    """Location store backed by a JSON file.

    A missing file yields the defaults (0, 0, UTC) so a fresh device can
    start before it is configured.

    Raises:
        ValueError: If the file is not a JSON object with numeric fields.
        InvalidLocation: If the stored values are out of range.
    """

    def __init__(self, path: str | os.PathLike):
        self._path = Path(path)
        self._document = self._read()
        super().__init__(
            self._field('latitude'),
            self._field('longitude'),
            self._field('tz_offset'),
        )
        logger.info(
            "Loaded location %.4f, %.4f (UTC%+g) from %s",
            self._latitude, self._longitude, self._tz_offset, self._path,
        )

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, Any]:
        try:
            with open(self._path, encoding='utf-8') as f:
                document = json.load(f)
        except FileNotFoundError:
            logger.warning("Config file %s not found, using defaults", self._path)
            return dict(_DEFAULTS)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Config file {self._path} is not valid JSON: {exc}") from exc

        if not isinstance(document, dict):
            raise ValueError(f"Config file {self._path} must contain a JSON object")
        return document

    def _field(self, key: str) -> float:
        value = self._document.get(key, _DEFAULTS[key])
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(
                f"Config file {self._path}: '{key}' must be a number, got {value!r}"
            )
        return float(value)

    def save(self) -> None:
        """Write the document atomically (temp file, then rename)."""
        document = dict(self._document)
        document['latitude'] = self._latitude
        document['longitude'] = self._longitude
        document['tz_offset'] = self._tz_offset

        tmp_path = self._path.with_name(self._path.name + '.tmp')
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(document, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, self._path)
        self._document = document
        logger.info("Saved location to %s", self._path)
