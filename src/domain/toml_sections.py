"""Placement of ContourSettings fields in the tables of a profile file.

The model stays flat; in TOML each field lives in a table under a short key::

    [levels]
    values = [100.0, 200.0]

    [georeference]
    grid_size = 0.5
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

    from domain.models import ContourSettings

# Поле модели → (таблица TOML, ключ в таблице)
FIELD_LOCATIONS: dict[str, tuple[str, str]] = {
    'iso_value': ('levels', 'iso_value'),
    'levels': ('levels', 'values'),
    'level_interval': ('levels', 'interval'),
    'level_base': ('levels', 'base'),
    'lng_start': ('georeference', 'lng_start'),
    'lat_start': ('georeference', 'lat_start'),
    'grid_size': ('georeference', 'grid_size'),
    'delimiter': ('input', 'delimiter'),
    'workers': ('execution', 'workers'),
    'skip_non_finite': ('output', 'skip_non_finite'),
}

# (таблица, ключ) → поле модели
_KEY_TO_FIELD: dict[tuple[str, str], str] = {
    location: field for field, location in FIELD_LOCATIONS.items()
}


def settings_to_tables(settings: ContourSettings) -> dict[str, dict[str, Any]]:
    """Group the model fields by table; unset (None) fields are left out."""
    tables: dict[str, dict[str, Any]] = {}
    for field, value in settings.model_dump().items():
        if value is None or field not in FIELD_LOCATIONS:
            continue
        table, key = FIELD_LOCATIONS[field]
        tables.setdefault(table, {})[key] = value
    return tables


def tables_to_fields(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Flatten a parsed profile back into model field names.

    Top-level scalars are taken as field names as-is, so a flat profile
    without tables loads too. Keys of unknown tables are kept under their own
    names and left for the model to accept or ignore.
    """
    fields: dict[str, Any] = {}
    for name, value in data.items():
        if not isinstance(value, dict):
            fields[name] = value
            continue
        for key, item in value.items():
            fields[_KEY_TO_FIELD.get((name, key), key)] = item
    return fields
