"""
Paint catalog records for the matching engine.

The catalog itself lives in an external paint database. This module turns
the raw records it hands over (manufacturer paints and user-defined custom
paints alike) into one canonical, immutable CatalogEntry shape before they
reach the search.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import pandas as pd

from .color_converter import is_valid_hex
from .errors import InvalidCatalogRecord, InvalidColorFormat

logger = logging.getLogger(__name__)


class PaintType(Enum):
    """Kind of paint as sold by the manufacturer."""
    BASE = "base"
    LAYER = "layer"
    SHADE = "shade"
    METALLIC = "metallic"
    TECHNICAL = "technical"
    CONTRAST = "contrast"


class PaintSource(Enum):
    """Where a catalog entry came from."""
    GLOBAL = "global"    # Manufacturer catalog shared by all users
    CUSTOM = "custom"    # Paint defined by a single user


@dataclass(frozen=True)
class CatalogEntry:
    """One paint in a catalog snapshot."""
    id: str
    name: str
    brand: str
    hex_color: str                       # '#rrggbb', source of truth for the color
    paint_type: Optional[PaintType] = None
    category: Optional[str] = None       # e.g. "Speedpaint 2.0", "Model Color"
    source: PaintSource = PaintSource.GLOBAL

    def __post_init__(self):
        if not is_valid_hex(self.hex_color):
            raise InvalidColorFormat(self.hex_color)
        object.__setattr__(self, 'hex_color', self.hex_color.lower())

    @property
    def is_custom(self) -> bool:
        return self.source is PaintSource.CUSTOM


# Accepted field names for raw records, first match wins
_FIELD_ALIASES = {
    'id': ('id', 'paintId', 'paint_id'),
    'name': ('name', 'paint_name'),
    'brand': ('brand', 'manufacturer'),
    'hex_color': ('hexColor', 'hex_color', 'hex'),
    'paint_type': ('type', 'paint_type'),
    'category': ('category', 'range'),
}

# Columns that mark a CSV row as a custom paint
_FLAG_COLUMNS = {
    'source': 'source',
    'iscustom': 'isCustom',
    'is_custom': 'isCustom',
    'userid': 'userId',
}


def _lookup(record: Mapping[str, Any], field: str) -> Any:
    for key in _FIELD_ALIASES[field]:
        value = record.get(key)
        if value is not None and not (isinstance(value, float) and pd.isna(value)):
            return value
    return None


def _parse_paint_type(value: Any) -> Optional[PaintType]:
    if value is None or isinstance(value, PaintType):
        return value
    try:
        return PaintType(str(value).strip().lower())
    except ValueError:
        logger.debug(f"Unknown paint type {value!r}, leaving it unset")
        return None


def _is_set(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in ('', 'false', '0', 'no', 'nan')
    if isinstance(value, float) and pd.isna(value):
        return False
    return bool(value)


def _parse_source(record: Mapping[str, Any], default: PaintSource) -> PaintSource:
    source = record.get('source')
    if isinstance(source, PaintSource):
        return source
    if source:
        try:
            return PaintSource(str(source).strip().lower())
        except ValueError:
            raise InvalidCatalogRecord(f"Unknown paint source {source!r}")
    if _is_set(record.get('isCustom')) or _is_set(record.get('is_custom')) or _is_set(record.get('userId')):
        return PaintSource.CUSTOM
    return default


def entry_from_record(record: Mapping[str, Any],
                      default_source: PaintSource = PaintSource.GLOBAL) -> CatalogEntry:
    """Build a CatalogEntry from a raw database record.

    Custom paints are recognised by an explicit 'source', an 'isCustom'
    flag or an owning 'userId'.

    Raises:
        InvalidCatalogRecord: if id, name, brand or hex color is missing
        InvalidColorFormat: if the hex color is malformed
    """
    if isinstance(record, CatalogEntry):
        return record

    values = {field: _lookup(record, field) for field in ('id', 'name', 'brand', 'hex_color')}
    missing = [field for field, value in values.items() if value is None]
    if missing:
        raise InvalidCatalogRecord(f"Catalog record is missing {', '.join(missing)}: {dict(record)!r}")

    category = _lookup(record, 'category')
    return CatalogEntry(
        id=str(values['id']),
        name=str(values['name']),
        brand=str(values['brand']),
        hex_color=str(values['hex_color']).strip(),
        paint_type=_parse_paint_type(_lookup(record, 'paint_type')),
        category=str(category) if category is not None else None,
        source=_parse_source(record, default_source),
    )


def entries_from_records(records: Iterable[Mapping[str, Any]],
                         skip_invalid: bool = False,
                         default_source: PaintSource = PaintSource.GLOBAL) -> List[CatalogEntry]:
    """Convert raw records to catalog entries, keeping their order.

    Args:
        records: Raw records from the paint database
        skip_invalid: Log and drop malformed records instead of raising
        default_source: Source used when a record does not say

    Returns:
        List of CatalogEntry objects
    """
    entries = []
    skipped = 0
    for row_num, record in enumerate(records, start=1):
        try:
            entries.append(entry_from_record(record, default_source))
        except (InvalidCatalogRecord, InvalidColorFormat) as e:
            if not skip_invalid:
                raise
            skipped += 1
            logger.warning(f"Skipping catalog record {row_num}: {e}")

    if skipped:
        logger.info(f"Loaded {len(entries)} catalog entries, skipped {skipped} invalid records")
    return entries


def build_catalog(global_records: Iterable[Mapping[str, Any]],
                  custom_records: Iterable[Mapping[str, Any]] = (),
                  skip_invalid: bool = True) -> List[CatalogEntry]:
    """Merge manufacturer paints and a user's custom paints into one snapshot.

    Manufacturer paints come first, so they win ties against custom paints
    with the same color.
    """
    catalog = entries_from_records(global_records, skip_invalid, PaintSource.GLOBAL)
    catalog.extend(entries_from_records(custom_records, skip_invalid, PaintSource.CUSTOM))
    return catalog


def catalog_from_dataframe(df: pd.DataFrame, skip_invalid: bool = True) -> List[CatalogEntry]:
    """Convert a DataFrame with one paint per row to catalog entries."""
    records = []
    for _, row in df.iterrows():
        records.append({key: value for key, value in row.items() if pd.notna(value)})
    return entries_from_records(records, skip_invalid=skip_invalid)


def read_catalog_csv(file_path: Union[str, Path], skip_invalid: bool = True) -> List[CatalogEntry]:
    """Load a catalog snapshot from a CSV export of the paint database.

    Column names are matched case-insensitively against the usual aliases
    (id/paintId, name, brand, hexColor/hex, type, category).
    """
    df = pd.read_csv(file_path, dtype=str)

    header_map: Dict[str, str] = {}
    for col in df.columns:
        col_lower = col.lower().strip()
        if col_lower in _FLAG_COLUMNS:
            header_map[col] = _FLAG_COLUMNS[col_lower]
            continue
        for aliases in _FIELD_ALIASES.values():
            canonical = aliases[0]
            if col_lower in [alias.lower() for alias in aliases] and canonical not in header_map.values():
                header_map[col] = canonical
                break

    logger.debug(f"Catalog CSV {file_path}: {len(df)} rows, columns {header_map}")
    return catalog_from_dataframe(df.rename(columns=header_map), skip_invalid=skip_invalid)


def filter_by_brand(catalog: Iterable[CatalogEntry], brands: Iterable[str]) -> List[CatalogEntry]:
    """Keep entries whose brand is in brands (case-insensitive), preserving order."""
    wanted = {brand.lower() for brand in brands}
    return [entry for entry in catalog if entry.brand.lower() in wanted]
