"""Star records and the in-memory catalog, plus the CSV(.gz) loader for the named-star dataset."""

from __future__ import annotations

import csv
import gzip
import io
import logging
import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path

from star_quiz.constants import MISSING_COORDINATE, MISSING_MAGNITUDE

logger = logging.getLogger(__name__)

# Header names in the named-star CSV (HYG-style columns)
COLUMN_ID = 'id'
COLUMN_NAME = 'proper'
COLUMN_RA = 'ra'
COLUMN_DEC = 'dec'
COLUMN_MAG = 'mag'
COLUMN_DIST = 'dist'
COLUMN_CONSTELLATION = 'con'
COLUMN_DESIGNATION = 'bf'


@dataclass(frozen=True)
class StarRecord:
    """A single catalog star: identity, J2000 RA (hours) / Dec (degrees), magnitude.

    dist, constellation and designation are carried for display only.
    """

    id: int
    name: str
    ra: float
    dec: float
    mag: float
    dist: float = 0.0
    constellation: str = ''
    designation: str = ''

    @property
    def is_named(self) -> bool:
        """True if the star has a non-empty proper name."""
        return bool(self.name)


class StarCatalog:
    """Immutable, ordered collection of StarRecord keyed by id.

    Catalog order is preserved; it is the draw order and the hit-test tie-break.
    """

    def __init__(self, stars: Iterable[StarRecord] = ()) -> None:
        self._stars: tuple[StarRecord, ...] = tuple(stars)
        self._by_id: dict[int, StarRecord] = {}
        for star in self._stars:
            if star.id in self._by_id:
                raise ValueError(f'Duplicate star id in catalog: {star.id}')
            self._by_id[star.id] = star

    def __len__(self) -> int:
        return len(self._stars)

    def __iter__(self) -> Iterator[StarRecord]:
        return iter(self._stars)

    def __contains__(self, star: object) -> bool:
        return isinstance(star, StarRecord) and self._by_id.get(star.id) == star

    @property
    def stars(self) -> tuple[StarRecord, ...]:
        """All stars in catalog order."""
        return self._stars

    def get(self, star_id: int) -> StarRecord | None:
        """Return the star with this id, or None."""
        return self._by_id.get(star_id)

    def visible(self, max_magnitude: float) -> Iterator[StarRecord]:
        """Yield stars with mag <= max_magnitude, in catalog order."""
        for star in self._stars:
            if star.mag <= max_magnitude:
                yield star


def _parse_float(raw: str | None, default: float) -> float:
    """Parse a float field; missing, blank, or non-finite values give default."""
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    if not math.isfinite(value):
        return default
    return value


def _parse_int(raw: str | None) -> int | None:
    """Parse an integer field (accepts '12' and '12.0'); None on failure."""
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        value = _parse_float(raw, math.nan)
        if math.isnan(value):
            return None
        return int(value)


def star_from_row(row: Mapping[str, str | None], row_number: int) -> StarRecord:
    """Build a StarRecord from one CSV row, defaulting malformed fields.

    Missing or unparseable values never fail the row: id falls back to
    row_number, magnitude to 10 (faint, normally filtered out), ra/dec and
    distance to 0.

    Parameters:
        row: Column name -> raw string (csv.DictReader row).
        row_number: 1-based data row number, used as fallback id.

    Returns:
        StarRecord.
    """
    star_id = _parse_int(row.get(COLUMN_ID))
    if star_id is None:
        logger.debug('Row %d: missing or invalid id; using row number', row_number)
        star_id = row_number
    mag = _parse_float(row.get(COLUMN_MAG), math.nan)
    if math.isnan(mag):
        logger.debug('Row %d (id %d): no magnitude; treating as faint', row_number, star_id)
        mag = MISSING_MAGNITUDE
    return StarRecord(
        id=star_id,
        name=(row.get(COLUMN_NAME) or '').strip(),
        ra=_parse_float(row.get(COLUMN_RA), MISSING_COORDINATE),
        dec=_parse_float(row.get(COLUMN_DEC), MISSING_COORDINATE),
        mag=mag,
        dist=_parse_float(row.get(COLUMN_DIST), 0.0),
        constellation=(row.get(COLUMN_CONSTELLATION) or '').strip(),
        designation=(row.get(COLUMN_DESIGNATION) or '').strip(),
    )


def parse_catalog_text(text: str, named_only: bool = True) -> StarCatalog:
    """Parse CSV text (header row first) into a StarCatalog.

    Blank lines are skipped. Rows repeating an earlier id are dropped.

    Parameters:
        text: Full CSV document.
        named_only: If True, rows without a proper name are dropped.

    Returns:
        StarCatalog in file order.
    """
    reader = csv.DictReader(io.StringIO(text), skipinitialspace=True)
    stars: list[StarRecord] = []
    seen: set[int] = set()
    for row_number, row in enumerate(reader, start=1):
        if not any((v or '').strip() for v in row.values() if isinstance(v, str)):
            continue
        star = star_from_row(row, row_number)
        if named_only and not star.is_named:
            continue
        if star.id in seen:
            logger.debug('Row %d: duplicate id %d dropped', row_number, star.id)
            continue
        seen.add(star.id)
        stars.append(star)
    return StarCatalog(stars)


def read_catalog(filepath: str | Path, named_only: bool = True) -> StarCatalog:
    """Read the named-star catalog from a .csv or gzip-compressed .csv.gz file.

    Parameters:
        filepath: Path to catalog file.
        named_only: If True, stars without a proper name are dropped.

    Returns:
        StarCatalog.

    Raises:
        OSError: File missing or unreadable (including a corrupt gzip stream).
    """
    path = Path(filepath)
    if path.suffix == '.gz':
        with gzip.open(path, 'rt', encoding='utf-8', newline='') as f:
            text = f.read()
    else:
        text = path.read_text(encoding='utf-8')
    catalog = parse_catalog_text(text, named_only=named_only)
    logger.info('Loaded %d named stars from %s', len(catalog), path)
    return catalog
