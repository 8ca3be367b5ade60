"""Administrative regions: address normalization and lookup tables."""

import csv
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from logibase.database.base import Database
from logibase.domain.entities import Country, District, Province, Regency
from logibase.domain.errors import ValidationError, invalid_choice
from logibase.domain.schemas import INDONESIA, REGION_FIELDS

logger = logging.getLogger(__name__)

REGION_LEVELS = {
    "countries": ("code", "name"),
    "provinces": ("code", "name"),
    "regencies": ("code", "name", "province_code"),
    "districts": ("code", "name", "regency_code"),
}


def normalize_regions(address: Mapping[str, Any], country_code: Optional[str]) -> dict[str, Any]:
    """Decide which region codes an address keeps.

    Indonesian addresses keep whatever province/regency/district codes were
    given, even a partial chain. Any other country forces all three to None,
    whatever the input held.

    Args:
        address: Address fields (a full record or a sparse patch)
        country_code: Country the address belongs to

    Returns:
        A new dict; ``address`` is not modified
    """
    normalized = dict(address)
    if country_code == INDONESIA:
        return normalized
    for name in REGION_FIELDS:
        normalized[name] = None
    return normalized


class RegionService:
    """Service for country and Indonesian region lookup tables."""

    def __init__(self, db: Database):
        """Initialize region service.

        Args:
            db: Database instance
        """
        self.db = db

    def import_rows(self, level: str, rows: list[Mapping[str, Any]]) -> int:
        """Insert or update lookup rows by code.

        Args:
            level: One of countries, provinces, regencies, districts
            rows: Rows with the columns the level needs

        Returns:
            Number of rows written

        Raises:
            ValidationError: If the level is unknown or a row lacks a column
        """
        columns = REGION_LEVELS.get(level)
        if columns is None:
            raise ValidationError(invalid_choice("level", level, list(REGION_LEVELS)))

        cleaned = []
        for line, row in enumerate(rows, start=1):
            values = {}
            for column in columns:
                value = str(row.get(column) or "").strip()
                if not value:
                    raise ValidationError(f"Row {line}: missing '{column}' for {level}")
                values[column] = value
            if level == "countries":
                values["code"] = values["code"].upper()
            cleaned.append(values)

        if not cleaned:
            return 0

        with self.db.transaction():
            self.db.upsert_regions(level, cleaned)
        logger.info("Imported %d %s", len(cleaned), level)
        return len(cleaned)

    def import_csv(self, level: str, csv_file_path: str) -> int:
        """Import lookup rows from a CSV file with a header line.

        Raises:
            FileNotFoundError: If the CSV file doesn't exist
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            sample = f.read(1024)
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t").delimiter
            except csv.Error:
                delimiter = ","
            rows = list(csv.DictReader(f, delimiter=delimiter))

        return self.import_rows(level, rows)

    def list_countries(self) -> list[Country]:
        return self.db.list_countries()

    def list_provinces(self) -> list[Province]:
        return self.db.list_provinces()

    def list_regencies(self, province_code: str) -> list[Regency]:
        """List regencies of one province."""
        return self.db.list_regencies(province_code)

    def list_districts(self, regency_code: str) -> list[District]:
        """List districts of one regency."""
        return self.db.list_districts(regency_code)
