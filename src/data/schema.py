"""Data schema validation for country geometries"""
import re
from typing import Any, List, Optional
import pandas as pd
import geopandas as gpd


# Natural Earth uses -99 where no ISO code is assigned
MISSING_CODE_SENTINELS = {'', '-99', '-1', 'NONE', 'NAN', 'NULL'}

_ALPHA2 = re.compile(r'^[A-Z]{2}$')


def normalize_code(value: Any) -> Optional[str]:
    """Strip and upper-case a country code. Sentinels and NaN become None."""
    if value is None:
        return None
    if not isinstance(value, str) and pd.isna(value):
        return None
    code = str(value).strip().upper()
    if code in MISSING_CODE_SENTINELS:
        return None
    return code


class CountrySchema:
    """Validates the normalized country frame produced by CountryLoader"""

    CODE_FIELD = 'iso_a2'
    NAME_FIELD = 'name'
    REQUIRED_FIELDS = [CODE_FIELD, NAME_FIELD, 'geometry']

    @staticmethod
    def is_iso_alpha2(code: Any) -> bool:
        """ISO 3166-1 alpha-2: exactly two ASCII uppercase letters"""
        return isinstance(code, str) and bool(_ALPHA2.match(code))

    @staticmethod
    def validate_countries(gdf: gpd.GeoDataFrame) -> List[str]:
        """Validate country data. Returns list of errors (empty if valid)."""
        errors = []
        for field in CountrySchema.REQUIRED_FIELDS:
            if field not in gdf.columns:
                errors.append(f"Missing required field '{field}'")

        if errors:
            return errors

        if len(gdf) == 0:
            errors.append("Country dataset is empty")
            return errors

        empty_geom = gdf.geometry.isna() | gdf.geometry.is_empty
        if empty_geom.any():
            names = gdf.loc[empty_geom, CountrySchema.NAME_FIELD].astype(str).tolist()
            errors.append(f"{int(empty_geom.sum())} countries have no geometry: {', '.join(names)}")

        codes = gdf[CountrySchema.CODE_FIELD]
        present = codes.dropna()
        malformed = sorted({c for c in present if not CountrySchema.is_iso_alpha2(c)})
        if malformed:
            errors.append(f"Malformed ISO alpha-2 codes: {', '.join(malformed)}")

        return errors
