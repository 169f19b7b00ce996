"""Country geometry loader for the visited-countries map"""
from pathlib import Path
from typing import List, Optional, Sequence, Tuple
import geopandas as gpd
from .schema import CountrySchema, normalize_code


DEFAULT_ISO_COLUMNS = ('ISO_A2', 'ISO_A2_EH', 'iso_a2')
DEFAULT_NAME_COLUMNS = ('NAME', 'ADMIN', 'name')
TARGET_CRS = 'EPSG:4326'


class CountryLoader:
    """Loads a country dataset (shapefile, zip, GeoJSON, GeoPackage) and normalizes it"""

    def __init__(
        self,
        countries_path: str,
        iso_columns: Optional[Sequence[str]] = None,
        name_columns: Optional[Sequence[str]] = None
    ):
        self.countries_path = Path(countries_path)
        if not self.countries_path.exists():
            raise FileNotFoundError(f"Country data does not exist: {countries_path}")

        self.iso_columns = list(iso_columns or DEFAULT_ISO_COLUMNS)
        self.name_columns = list(name_columns or DEFAULT_NAME_COLUMNS)

    def load(self) -> Tuple[gpd.GeoDataFrame, List[str]]:
        """
        Read the dataset from disk.
        Returns (countries, errors). Errors is empty if valid.
        """
        gdf = gpd.read_file(self.countries_path)
        return self.from_frame(gdf)

    def from_frame(self, gdf: gpd.GeoDataFrame) -> Tuple[gpd.GeoDataFrame, List[str]]:
        """Normalize an in-memory frame to columns iso_a2, name, geometry"""
        errors = []

        code_columns = [c for c in self.iso_columns if c in gdf.columns]
        if not code_columns:
            errors.append(f"No ISO code column found (tried {', '.join(self.iso_columns)})")
            return gdf, errors

        out = gdf.copy()
        if out.geometry.name != 'geometry':
            out = out.rename_geometry('geometry')
        out[CountrySchema.CODE_FIELD] = [
            self._resolve_code(candidates)
            for candidates in zip(*(out[c] for c in code_columns))
        ]

        name_column = next((c for c in self.name_columns if c in gdf.columns), None)
        if name_column is None:
            out[CountrySchema.NAME_FIELD] = out[CountrySchema.CODE_FIELD].fillna('unknown')
        elif name_column != CountrySchema.NAME_FIELD:
            out[CountrySchema.NAME_FIELD] = out[name_column]

        if out.crs is None:
            out = out.set_crs(TARGET_CRS)
        elif out.crs.to_string() != TARGET_CRS:
            out = out.to_crs(TARGET_CRS)

        out = out[[CountrySchema.CODE_FIELD, CountrySchema.NAME_FIELD, 'geometry']].reset_index(drop=True)

        errors.extend(CountrySchema.validate_countries(out))
        return out, errors

    @staticmethod
    def uncoded_names(gdf: gpd.GeoDataFrame) -> List[str]:
        """Countries without a usable code. They stay on the map, never colored."""
        mask = gdf[CountrySchema.CODE_FIELD].isna()
        return sorted(gdf.loc[mask, CountrySchema.NAME_FIELD].astype(str))

    @staticmethod
    def _resolve_code(candidates) -> Optional[str]:
        """First candidate column holding a valid alpha-2 code wins"""
        for value in candidates:
            code = normalize_code(value)
            if code is not None and CountrySchema.is_iso_alpha2(code):
                return code
        return None
