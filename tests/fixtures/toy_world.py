"""Generate a synthetic country dataset for testing"""
from pathlib import Path
from typing import List, Optional, Tuple
import geopandas as gpd
from shapely.geometry import box


# (NAME, ISO_A2, ISO_A2_EH) laid out left to right as 10x10 degree boxes.
# France and Norway mirror Natural Earth: -99 in ISO_A2, real code in ISO_A2_EH.
TOY_COUNTRIES: List[Tuple[str, str, str]] = [
    ('France', '-99', 'FR'),
    ('Germany', 'DE', 'DE'),
    ('Italy', 'IT', 'IT'),
    ('Norway', '-99', 'NO'),
    ('Canada', 'CA', 'CA'),
    ('Japan', 'JP', 'JP'),
    ('Somaliland', '-99', '-99'),
]


def generate_toy_world(countries: Optional[List[Tuple[str, str, str]]] = None, crs: str = 'EPSG:4326') -> gpd.GeoDataFrame:
    """
    Build a GeoDataFrame shaped like Natural Earth admin 0 countries.

    Returns:
        GeoDataFrame with columns: NAME, ISO_A2, ISO_A2_EH, geometry
    """
    rows = countries if countries is not None else TOY_COUNTRIES
    return gpd.GeoDataFrame(
        {
            'NAME': [name for name, _, _ in rows],
            'ISO_A2': [iso for _, iso, _ in rows],
            'ISO_A2_EH': [iso_eh for _, _, iso_eh in rows],
        },
        geometry=[box(-170 + 10 * i, 0, -160 + 10 * i, 10) for i in range(len(rows))],
        crs=crs,
    )


def write_toy_world(tmp_path: Path, filename: str = 'countries.geojson') -> Path:
    """Write the toy world as GeoJSON and return its path"""
    path = Path(tmp_path) / filename
    generate_toy_world().to_file(path, driver='GeoJSON')
    return path
