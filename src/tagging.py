"""Tag countries as visited / planned from two sets of ISO alpha-2 codes"""
from typing import Dict, FrozenSet, Iterable, List
import numpy as np
import geopandas as gpd

from visited_map.src.data.schema import CountrySchema, normalize_code


STATUS_VISITED = 'visited'
STATUS_PLANNED = 'planned'
STATUS_NONE = 'none'
STATUSES = [STATUS_VISITED, STATUS_PLANNED, STATUS_NONE]


def parse_codes(values: Iterable[str]) -> FrozenSet[str]:
    """
    Normalize an iterable of country codes.

    Accepts lower case and surrounding whitespace. Raises ValueError listing
    every code that is not ISO 3166-1 alpha-2.
    """
    if isinstance(values, str):
        values = values.split(',')

    codes = set()
    bad = []
    for value in values:
        code = normalize_code(value)
        if code is None:
            # Blank entries (e.g. trailing comma on the command line)
            if str(value).strip() == '':
                continue
            bad.append(str(value))
        elif not CountrySchema.is_iso_alpha2(code):
            bad.append(str(value))
        else:
            codes.add(code)

    if bad:
        raise ValueError(f"Invalid ISO alpha-2 codes: {', '.join(bad)}")
    return frozenset(codes)


def tag_countries(gdf: gpd.GeoDataFrame, visited: Iterable[str], planned: Iterable[str]) -> gpd.GeoDataFrame:
    """
    Return a copy of gdf with boolean 'visited' / 'planned' columns and a 'status' column.

    A code present in both sets keeps both booleans true; its status is 'visited'.
    """
    visited_codes = parse_codes(visited)
    planned_codes = parse_codes(planned)

    tagged = gdf.copy()
    codes = tagged[CountrySchema.CODE_FIELD]
    tagged['visited'] = codes.isin(visited_codes).astype(bool)
    tagged['planned'] = codes.isin(planned_codes).astype(bool)
    tagged['status'] = np.select(
        [tagged['visited'], tagged['planned']],
        [STATUS_VISITED, STATUS_PLANNED],
        default=STATUS_NONE
    )
    return tagged


def unmatched_codes(gdf: gpd.GeoDataFrame, codes: Iterable[str]) -> List[str]:
    """Requested codes that no country in the dataset carries"""
    known = set(gdf[CountrySchema.CODE_FIELD].dropna())
    return sorted(parse_codes(codes) - known)


def summarize(tagged: gpd.GeoDataFrame) -> Dict[str, int]:
    """Country count per status"""
    counts = tagged['status'].value_counts()
    return {status: int(counts.get(status, 0)) for status in STATUSES}
