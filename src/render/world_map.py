"""Render the tagged countries as a single static HTML map"""
from pathlib import Path
from typing import Any, Dict, Optional
import folium
import geopandas as gpd

from visited_map.src.tagging import STATUSES, STATUS_NONE


DEFAULT_MAP_PARAMS = {
    'center': [20.0, 0.0],
    'zoom_start': 2,
    'tiles': 'cartodbpositron',
    'colors': {
        'visited': '#2a9d8f',
        'planned': '#e9c46a',
        'none': '#d9d9d9',
    },
    'line_color': '#ffffff',
    'line_weight': 0.5,
    'fill_opacity': 0.8,
    'legend': True,
}

LAYER_COLUMNS = ['name', 'iso_a2', 'status', 'geometry']

_LEGEND_TEMPLATE = """
<div id="visited-map-legend" style="position: fixed; bottom: 30px; left: 30px; z-index: 9999;
     background: white; padding: 8px 12px; border-radius: 4px; font: 13px sans-serif;
     box-shadow: 0 1px 4px rgba(0, 0, 0, 0.3);">
{rows}
</div>
"""

_LEGEND_ROW = (
    '<div><span style="display: inline-block; width: 12px; height: 12px; '
    'margin-right: 6px; background: {color};"></span>{label}</div>'
)


def _merged_params(map_params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    params = dict(DEFAULT_MAP_PARAMS)
    if map_params:
        params.update(map_params)
        params['colors'] = {**DEFAULT_MAP_PARAMS['colors'], **map_params.get('colors', {})}
    return params


def style_for(status: str, map_params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Leaflet path style for one status. Unknown statuses render as 'none'."""
    params = _merged_params(map_params)
    colors = params['colors']
    return {
        'fillColor': colors.get(status, colors[STATUS_NONE]),
        'color': params['line_color'],
        'weight': params['line_weight'],
        'fillOpacity': params['fill_opacity'],
    }


def legend_html(map_params: Optional[Dict[str, Any]] = None) -> str:
    params = _merged_params(map_params)
    rows = '\n'.join(
        _LEGEND_ROW.format(color=params['colors'][status], label=status.capitalize())
        for status in STATUSES
    )
    return _LEGEND_TEMPLATE.format(rows=rows)


def build_map(tagged: gpd.GeoDataFrame, map_params: Optional[Dict[str, Any]] = None) -> folium.Map:
    """
    Build the folium map: one GeoJson layer colored by 'status'.

    Args:
        tagged: Output of tag_countries (needs name, iso_a2, status, geometry)
        map_params: The 'map' group of the params file

    Returns:
        folium.Map ready to save
    """
    params = _merged_params(map_params)

    missing = [c for c in LAYER_COLUMNS if c not in tagged.columns]
    if missing:
        raise ValueError(f"Tagged frame is missing columns: {', '.join(missing)}")

    fmap = folium.Map(
        location=list(params['center']),
        zoom_start=params['zoom_start'],
        tiles=params['tiles'],
    )

    # Only plain string properties go into the GeoJSON payload
    layer = tagged[LAYER_COLUMNS]
    folium.GeoJson(
        layer,
        name='countries',
        style_function=lambda feature: style_for(feature['properties']['status'], params),
        tooltip=folium.GeoJsonTooltip(fields=['name', 'status'], aliases=['Country', 'Status']),
    ).add_to(fmap)

    if params['legend']:
        fmap.get_root().html.add_child(folium.Element(legend_html(params)))

    return fmap


def render_html(
    tagged: gpd.GeoDataFrame,
    output_path: str,
    map_params: Optional[Dict[str, Any]] = None
) -> Path:
    """Write the map to output_path (parents created). Returns the path."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fmap = build_map(tagged, map_params)
    fmap.save(str(path))
    return path
