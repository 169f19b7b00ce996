"""Tests for HTML map rendering"""
import pytest
import folium

from visited_map.src.data.loader import CountryLoader
from visited_map.src.render.world_map import build_map, legend_html, render_html, style_for
from visited_map.src.tagging import tag_countries

from fixtures.toy_world import write_toy_world


@pytest.fixture
def tagged(tmp_path):
    countries, _ = CountryLoader(str(write_toy_world(tmp_path))).load()
    return tag_countries(countries, visited={'FR', 'DE'}, planned={'NO'})


def test_style_for_status():
    assert style_for('visited')['fillColor'] == '#2a9d8f'
    assert style_for('planned')['fillColor'] == '#e9c46a'
    assert style_for('none')['fillColor'] == '#d9d9d9'


def test_style_for_unknown_status_falls_back_to_none():
    assert style_for('bogus')['fillColor'] == style_for('none')['fillColor']


def test_style_for_partial_color_override():
    """Overriding one color keeps the defaults for the others"""
    style = style_for('planned', {'colors': {'visited': '#000000'}, 'fill_opacity': 0.5})
    assert style['fillColor'] == '#e9c46a'
    assert style['fillOpacity'] == 0.5


def test_legend_lists_every_status():
    html = legend_html()
    for label in ('Visited', 'Planned', 'None'):
        assert label in html


def test_build_map_returns_folium_map(tagged):
    fmap = build_map(tagged)
    assert isinstance(fmap, folium.Map)


def test_build_map_requires_status_column(tagged):
    with pytest.raises(ValueError):
        build_map(tagged.drop(columns=['status']))


def test_render_html_writes_single_file(tagged, tmp_path):
    output = tmp_path / "public" / "index.html"
    path = render_html(tagged, str(output), {'colors': {'visited': '#123456'}})

    assert path == output
    assert output.exists()
    html = output.read_text(encoding='utf-8')
    assert 'leaflet' in html.lower()
    assert 'France' in html
    assert '#123456' in html
    assert 'visited-map-legend' in html


def test_render_html_without_legend(tagged, tmp_path):
    output = tmp_path / "map.html"
    render_html(tagged, str(output), {'legend': False})
    assert 'visited-map-legend' not in output.read_text(encoding='utf-8')
