"""
Render Visited Countries Map
Tags every country as visited / planned and writes a single static HTML page.
"""
import argparse
import json
import sys
from pathlib import Path

from visited_map.config.params_loader import ParamsLoader
from visited_map.src.build_log import log_build_event, write_build_log
from visited_map.src.data.loader import CountryLoader
from visited_map.src.render.world_map import render_html
from visited_map.src.tagging import parse_codes, summarize, tag_countries, unmatched_codes


def build_overrides(args: argparse.Namespace) -> dict:
    """Translate CLI flags into a params override dict"""
    overrides = {}
    if args.visited is not None:
        overrides.setdefault('countries', {})['visited'] = sorted(parse_codes(args.visited))
    if args.planned is not None:
        overrides.setdefault('countries', {})['planned'] = sorted(parse_codes(args.planned))
    if args.data is not None:
        overrides.setdefault('data', {})['countries_path'] = args.data
    if args.output is not None:
        overrides.setdefault('output', {})['html_path'] = args.output
    return overrides


def run(params: ParamsLoader, build_log: list = None) -> int:
    """Validate params, load, tag, render. Returns a process exit code."""
    if build_log is None:
        build_log = []

    param_errors = params.validate()
    if param_errors:
        log_build_event("code_errors", {'errors': param_errors}, logger=build_log)
        return 1

    visited = params.country_codes('visited')
    planned = params.country_codes('planned')

    loader = CountryLoader(
        params.get('data', 'countries_path'),
        iso_columns=params.get('data', 'iso_columns'),
        name_columns=params.get('data', 'name_columns'),
    )
    print(f"Loading countries from {loader.countries_path}...", file=sys.stderr, flush=True)
    countries, errors = loader.load()
    if errors:
        log_build_event("schema_errors", {'path': str(loader.countries_path), 'errors': errors}, logger=build_log)
        return 1

    log_build_event("countries_loaded", {
        'path': str(loader.countries_path),
        'countries': len(countries),
        'uncoded': CountryLoader.uncoded_names(countries),
    }, logger=build_log)

    tagged = tag_countries(countries, visited, planned)

    missing = unmatched_codes(countries, visited | planned)
    if missing:
        # Typos or territories the dataset merges into another country
        log_build_event("unmatched_codes", {'codes': missing}, logger=build_log)

    output_path = render_html(tagged, params.get('output', 'html_path'), params.get('map'))
    log_build_event("map_written", {'path': str(output_path), **summarize(tagged)}, logger=build_log)

    if params.get('output', 'write_params_snapshot', default=False):
        snapshot_path = output_path.with_name('params_snapshot.json')
        with open(snapshot_path, 'w', encoding='utf-8') as f:
            json.dump(params.snapshot(), f, indent=2)

    if params.get('output', 'write_build_log', default=False):
        write_build_log(build_log, output_path)

    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render the visited / planned countries map")
    parser.add_argument("--params", type=str, help="Params JSON (defaults to config/base_params.json)")
    parser.add_argument("--data", type=str, help="Country geometries (shapefile, zip, GeoJSON, GeoPackage)")
    parser.add_argument("--output", type=str, help="HTML output path")
    parser.add_argument("--visited", type=str, help="Comma-separated ISO alpha-2 codes")
    parser.add_argument("--planned", type=str, help="Comma-separated ISO alpha-2 codes")

    args = parser.parse_args(argv)

    try:
        overrides = build_overrides(args)
    except ValueError as e:
        parser.error(str(e))

    params = ParamsLoader(args.params, overrides=overrides)

    data_path = params.get('data', 'countries_path')
    if isinstance(data_path, str) and not Path(data_path).exists():
        print(f"Country data not found: {data_path}", file=sys.stderr)
        print("Download Natural Earth admin 0 countries (1:110m) into data/ or pass --data.", file=sys.stderr)
        return 1

    return run(params)


if __name__ == "__main__":
    sys.exit(main())
