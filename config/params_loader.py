"""Load and access map parameters from base_params.json"""
import json
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional
import copy
import warnings

from visited_map.src.tagging import STATUSES, parse_codes


REQUIRED_GROUPS = ('countries', 'data', 'output', 'map', 'article')
COUNTRY_GROUPS = ('visited', 'planned')


class ParamsLoader:
    """Single source of truth for map and article parameters"""

    def __init__(self, params_path: Optional[str] = None, overrides: Dict[str, Any] = None, strict: bool = True):
        if params_path is not None:
            params_file = Path(params_path)
        else:
            # Default to base_params.json in config directory
            params_file = Path(__file__).parent / "base_params.json"

        with open(params_file, 'r', encoding='utf-8') as f:
            self._params = json.load(f)

        if overrides:
            self._params = self._deep_merge(self._params, overrides, strict=strict)

    def _deep_merge(self, base: Any, override: Any, strict: bool = True, path: str = "") -> Any:
        """
        Recursive merge with type checking.

        Rules:
        - dict + dict -> recursive merge
        - list in override -> REPLACE base list
        - scalar -> replace
        - unknown keys in strict mode -> raise KeyError
        - type mismatch -> raise TypeError (unless int/float or None)
        """
        if isinstance(base, dict) and isinstance(override, dict):
            result = copy.deepcopy(base)
            for k, v in override.items():
                new_path = f"{path}.{k}" if path else k

                if k not in base:
                    if strict:
                        raise KeyError(f"Override key '{new_path}' does not exist in base params.")
                    warnings.warn(f"Override key '{new_path}' does not exist in base params. Adding it.")
                    result[k] = v
                else:
                    result[k] = self._deep_merge(base[k], v, strict=strict, path=new_path)
            return result

        if not isinstance(override, type(base)):
            if isinstance(base, (int, float)) and isinstance(override, (int, float)):
                pass
            elif base is None or override is None:
                pass
            else:
                msg = f"Type mismatch at '{path}': expected {type(base).__name__}, got {type(override).__name__}"
                if strict:
                    raise TypeError(msg)
                warnings.warn(msg)

        return override

    def get(self, *keys: str, default: Any = None) -> Any:
        """Get nested parameter value from a sequence of keys"""
        value = self._params
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key, default)
            else:
                return default
        return value

    def snapshot(self) -> Dict[str, Any]:
        """Create a snapshot of parameters used (written next to the rendered map)"""
        return copy.deepcopy(self._params)

    def country_codes(self, group: str) -> FrozenSet[str]:
        """Normalized codes of countries.<group>. Raises ValueError on malformed codes."""
        values = self.get('countries', group, default=[])
        if not isinstance(values, list):
            raise ValueError("must be a list of ISO alpha-2 codes")
        return parse_codes(values)

    def validate(self) -> List[str]:
        """
        Check the groups the map and lint runs read.
        Returns list of errors (empty if valid).
        """
        errors = []
        for group in REQUIRED_GROUPS:
            if not isinstance(self.get(group), dict):
                errors.append(f"Missing params group '{group}'")
        if errors:
            return errors

        for group in COUNTRY_GROUPS:
            try:
                self.country_codes(group)
            except ValueError as e:
                errors.append(f"countries.{group}: {e}")

        iso_columns = self.get('data', 'iso_columns')
        if not _is_str_list(iso_columns):
            errors.append("data.iso_columns must be a non-empty list of column names")
        if not isinstance(self.get('data', 'countries_path'), str):
            errors.append("data.countries_path must be a string")
        if not isinstance(self.get('output', 'html_path'), str):
            errors.append("output.html_path must be a string")

        colors = self.get('map', 'colors', default={})
        missing_colors = [s for s in STATUSES if not isinstance(colors, dict) or s not in colors]
        if missing_colors:
            errors.append(f"map.colors has no color for: {', '.join(missing_colors)}")

        if not _is_str_list(self.get('article', 'required_fields')):
            errors.append("article.required_fields must be a non-empty list of field names")

        return errors


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and bool(value) and all(isinstance(v, str) and v for v in value)
