
from typing import Dict, Any
import yaml

from .codes import AIRLINE_CODE_MAP, KNOWN_AIRPORT_CODES, CodeTables

def load_tables(path: str) -> CodeTables:
    """
    Read airport/airline overrides from YAML and merge them into the
    built-in tables:

        airports: [GOM, FKI]
        airlines: {"8Z": "Congo Airways"}
    """
    with open(path, "r", encoding="utf-8") as f:
        data: Dict[str, Any] = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at top level, got {type(data).__name__}")

    airports = data.get("airports") or []
    if not isinstance(airports, list) or not all(isinstance(a, str) for a in airports):
        raise ValueError(f"{path}: 'airports' must be a list of codes")
    airlines = data.get("airlines") or {}
    if not isinstance(airlines, dict):
        raise ValueError(f"{path}: 'airlines' must map codes to names")

    merged_airports = list(KNOWN_AIRPORT_CODES)
    for code in airports:
        code = code.strip().upper()
        if len(code) != 3 or not code.isalpha():
            raise ValueError(f"{path}: bad airport code {code!r}")
        if code not in merged_airports:
            merged_airports.append(code)

    merged_airlines = dict(AIRLINE_CODE_MAP)
    for code, name in airlines.items():
        code = str(code).strip().upper()
        if len(code) != 2:
            raise ValueError(f"{path}: bad airline code {code!r}")
        merged_airlines[code] = str(name)

    return CodeTables(merged_airports, merged_airlines)
