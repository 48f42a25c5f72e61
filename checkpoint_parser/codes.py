from typing import Dict, FrozenSet, Iterable, Mapping, Optional
import regex as re

# Airports served from the checkpoint (DRC hubs first)
KNOWN_AIRPORT_CODES = (
    "FIH", "FKI", "GOM", "FBM", "KWZ", "KGA", "MJM", "GMA", "MDK", "KND",
    "NBO", "EBB", "ADD", "KGL", "DAR", "JRO",
    "LFW", "ABJ", "LOS", "ACC", "NKC",
    "JNB", "CPT", "LAD", "BZV",
    "CMN", "CAI", "ALG", "TUN",
    "BRU", "CDG", "AMS", "FRA", "LHR", "LIS", "IST",
    "DXB", "DOH", "AUH",
    "NLI", "NDJ",
)

# Map 2-character carrier codes to display names (extend as needed)
AIRLINE_CODE_MAP = {
    "9U": "Air Congo",
    "ET": "Ethiopian Airlines",
    "KP": "ASKY Airlines",
    "KQ": "Kenya Airways",
    "HF": "Air Côte d'Ivoire",
    "U7": "Uganda Airlines",
    "AT": "Royal Air Maroc",
    "TK": "Turkish Airlines",
    "EK": "Emirates",
    "AF": "Air France",
    "SN": "Brussels Airlines",
    "WB": "RwandAir",
    "SA": "South African Airways",
}

UNKNOWN = "UNKNOWN"
UNKNOWN_AIRPORT = "UNK"


class CodeTables:
    """
    Read-only airport and airline lookups.
    Built once and passed into the parsers; nothing mutates it afterwards.
    """

    __slots__ = ("airports", "airlines", "airport_re")

    def __init__(self, airports: Iterable[str], airlines: Mapping[str, str]):
        self.airports: FrozenSet[str] = frozenset(a.upper() for a in airports)
        self.airlines: Dict[str, str] = {k.upper(): v for k, v in airlines.items()}
        alternation = "|".join(sorted(self.airports))
        self.airport_re = re.compile(f"(?:{alternation})") if alternation else re.compile(r"(?!)")

    def is_airport(self, code: Optional[str]) -> bool:
        return bool(code) and code.upper() in self.airports

    def contains_airport(self, token: str) -> bool:
        return any(token[i:i + 3] in self.airports for i in range(len(token) - 2))

    def is_airport_pair(self, token: str) -> bool:
        return len(token) == 6 and token[:3] in self.airports and token[3:] in self.airports

    def airline_name(self, code: Optional[str]) -> Optional[str]:
        if not code:
            return None
        return self.airlines.get(code.upper())

    def __repr__(self) -> str:
        return f"CodeTables(airports={len(self.airports)}, airlines={len(self.airlines)})"


DEFAULT_TABLES = CodeTables(KNOWN_AIRPORT_CODES, AIRLINE_CODE_MAP)
