import logging
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple, TypedDict
import regex as re

from .classifier import classify
from .codes import CodeTables, DEFAULT_TABLES, UNKNOWN_AIRPORT
from .heuristics import (
    baggage_air_congo, baggage_ethiopian, baggage_piece_count,
    find_ddmmm, julian_to_ddmmm, pick_flight_time, pick_seat,
)
from .models import BaggageInfo, BoardingPassFormat, ParsedBoardingPass
from .utils import clean_name, normalize_payload, or_unknown, split_name, strip_leading_zeros

logger = logging.getLogger(__name__)

# =========================
# Constants & small helpers
# =========================

# text before a PNR or flight code that can only be passenger name
NAME_PREFIX_RE = re.compile(r"^M1[A-Z\s/]+$")
PNR_CANDIDATE_RE = re.compile(r"[A-Z0-9]{6,7}(?=\s|$)")

PREFERRED_CARRIERS = ("9U", "ET", "EK", "AF", "SN")
_GENERIC_FLIGHT_RE = re.compile(r"([A-Z]{2})(\d{3,4})")
_ROUTE_CONNECTOR = r"\s*[-/>→\s]\s*"

# Mandatory BCBP block: M1NAME PNR DEPARRCC NNNN JJJ C SSSL SEQ
BCBP_RE = re.compile(
    r"^M1(?P<name>[A-Z/\s]+?)\s+(?P<pnr>[A-Z0-9]{6,7})\s+"
    r"(?P<dep>[A-Z]{3})\s*(?P<arr>[A-Z]{3})\s*(?P<carrier>[A-Z0-9]{2})\s+"
    r"(?P<flight>\d{3,4})[^0-9]*?(?P<julian>\d{3})(?P<cabin>[A-Z])"
    r"(?P<seat>\d{3}[A-Z])(?P<seq>\d{4})"
)

FORMAT_CARRIERS = {
    BoardingPassFormat.AIR_CONGO: ("9U", "Air Congo"),
    BoardingPassFormat.ETHIOPIAN: ("ET", "Ethiopian Airlines"),
}


class NameMatch(NamedTuple):
    name: str
    pnr: str
    # True when the name's last character was handed to the PNR
    overlap: bool


class FlightCode(NamedTuple):
    number: str
    start: int


class BoardingPassFields(TypedDict, total=False):
    pnr: Optional[str]
    full_name: Optional[str]
    flight_number: Optional[str]
    flight_time: Optional[str]
    flight_date: Optional[str]
    departure: Optional[str]
    arrival: Optional[str]
    seat_number: Optional[str]
    ticket_number: Optional[str]
    company_code: Optional[str]
    airline: Optional[str]
    baggage_info: Optional[BaggageInfo]


def _glued_to_artifact(text: str, start: int, code: str) -> bool:
    # BET... / 1ET... are carrier and ticket prefixes, not Ethiopian flights
    return code == "ET" and start > 0 and text[start - 1] in ("B", "1")

# ======================
# Name / PNR extraction
# ======================

def pnr_candidates(text: str, tables: CodeTables = DEFAULT_TABLES) -> List[Tuple[str, int]]:
    """
    Return (candidate, offset) for every 6-7 char run that closes a token.
    Runs that contain an airport code (route collisions) are dropped.
    """
    cands: List[Tuple[str, int]] = []
    for m in PNR_CANDIDATE_RE.finditer(text):
        tok = m.group()
        if tables.contains_airport(tok) or tables.is_airport_pair(tok):
            continue
        cands.append((tok, m.start()))
    return cands

def extract_name_and_pnr(text: str, tables: CodeTables = DEFAULT_TABLES) -> Optional[NameMatch]:
    """
    Split M1<NAME><PNR> when the PNR may be glued to the name.

    Only candidates preceded by plain name characters qualify; the last
    one is closest to the route and wins. If the PNR is glued on and the
    name ends with the PNR's first letter, that letter belongs to the PNR.
    """
    cands = [(tok, off) for tok, off in pnr_candidates(text, tables) if NAME_PREFIX_RE.match(text[:off])]
    if not cands:
        return None
    pnr, off = cands[-1]
    name_part = text[2:off]
    overlap = bool(name_part) and not name_part[-1].isspace() and name_part[-1] == pnr[0]
    if overlap:
        name_part = name_part[:-1]
    name = clean_name(name_part)
    if not name:
        return None
    return NameMatch(name, pnr, overlap)

def extract_name_before(text: str, start: int) -> Optional[str]:
    """Name glued straight onto the flight code: M1KATEBA9U123 -> KATEBA."""
    if start <= 2:
        return None
    prefix = text[:start]
    if not NAME_PREFIX_RE.match(prefix):
        return None
    return clean_name(prefix[2:]) or None

# ===============
# Flight number
# ===============

def extract_flight_number(text: str, carriers: Tuple[str, ...] = PREFERRED_CARRIERS) -> Optional[FlightCode]:
    # 1) Known carriers, optional single space: ET701 / ET 0840
    pat = r"(%s) ?(\d{3,4})" % "|".join(re.escape(c) for c in carriers)
    for m in re.finditer(pat, text):
        if _glued_to_artifact(text, m.start(), m.group(1)):
            continue
        return FlightCode(m.group(1) + m.group(2), m.start())

    # 2) Any two-letter code + 3-4 digits
    for m in _GENERIC_FLIGHT_RE.finditer(text):
        if _glued_to_artifact(text, m.start(), m.group(1)):
            continue
        return FlightCode(m.group(1) + m.group(2), m.start())

    # 3) Bare digits, not a seat/class chunk and not the head of a tag number
    for m in re.finditer(r"\d{3,4}", text):
        start = m.start()
        if start > 0 and text[start - 1] in ("Y", "C"):
            continue
        if re.match(r"\d{10}", text[start:start + 10]):
            continue
        code = re.search(r"([A-Z]{2})\s*$", text[max(0, start - 4):start])
        if code and not _glued_to_artifact(text, start - len(code.group(0)), code.group(1)):
            return FlightCode(code.group(1) + m.group(), start - len(code.group(0)))
        return FlightCode(m.group(), start)
    return None

# =======
# Route
# =======

def extract_route(text: str, tables: CodeTables = DEFAULT_TABLES) -> Tuple[Optional[str], Optional[str]]:
    # 1) Two known codes glued together: FIHFBM
    for i in range(len(text) - 5):
        dep, arr = text[i:i + 3], text[i + 3:i + 6]
        if dep != arr and dep in tables.airports and arr in tables.airports:
            return dep, arr

    # 2) Two known codes with a connector: FIH-FBM / FIH FBM / FIH→FBM
    alt = tables.airport_re.pattern
    for m in re.finditer(rf"({alt}){_ROUTE_CONNECTOR}({alt})", text):
        if m.group(1) != m.group(2):
            return m.group(1), m.group(2)

    found: List[str] = []
    for m in tables.airport_re.finditer(text):
        if m.group() not in found:
            found.append(m.group())

    # 3) One known code followed by an unlisted one: take the letters verbatim
    if len(found) == 1:
        m = re.search(rf"{found[0]}([A-Z]{{3}})", text)
        if m and m.group(1) != found[0]:
            return found[0], m.group(1)
        return None, None

    # 4) First two known codes anywhere
    if len(found) >= 2:
        return found[0], found[1]
    return None, None

# ===============
# Ticket number
# ===============

def extract_ticket_number(text: str, tables: CodeTables = DEFAULT_TABLES) -> Optional[str]:
    if len(text) <= 21:
        return None
    window = text[21:min(70, len(text))]
    prefix = window[:2]
    if prefix in tables.airlines:
        window = window[2:]
    return window.strip() or None

# ===========
# Pipelines
# ===========

def _common_fields(text: str, tables: CodeTables, flight: Optional[FlightCode]) -> BoardingPassFields:
    out: BoardingPassFields = {
        "pnr": None, "full_name": None, "flight_number": None, "flight_time": None,
        "flight_date": None, "departure": None, "arrival": None, "seat_number": None,
        "ticket_number": None, "company_code": None, "airline": None, "baggage_info": None,
    }

    nm = extract_name_and_pnr(text, tables)
    if nm:
        out["full_name"], out["pnr"] = nm.name, nm.pnr
    elif flight:
        out["full_name"] = extract_name_before(text, flight.start)

    if flight:
        out["flight_number"] = flight.number
    out["departure"], out["arrival"] = extract_route(text, tables)
    out["flight_time"] = pick_flight_time(text)
    out["flight_date"] = find_ddmmm(text)
    out["seat_number"] = pick_seat(text)
    out["ticket_number"] = extract_ticket_number(text, tables)
    return out

def _carrier_fields(out: BoardingPassFields, fmt: BoardingPassFormat, tables: CodeTables) -> None:
    code, default_name = FORMAT_CARRIERS[fmt]
    out["company_code"] = code
    out["airline"] = tables.airline_name(code) or default_name

def parse_air_congo(text: str, tables: CodeTables = DEFAULT_TABLES, year: Optional[int] = None) -> BoardingPassFields:
    out = _common_fields(text, tables, extract_flight_number(text))
    _carrier_fields(out, BoardingPassFormat.AIR_CONGO, tables)
    out["baggage_info"] = baggage_air_congo(text)
    return out

def parse_ethiopian(text: str, tables: CodeTables = DEFAULT_TABLES, year: Optional[int] = None) -> BoardingPassFields:
    flight = extract_flight_number(text, carriers=("ET",)) or extract_flight_number(text)
    out = _common_fields(text, tables, flight)
    _carrier_fields(out, BoardingPassFormat.ETHIOPIAN, tables)
    out["baggage_info"] = baggage_ethiopian(text)
    return out

def _structured_fields(m, text: str, tables: CodeTables, year: Optional[int]) -> BoardingPassFields:
    carrier = m.group("carrier")
    return {
        "pnr": m.group("pnr"),
        "full_name": clean_name(m.group("name")) or None,
        "flight_number": carrier + m.group("flight"),
        "flight_time": pick_flight_time(text),
        "flight_date": julian_to_ddmmm(int(m.group("julian")), year),
        "departure": m.group("dep"),
        "arrival": m.group("arr"),
        "seat_number": strip_leading_zeros(m.group("seat")),
        "ticket_number": extract_ticket_number(text, tables),
        "company_code": carrier,
        "airline": None,
        "baggage_info": None,
    }

def parse_generic(text: str, tables: CodeTables = DEFAULT_TABLES, year: Optional[int] = None) -> BoardingPassFields:
    m = BCBP_RE.match(text)
    if m:
        out = _structured_fields(m, text, tables, year)
    else:
        out = _common_fields(text, tables, extract_flight_number(text))
        fn = out["flight_number"]
        code = re.match(r"^([A-Z0-9]{2})(?=\d{3,4}$)", fn) if fn else None
        out["company_code"] = code.group(1) if code else None

    out["baggage_info"] = baggage_piece_count(text)
    if out["company_code"]:
        out["airline"] = tables.airline_name(out["company_code"]) or f"Airline {out['company_code']}"
    return out

PIPELINES: Dict[BoardingPassFormat, Callable[..., BoardingPassFields]] = {
    BoardingPassFormat.AIR_CONGO: parse_air_congo,
    BoardingPassFormat.ETHIOPIAN: parse_ethiopian,
    BoardingPassFormat.GENERIC: parse_generic,
}

# =============
# Entry point
# =============

def _to_record(f: BoardingPassFields, raw: str, fmt: BoardingPassFormat) -> ParsedBoardingPass:
    first, last = split_name(f.get("full_name"))
    dep = or_unknown(f.get("departure"), UNKNOWN_AIRPORT)
    arr = or_unknown(f.get("arrival"), UNKNOWN_AIRPORT)
    return ParsedBoardingPass(
        pnr=or_unknown(f.get("pnr")),
        full_name=or_unknown(f.get("full_name")),
        first_name=or_unknown(first),
        last_name=or_unknown(last),
        flight_number=or_unknown(f.get("flight_number")),
        flight_time=f.get("flight_time"),
        flight_date=f.get("flight_date"),
        departure=dep,
        arrival=arr,
        route=f"{dep}-{arr}",
        seat_number=f.get("seat_number"),
        ticket_number=f.get("ticket_number"),
        company_code=or_unknown(f.get("company_code")),
        airline=or_unknown(f.get("airline")),
        baggage_info=f.get("baggage_info"),
        raw_data=raw,
        format=fmt,
    )

def parse_boarding_pass(raw: str, tables: CodeTables = DEFAULT_TABLES, year: Optional[int] = None) -> ParsedBoardingPass:
    """
    Decode one boarding-pass barcode payload.

    Never raises on bad input: fields that cannot be extracted come back
    as "UNKNOWN" / "UNK" or None. `year` anchors BCBP Julian dates and
    defaults to the current year.
    """
    raw = raw or ""
    text = normalize_payload(raw)
    fmt = classify(raw)
    record = _to_record(PIPELINES[fmt](text, tables, year), raw, fmt)
    logger.debug(
        "parsed %s boarding pass: pnr=%s flight=%s route=%s",
        fmt.value, record.pnr, record.flight_number, record.route,
    )
    return record
