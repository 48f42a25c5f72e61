
import logging
from typing import Optional, Tuple, TypedDict
import regex as re

from .codes import CodeTables, DEFAULT_TABLES, UNKNOWN
from .heuristics import BASE_DIGITS, find_ddmmm
from .models import BaggageTagData
from .utils import normalize_payload

logger = logging.getLogger(__name__)

_ROUTE_CONNECTOR = r"\s*(?:pour|POUR|→|->|-)\s*"


class TagFields(TypedDict, total=False):
    passenger_name: Optional[str]
    rfid_tag: Optional[str]
    flight_number: Optional[str]
    flight_date: Optional[str]
    pnr: Optional[str]
    origin: Optional[str]
    destination: Optional[str]
    baggage_sequence: Optional[int]
    baggage_count: Optional[int]


def _extract_name(text: str) -> Optional[str]:
    m = re.search(r"NME[:\s]+([A-Z\s]+)", text)
    if m:
        name = re.sub(r"\s+", " ", m.group(1)).strip()
        if name:
            return name
    # first "WORD WORD" run
    m = re.search(r"([A-Z]{2,}\s+[A-Z]{2,})", text)
    return re.sub(r"\s+", " ", m.group(1)) if m else None

def _extract_rfid(text: str) -> Tuple[Optional[str], Optional[Tuple[int, int]], Optional[int]]:
    """
    Return (tag, span, sequence). 4071 ET201605 > ET201605 > digit run.
    A 13-digit run is a 10-digit base plus a 3-digit bag sequence; the tag
    is the base so it lines up with a boarding pass's expected_tags.
    """
    m = re.search(r"(\d{4,})\s*ET\s*(\d{6,})", text)
    if m:
        return f"{m.group(1)} ET{m.group(2)}", m.span(), None
    m = re.search(r"ET\s*(\d{6,})", text)
    if m:
        return f"ET{m.group(1)}", m.span(), None
    runs = list(re.finditer(r"\d{4,}", text))
    if not runs:
        return None, None, None
    # 8+ digits looks like a full tag; shorter runs are a last resort
    full = [r for r in runs if len(r.group()) >= 8]
    best = (full or runs)[0]
    run = best.group()
    if len(run) == 13:
        seq = int(run[BASE_DIGITS:])
        return run[:BASE_DIGITS], best.span(), (seq if seq >= 1 else None)
    if len(run) == BASE_DIGITS and run == text:
        # bare base: first bag
        return run, best.span(), 1
    return run, best.span(), None

def _extract_flight_and_date(text: str, rfid_span: Optional[Tuple[int, int]]) -> Tuple[Optional[str], Optional[str]]:
    m = re.search(r"(ET\d+)\s*/\s*(\d{2}[A-Z]{3})", text)
    if m:
        return m.group(1), m.group(2)

    flight = None
    for fm in re.finditer(r"ET\s*(\d{2,4})(?!\d)", text):
        if rfid_span and rfid_span[0] <= fm.start() < rfid_span[1]:
            continue
        flight = "ET" + fm.group(1)
        break
    return flight, find_ddmmm(text)

def _extract_pnr(text: str) -> Optional[str]:
    m = re.search(r"PNR[:\s]+([A-Z0-9]{6,7})", text)
    if not m:
        return None
    pnr = m.group(1)
    # Ethiopian issues 7-char EY... locators; everyone else uses 6
    if len(pnr) == 7 and not pnr.startswith("EY"):
        pnr = pnr[:6]
    return pnr

def _extract_route(text: str, tables: CodeTables) -> Tuple[Optional[str], Optional[str]]:
    alt = tables.airport_re.pattern
    # GMA pour FIH / GMA→FIH / GMA->FIH / GMA-FIH
    for m in re.finditer(rf"({alt}){_ROUTE_CONNECTOR}({alt})", text):
        if m.group(1) != m.group(2):
            return m.group(1), m.group(2)
    # GMAFIH
    for m in re.finditer(rf"(?<![A-Z])({alt})({alt})(?![A-Z])", text):
        if m.group(1) != m.group(2):
            return m.group(1), m.group(2)

    # first and last standalone codes
    found = [m.group(1) for m in re.finditer(rf"\b({alt})\b", text)]
    if len(found) >= 2 and found[0] != found[-1]:
        return found[0], found[-1]
    return None, None

def _extract_pieces(text: str) -> Tuple[Optional[int], Optional[int]]:
    """(sequence, count) from a 2/5 piece marker."""
    m = re.search(r"(?<![\dA-Z/])(\d{1,2})\s*/\s*(\d{1,2})(?![\dA-Z])", text)
    if m:
        seq, count = int(m.group(1)), int(m.group(2))
        if 1 <= seq <= count:
            return seq, count
    return None, None

def parse_baggage_tag(raw: str, tables: CodeTables = DEFAULT_TABLES) -> BaggageTagData:
    """
    Decode a printed baggage-tag label, e.g.
    NME:MOHILO LOUVE | 4071 ET201605 | ET73/22NOV | PNR:HHJWNG | GMA→FIH
    Each field is extracted on its own; a miss never blocks the others.
    """
    raw = raw or ""
    text = normalize_payload(raw).strip()

    out: TagFields = {}
    out["passenger_name"] = _extract_name(text)
    out["rfid_tag"], rfid_span, tag_seq = _extract_rfid(text)
    out["flight_number"], out["flight_date"] = _extract_flight_and_date(text, rfid_span)
    out["pnr"] = _extract_pnr(text)
    out["origin"], out["destination"] = _extract_route(text, tables)
    out["baggage_sequence"], out["baggage_count"] = _extract_pieces(text)
    if out["baggage_sequence"] is None:
        out["baggage_sequence"] = tag_seq

    tag = BaggageTagData(
        passenger_name=out["passenger_name"] or UNKNOWN,
        rfid_tag=out["rfid_tag"] or raw.strip(),
        flight_number=out["flight_number"],
        flight_date=out["flight_date"],
        pnr=out["pnr"],
        origin=out["origin"],
        destination=out["destination"],
        baggage_sequence=out["baggage_sequence"],
        baggage_count=out["baggage_count"],
        raw_data=raw,
    )
    logger.debug("parsed baggage tag: rfid=%s pnr=%s flight=%s", tag.rfid_tag, tag.pnr, tag.flight_number)
    return tag
