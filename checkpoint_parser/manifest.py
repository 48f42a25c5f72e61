
import logging
from typing import List, Optional, Tuple
import regex as re

from .codes import CodeTables, DEFAULT_TABLES, UNKNOWN_AIRPORT
from .models import ManifestLine

logger = logging.getLogger(__name__)

MIN_TOKENS = 8
# bag id, surname, pnr, ... , route
BAG_ID, SURNAME, PNR, ROUTE = 0, 1, 2, 7

_ROUTE_TOKEN_RE = re.compile(r"([A-Z]{3})\*?-([A-Z]{3})")
_ROUTE_LINE_RE = re.compile(r"([A-Z]{3})-([A-Z]{3})")


def decode_route(route: str, line: str = "") -> Tuple[Optional[str], Optional[str]]:
    """BRU*-FIH -> (BRU, FIH); falls back to any XXX-YYY on the whole line."""
    m = _ROUTE_TOKEN_RE.search(route) or _ROUTE_LINE_RE.search(line)
    if not m:
        return None, None
    return m.group(1), m.group(2)

def parse_manifest_line(line: str, tables: CodeTables = DEFAULT_TABLES) -> Optional[ManifestLine]:
    tokens = (line or "").split()
    if len(tokens) < MIN_TOKENS:
        return None

    route = tokens[ROUTE]
    origin, destination = decode_route(route, line)
    if origin and not tables.is_airport(origin):
        logger.debug("manifest origin %s not in airport table", origin)

    row = ManifestLine(
        bag_id=tokens[BAG_ID],
        pax_surname=tokens[SURNAME],
        pnr=tokens[PNR],
        route=route,
        origin=origin or UNKNOWN_AIRPORT,
        destination=destination or UNKNOWN_AIRPORT,
    )
    logger.debug("parsed manifest row: bag=%s pnr=%s route=%s", row.bag_id, row.pnr, row.route)
    return row

def parse_manifest(text: str, tables: CodeTables = DEFAULT_TABLES) -> List[ManifestLine]:
    """Parse every non-blank line; header and short lines are dropped."""
    rows: List[ManifestLine] = []
    for line in (text or "").splitlines():
        if not line.strip():
            continue
        row = parse_manifest_line(line, tables)
        if row is not None:
            rows.append(row)
    return rows
