"""
Scoring routines shared by the extractors.

Each picker gathers every textually valid candidate first, then applies
an explicit priority and tie-break, so the same digit run always resolves
the same way.
"""
import logging
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence, Tuple

import regex as re
from dateutil import parser as dateparser

from .models import BaggageInfo
from .utils import strip_leading_zeros

logger = logging.getLogger(__name__)

MONTHS = ("JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC")

MONTH_MAP = {
    'JAN':'Jan','FEB':'Feb','MAR':'Mar','APR':'Apr','MAY':'May','JUN':'Jun',
    'JUL':'Jul','AUG':'Aug','SEP':'Sep','SEPT':'Sep','OCT':'Oct','NOV':'Nov','DEC':'Dec'
}

MAX_BAGS = 10
BASE_DIGITS = 10

# DDMMM carries no year; validate against a leap year so 29FEB passes
_LEAP_YEAR = datetime(2000, 1, 1)

# 310Y..319C are fare/class codes printed next to the seat, never seats
_CLASS_CODE_RE = re.compile(r"^31[0-9][YC]$")

# =============
# Flight time
# =============

def _time_priority(hours: int) -> int:
    if 6 <= hours <= 23:
        return 3
    if 1 <= hours <= 5:
        return 2
    return 1

def flight_time_candidates(text: str) -> List[Tuple[str, int, int]]:
    """
    Return a list of (HH:MM, offset, priority) for every 4-digit chunk
    that reads as a 24h time. 00:00-00:09 is dropped: those are baggage
    and ticket artifacts, never departure times.
    """
    cands: List[Tuple[str, int, int]] = []
    for m in re.finditer(r"\d{4}", text):
        hh, mm = int(m.group()[:2]), int(m.group()[2:])
        if hh > 23 or mm > 59:
            continue
        if hh == 0 and mm < 10:
            continue
        cands.append((f"{hh:02d}:{mm:02d}", m.start(), _time_priority(hh)))
    return cands

def pick_flight_time(text: str) -> Optional[str]:
    cands = flight_time_candidates(text)
    if not cands:
        return None
    # highest priority, then earliest offset
    best = max(cands, key=lambda c: (c[2], -c[1]))
    return best[0]

# ======
# Seat
# ======

def pick_seat(text: str) -> Optional[str]:
    # 1) cabin letter + 3-digit seat: ...Y013A...
    m = re.search(r"[YC](\d{3}[A-Z])", text)
    if m:
        return strip_leading_zeros(m.group(1))

    # 2) first bare 3-digit seat that is not a class code
    for m in re.finditer(r"\d{3}[A-Z]", text):
        if _CLASS_CODE_RE.match(m.group()):
            continue
        return strip_leading_zeros(m.group())

    # 3) short seat: 12A / 1B
    m = re.search(r"(?<![A-Z0-9])(\d{1,2}[A-Z])(?!\d)", text)
    if m:
        return m.group(1)
    return None

# =========
# Baggage
# =========

def expand_tags(base_number: str, count: int) -> Tuple[str, ...]:
    base = int(base_number)
    return tuple(str(base + i).zfill(BASE_DIGITS) for i in range(count))

def build_baggage(base_number: str, count: int) -> BaggageInfo:
    return BaggageInfo(count=count, base_number=base_number, expected_tags=expand_tags(base_number, count))

def decode_baggage(text: str, run_lengths: Sequence[int]) -> Optional[BaggageInfo]:
    """
    Scan maximal digit runs whose length is in run_lengths; the first
    BASE_DIGITS digits are the tag base, the rest is the bag count.
    Runs decoding to a count outside 1..MAX_BAGS are skipped.
    """
    for m in re.finditer(r"\d+", text):
        run = m.group()
        if len(run) not in run_lengths:
            continue
        base, count = run[:BASE_DIGITS], int(run[BASE_DIGITS:])
        if not 1 <= count <= MAX_BAGS:
            logger.debug("rejecting baggage run %s: count %d out of range", run, count)
            continue
        return build_baggage(base, count)
    return None

def baggage_air_congo(text: str) -> Optional[BaggageInfo]:
    # 10 base + 2 count, or 10 base + zero-padded 3 count
    return decode_baggage(text, (12, 13))

def baggage_ethiopian(text: str) -> Optional[BaggageInfo]:
    return decode_baggage(text, (13,))

def baggage_piece_count(text: str) -> Optional[BaggageInfo]:
    """2PC style piece count, paired with a standalone 10-digit tag base."""
    m = re.search(r"(?<!\d)(\d{1,2})PC(?![A-Z])", text)
    if not m:
        return None
    count = int(m.group(1))
    if not 1 <= count <= MAX_BAGS:
        return None
    base = re.search(r"(?<!\d)\d{10}(?!\d)", text)
    if not base:
        return None
    return build_baggage(base.group(), count)

# =======
# Dates
# =======

def parse_ddmmm(token: str) -> Optional[str]:
    # 02JUN / 2JUN / 02 JUN -> 02JUN, only when the day exists in that month
    m = re.match(r"(?i)^\s*(\d{1,2})\s*([A-Z]{3,4})\s*$", token.strip())
    if not m:
        return None
    d, mon = m.group(1), m.group(2).upper()
    mon_std = MONTH_MAP.get(mon)
    if not mon_std:
        return None
    try:
        dt = dateparser.parse(f"{d} {mon_std}", dayfirst=True, default=_LEAP_YEAR)
    except (ValueError, OverflowError):
        return None
    return f"{dt.day:02d}{MONTHS[dt.month - 1]}"

def find_ddmmm(text: str) -> Optional[str]:
    for m in re.finditer(r"(?<!\d)(\d{2}[A-Z]{3,4})(?![A-Z])", text):
        d = parse_ddmmm(m.group(1))
        if d:
            return d
    return None

def julian_to_ddmmm(day: int, year: Optional[int] = None) -> Optional[str]:
    """BCBP day-of-year (1..366) to DDMMM against a reference year."""
    if not 1 <= day <= 366:
        return None
    year = year or date.today().year
    dt = date(year, 1, 1) + timedelta(days=day - 1)
    if dt.year != year:
        return None
    return f"{dt.day:02d}{MONTHS[dt.month - 1]}"
