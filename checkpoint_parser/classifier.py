
import logging
from typing import Optional
import regex as re

from .models import BoardingPassFormat

logger = logging.getLogger(__name__)

AIR_CONGO_MARKER = "9U"
_ET_FLIGHT_RE = re.compile(r"ET\d{3,4}")
# BET... and 1ET... are carrier/ticket prefix artifacts, not flight codes
_ET_REJECT_BEFORE = {"B", "1"}

def find_ethiopian_flight(text: str) -> Optional[str]:
    """
    Return the first ET + 3-4 digit code in text that is not glued to a
    B or 1, or None.
    """
    for m in _ET_FLIGHT_RE.finditer(text):
        if m.start() > 0 and text[m.start() - 1] in _ET_REJECT_BEFORE:
            continue
        return m.group()
    return None

def classify(raw: str) -> BoardingPassFormat:
    """
    Pick the decoding strategy for a boarding-pass payload.
    Order matters: Air Congo data can carry coincidental ET substrings.
    """
    raw = raw or ""
    if AIR_CONGO_MARKER in raw:
        fmt = BoardingPassFormat.AIR_CONGO
    elif find_ethiopian_flight(raw[: len(raw) // 2]):
        # flight numbers sit before the midpoint
        fmt = BoardingPassFormat.ETHIOPIAN
    else:
        fmt = BoardingPassFormat.GENERIC
    logger.debug("classified payload (%d chars) as %s", len(raw), fmt.value)
    return fmt
