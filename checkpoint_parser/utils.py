
import re
import unicodedata
from typing import Optional, Tuple

from .codes import UNKNOWN

_WS_RE = re.compile(r"\s+")

def normalize_payload(s: str) -> str:
    """Strip accents and control characters, keep case and spacing."""
    if not s:
        return ""
    s = unicodedata.normalize("NFKD", s)
    s = "".join(c for c in s if not unicodedata.combining(c))
    # scanners append CR/LF or GS separators; they are not payload
    return "".join(c if c.isprintable() else " " for c in s).rstrip()

def clean_name(s: str) -> str:
    """Slashes become spaces, whitespace collapsed."""
    s = (s or "").replace("/", " ")
    return _WS_RE.sub(" ", s).strip()

def split_name(full_name: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """Return (first_name, last_name): last token is the first name."""
    parts = (full_name or "").split()
    if not parts:
        return None, None
    first = parts[-1]
    last = " ".join(parts[:-1]) or None
    return first, last

def strip_leading_zeros(seat: str) -> str:
    # 013A -> 13A, 000A stays 0A
    return re.sub(r"^0+(?=\d)", "", seat)

def or_unknown(value: Optional[str], sentinel: str = UNKNOWN) -> str:
    return value if value else sentinel
