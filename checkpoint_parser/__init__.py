from .classifier import classify
from .codes import DEFAULT_TABLES, CodeTables
from .extractors import parse_boarding_pass
from .manifest import parse_manifest, parse_manifest_line
from .models import BaggageInfo, BaggageTagData, BoardingPassFormat, ManifestLine, ParsedBoardingPass
from .rules import load_tables
from .tags import parse_baggage_tag
