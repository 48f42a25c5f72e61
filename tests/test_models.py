
import pytest
from pydantic import ValidationError

from checkpoint_parser.models import BaggageInfo, ParsedBoardingPass, ManifestLine

def test_baggage_count_bounds():
    with pytest.raises(ValidationError):
        BaggageInfo(count=11, base_number="4071161863", expected_tags=tuple("x" * 11))
    with pytest.raises(ValidationError):
        BaggageInfo(count=0, base_number="4071161863", expected_tags=())

def test_expected_tags_match_count():
    with pytest.raises(ValidationError):
        BaggageInfo(count=2, base_number="4071161863", expected_tags=("4071161863",))

def test_defaults_are_sentinels():
    bp = ParsedBoardingPass()
    assert bp.pnr == "UNKNOWN"
    assert bp.departure == "UNK"
    assert bp.route == "UNK-UNK"
    assert bp.flight_time is None

def test_records_are_frozen():
    row = ManifestLine(bag_id="1", pax_surname="A", pnr="B", route="C")
    with pytest.raises(ValidationError):
        row.pnr = "X"
