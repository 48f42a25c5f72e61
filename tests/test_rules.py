
import os
import pytest

from checkpoint_parser.rules import load_tables
from checkpoint_parser.tags import parse_baggage_tag

SAMPLE = os.path.join(os.path.dirname(__file__), "..", "tables.yaml")

def test_sample_tables_merge_with_defaults():
    tables = load_tables(SAMPLE)
    assert tables.is_airport("BKY")
    assert tables.is_airport("FIH")
    assert tables.airline_name("8Z") == "Congo Airways"
    assert tables.airline_name("ET") == "Ethiopian Airlines"

def test_override_changes_route_decoding(tmp_path):
    p = tmp_path / "tables.yaml"
    p.write_text("airports:\n  - xyz\n", encoding="utf-8")
    tables = load_tables(str(p))
    tag = parse_baggage_tag("NME:A B | 12345678 | XYZ-FIH", tables)
    assert tag.origin == "XYZ"

def test_empty_file_gives_defaults(tmp_path):
    p = tmp_path / "empty.yaml"
    p.write_text("", encoding="utf-8")
    tables = load_tables(str(p))
    assert tables.is_airport("ADD")
    assert not tables.is_airport("XYZ")

@pytest.mark.parametrize("body", [
    "- FIH\n- ADD\n",
    "airports: FIH\n",
    "airports:\n  - FIHX\n",
    "airlines:\n  - ET\n",
    "airlines:\n  ETH: Nope\n",
])
def test_bad_shapes_raise(tmp_path, body):
    p = tmp_path / "bad.yaml"
    p.write_text(body, encoding="utf-8")
    with pytest.raises(ValueError):
        load_tables(str(p))
