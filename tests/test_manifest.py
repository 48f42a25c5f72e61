
from checkpoint_parser.manifest import parse_manifest_line, parse_manifest, decode_route

def test_manifest_example():
    row = parse_manifest_line("9ET336602 MBAKA GHMKYS 6 Econ 244 29.5 BRU*-FIH")
    assert row.bag_id == "9ET336602"
    assert row.pax_surname == "MBAKA"
    assert row.pnr == "GHMKYS"
    assert row.route == "BRU*-FIH"
    assert row.origin == "BRU"
    assert row.destination == "FIH"

def test_short_line_yields_nothing():
    assert parse_manifest_line("BAG ID NAME PNR") is None
    assert parse_manifest_line("") is None

def test_route_fallback_over_whole_line():
    row = parse_manifest_line("9ET336603 DOE ABC123 1 Econ 244 10.0 ?? ADD-FIH")
    assert row.route == "??"
    assert (row.origin, row.destination) == ("ADD", "FIH")

def test_undecodable_route_is_unk():
    row = parse_manifest_line("9ET336604 DOE ABC123 1 Econ 244 10.0 n/a")
    assert (row.origin, row.destination) == ("UNK", "UNK")

def test_decode_route():
    assert decode_route("CDG-FIH") == ("CDG", "FIH")
    assert decode_route("x") == (None, None)

def test_parse_manifest_drops_non_data_lines():
    text = "\n".join([
        "ETHIOPIAN AIRLINES BAGGAGE MANIFEST",
        "",
        "9ET336602 MBAKA GHMKYS 6 Econ 244 29.5 BRU*-FIH",
        "TOTAL 2",
        "9ET336605 LUKUSA HHJWNG 7 Econ 245 23.0 ADD-FIH",
    ])
    rows = parse_manifest(text)
    assert [r.bag_id for r in rows] == ["9ET336602", "9ET336605"]
