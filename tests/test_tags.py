
from checkpoint_parser.tags import parse_baggage_tag
from checkpoint_parser.extractors import parse_boarding_pass
from checkpoint_parser.codes import CodeTables, KNOWN_AIRPORT_CODES, AIRLINE_CODE_MAP

def test_full_label():
    raw = "NME:MOHILO LOUVE | 4071 ET201605 | ET73/22NOV | PNR:HHJWNG | GMA→FIH"
    tag = parse_baggage_tag(raw)
    assert tag.passenger_name == "MOHILO LOUVE"
    assert tag.rfid_tag == "4071 ET201605"
    assert tag.flight_number == "ET73"
    assert tag.flight_date == "22NOV"
    assert tag.pnr == "HHJWNG"
    assert tag.origin == "GMA"
    assert tag.destination == "FIH"
    assert tag.raw_data == raw

def test_label_without_markers():
    tag = parse_baggage_tag("MOHILO LOUVE 4071 ET201605 ET73 22NOV GMA FIH")
    assert tag.passenger_name == "MOHILO LOUVE"
    assert tag.rfid_tag == "4071 ET201605"
    assert tag.flight_number == "ET73"
    assert tag.flight_date == "22NOV"
    assert tag.origin == "GMA"
    assert tag.destination == "FIH"

def test_piece_marker_and_plain_digits():
    tag = parse_baggage_tag("NME:DOE JOHN | 0071123456 | 2/3 | ET840/05DEC | ADD-FIH")
    assert tag.rfid_tag == "0071123456"
    assert tag.baggage_sequence == 2
    assert tag.baggage_count == 3
    assert tag.flight_number == "ET840"
    assert tag.flight_date == "05DEC"
    assert (tag.origin, tag.destination) == ("ADD", "FIH")

def test_thirteen_digit_tag():
    tag = parse_baggage_tag("0071123456002")
    assert tag.rfid_tag == "0071123456"
    assert tag.baggage_sequence == 2
    assert tag.baggage_count is None
    assert tag.passenger_name == "UNKNOWN"

def test_pnr_length_rules():
    assert parse_baggage_tag("PNR:EYFMKNE").pnr == "EYFMKNE"
    assert parse_baggage_tag("PNR:ABCDEFG").pnr == "ABCDEF"
    assert parse_baggage_tag("PNR ABC123").pnr == "ABC123"

def test_route_pour_connector():
    tag = parse_baggage_tag("NME:KABILA | FBM pour FIH")
    assert (tag.origin, tag.destination) == ("FBM", "FIH")

def test_unknown_route_code_needs_tables():
    raw = "NME:A B | 12345678 | XYZ-FIH"
    assert parse_baggage_tag(raw).origin is None
    tables = CodeTables(list(KNOWN_AIRPORT_CODES) + ["XYZ"], AIRLINE_CODE_MAP)
    tag = parse_baggage_tag(raw, tables)
    assert (tag.origin, tag.destination) == ("XYZ", "FIH")

def test_rfid_defaults_to_trimmed_raw():
    tag = parse_baggage_tag("  HELLO  ")
    assert tag.rfid_tag == "HELLO"
    assert tag.flight_number is None

def test_embedded_thirteen_digit_tag_keeps_base():
    tag = parse_baggage_tag("NME:DOE JOHN | 4071161863001 | ADD-FIH")
    assert tag.rfid_tag == "4071161863"
    assert tag.baggage_sequence == 1

def test_bare_base_is_first_bag():
    tag = parse_baggage_tag("4071161863")
    assert tag.rfid_tag == "4071161863"
    assert tag.baggage_sequence == 1

def test_scanned_tag_matches_boarding_pass_expected_tags():
    bp = parse_boarding_pass("M1KATEBA9U123FIHJNB143012A4071161863002")
    tag = parse_baggage_tag("4071161864002")
    assert tag.rfid_tag in bp.baggage_info.expected_tags
    assert tag.baggage_sequence == 2

def test_same_code_both_sides_is_not_a_route():
    tag = parse_baggage_tag("NME:A B | 12345678 | FIH-FIH")
    assert tag.origin is None
    assert tag.destination is None
    tag = parse_baggage_tag("NME:A B | FIHFIH | GMA-FIH")
    assert (tag.origin, tag.destination) == ("GMA", "FIH")
