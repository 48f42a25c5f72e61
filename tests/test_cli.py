
import csv
import json
from click.testing import CliRunner

from checkpoint_parser.cli import main

AIR_CONGO = "M1KATEBA9U123FIHJNB143012A4071161863002"

def test_classify_command():
    result = CliRunner().invoke(main, ["classify", AIR_CONGO])
    assert result.exit_code == 0
    assert result.output.strip() == "AIR_CONGO"

def test_boarding_pass_emits_json():
    result = CliRunner().invoke(main, ["boarding-pass", AIR_CONGO])
    assert result.exit_code == 0
    rec = json.loads(result.output.strip().splitlines()[0])
    assert rec["flight_number"] == "9U123"
    assert rec["baggage_info"]["count"] == 2
    assert rec["format"] == "AIR_CONGO"

def test_tag_from_file_with_report(tmp_path):
    labels = tmp_path / "labels.txt"
    labels.write_text("NME:DOE JOHN | 0071123456 | ADD-FIH\n\n0071123456002\n", encoding="utf-8")
    report = tmp_path / "out" / "tags.csv"
    result = CliRunner().invoke(main, ["tag", "--file", str(labels), "--report", str(report)])
    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert len(lines) == 2
    with open(report, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert rows[0]["origin"] == "ADD"
    assert rows[1]["rfid_tag"] == "0071123456"
    assert rows[1]["baggage_sequence"] == "2"

def test_manifest_command(tmp_path):
    p = tmp_path / "manifest.txt"
    p.write_text("HEADER LINE\n9ET336602 MBAKA GHMKYS 6 Econ 244 29.5 BRU*-FIH\n", encoding="utf-8")
    result = CliRunner().invoke(main, ["manifest", str(p)])
    assert result.exit_code == 0
    rec = json.loads(result.output.strip())
    assert rec["origin"] == "BRU"

def test_boarding_pass_without_input_fails():
    result = CliRunner().invoke(main, ["boarding-pass"])
    assert result.exit_code != 0

def test_bad_tables_file_is_reported(tmp_path):
    p = tmp_path / "bad.yaml"
    p.write_text("airports: FIH\n", encoding="utf-8")
    result = CliRunner().invoke(main, ["--tables", str(p), "classify", AIR_CONGO])
    assert result.exit_code == 2
    assert "--tables" in result.output
