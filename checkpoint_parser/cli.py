import os, json, click, csv, logging
from typing import Dict, Any, Iterable, List, Optional
from pydantic import BaseModel
from .codes import DEFAULT_TABLES, CodeTables
from .rules import load_tables
from .classifier import classify
from .extractors import parse_boarding_pass
from .tags import parse_baggage_tag
from .manifest import parse_manifest

def _read_inputs(raw: Iterable[str], file: Optional[str]) -> List[str]:
    items = [r for r in raw if r.strip()]
    if file:
        with open(file, "r", encoding="utf-8") as f:
            items.extend(line.rstrip("\r\n") for line in f if line.strip())
    return items

def _flat(record: Dict[str, Any]) -> Dict[str, Any]:
    # nested values (baggage_info) go to the CSV as JSON text
    return {k: json.dumps(v, ensure_ascii=False) if isinstance(v, (dict, list)) else v for k, v in record.items()}

def emit(records: List[BaseModel], report: Optional[str]) -> None:
    rows = [r.model_dump(mode="json") for r in records]
    for row in rows:
        click.echo(json.dumps(row, ensure_ascii=False))

    if report and rows:
        os.makedirs(os.path.dirname(report) or ".", exist_ok=True)
        with open(report, "w", newline="", encoding="utf-8") as csvfile:
            writer = csv.DictWriter(csvfile, fieldnames=list(rows[0].keys()))
            writer.writeheader()
            for row in rows:
                writer.writerow(_flat(row))

def _tables(ctx: click.Context) -> CodeTables:
    return ctx.obj.get("tables", DEFAULT_TABLES) if ctx.obj else DEFAULT_TABLES

@click.group()
@click.option("--tables", "tables_path", default=None, type=click.Path(exists=True, dir_okay=False), help="YAML airport/airline overrides")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr")
@click.pass_context
def main(ctx, tables_path, verbose):
    """Checkpoint scan parser: boarding passes, baggage tags, manifests"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    if tables_path:
        try:
            ctx.obj["tables"] = load_tables(tables_path)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--tables")

@main.command("classify")
@click.argument("raw")
def classify_cmd(raw):
    """Print the detected boarding-pass format."""
    click.echo(classify(raw).value)

@main.command("boarding-pass")
@click.argument("raw", nargs=-1)
@click.option("--file", "file", default=None, type=click.Path(exists=True, dir_okay=False), help="One payload per line")
@click.option("--year", default=None, type=int, help="Reference year for BCBP julian dates")
@click.option("--report", default=None, type=click.Path(), help="Optional CSV report path")
@click.pass_context
def boarding_pass_cmd(ctx, raw, file, year, report):
    """Decode boarding-pass barcode payloads, one JSON object each."""
    items = _read_inputs(raw, file)
    if not items:
        raise click.UsageError("no payloads given")
    tables = _tables(ctx)
    emit([parse_boarding_pass(r, tables, year=year) for r in items], report)

@main.command("tag")
@click.argument("raw", nargs=-1)
@click.option("--file", "file", default=None, type=click.Path(exists=True, dir_okay=False), help="One label per line")
@click.option("--report", default=None, type=click.Path(), help="Optional CSV report path")
@click.pass_context
def tag_cmd(ctx, raw, file, report):
    """Decode baggage-tag labels, one JSON object each."""
    items = _read_inputs(raw, file)
    if not items:
        raise click.UsageError("no labels given")
    tables = _tables(ctx)
    emit([parse_baggage_tag(r, tables) for r in items], report)

@main.command("manifest")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--report", default=None, type=click.Path(), help="Optional CSV report path")
@click.pass_context
def manifest_cmd(ctx, path, report):
    """Decode a manifest text export, one JSON object per bag row."""
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    emit(parse_manifest(text, _tables(ctx)), report)

if __name__ == "__main__":
    main()
