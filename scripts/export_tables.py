import argparse
import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from inkloop.errors import DashboardError
from inkloop.export import export_csv, save_to_disk
from inkloop.io import load_snapshot
from inkloop.metrics import TABLE_BUILDERS, TABLE_SCHEMAS, build_partner_table
from inkloop.qa import run_qa
from inkloop.utils import ensure_dir, read_settings, setting, setup_logger, write_json
from inkloop.view_state import RANGES, ViewStateController

MONTHLY_TABLES = {"monthly_financials", "project_timeline"}


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Export dashboard tables as CSV")
    parser.add_argument("--snapshot", default=None, help="Path to a JSON or YAML snapshot (defaults to the configured one)")
    parser.add_argument("--output", default="data/exports", help="Output directory")
    parser.add_argument("--range", dest="range_", choices=RANGES, default=None, help="Keep only the last N months")
    parser.add_argument("--quote", action="store_true", help="Quote fields containing commas or quotes")
    parser.add_argument("--settings", default="config/settings.yaml", help="Settings YAML")
    return parser.parse_args(argv)


def export_tables(snapshot, output_dir: str, controller: ViewStateController, quote: bool = False, share_basis: str = "equal") -> dict:
    logger = setup_logger()
    ensure_dir(output_dir)

    def saver(text, filename):
        return save_to_disk(text, filename, output_dir)

    written = {}
    for name, builder in TABLE_BUILDERS.items():
        table = build_partner_table(snapshot, share_basis) if name == "partners" else builder(snapshot)
        if name in MONTHLY_TABLES:
            table = controller.apply_range(table)
        if table.empty:
            logger.warning("Skipping %s: no rows", name)
            continue
        filename = f"inkloop_{name}.csv"
        export_csv(table, filename, saver=saver, fields=TABLE_SCHEMAS[name], quote=quote)
        written[name] = os.path.join(output_dir, filename)

    qa_report = run_qa(snapshot)
    write_json(qa_report, os.path.join(output_dir, "qa_report.json"))
    logger.info("Export complete: %d tables, %d QA warnings", len(written), len(qa_report["warnings"]))
    return written


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = read_settings(args.settings)
    logger = setup_logger(level=setting(settings, "logging.level", "INFO"))

    try:
        snapshot = load_snapshot(args.snapshot or setting(settings, "data.snapshot_path"))
        controller = ViewStateController(
            range_=args.range_ or setting(settings, "app.default_range", "6m"),
            range_filtering=args.range_ is not None,
        )
        export_tables(
            snapshot,
            args.output,
            controller,
            quote=args.quote or setting(settings, "export.quote", False),
            share_basis=setting(settings, "metrics.partner_share_basis", "equal"),
        )
    except DashboardError as exc:
        logger.error("Export failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
