"""
FARS Command Line Interface (CLI)
=================================

Run it like:

    python -m fars.cli --data-dir data summarize 2013 2014 2015
    python -m fars.cli map 1 2013 --out alabama_2013.png

Commands map one-to-one onto the package functions:

    filename <year>
    summarize <year> [<year> ...] [--export out.csv|out.json]
    map <state> <year> [--out map.png] [--boundaries states.shp]
    report <out.docx> --years <year> [<year> ...] [--state <state>]

The CLI never modifies the data files.
"""

from __future__ import annotations
import argparse, logging, sys
from typing import List, Optional

from .config import FarsConfig
from .loader import make_filename
from .summary import fars_summarize_years, export_summary


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="fars", description="FARS accident data helpers")
    ap.add_argument("--data-dir", default=".", help="Directory holding accident_<year>.csv.bz2 files")
    ap.add_argument("-v", "--verbose", action="store_true", help="Show info log messages")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p = sub.add_parser("filename", help="Print the file name for a year")
    p.add_argument("year")

    p = sub.add_parser("summarize", help="Accidents per month for each year")
    p.add_argument("years", nargs="+")
    p.add_argument("--export", help="Write the table to a .csv or .json file")

    p = sub.add_parser("map", help="Plot one state's accidents for one year")
    p.add_argument("state")
    p.add_argument("year")
    p.add_argument("--out", help="Save the map to this image file instead of showing it")
    p.add_argument("--boundaries", help="Shapefile/GeoJSON with state boundaries")

    p = sub.add_parser("report", help="Write a DOCX report")
    p.add_argument("out")
    p.add_argument("--years", nargs="+", required=True)
    p.add_argument("--state", type=int, help="Include the map of this state (first year)")
    p.add_argument("--boundaries", help="Shapefile/GeoJSON with state boundaries")
    return ap


def handle(args: argparse.Namespace, argv: List[str]) -> None:
    """Run one parsed command."""
    config = FarsConfig(data_dir=args.data_dir, boundaries_path=getattr(args, "boundaries", None))

    if args.cmd == "filename":
        print(make_filename(args.year, config))
        return

    if args.cmd == "summarize":
        summary = fars_summarize_years(args.years, config)
        print(summary.to_string())
        if args.export:
            export_summary(summary, args.export)
            print(f"Exported summary to {args.export}")
        return

    if args.cmd == "map":
        import matplotlib
        if args.out:
            matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        from .mapping import fars_map_state
        ax = fars_map_state(args.state, args.year, config=config)
        if ax is None:
            print("no accidents to plot")
            return
        if args.out:
            plt.tight_layout()
            plt.savefig(args.out, dpi=200)
            plt.close()
            print(f"Map written to {args.out}")
        else:
            plt.show()
        return

    if args.cmd == "report":
        from .report import generate_docx_report, ReportConfig, DatasetCitation
        summary = fars_summarize_years(args.years, config)
        files = [make_filename(y, config) for y in summary.columns]
        cfg = ReportConfig(
            citation=DatasetCitation(file_names=files),
            map_state=args.state,
            map_year=int(summary.columns[0]) if args.state is not None else None,
            command_log=["fars " + " ".join(argv)],
        )
        generate_docx_report(summary, args.out, config=cfg, fars_config=config)
        print(f"Report written to {args.out}")
        return


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the FARS CLI. Returns the process exit status."""
    argv = list(sys.argv[1:] if argv is None else argv)
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s - %(name)s - %(message)s",
    )
    try:
        handle(args, argv)
    except Exception as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
