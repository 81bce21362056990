import argparse

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="comment-density",
        description="Compute the comments density of a source tree"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Analyze a directory")
    analyze.add_argument("path", help="The directory to scan")
    analyze.add_argument("--config", required=True, help="The configuration file (.json or .toml)")
    analyze.add_argument("--workers", type=int, default=None, help="Number of parallel file scans")
    analyze.add_argument(
        "--exclude-dir",
        action="append",
        default=[],
        dest="exclude_dirs",
        metavar="NAME",
        help="Skip directories with this name (repeatable)",
    )
    analyze.add_argument("--json", action="store_true", help="Output JSON")
    analyze.add_argument("--output", help="Write output to file")
    analyze.add_argument("--verbose", action="store_true")

    return parser
