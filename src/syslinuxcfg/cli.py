"""Command line arguments."""

import argparse
from pathlib import Path
from typing import List, Optional


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="syslinuxcfg",
        description="Resolve a syslinux/isolinux configuration into an ordered list of boot images.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Mount point to search for isolinux.cfg/syslinux.cfg",
    )
    source.add_argument(
        "--config",
        default=None,
        help="Config file path or URL to parse",
    )
    parser.add_argument(
        "--working-dir",
        default=None,
        help="Base URL for relative references in --config (default: none)",
    )
    parser.add_argument(
        "--format",
        choices=("json", "text"),
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--http-timeout",
        type=float,
        default=30.0,
        help="Timeout in seconds for http(s) fetches (default: 30)",
    )
    return parser.parse_args(argv)
