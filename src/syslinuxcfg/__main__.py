"""Entry point: python -m syslinuxcfg."""

import argparse
import sys
from datetime import datetime, timezone
from typing import List, Optional

from .cli import parse_args
from .errors import ConfigNotFound, FetchError, MalformedReference
from .fetch import Fetcher, default_schemes
from .schema import BootMenu


def _resolve(args: argparse.Namespace, fetcher: Fetcher) -> BootMenu:
    from . import parser

    meta = {"timestamp": datetime.now(timezone.utc).isoformat()}
    if args.root is not None:
        meta["source"] = str(args.root)
        images = parser.parse_from_local_directory(args.root, fetcher)
    else:
        meta["source"] = args.config
        meta["working_directory"] = args.working_dir
        images = parser.parse_config(args.working_dir, args.config, fetcher)
    return BootMenu(meta=meta, images=images)


def main(argv: Optional[List[str]] = None, fetcher: Optional[Fetcher] = None) -> int:
    args = parse_args(argv)
    schemes = None
    if fetcher is None:
        fetcher = schemes = default_schemes(http_timeout=args.http_timeout)
    try:
        menu = _resolve(args, fetcher)
    except (ConfigNotFound, FetchError, MalformedReference) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        if schemes is not None:
            schemes.close()

    if args.format == "text":
        from .renderers import render
        sys.stdout.write(render(menu))
    else:
        print(menu.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
