#!/usr/bin/env python3
import argparse
import asyncio
import sys
from dataclasses import replace
from typing import Any, Dict, List

from .config import config
from .config_loader import load_config_file
from .data_export import DataExporter, build_exporter_registry, export
from .exceptions import ScraperError
from .loaders import LOADERS, create_page_loader
from .scraper import scrape


def parse_params(pairs: List[str]) -> Dict[str, Any]:
    """['page=1', 'page=2', 'q=shoes'] -> {'page': ['1', '2'], 'q': 'shoes'}"""
    params: Dict[str, Any] = {}
    for pair in pairs:
        if "=" not in pair:
            raise ScraperError(f"Invalid --param '{pair}', expected name=value")
        name, value = pair.split("=", 1)
        if name in params:
            current = params[name]
            params[name] = (current if isinstance(current, list) else [current]) + [value]
        else:
            params[name] = value
    return params


def cmd_run(args: argparse.Namespace) -> int:
    extraction = load_config_file(args.config)
    if args.param:
        extraction = replace(extraction, params={**(extraction.params or {}), **parse_params(args.param)})

    loader = create_page_loader(args.loader)
    records = asyncio.run(scrape(args.urls or None, extraction, loader=loader))

    if args.output:
        export(args.output, records, build_exporter_registry())
    else:
        sys.stdout.write(DataExporter(records).to_json() + "\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="curlscrape", description="curlscrape - configuration-driven web scraper")
    p.add_argument("config", help="Extraction config (.yaml, .yml or .json)")
    p.add_argument("urls", nargs="*", help="URLs to scrape (default: 'urls' from the config)")
    p.add_argument("-o", "--output", help="Export path; suffix picks the format (json, csv, xml)")
    p.add_argument("-l", "--loader", default=config.loader, choices=LOADERS, help="Page loader")
    p.add_argument("-p", "--param", action="append", default=[], metavar="NAME=VALUE",
                   help="Request parameter; repeat a name to build a list")
    p.set_defaults(func=cmd_run)
    return p


def main(argv: List[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args) or 0)
    except ScraperError as e:
        print(f"curlscrape: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
