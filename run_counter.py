#!/usr/bin/env python3
"""
Command-line script to count the tests recorded in Confluence page tables.

Reads connection settings from the environment (or a .env file):
    CONFLUENCE_URL, CONFLUENCE_USERNAME, CONFLUENCE_API_TOKEN
and a target:
    CONFLUENCE_SPACE_KEY  (whole space)  or
    CONFLUENCE_PAGE_URLS  (comma-separated page URLs, takes precedence)

Usage:
    python run_counter.py
    python run_counter.py --space DEV
    python run_counter.py --url https://x.atlassian.net/wiki/spaces/DEV/pages/229378/Test+Table+01
    python run_counter.py --space DEV --json -o results.json
"""

import argparse
import logging
import sys
from pathlib import Path

from confluence_counter.config import load_config
from confluence_counter.main import ConfluenceCounter
from confluence_counter.report import format_results, to_json
from confluence_counter.exceptions import ConfigurationError, EnumerationError
from confluence_counter.logger import setup_logger

USAGE_HINT = """
Please set the following environment variables:
  - CONFLUENCE_URL
  - CONFLUENCE_USERNAME
  - CONFLUENCE_API_TOKEN

Optional:
  - CONFLUENCE_SPACE_KEY (to analyze entire space)
  - CONFLUENCE_PAGE_URLS (comma-separated URLs of specific pages)

Or create a .env file in the current directory."""


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Count Unit and WDIO tests recorded in Confluence page tables"
    )
    parser.add_argument(
        "--space", "-s",
        help="Space key to scan (overrides CONFLUENCE_SPACE_KEY)"
    )
    parser.add_argument(
        "--url", "-u",
        action="append",
        dest="urls",
        help="Page URL to analyze; repeat for several pages (overrides CONFLUENCE_PAGE_URLS)"
    )
    parser.add_argument(
        "--env-file",
        help="Path to a .env file (default: search from the current directory)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON instead of tables"
    )
    parser.add_argument(
        "--output", "-o",
        help="Write results to this file instead of stdout"
    )
    parser.add_argument(
        "--strict-listing",
        action="store_true",
        help="Fail if the space cannot be listed instead of reporting zero pages"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging"
    )

    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_logger(level=log_level)

    # --space alone must not be overridden by page URLs from the environment
    page_urls = args.urls
    if page_urls is None and args.space:
        page_urls = []

    config = load_config(
        env_file=args.env_file,
        space_key=args.space,
        page_urls=page_urls
    )

    try:
        counter = ConfluenceCounter(config, strict_listing=args.strict_listing)
        result = counter.run()
        output = to_json(result) if args.json else format_results(result)

        if args.output:
            Path(args.output).write_text(output)
            print(f"Results saved to: {args.output}", file=sys.stderr)
        else:
            print(output)
    except ConfigurationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        if e.missing:
            print(USAGE_HINT, file=sys.stderr)
        return 1
    except EnumerationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
