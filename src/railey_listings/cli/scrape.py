from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from railey_listings.config import Settings
from railey_listings.services import ListingSource, ScrapeError, get_extractor, normalize


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Extract Railey.com listings once and print them as JSON")
    parser.add_argument("--extractor", choices=["pattern", "openai"], help="Override LISTINGS_EXTRACTOR")
    parser.add_argument("--file", type=Path, help="Read listings HTML from a saved page instead of the site")
    parser.add_argument("--limit", type=int, default=None, help="Print at most N properties")
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    extractor = get_extractor(args.extractor, settings)
    try:
        if args.file:
            html = args.file.read_text(encoding="utf-8")
        else:
            html = ListingSource(settings).fetch()
        records = extractor.extract(html)
    except ScrapeError as e:
        print(f"Extraction failed: {e}", file=sys.stderr)
        return 1
    if not records:
        print("No listings found", file=sys.stderr)
        return 1

    props = [normalize(r) for r in records[: args.limit]]
    print(json.dumps([p.model_dump(mode="json", by_alias=True) for p in props], indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
