"""Query the SVRF API from the command line and print the results as JSON.

Example usages::

    python -m scripts.svrf_search search "cat ears" --type 3d --category "Face Filters"
    python -m scripts.svrf_search trending --size 5
    python -m scripts.svrf_search media 6353
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from svrf import (
    ApiError,
    AuthError,
    Category,
    MediaType,
    MissingPayloadError,
    SearchOptions,
    StereoscopicType,
    TrendingOptions,
    create_client,
)

EXIT_OK = 0
EXIT_AUTH_ERROR = 2
EXIT_NOT_FOUND = 3
EXIT_TRANSPORT_ERROR = 4


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Search SVRF immersive media.")
    parser.add_argument("--api-key", help="API key; defaults to SVRF_API_KEY.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_filters(subparser: argparse.ArgumentParser) -> None:
        subparser.add_argument(
            "--type",
            action="append",
            choices=[media_type.value for media_type in MediaType],
            dest="types",
        )
        subparser.add_argument(
            "--stereoscopic-type",
            choices=[value.value for value in StereoscopicType],
        )
        subparser.add_argument("--category", choices=[value.value for value in Category])
        subparser.add_argument("--size", type=int)

    search_parser = subparsers.add_parser("search", help="Search media by keyword.")
    search_parser.add_argument("query")
    add_filters(search_parser)
    search_parser.add_argument("--page-num", type=int)

    trending_parser = subparsers.add_parser("trending", help="List trending media.")
    add_filters(trending_parser)
    trending_parser.add_argument("--next-page-cursor")

    media_parser = subparsers.add_parser("media", help="Fetch one media item by id.")
    media_parser.add_argument("media_id")

    return parser


def _filters(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "type": set(args.types) if args.types else None,
        "stereoscopic_type": args.stereoscopic_type,
        "category": args.category,
        "size": args.size,
    }


async def _run(args: argparse.Namespace) -> dict[str, Any]:
    async with create_client() as client:
        await client.authenticate(args.api_key)
        if args.command == "search":
            options = SearchOptions(page_num=args.page_num, **_filters(args))
            page = await client.search(args.query, options)
            return page.model_dump(mode="json")
        if args.command == "trending":
            options = TrendingOptions(next_page_cursor=args.next_page_cursor, **_filters(args))
            page = await client.get_trending(options)
            return page.model_dump(mode="json")
        media = await client.get_media(args.media_id)
        return media.model_dump(mode="json")


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        result = asyncio.run(_run(args))
    except AuthError as exc:
        print(f"Authentication failed: {exc}", file=sys.stderr)
        return EXIT_AUTH_ERROR
    except MissingPayloadError as exc:
        print(f"Nothing found: {exc}", file=sys.stderr)
        return EXIT_NOT_FOUND
    except ApiError as exc:
        print(f"Request failed: {exc}", file=sys.stderr)
        return EXIT_TRANSPORT_ERROR

    print(json.dumps(result, indent=2))
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
