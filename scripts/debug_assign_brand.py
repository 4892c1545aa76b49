"""Run the brand assignment job, or match a single title, from the command line."""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from config import settings
from models import SessionLocal, init_db
from services.brand_assignment import assign_brand_if_known
from services.brand_mapping import BrandMatcher
from services.datasets import load_brand_graph

logger = logging.getLogger(__name__)


def match_title(title: str, connections_path: str) -> None:
    graph = load_brand_graph(connections_path)
    result = BrandMatcher().match(graph, title)
    if result.ignored:
        print(f"{title} -> ignored")
        return
    print(f"{title} -> {result.canonical_brand} (matched: {', '.join(result.matched_brands) or '-'})")


def run_assignment(country_code: str, source: str, connections_path: str, dry_run: bool) -> None:
    init_db()
    db = SessionLocal()
    try:
        graph = load_brand_graph(connections_path)
        summary = assign_brand_if_known(db, country_code, source, graph=graph, dry_run=dry_run)
    finally:
        db.close()

    print("=" * 60)
    print(f"Brand assignment {country_code}/{source}{' (dry run)' if dry_run else ''}")
    print("=" * 60)
    for key, value in summary.to_dict().items():
        print(f"  {key}: {value}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Assign brands to pharmacy items")
    parser.add_argument("--country", default=settings.default_country_code, help="Country code of the catalogue")
    parser.add_argument("--source", default=settings.default_source, help="Source system of the catalogue")
    parser.add_argument("--title", help="Match a single title and print the result instead of running the job")
    parser.add_argument(
        "--connections",
        default=settings.brand_connections_path,
        help="Path to the brand connections JSON file",
    )
    parser.add_argument("--dry-run", action="store_true", default=False, help="Match without storing mappings")
    parser.add_argument("--verbose", action="store_true", default=False, help="Log every matched title")

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else settings.log_level.upper())

    try:
        if args.title:
            match_title(args.title, args.connections)
        else:
            run_assignment(args.country, args.source, args.connections, args.dry_run)
    except Exception as e:
        logger.error(f"Error while running brand assignment: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
