"""
Print the current client leaderboard.

Fetches the full sales snapshot from Supabase and prints the ranking the
public page shows. Use --all to ignore the privacy cut-off (operators only).
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from repositories.sale_repository import list_sales
from services.ranking_service import (
    DEFAULT_TOP_N,
    DEFAULT_VISIBLE_COUNT,
    aggregate_clients,
    compute_ranking,
)


def show_ranking(top_n: int, visible_count: int) -> None:
    sales = list_sales()
    entries = compute_ranking(sales, top_n=top_n, visible_count=visible_count)

    print("=" * 50)
    print("CLIENT RANKING")
    print("=" * 50)
    print(f"Sales registered:          {len(sales)}")
    print(f"Distinct clients:          {len(aggregate_clients(sales))}")
    print("-" * 50)

    if not entries:
        print("Ranking is empty.")
    for entry in entries:
        handle = f" ({entry.handle})" if entry.handle else ""
        print(f"{entry.rank:>3}. {entry.full_name}{handle}: {entry.amount_label}")

    print("=" * 50)


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Print the client leaderboard computed from Supabase",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Public view (top 10, totals for top 3)
  python show_ranking.py

  # Top 20 with every total shown
  python show_ranking.py --top 20 --all
        """
    )
    parser.add_argument("--top", type=int, default=DEFAULT_TOP_N, help="Number of entries")
    parser.add_argument(
        "--visible",
        type=int,
        default=DEFAULT_VISIBLE_COUNT,
        help="Ranks whose total is shown"
    )
    parser.add_argument("--all", action="store_true", help="Show every total")
    args = parser.parse_args()

    visible = args.top if args.all else args.visible

    try:
        show_ranking(args.top, visible)
    except (RuntimeError, ValueError) as e:
        print(f"[ERROR] {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
