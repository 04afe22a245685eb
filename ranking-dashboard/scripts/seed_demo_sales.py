"""
Seed demo sales for testing and demos.

Inserts a small, fixed set of sales so the leaderboard has something to show.
Ana Silva appears twice with different letter case to exercise client
grouping. Refuses to run against a non-empty sales table unless --force.
"""

import argparse
import sys
from decimal import Decimal
from pathlib import Path

# Add parent directory to path so we can import from repositories
sys.path.insert(0, str(Path(__file__).parent.parent))

from repositories.sale_repository import list_sales, record_sale

DEMO_SALES = [
    ("Ana", "Silva", "@anasilva", Decimal("100.00")),
    ("ana", "SILVA", "@anasilva", Decimal("50.00")),
    ("Bruno", "Costa", "@b", Decimal("30.00")),
    ("Carla", "Souza", None, Decimal("75.50")),
    ("Diego", "Lima", "diegolima", Decimal("12.00")),
]


def seed_demo_sales(force: bool = False) -> None:
    """Insert the demo sales."""

    existing = list_sales()
    if existing and not force:
        print(f"Sales table already has {len(existing)} rows. Use --force to add demo sales anyway.")
        return

    for first_name, last_name, handle, amount in DEMO_SALES:
        sale = record_sale(first_name, last_name, amount, handle=handle)
        print(f"[SUCCESS] {sale.full_name} {sale.handle or ''} {sale.amount}")

    print(f"\nInserted {len(DEMO_SALES)} demo sales.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Insert demo sales into Supabase")
    parser.add_argument("--force", action="store_true", help="Insert even if sales already exist")
    seed_demo_sales(force=parser.parse_args().force)
