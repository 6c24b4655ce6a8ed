# seed_flags.py
# Purpose: load the bundled ICS flag set into the configured database.
# Usage: python seed_flags.py [--reset] from the project root.

import sys

from dotenv import load_dotenv

load_dotenv()

from flagstack_app import create_app
from flagstack_app.modules.catalog.services import CatalogService, load_bundled_flags


def seed(reset: bool = False):
    """Upsert every bundled flag by key; with ``reset`` the catalog is emptied first."""
    app = create_app()
    with app.app_context():
        if reset:
            deleted = CatalogService.reset_catalog()
            print(f"Deleted {deleted} flags.")

        result = CatalogService.seed_catalog(load_bundled_flags())
        print(f"Database seeded successfully. Created: {result.created}, Updated: {result.updated}")


if __name__ == '__main__':
    seed(reset='--reset' in sys.argv[1:])
