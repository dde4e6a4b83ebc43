"""Import standard recipes from a JSON file into the configured database.

Usage: python scripts/import_data.py [path/to/recipes.json]
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))  # noqa: E402

from bartender.db import SessionLocal, init_db  # noqa: E402
from bartender.logging_config import setup_logging  # noqa: E402
from bartender.seed import STANDARD_RECIPES_FILE, load_recipes, seed_standard_recipes  # noqa: E402


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    setup_logging()
    init_db()
    p = Path(argv[0]) if argv else STANDARD_RECIPES_FILE
    if not p.exists():
        print(f'{p} not found')
        return 1
    data = load_recipes(p)
    db = SessionLocal()
    try:
        added = seed_standard_recipes(db, data)
    finally:
        db.close()
    print(f'Imported {added} recipes')
    return 0


if __name__ == '__main__':
    sys.exit(main())
