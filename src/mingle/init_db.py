"""Create or drop the Mingle tables directly from the ORM metadata."""

import argparse

from mingle.db.session import create_tables, drop_tables


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--drop", action="store_true", help="Drop all tables before creating them")
    args = parser.parse_args(argv)

    if args.drop:
        drop_tables()
        print("Dropped all tables.")
    create_tables()
    print("Database initialized.")


if __name__ == "__main__":
    main()
