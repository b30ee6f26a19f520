#!/usr/bin/env python3
"""
Database management script for the SponsiWise backend.
Creates and drops the schema from the SQLAlchemy metadata.
"""

import sys
from pathlib import Path

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent))

from app.config import settings
from app.infrastructure.db.database import create_tables, drop_tables


def create_database():
    """Create every table that does not exist yet."""
    print(f"Creating tables on {settings.database_url}...")
    create_tables()
    print("Tables created.")


def drop_database():
    """Drop all tables - WARNING: This will drop all data!"""
    response = input("This will drop ALL data. Type 'yes' to continue: ")
    if response.lower() != 'yes':
        print("Drop cancelled.")
        return False
    drop_tables()
    print("Tables dropped.")
    return True


def reset_database():
    """Drop and recreate all tables."""
    if drop_database():
        create_database()


def main():
    """Main CLI function."""
    if len(sys.argv) < 2:
        print("Usage: python manage_db.py [command]")
        print("Commands:")
        print("  create         - Create all tables")
        print("  drop           - Drop all tables (WARNING: drops all data)")
        print("  reset          - Drop and recreate all tables")
        return

    command_name = sys.argv[1]

    if command_name == "create":
        create_database()
    elif command_name == "drop":
        drop_database()
    elif command_name == "reset":
        reset_database()
    else:
        print(f"Unknown command: {command_name}")


if __name__ == "__main__":
    main()
