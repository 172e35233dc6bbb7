#!/usr/bin/env python3
"""Maintenance for the reservations database: provision, reset, list rooms.

Usage:
    python scripts/manage_db.py init
    python scripts/manage_db.py reset
    python scripts/manage_db.py rooms
"""

import sys
from pathlib import Path

# Make the backend directory importable when run from anywhere
BASE_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BASE_DIR))

from sqlmodel import Session

from reservations.db import engine, init_db, reset_db
from reservations.services.resources import ROOMS, get_resources
from reservations.services.store import TabularStore


def list_rooms():
    """Print every room with its description."""
    with Session(engine) as session:
        rooms = get_resources(TabularStore(session), ROOMS)
        if not rooms:
            print("No rooms found")
            return
        print(f"{len(rooms)} room(s):")
        for room in rooms:
            print(f"  - {room.name}: {room.description or ''}")


def main():
    command = sys.argv[1] if len(sys.argv) > 1 else "init"
    if command == "init":
        init_db()
        print("Database provisioned")
    elif command == "reset":
        answer = input("This deletes every record. Type 'yes' to continue: ").strip()
        if answer != "yes":
            print("Aborted")
            return
        reset_db()
        print("Database reset")
    elif command == "rooms":
        list_rooms()
    else:
        print(__doc__)
        sys.exit(1)


if __name__ == "__main__":
    main()
