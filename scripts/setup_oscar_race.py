from __future__ import annotations

import argparse

from egot_tracker.config.settings import settings
from egot_tracker.oscars.nominations import load_nominations
from egot_tracker.oscars.setup import setup_oscar_race
from egot_tracker.store.db import init_db

if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--year", type=int, default=2025)
    parser.add_argument("--reset", action="store_true")
    args = parser.parse_args()

    init_db()
    nominations = load_nominations(settings.nominations_file(args.year))
    setup_oscar_race(args.year, nominations, reset=args.reset)
