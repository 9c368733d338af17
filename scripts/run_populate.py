from __future__ import annotations

from egot_tracker.config.settings import settings
from egot_tracker.facts.populate import populate_celebrities
from egot_tracker.store.db import init_db
from egot_tracker.utils.roster import load_roster

if __name__ == "__main__":
    init_db()
    populate_celebrities(load_roster(settings.roster_file))
