"""Global lock for serialising read-modify-write operations on the league data files.

Every runtime code path that loads, mutates and saves rosters, the draft
schedule or pick assignments MUST hold this lock for the whole cycle.
Trades touching the same pick are serialised here too; the keeper and
draft engines assume they are handed an already-consistent snapshot.

Usage::

    from data_lock import DATA_LOCK

    with DATA_LOCK:
        draft = load_draft(season)
        # ... mutate ...
        save_draft(draft)
"""

import threading

DATA_LOCK = threading.RLock()
