"""Build a dump of the newest installation signal seen in each star system."""

from __future__ import annotations

import datetime
import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
PROGRESS_INTERVAL = 1000
DEFAULT_OUTPUT = "installations.json"


def installation_query() -> dict[str, Any]:
    """The filter selecting messages that hold at least one installation."""
    return {"message.signals.SignalType": "Installation"}


def installation_projection() -> dict[str, Any]:
    """The projection keeping the system details and only installation signals."""
    return {
        "message.StarSystem": 1,
        "message.SystemAddress": 1,
        "message.StarPos": 1,
        "message.signals": {
            "$filter": {
                "input": "$message.signals",
                "as": "signal",
                "cond": {"$eq": ["$$signal.SignalType", "Installation"]},
            }
        },
    }


def _signal_date(document: Mapping[str, Any]) -> datetime.date:
    timestamp = document["message"]["signals"][0]["timestamp"]
    return datetime.datetime.strptime(timestamp, TIMESTAMP_FORMAT).date()


def select_unique_signals(documents: Iterable[Mapping[str, Any]]) -> dict[str, dict[str, Any]]:
    """Keep one document per star system, preferring the one with the later date.

    Documents lose their ``_id``. Only the date part of the first signal's
    timestamp is compared. The result is ordered by star system name.
    """
    unique: dict[str, dict[str, Any]] = {}
    changes = 0
    has_printed = False

    for raw in documents:
        document = dict(raw)
        document.pop("_id", None)
        star_system = document["message"]["StarSystem"]
        if not isinstance(star_system, str):
            raise ValueError(f"StarSystem is not a string: {star_system!r}")

        stored = unique.get(star_system)
        if stored is None or _signal_date(document) > _signal_date(stored):
            unique[star_system] = document
            changes += 1
            has_printed = False

        if changes % PROGRESS_INTERVAL == 0 and not has_printed:
            print(
                f"Processed {changes} total items that are new or should replace existing ones..."
            )
            has_printed = True

    return dict(sorted(unique.items()))


def generate_installations_dump(
    collection: Any, output_path: str | Path = DEFAULT_OUTPUT
) -> dict[str, dict[str, Any]]:
    """Query ``collection`` for installations and write the unique ones as JSON."""
    print("Generating query...")
    cursor = collection.find(installation_query(), installation_projection())
    print("Filtering results...")
    unique = select_unique_signals(cursor)
    print(f"Number of unique signals: {len(unique)}")
    print("Dumping to disk as requested...")
    with open(output_path, "w", encoding="utf-8") as handle:
        json.dump(unique, handle, indent=2, sort_keys=True, default=str)
    print(f"Dumped {len(unique)} signals blobs to disk.")
    return unique