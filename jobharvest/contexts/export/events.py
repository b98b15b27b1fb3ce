"""Minimal event logger for skipped detail pages written to JSON Lines."""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
SKIPPED_LISTINGS_FILE = "skipped_listings.txt"


def log_skipped_listing_event(
    url: str,
    kind: str,
    reason: str,
    log_dir: Path = LOGS_PATH,
    status_code: Optional[int] = None,
    classification: Optional[str] = None,
) -> None:
    """
    Append a skipped-listing event to ``skipped_listings.txt`` in JSON Lines.

    ``status_code`` and ``classification`` are only known for fetch failures
    and are written as null otherwise.
    """

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    payload = {
        "timestamp": datetime.now().isoformat(),
        "url": url,
        "kind": kind,
        "reason": reason,
        "status_code": status_code,
        "classification": classification,
    }

    # One JSON object per line so downstream tools can stream the file.
    with open(log_dir / SKIPPED_LISTINGS_FILE, "a", encoding="utf-8") as handle:
        handle.write(json.dumps(payload) + "\n")
