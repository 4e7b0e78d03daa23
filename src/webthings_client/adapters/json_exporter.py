"""JSON export of a things listing.

Stable, UTF-8 output that other tools can consume; WebThings keys such as
`@type` keep their original spelling.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from webthings_client.core.domain.models import Thing


def things_payload(things: Iterable[Thing]) -> list[dict[str, Any]]:
    return [t.model_dump(mode="json", by_alias=True) for t in things]


def export_things_json(*, things: Iterable[Thing], output_path: Path) -> Path:
    """Write the things list as JSON with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(things_payload(things), ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
