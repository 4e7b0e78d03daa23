from __future__ import annotations

import json

from webthings_client.adapters.json_exporter import export_things_json
from webthings_client.core.domain.models import Thing


def test_export_keeps_order_and_aliases(tmp_path, sample_things):
    things = [Thing.model_validate(item) for item in sample_things]

    path = export_things_json(things=things, output_path=tmp_path / "out" / "things.json")

    data = json.loads(path.read_text(encoding="utf-8"))
    assert [item["title"] for item in data] == ["Lamp", "Plug"]
    assert data[0]["@type"] == ["Light", "OnOffSwitch"]
    assert data[0]["@context"] == "https://webthings.io/schemas"


def test_single_type_string_becomes_list():
    assert Thing.model_validate({"@type": "Light"}).types == ["Light"]
