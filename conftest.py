"""Shared fixtures for the storefront tests."""
import json

import pytest


@pytest.fixture
def v2_item():
    """Shop entry in the fortniteapi.io v2 shape (nested objects)."""
    return {
        "displayName": "Renegade Raider",
        "mainType": "outfit",
        "rarity": {"id": "Rare", "name": "Rare"},
        "price": {"regularPrice": 1200, "finalPrice": 1000},
        "section": {"id": "Legends", "name": "Legends"},
        "displayAssets": [
            {"url": "https://cdn.test/da.png", "background": "https://cdn.test/bg.png"}
        ],
        "granted": [{"id": "CID_028"}, {"id": "BID_004"}],
    }


@pytest.fixture
def legacy_item():
    """Shop entry in an older flat shape (plain strings, top-level price)."""
    return {
        "devName": "[VIRTUAL]1 x Lo-Fi Beats for 200 MtxCurrency: Lo-Fi Beats",
        "type": "music_pack",
        "rarity": "Uncommon",
        "vbucks": 200,
        "section": "jam tracks",
        "images": {"icon": "https://cdn.test/lofi.png"},
        "grantedIds": ["MusicPack_LoFi"],
    }


@pytest.fixture
def shop_data(v2_item, legacy_item):
    return {
        "shop": [
            v2_item,
            legacy_item,
            {"name": "Llama Glider", "section": {"name": "daily"}, "finalPrice": 800},
            {"displayName": "Floss", "section": {"name": "Daily"}},
        ]
    }


@pytest.fixture
def write_json(tmp_path):
    def _write(name, data):
        path = tmp_path / name
        path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
        return str(path)
    return _write
