"""
Refresh the offline data files:
  1. live shop  -> FALLBACK_SHOP_PATH
  2. item details for every granted id -> MEDIA_INDEX_PATH (minified)

Run manually (or from cron):  python run.py
"""
import json
import os

import requests

import fortnite_api
from catalog import shop_entries
from config import (
    FALLBACK_SHOP_PATH, MEDIA_INDEX_PATH, SHOP_LANG,
    REFRESH_DELAY, REFRESH_MAX_CALLS,
)
from media_service import media_from_details
from normalizer import granted_ids
from shop_loader import is_shop_payload


def collect_granted_ids(shop_data):
    """Every granted id in shop order, without repeats."""
    seen = []
    for raw in shop_entries(shop_data):
        for item_id in granted_ids(raw):
            if item_id not in seen:
                seen.append(item_id)
    return seen


def build_media_index(ids, lookup, max_calls=None):
    """
    {id: {video?, audio?, poster?}} for ids whose details carry video or audio.
    Ids are looked up one at a time, stopping after max_calls lookups.
    """
    index = {}
    for n, item_id in enumerate(ids):
        if max_calls is not None and n >= max_calls:
            print(f"[SKIPPED] {len(ids) - n} ids - call limit reached ({max_calls})")
            break
        media = media_from_details(lookup(item_id), title=item_id, poster='')
        if not media:
            continue
        entry = {k: v for k, v in (('video', media.video), ('audio', media.audio), ('poster', media.poster)) if v}
        index[item_id] = entry
    return index


def _write_json(path, data, minify=False):
    os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        if minify:
            json.dump(data, f, separators=(',', ':'))
        else:
            json.dump(data, f, indent=2)


def main():
    fortnite_api.reset_api_call_count()

    # ---------- Step 1: Live shop ----------
    try:
        shop_data = fortnite_api.fetch_shop(SHOP_LANG)
    except (requests.RequestException, ValueError) as e:
        print(f"[ERROR] Could not fetch live shop, nothing written: {e}")
        return 1

    if not is_shop_payload(shop_data):
        print("[ERROR] Live shop has an unexpected format, nothing written")
        return 1

    _write_json(FALLBACK_SHOP_PATH, shop_data)
    print(f"[INFO] Saved shop snapshot to {FALLBACK_SHOP_PATH}")

    # ---------- Step 2: Media index ----------
    ids = collect_granted_ids(shop_data)
    print(f"\n[INFO] Looking up media for {len(ids)} granted items...\n")

    index = build_media_index(
        ids,
        lambda item_id: fortnite_api.get_item_details(item_id, lang=SHOP_LANG, delay=REFRESH_DELAY),
        max_calls=REFRESH_MAX_CALLS,
    )
    _write_json(MEDIA_INDEX_PATH, index, minify=True)

    print(f"[SUCCESS] Media index: {len(index)} entries ({fortnite_api.get_api_call_count()} API calls)")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
