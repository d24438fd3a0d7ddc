import json

import requests

import fortnite_api
from catalog import shop_entries
from config import FALLBACK_SHOP_PATH, SHOP_LANG


class ShopUnavailable(Exception):
    """Neither the live shop nor the local snapshot could be loaded."""


def is_shop_payload(data):
    return isinstance(data, dict) and (
        isinstance(data.get('shop'), list) or isinstance(data.get('items'), list)
    )


def load_fallback(path=FALLBACK_SHOP_PATH):
    """Read the offline snapshot. Raises ShopUnavailable if it is missing or broken."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ShopUnavailable(f"Fallback shop unavailable at {path}: {e}") from e
    if not is_shop_payload(data):
        raise ShopUnavailable(f"Fallback shop at {path} has an unexpected format")
    return data


def get_shop(lang=SHOP_LANG, fallback_path=FALLBACK_SHOP_PATH, fetch=None):
    """
    Live catalog first, local snapshot on any failure.

    Returns (shop_data, source) where source is 'live' or 'fallback'.
    """
    fetch = fetch or fortnite_api.fetch_shop
    try:
        live = fetch(lang)
        if is_shop_payload(live):
            print(f"[SHOP] Live shop loaded ({len(shop_entries(live))} entries)")
            return live, 'live'
        print("[SHOP] Live shop has an unexpected format, using fallback")
    except requests.RequestException as e:
        print(f"[SHOP] Live shop failed ({e}), using fallback")
    except ValueError as e:
        print(f"[SHOP] Live shop returned invalid JSON ({e}), using fallback")

    data = load_fallback(fallback_path)
    print(f"[SHOP] Fallback shop loaded ({len(shop_entries(data))} entries)")
    return data, 'fallback'
