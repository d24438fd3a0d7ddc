import requests
import time

from config import FORTNITE_API_KEY, FORTNITE_API_BASE, SHOP_LANG, REQUEST_TIMEOUT

# Global counter for API calls
_api_call_count = 0
_last_api_call_time = 0


def _headers():
    # Upstream expects the raw key, empty string when unset
    return {'Authorization': FORTNITE_API_KEY or ''}


def upstream_get(path, params=None):
    """
    GET an upstream endpoint with the server-held credential.

    Returns the raw requests.Response (any status code).
    Raises requests.RequestException on transport failure.
    """
    global _api_call_count, _last_api_call_time

    _api_call_count += 1
    _last_api_call_time = time.time()

    return requests.get(
        f"{FORTNITE_API_BASE}{path}",
        params=params,
        headers=_headers(),
        timeout=REQUEST_TIMEOUT
    )


def fetch_shop(lang=SHOP_LANG):
    """
    Fetch the live item shop.

    Returns the decoded JSON payload.
    Raises requests.RequestException for transport/HTTP errors and
    ValueError when the body is not JSON.
    """
    print(f"[API Call {_api_call_count + 1}] Fetching shop (lang={lang})")
    r = upstream_get('/v2/shop', params={'lang': lang})
    r.raise_for_status()
    return r.json()


def get_item_details(item_id, lang=SHOP_LANG, delay=0):
    """
    Fetch the detail record for one granted item.

    Returns the decoded JSON payload, or None if not found/error.

    Args:
        item_id: Granted-item id to look up
        lang: Upstream language code
        delay: Seconds to wait between API calls
    """
    # Rate limiting: wait if needed
    if delay > 0 and _last_api_call_time > 0:
        elapsed = time.time() - _last_api_call_time
        if elapsed < delay:
            time.sleep(delay - elapsed)

    try:
        print(f"[API Call {_api_call_count + 1}] Fetching item: {item_id}")
        r = upstream_get('/v2/items/get', params={'id': item_id, 'lang': lang})

        if r.status_code == 429:  # Rate limit error
            print(f"⚠️  RATE LIMIT for {item_id} - Consider increasing delay")
            return None

        if r.status_code != 200:
            print(f"❌ API Error for {item_id}: {r.status_code}")
            return None

        data = r.json()
        if not isinstance(data, dict):
            print(f"⚠️  Unexpected detail payload for {item_id}")
            return None
        return data

    except requests.RequestException as e:
        print(f"❌ Request failed for {item_id}: {e}")
        return None
    except ValueError as e:
        print(f"❌ Invalid JSON for {item_id}: {e}")
        return None


def get_api_call_count():
    """Return the current API call count"""
    return _api_call_count


def reset_api_call_count():
    """Reset the API call counter"""
    global _api_call_count
    _api_call_count = 0
