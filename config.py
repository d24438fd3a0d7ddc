"""
ItemShop configuration
All values can be overridden with environment variables.
"""
import os

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# Upstream API (keep the key server-side)
FORTNITE_API_KEY = os.getenv("FORTNITE_API_KEY", "")
FORTNITE_API_BASE = os.getenv("FORTNITE_API_BASE", "https://fortniteapi.io").rstrip("/")
SHOP_LANG = os.getenv("SHOP_LANG", "en")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
STATIC_MAX_AGE = int(os.getenv("STATIC_MAX_AGE", "3600"))  # 1h

# Local data files
PUBLIC_DIR = os.getenv("PUBLIC_DIR", os.path.join(BASE_DIR, "public"))
TEMPLATE_DIR = os.path.join(BASE_DIR, "templates")
FALLBACK_SHOP_PATH = os.getenv(
    "FALLBACK_SHOP_PATH", os.path.join(PUBLIC_DIR, "data", "fallback-shop.json")
)
MEDIA_INDEX_PATH = os.getenv(
    "MEDIA_INDEX_PATH", os.path.join(PUBLIC_DIR, "data", "item-media.min.json")
)

# Snapshot refresh (run.py)
REFRESH_DELAY = float(os.getenv("REFRESH_DELAY", "0"))
_max_calls = os.getenv("REFRESH_MAX_CALLS", "").strip()
REFRESH_MAX_CALLS = int(_max_calls) if _max_calls else None
