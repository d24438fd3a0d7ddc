"""
Item normalizer

Upstream shop entries change shape between API versions (and the offline
snapshot may come from an older one). Every display field is read through an
ordered list of extraction rules; the first rule that yields a non-empty value
wins. Rules never raise - a missing or oddly-shaped field just yields None.
"""
import re

from models import DisplayItem, ShopRow

DEFAULT_SECTION = "Misc"


# ---------- Rule helpers ----------
def _is_empty(value):
    return value is None or value == "" or value == [] or value == {}


def _scalar(value):
    # bool is an int subclass but never a displayable value here
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int, float)):
        return value
    return None


def dig(node, *keys):
    """Walk nested dicts/lists, returning None as soon as a step is missing."""
    for key in keys:
        if isinstance(key, int):
            if not isinstance(node, list) or not -len(node) <= key < len(node):
                return None
            node = node[key]
        elif isinstance(node, dict):
            node = node.get(key)
        else:
            return None
    return node


def path(*keys):
    """Rule: scalar value at a nested path."""
    def rule(raw):
        return _scalar(dig(raw, *keys))
    return rule


def text_or_field(key, attrs):
    """Rule: `key` holds either a plain string or an object read via `attrs`."""
    def rule(raw):
        value = dig(raw, key)
        if isinstance(value, dict):
            return first_match(value, [path(attr) for attr in attrs])
        return _scalar(value)
    return rule


def ids_from(key):
    """Rule: `key` is a list of objects carrying an `id`."""
    def rule(raw):
        entries = dig(raw, key)
        if not isinstance(entries, list):
            return None
        return [str(e["id"]) for e in entries if isinstance(e, dict) and _scalar(e.get("id"))]
    return rule


def id_list(key):
    """Rule: `key` is already a list of ids."""
    def rule(raw):
        entries = dig(raw, key)
        if not isinstance(entries, list):
            return None
        return [str(e) for e in entries if _scalar(e) not in (None, "")]
    return rule


def dev_name(raw):
    # "[VIRTUAL]1 x Renegade Raider for 1200 MtxCurrency: Renegade Raider" -> "Renegade Raider"
    value = _scalar(dig(raw, "devName"))
    if value is None:
        return None
    return re.sub(r"^.*:\s*", "", str(value))


def first_match(raw, rules, default=""):
    for rule in rules:
        value = rule(raw)
        if not _is_empty(value):
            return value
    return default


# ---------- Extraction rules ----------
DISPLAY_NAME_RULES = [
    path("displayName"),
    path("display_name"),
    path("name"),
    dev_name,
]

MAIN_TYPE_RULES = [
    text_or_field("mainType", ("value", "name")),
    text_or_field("type", ("value", "name")),
]

PRICE_RULES = [
    path("price", "finalPrice"),
    path("price", "regularPrice"),
    path("vbucks"),
    path("finalPrice"),
    path("regularPrice"),
    path("price"),
]

RARITY_RULES = [
    text_or_field("rarity", ("name", "id")),
]

SECTION_RULES = [
    text_or_field("section", ("name", "displayName")),
    path("layout", "name"),
]

GRANTED_ID_RULES = [
    id_list("grantedIds"),
    ids_from("granted"),
    ids_from("grants"),
]


# ---------- Poster candidates ----------
def _display_asset(raw):
    asset = dig(raw, "displayAssets", 0)
    if asset is None:
        asset = dig(raw, "displayAssets")
    return asset if isinstance(asset, dict) else None


def _image_block(raw):
    block = first_match(raw, [lambda r: dig(r, "images"), lambda r: dig(r, "displayImage")], None)
    return block if isinstance(block, dict) else None


def _root(raw):
    return raw if isinstance(raw, dict) else None


# Ordered: the plain display asset is the most reliable picture
POSTER_SOURCES = [
    (_display_asset, ("url", "full_background", "background", "icon")),
    (_image_block, ("icon", "featured", "full_background", "background")),
    (_root, ("full_background", "icon")),
]


def image_candidates(raw):
    """Ordered, de-duplicated list of non-blank image URLs for one entry."""
    candidates = []
    for locate, keys in POSTER_SOURCES:
        block = locate(raw)
        if block is None:
            continue
        for key in keys:
            url = block.get(key)
            if isinstance(url, str) and url.strip() and url not in candidates:
                candidates.append(url)
    return candidates


# ---------- Public API ----------
def _text(value):
    return value if isinstance(value, str) else str(value)


def normalize_display(raw):
    price = first_match(raw, PRICE_RULES)
    return DisplayItem(
        display_name=_text(first_match(raw, DISPLAY_NAME_RULES)),
        main_type=_text(first_match(raw, MAIN_TYPE_RULES)),
        price=price,
        rarity=_text(first_match(raw, RARITY_RULES)),
    )


def section_name(raw):
    return _text(first_match(raw, SECTION_RULES, DEFAULT_SECTION))


def granted_ids(raw):
    return list(first_match(raw, GRANTED_ID_RULES, []))


def normalize_item(raw):
    """Map one raw upstream entry to a ShopRow. Never raises."""
    return ShopRow(
        item=normalize_display(raw),
        section=section_name(raw),
        poster_candidates=image_candidates(raw),
        granted_ids=granted_ids(raw),
    )
