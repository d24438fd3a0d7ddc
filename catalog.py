import re
from collections import OrderedDict

from normalizer import normalize_item


def shop_entries(shop_data):
    """Raw entries from either payload shape ({shop: [...]} or {items: [...]})."""
    if not isinstance(shop_data, dict):
        return []
    for key in ('shop', 'items'):
        entries = shop_data.get(key)
        if isinstance(entries, list):
            return entries
    return []


def group_catalog(shop_data):
    """
    Group normalized rows by section name, keeping upstream item order.

    Returns OrderedDict: section name -> [ShopRow, ...]
    """
    groups = OrderedDict()
    for raw in shop_entries(shop_data):
        row = normalize_item(raw)
        groups.setdefault(row.section, []).append(row)
    return groups


def sorted_categories(groups):
    return sorted(groups, key=lambda name: name.lower())


def idize(name):
    return re.sub(r'[^a-z0-9]+', '-', (name or 'misc').lower())


def section_id(name):
    return 'section-' + idize(name)


def section_ids(names):
    """Section ids for names in display order; repeats get -2, -3, ... suffixes."""
    used = set()
    ids = []
    for name in names:
        base = section_id(name)
        candidate, n = base, 1
        while candidate in used:
            n += 1
            candidate = f'{base}-{n}'
        used.add(candidate)
        ids.append(candidate)
    return ids
