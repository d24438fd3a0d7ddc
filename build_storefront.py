"""
Storefront page renderer

Used by server.py for the live page, and as a script to write a static
snapshot:  python build_storefront.py [output.html]
"""
import os
import sys
from datetime import datetime, timedelta, timezone

from jinja2 import Environment, FileSystemLoader, select_autoescape

from catalog import group_catalog, sorted_categories, section_ids
from config import PUBLIC_DIR, TEMPLATE_DIR

env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(['html']),
)

LOAD_FAILED_MESSAGE = "Failed to load shop. Try again in a bit."

# Inline so it is bound before the first load can fail
IMAGE_ONERROR = (
    "var r=JSON.parse(this.dataset.fallbacks||'[]');"
    "if(r.length){this.dataset.fallbacks=JSON.stringify(r.slice(1));this.src=r[0];}"
)


def time_until_reset(now=None):
    """HH:MM:SS until the next daily shop reset (00:00 UTC)."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)
    next_reset = datetime(now.year, now.month, now.day, tzinfo=timezone.utc) + timedelta(days=1)
    seconds = max(0, int((next_reset - now).total_seconds()))
    h, rem = divmod(seconds, 3600)
    m, s = divmod(rem, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


def image_fallback(candidates):
    """
    First candidate is the initial src; the rest are tried in order on error.
    No candidates -> empty src (the image stays unset).
    """
    candidates = list(candidates or [])
    if not candidates:
        return '', []
    return candidates[0], candidates[1:]


def build_context(shop_data, source='live', now=None):
    groups = group_catalog(shop_data)
    categories = []
    names = sorted_categories(groups)
    for name, anchor in zip(names, section_ids(names)):
        cards = []
        for row in groups[name]:
            src, fallbacks = image_fallback(row.poster_candidates)
            cards.append({'row': row, 'item': row.item, 'src': src, 'fallbacks': fallbacks})
        categories.append({'name': name, 'id': anchor, 'cards': cards})

    return {
        'categories': categories,
        'item_count': sum(len(rows) for rows in groups.values()),
        'source': source,
        'countdown': time_until_reset(now),
        'image_onerror': IMAGE_ONERROR,
        'error': None,
    }


def render_storefront(shop_data, source='live', now=None):
    template = env.get_template('storefront.html')
    return template.render(**build_context(shop_data, source=source, now=now))


def render_error_page(now=None):
    template = env.get_template('storefront.html')
    return template.render(
        categories=[],
        item_count=0,
        source=None,
        countdown=time_until_reset(now),
        image_onerror=IMAGE_ONERROR,
        error=LOAD_FAILED_MESSAGE,
    )


def main(argv=None):
    # Imported here so the renderer itself has no network dependency
    from shop_loader import get_shop, ShopUnavailable

    argv = sys.argv[1:] if argv is None else argv
    out_path = argv[0] if argv else os.path.join(PUBLIC_DIR, 'storefront.html')

    try:
        shop_data, source = get_shop()
        html = render_storefront(shop_data, source=source)
    except ShopUnavailable as e:
        print(f"[ERROR] {e}")
        html = render_error_page()

    with open(out_path, 'w', encoding='utf-8') as f:
        f.write(html)

    print(f"[SUCCESS] {out_path} generated")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
