"""
Flask server: storefront page, upstream proxy and preview resolution
"""
import threading

from flask import Flask, jsonify, request, Response, current_app
import requests

import fortnite_api
from build_storefront import render_storefront, render_error_page
from config import (
    HOST, PORT, PUBLIC_DIR, SHOP_LANG, STATIC_MAX_AGE,
    FALLBACK_SHOP_PATH, MEDIA_INDEX_PATH,
)
from media_service import MediaIndex, resolve_media
from shop_loader import get_shop, ShopUnavailable


app = Flask(__name__, static_folder=PUBLIC_DIR, static_url_path='')
app.config['SEND_FILE_MAX_AGE_DEFAULT'] = STATIC_MAX_AGE
app.config['FALLBACK_SHOP_PATH'] = FALLBACK_SHOP_PATH
app.config['MEDIA_INDEX_PATH'] = MEDIA_INDEX_PATH

_media_index_lock = threading.Lock()


def get_media_index():
    """Media index for this process - loaded on first use, then reused."""
    index = current_app.extensions.get('media_index')
    if index is None:
        with _media_index_lock:
            index = current_app.extensions.get('media_index')
            if index is None:
                index = MediaIndex.load(current_app.config['MEDIA_INDEX_PATH'])
                current_app.extensions['media_index'] = index
    return index


def _passthrough(upstream):
    # Status and body verbatim
    return Response(upstream.text, status=upstream.status_code, content_type='application/json')


@app.route('/')
def storefront():
    """Render the shop grouped by section"""
    try:
        shop_data, source = get_shop(fallback_path=current_app.config['FALLBACK_SHOP_PATH'])
        return render_storefront(shop_data, source=source)
    except ShopUnavailable as e:
        print(f"[ERROR] {e}")
    except Exception as e:
        print(f"[ERROR] Storefront render failed: {e}")
    return render_error_page(), 503


@app.route('/api/shop', methods=['GET'])
def proxy_shop():
    """Proxy the upstream shop (keeps the API key server-side)"""
    lang = request.args.get('lang', SHOP_LANG)
    try:
        upstream = fortnite_api.upstream_get('/v2/shop', params={'lang': lang})
        print(f"[PROXY] /api/shop -> {upstream.status_code}")
        return _passthrough(upstream)
    except requests.RequestException as e:
        print(f"[ERROR] Shop proxy failed: {e}")
        return jsonify({'error': 'Proxy failed', 'details': str(e)}), 500


@app.route('/api/item', methods=['GET'])
def proxy_item():
    """Proxy the upstream item detail endpoint"""
    item_id = request.args.get('id', '')
    lang = request.args.get('lang', SHOP_LANG)

    if not item_id:
        return jsonify({'error': 'Missing id'}), 400

    try:
        upstream = fortnite_api.upstream_get('/v2/items/get', params={'id': item_id, 'lang': lang})
        print(f"[PROXY] /api/item {item_id} -> {upstream.status_code}")
        return _passthrough(upstream)
    except requests.RequestException as e:
        print(f"[ERROR] Item proxy failed for {item_id}: {e}")
        return jsonify({'error': 'Proxy failed', 'details': str(e)}), 500


@app.route('/api/preview', methods=['GET'])
def preview():
    """Resolve the best preview media for a card (index -> item details -> poster)"""
    title = request.args.get('title', '')
    poster = request.args.get('poster', '')
    ids = [i for i in request.args.getlist('id') if i]
    lang = request.args.get('lang', SHOP_LANG)

    media = resolve_media(
        title,
        ids,
        poster,
        index=get_media_index(),
        lookup=lambda item_id: fortnite_api.get_item_details(item_id, lang=lang),
    )
    return jsonify(media.to_dict())


if __name__ == '__main__':
    print("=" * 60)
    print("ItemShop Storefront Server")
    print("=" * 60)
    print(f"Storefront: http://localhost:{PORT}")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    app.run(debug=False, host=HOST, port=PORT)
