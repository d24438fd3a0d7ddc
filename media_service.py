import json
from types import MappingProxyType

import fortnite_api
from models import MediaIndexEntry, PreviewMedia


class MediaIndex:
    """
    Prebuilt granted-item id -> preview assets mapping.
    Read-only once loaded; a missing or broken file gives an empty index.
    """

    def __init__(self, entries=None):
        self._entries = MappingProxyType(dict(entries or {}))

    @classmethod
    def from_dict(cls, data):
        entries = {}
        if isinstance(data, dict):
            for item_id, raw in data.items():
                if not isinstance(raw, dict):
                    continue
                entries[str(item_id)] = MediaIndexEntry(
                    video=_str(raw.get('video')),
                    audio=_str(raw.get('audio')),
                    poster=_str(raw.get('poster')),
                )
        return cls(entries)

    @classmethod
    def load(cls, path):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            print(f"[MEDIA] Media index unavailable ({path}): {e}")
            return cls()
        index = cls.from_dict(data)
        print(f"[MEDIA] Loaded {len(index)} media index entries")
        return index

    def get(self, item_id):
        return self._entries.get(item_id)

    def __len__(self):
        return len(self._entries)

    def __contains__(self, item_id):
        return item_id in self._entries


def _str(value):
    return value if isinstance(value, str) else ''


# ---------- Detail payload helpers ----------
def _unwrap(details):
    # fortniteapi.io wraps the record as {"result": true, "item": {...}}
    item = details.get('item')
    return item if isinstance(item, dict) else details


def media_from_details(details, title, poster):
    """PreviewMedia from one item detail payload, or None if it has no video/audio."""
    if not isinstance(details, dict):
        return None
    d = _unwrap(details)

    video = _str(d.get('video'))
    if not video:
        videos = d.get('videos')
        if isinstance(videos, list) and videos:
            first = videos[0]
            video = _str(first.get('url')) if isinstance(first, dict) else _str(first)
    audio = _str(d.get('audio'))
    if not (video or audio):
        return None

    images = d.get('images') if isinstance(d.get('images'), dict) else {}
    fallback_poster = (
        _str(images.get('full_background'))
        or _str(images.get('icon'))
        or poster
        or ''
    )
    return PreviewMedia(title=title, video=video, audio=audio, poster=fallback_poster)


# ---------- Resolution strategies ----------
class IndexStrategy:
    """1️⃣ Prebuilt media index - no network."""

    def __init__(self, index):
        self.index = index

    def __call__(self, title, ids, poster):
        for item_id in ids:
            entry = self.index.get(item_id)
            if entry and entry.has_media:
                return PreviewMedia(
                    title=title,
                    video=entry.video,
                    audio=entry.audio,
                    poster=entry.poster or poster,
                )
        return None


class DetailStrategy:
    """2️⃣ Live item detail lookup, one id at a time."""

    def __init__(self, lookup=None):
        self.lookup = lookup or fortnite_api.get_item_details

    def __call__(self, title, ids, poster):
        for item_id in ids:
            media = media_from_details(self.lookup(item_id), title, poster)
            if media:
                return media
        return None


def default_strategies(index, lookup=None):
    return [IndexStrategy(index), DetailStrategy(lookup)]


def resolve_media(title, ids, poster, index, lookup=None, strategies=None):
    """
    Best preview for a card: media index, then item details, then poster only.

    Args:
        title: Modal title
        ids: Granted-item ids, in priority order
        poster: First poster candidate of the card
        index: MediaIndex for this session
        lookup: item id -> detail payload (defaults to the live API)
        strategies: Override the ordered strategy list
    """
    ids = [i for i in (ids or []) if i]
    poster = poster or ''
    for strategy in strategies or default_strategies(index, lookup):
        media = strategy(title, ids, poster)
        if media:
            print(f"[MEDIA] {title}: {media.kind} via {type(strategy).__name__}")
            return media

    # 3️⃣ Fallback
    return PreviewMedia(title=title, video='', audio='', poster=poster)
