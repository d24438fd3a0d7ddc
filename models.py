from dataclasses import dataclass, field, asdict
from typing import List, Union

RARITY_CLASSES = {
    'Common': 'rarity-common',
    'Uncommon': 'rarity-uncommon',
    'Rare': 'rarity-rare',
    'Epic': 'rarity-epic',
    'Legendary': 'rarity-legendary',
    'Marvel': 'rarity-marvel',
    'Icon': 'rarity-icon',
    'DC': 'rarity-dc',
}


def rarity_class(rarity):
    return RARITY_CLASSES.get(rarity or '', 'rarity-common')


@dataclass(frozen=True)
class DisplayItem:
    """
    Normalized, render-ready view of one shop entry.
    Missing fields are empty strings, never None.
    """
    display_name: str = ''
    main_type: str = ''
    price: Union[int, float, str] = ''
    rarity: str = ''

    @property
    def type_label(self):
        return str(self.main_type or '').replace('_', ' ')

    @property
    def rarity_class(self):
        return rarity_class(self.rarity)


@dataclass(frozen=True)
class ShopRow:
    """One grid card: normalized item plus everything needed to preview it."""
    item: DisplayItem
    section: str = 'Misc'
    poster_candidates: List[str] = field(default_factory=list)
    granted_ids: List[str] = field(default_factory=list)

    @property
    def poster(self):
        return self.poster_candidates[0] if self.poster_candidates else ''


@dataclass(frozen=True)
class MediaIndexEntry:
    video: str = ''
    audio: str = ''
    poster: str = ''

    @property
    def has_media(self):
        return bool(self.video or self.audio)


@dataclass(frozen=True)
class PreviewMedia:
    title: str = ''
    video: str = ''
    audio: str = ''
    poster: str = ''

    @property
    def kind(self):
        # Modal shows video first, then audio over the poster, else the poster alone
        if self.video:
            return 'video'
        if self.audio:
            return 'audio'
        return 'image'

    def to_dict(self):
        data = asdict(self)
        data['kind'] = self.kind
        return data
