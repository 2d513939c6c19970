#!/usr/bin/env python3
"""
Kana classification registry for chorded kana layouts.

Static table of every placeable kana and its phonological relationships:
voiced partner, semi-voiced partner and the modifier key that produces it,
contraction (youon) eligibility and foreign-sound (gairaion) eligibility.

The tables are built once at import time and exposed through read-only
mappings; nothing here mutates after the module is loaded.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

# Modifier kana occupy base slots and act as post-fixed shift keys
MODIFIER_KANAS: Tuple[str, ...] = ('ゃ', 'ゅ', 'ょ', '゛')
YOUON_MARKS: Tuple[str, ...] = ('ゃ', 'ゅ', 'ょ')
DAKUTEN = '゛'

SMALL_VOWELS: Tuple[str, ...] = ('ぁ', 'ぃ', 'ぅ', 'ぇ', 'ぉ')
PUNCTUATION: Tuple[str, ...] = ('、', '。')

PLAIN_KANAS: Tuple[str, ...] = tuple(
    'あいうえお'
    'かきくけこ'
    'さしすせそ'
    'たちつてと'
    'なにぬねの'
    'はひふへほ'
    'まみむめも'
    'やゆよ'
    'らりるれろ'
    'わをん'
    'っー'
)

# Voicing operator results. The ま row voices into the ぱ row on this keyboard.
DAKUON_MAP: Mapping[str, str] = MappingProxyType({
    'う': 'ゔ',
    'か': 'が', 'き': 'ぎ', 'く': 'ぐ', 'け': 'げ', 'こ': 'ご',
    'さ': 'ざ', 'し': 'じ', 'す': 'ず', 'せ': 'ぜ', 'そ': 'ぞ',
    'た': 'だ', 'ち': 'ぢ', 'つ': 'づ', 'て': 'で', 'と': 'ど',
    'は': 'ば', 'ひ': 'び', 'ふ': 'ぶ', 'へ': 'べ', 'ほ': 'ぼ',
    'ま': 'ぱ', 'み': 'ぴ', 'む': 'ぷ', 'め': 'ぺ', 'も': 'ぽ',
})

# Semi-voicing: (result, modifier kana whose key completes the chord)
HANDAKUON_MAP: Mapping[str, Tuple[str, str]] = MappingProxyType({
    'は': ('ぱ', 'ょ'),
    'ひ': ('ぴ', 'ゅ'),
    'ふ': ('ぷ', 'ょ'),
    'へ': ('ぺ', 'ょ'),
    'ほ': ('ぽ', 'ょ'),
})

YOUON_KANAS: Tuple[str, ...] = ('き', 'し', 'ち', 'に', 'ひ', 'み', 'り')
GAIRAION_KANAS: Tuple[str, ...] = ('あ', 'い', 'う', 'え', 'お', 'し', 'ち', 'つ', 'て', 'と', 'ふ')


@dataclass(frozen=True)
class KanaInfo:
    """Classification record for one placeable kana."""

    kana: str
    kind: str
    """One of 'plain', 'small_vowel', 'punctuation', 'modifier'"""

    is_dakuon: bool = False
    dakuon_kana: Optional[str] = None
    is_handakuon: bool = False
    handakuon_kana: Optional[str] = None
    handakuon_modifier_key: Optional[str] = None
    is_youon: bool = False
    is_gairaion: bool = False

    @property
    def is_modifier(self) -> bool:
        return self.kind == 'modifier'

    @property
    def is_small_vowel(self) -> bool:
        return self.kind == 'small_vowel'

    @property
    def is_punctuation(self) -> bool:
        return self.kind == 'punctuation'

    @property
    def is_composable(self) -> bool:
        """True if some post-fixed modifier keystroke turns this kana into another unit."""
        return (self.is_dakuon or self.is_handakuon or self.is_youon
                or self.is_gairaion or self.is_small_vowel)


def _build_registry() -> Mapping[str, KanaInfo]:
    registry: Dict[str, KanaInfo] = {}

    for kana in PLAIN_KANAS:
        handakuon = HANDAKUON_MAP.get(kana)
        registry[kana] = KanaInfo(
            kana=kana,
            kind='plain',
            is_dakuon=kana in DAKUON_MAP,
            dakuon_kana=DAKUON_MAP.get(kana),
            is_handakuon=handakuon is not None,
            handakuon_kana=handakuon[0] if handakuon else None,
            handakuon_modifier_key=handakuon[1] if handakuon else None,
            is_youon=kana in YOUON_KANAS,
            is_gairaion=kana in GAIRAION_KANAS,
        )

    for kana in SMALL_VOWELS:
        registry[kana] = KanaInfo(kana=kana, kind='small_vowel')
    for kana in PUNCTUATION:
        registry[kana] = KanaInfo(kana=kana, kind='punctuation')
    for kana in MODIFIER_KANAS:
        registry[kana] = KanaInfo(kana=kana, kind='modifier')

    return MappingProxyType(registry)


KANA_REGISTRY: Mapping[str, KanaInfo] = _build_registry()

# Reverse lookups for the encoder
_HANDAKUON_SOURCES: Mapping[str, str] = MappingProxyType(
    {result: source for source, (result, _) in HANDAKUON_MAP.items()}
)


def _build_dakuon_sources() -> Mapping[str, Tuple[str, ...]]:
    sources: Dict[str, List[str]] = {}
    for source, voiced in DAKUON_MAP.items():
        sources.setdefault(voiced, []).append(source)
    return MappingProxyType({voiced: tuple(kanas) for voiced, kanas in sources.items()})


_DAKUON_SOURCES: Mapping[str, Tuple[str, ...]] = _build_dakuon_sources()

YOUON_UNITS: Tuple[str, ...] = tuple(base + mark for base in YOUON_KANAS for mark in YOUON_MARKS)
GAIRAION_UNITS: Tuple[str, ...] = tuple(cons + vowel for cons in GAIRAION_KANAS for vowel in SMALL_VOWELS)


def classify(kana: str) -> Optional[KanaInfo]:
    """
    Look up the classification record of a placeable kana.

    Args:
        kana: A single kana character

    Returns:
        KanaInfo, or None if the string is not a recognized placeable kana
    """
    return KANA_REGISTRY.get(kana)


def dakuon_kanas() -> Tuple[str, ...]:
    return tuple(kana for kana, info in KANA_REGISTRY.items() if info.is_dakuon)


def youon_kanas() -> Tuple[str, ...]:
    return tuple(kana for kana, info in KANA_REGISTRY.items() if info.is_youon)


def gairaion_kanas() -> Tuple[str, ...]:
    return tuple(kana for kana, info in KANA_REGISTRY.items() if info.is_gairaion)


def handakuon_source(kana: str) -> Optional[str]:
    """Return the plain kana whose semi-voiced form is `kana`, if any."""
    return _HANDAKUON_SOURCES.get(kana)


def dakuon_sources(kana: str) -> Tuple[str, ...]:
    """Return the plain kana whose voiced form is `kana` (empty if none)."""
    return _DAKUON_SOURCES.get(kana, ())


def split_youon(unit: str) -> Optional[Tuple[str, str]]:
    """Split a contraction such as 'きゃ' into ('き', 'ゃ'); None if `unit` is not one."""
    if len(unit) != 2:
        return None
    base, mark = unit[0], unit[1]
    if base in YOUON_KANAS and mark in YOUON_MARKS:
        return base, mark
    return None


def split_gairaion(unit: str) -> Optional[Tuple[str, str]]:
    """Split a foreign-sound unit such as 'てぃ' into ('て', 'ぃ'); None if `unit` is not one."""
    if len(unit) != 2:
        return None
    consonant, vowel = unit[0], unit[1]
    if consonant in GAIRAION_KANAS and vowel in SMALL_VOWELS:
        return consonant, vowel
    return None


def encodable_units() -> Tuple[str, ...]:
    """
    Every output unit a layout can potentially produce.

    Placeable kana (modifiers included), voiced and semi-voiced forms,
    contractions and foreign-sound units, in a stable order.
    """
    units: List[str] = list(KANA_REGISTRY.keys())
    for voiced in list(_DAKUON_SOURCES.keys()) + list(_HANDAKUON_SOURCES.keys()):
        if voiced not in units:
            units.append(voiced)
    units.extend(YOUON_UNITS)
    units.extend(GAIRAION_UNITS)
    return tuple(units)


_ENCODABLE_UNITS = frozenset(encodable_units())


def is_encodable_unit(unit: str) -> bool:
    return unit in _ENCODABLE_UNITS
