"""Static place -> coordinate lookup used for offline distance estimates."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

_PLACES_FILE = Path(__file__).resolve().parent / "places.json"
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float


@lru_cache(maxsize=1)
def _load_places() -> tuple[dict[str, Coordinates], dict[str, str]]:
    with open(_PLACES_FILE, encoding="utf-8") as fh:
        data = json.load(fh)

    places: dict[str, Coordinates] = {}
    for name, pair in data.get("places", {}).items():
        key = normalize_place_name(name)
        if not key or len(pair) != 2:
            continue
        places[key] = Coordinates(lat=float(pair[0]), lng=float(pair[1]))

    aliases: dict[str, str] = {}
    for alias, target in data.get("aliases", {}).items():
        canonical = normalize_place_name(target)
        if canonical in places:
            aliases[normalize_place_name(alias)] = canonical
    return places, aliases


@lru_cache(maxsize=1)
def _partial_patterns() -> tuple[tuple[re.Pattern[str], str], ...]:
    places, _ = _load_places()
    # Longest names first so "new york" wins over "york"-style prefixes.
    names = sorted(places, key=len, reverse=True)
    return tuple((re.compile(rf"\b{re.escape(name)}\b"), name) for name in names)


def normalize_place_name(name: object) -> str:
    return _WHITESPACE.sub(" ", str(name or "").strip().lower())


def resolve_place(name: object) -> Optional[str]:
    """Return the canonical table key for ``name`` or None when unknown.

    Matching order: exact name, alias, first comma-separated part
    ("Paris, France"), then a whole-word match of a known name inside the text.
    """
    norm = normalize_place_name(name)
    if not norm:
        return None

    places, aliases = _load_places()
    candidates = [norm]
    head = norm.split(",", 1)[0].strip()
    if head and head != norm:
        candidates.append(head)

    for candidate in candidates:
        if candidate in places:
            return candidate
        if candidate in aliases:
            return aliases[candidate]

    for pattern, canonical in _partial_patterns():
        if pattern.search(norm):
            return canonical
    return None


def get_place_coords(name: object) -> Optional[Coordinates]:
    canonical = resolve_place(name)
    if canonical is None:
        return None
    places, _ = _load_places()
    return places[canonical]


def known_places() -> dict[str, Coordinates]:
    places, _ = _load_places()
    return dict(places)


def known_aliases() -> dict[str, str]:
    _, aliases = _load_places()
    return dict(aliases)


__all__ = [
    "Coordinates",
    "get_place_coords",
    "known_aliases",
    "known_places",
    "normalize_place_name",
    "resolve_place",
]
