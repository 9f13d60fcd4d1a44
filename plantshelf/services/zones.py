"""
Hardiness zone and bloom season label helpers.

Zone labels are USDA bands 1-13 with an optional "a"/"b" half-zone suffix
("4", "5a", "13b"). The numeric part drives zone sorting and bare-number
filters ("6" covers "6a" and "6b").
"""
import re
from typing import Iterable, Optional

ZONE_LABEL_RE = re.compile(r"^(?P<number>\d{1,2})(?P<half>[ab]?)$")
MIN_ZONE = 1
MAX_ZONE = 13

SEASONS: dict[str, str] = {
    "Spring": "March through May",
    "Summer": "June through August",
    "Fall": "September through November",
    "Winter": "December through February",
}

_SEASON_WORDS: dict[str, str] = {
    "spring": "Spring",
    "summer": "Summer",
    "midsummer": "Summer",
    "fall": "Fall",
    "autumn": "Fall",
    "winter": "Winter",
}


def normalize_zone_label(label: str) -> str:
    """Lower-case and strip a zone label; raise ValueError when it is not a zone."""
    cleaned = label.strip().lower()
    match = ZONE_LABEL_RE.match(cleaned)
    if not match:
        raise ValueError(f"invalid hardiness zone: {label!r}")
    number = int(match.group("number"))
    if not MIN_ZONE <= number <= MAX_ZONE:
        raise ValueError(f"hardiness zone out of range {MIN_ZONE}-{MAX_ZONE}: {label!r}")
    return f"{number}{match.group('half')}"


def zone_number(label: str) -> Optional[int]:
    """Numeric part of a zone label ("5b" -> 5), or None if unparseable."""
    match = ZONE_LABEL_RE.match(label.strip().lower())
    if not match:
        return None
    return int(match.group("number"))


def min_zone_number(labels: Iterable[str]) -> Optional[int]:
    numbers = [n for n in (zone_number(label) for label in labels) if n is not None]
    return min(numbers) if numbers else None


def zone_matches(label: str, wanted: str) -> bool:
    """
    True when a plant's zone label satisfies one requested zone.

    A bare number matches every half-zone with that number; a half-zone
    matches only itself.
    """
    wanted = wanted.strip().lower()
    if wanted.isdigit():
        return zone_number(label) == int(wanted)
    return label.strip().lower() == wanted


def expand_zone_range(text: str) -> list[str]:
    """
    Expand zone text such as "4-9", "5a-6b" or "3, 4, 5" into labels.

    Ranges expand to whole-number zones between the endpoints.
    """
    labels: list[str] = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            start, end = (p.strip() for p in part.split("-", 1))
            lo, hi = zone_number(start), zone_number(end)
            if lo is None or hi is None or lo > hi:
                raise ValueError(f"invalid zone range: {part!r}")
            labels.extend(str(n) for n in range(lo, hi + 1))
        else:
            labels.append(normalize_zone_label(part))
    return list(dict.fromkeys(labels))


def all_zone_labels() -> list[str]:
    return [f"{n}{half}" for n in range(MIN_ZONE, MAX_ZONE + 1) for half in ("a", "b")]


def normalize_season(season: str) -> str:
    cleaned = season.strip()
    if not cleaned:
        raise ValueError("bloom season must not be empty")
    for canonical in SEASONS:
        if canonical.casefold() == cleaned.casefold():
            return canonical
    return cleaned


def parse_bloom_seasons(text: Optional[str]) -> list[str]:
    """Pull season names out of free text like "late spring to midsummer"."""
    if not text:
        return []
    found = []
    for word in re.findall(r"[a-z]+", text.lower()):
        season = _SEASON_WORDS.get(word)
        if season and season not in found:
            found.append(season)
    return found


def classify_height(height: Optional[str]) -> Optional[str]:
    """
    Bucket descriptive height text into Short / Medium / Tall.

    Inches: <=18 Short, <=36 Medium. Feet: <=1.5 Short, <=3 Medium.
    Returns None when the text carries no usable measurement.
    """
    if not height:
        return None
    text = height.lower()
    numbers = [float(n) for n in re.findall(r"\d+(?:\.\d+)?", text)]
    if not numbers:
        return None
    tallest = max(numbers)
    if "inch" in text or '"' in text or re.search(r"\bin\b", text):
        inches = tallest
    elif "feet" in text or "foot" in text or "ft" in text or "'" in text:
        inches = tallest * 12
    else:
        return None
    if inches <= 18:
        return "Short"
    if inches <= 36:
        return "Medium"
    return "Tall"
