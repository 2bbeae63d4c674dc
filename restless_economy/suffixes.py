"""Short-scale suffix vocabulary shared by the parser and the formatter.

Each step is ×1000: k (10^3), m, b, t, qa, qi, … through the latinate codes
up to ce (centillion, 10^303). The table is built once at import time and
never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SuffixUnit:
    power: int
    code: str
    words: tuple[str, ...]
    aliases: tuple[str, ...] = ()

    @property
    def word(self) -> str:
        return self.words[0]


# ═══════════════════════════════════════════════════════════════
#  Table construction
# ═══════════════════════════════════════════════════════════════

# (code, word) for 10^3 … 10^33
_BASIC: list[tuple[str, str]] = [
    ("k", "thousand"),
    ("m", "million"),
    ("b", "billion"),
    ("t", "trillion"),
    ("qa", "quadrillion"),
    ("qi", "quintillion"),
    ("sx", "sextillion"),
    ("sp", "septillion"),
    ("oc", "octillion"),
    ("no", "nonillion"),
    ("de", "decillion"),
]

# Latin units prefix: 1–9
_ONES: list[tuple[str, str]] = [
    ("u", "un"),
    ("d", "duo"),
    ("t", "tre"),
    ("qa", "quattuor"),
    ("qn", "quin"),
    ("sx", "sex"),
    ("sp", "septen"),
    ("oc", "octo"),
    ("nv", "novem"),
]

# Latin tens: 20–90 (-illion index)
_TENS: list[tuple[str, str]] = [
    ("vg", "vigintillion"),
    ("tg", "trigintillion"),
    ("qg", "quadragintillion"),
    ("qng", "quinquagintillion"),
    ("sxg", "sexagintillion"),
    ("spg", "septuagintillion"),
    ("ocg", "octogintillion"),
    ("nvg", "nonagintillion"),
]

# Extra accepted codes that older help texts advertised.
_ALIASES: dict[str, tuple[str, ...]] = {
    "de": ("dc",),
    "ce": ("ct",),
}


def _illion_power(index: int) -> int:
    """Short scale: the n-illion is 10**(3n + 3)."""
    return 3 * index + 3


def _build_suffix_table() -> tuple[SuffixUnit, ...]:
    entries: list[tuple[int, str, str]] = []

    for i, (code, word) in enumerate(_BASIC):
        entries.append((3 * (i + 1), code, word))

    # 11–19: undecillion … novemdecillion
    for i, (ones_code, ones_word) in enumerate(_ONES, start=1):
        entries.append((_illion_power(10 + i), f"{ones_code}d", f"{ones_word}decillion"))

    # 20–99
    for t, (tens_code, tens_word) in enumerate(_TENS, start=2):
        entries.append((_illion_power(10 * t), tens_code, tens_word))
        for i, (ones_code, ones_word) in enumerate(_ONES, start=1):
            entries.append((_illion_power(10 * t + i), f"{ones_code}{tens_code}", f"{ones_word}{tens_word}"))

    entries.append((_illion_power(100), "ce", "centillion"))
    entries.sort()

    return tuple(
        SuffixUnit(
            power=power,
            code=code,
            words=(word,),
            aliases=_ALIASES.get(code, ()),
        )
        for power, code, word in entries
    )


SUFFIX_TABLE: tuple[SuffixUnit, ...] = _build_suffix_table()

_BY_CODE: dict[str, SuffixUnit] = {}
_BY_WORD: dict[str, SuffixUnit] = {}
_BY_POWER: dict[int, SuffixUnit] = {}

for _unit in SUFFIX_TABLE:
    _BY_CODE[_unit.code] = _unit
    for _alias in _unit.aliases:
        _BY_CODE[_alias] = _unit
    for _word in _unit.words:
        _BY_WORD[_word] = _unit
    _BY_POWER[_unit.power] = _unit
del _unit


# ═══════════════════════════════════════════════════════════════
#  Lookups
# ═══════════════════════════════════════════════════════════════


def _squash(text: str) -> str:
    return "".join(text.split()).lower()


def lookup_by_suffix(code: str) -> SuffixUnit | None:
    """Case-insensitive exact match on short codes and aliases."""
    return _BY_CODE.get(code.strip().lower())


def lookup_by_word(word: str) -> SuffixUnit | None:
    """Case/whitespace-insensitive match on full words; plurals accepted."""
    key = _squash(word)
    unit = _BY_WORD.get(key)
    if unit is None and key.endswith("s"):
        unit = _BY_WORD.get(key[:-1])
    return unit


def lookup_by_power(power: int) -> SuffixUnit | None:
    return _BY_POWER.get(power)


def best_suffix_for_power(power: int) -> SuffixUnit | None:
    """Largest unit whose power does not exceed ``power``."""
    if power < SUFFIX_TABLE[0].power:
        return None
    capped = min(power, SUFFIX_TABLE[-1].power)
    return _BY_POWER[capped - capped % 3]


def all_suffix_codes() -> list[str]:
    return [u.code for u in SUFFIX_TABLE]


def all_suffix_words() -> list[str]:
    return [w for u in SUFFIX_TABLE for w in u.words]


# ═══════════════════════════════════════════════════════════════
#  Suggestions
# ═══════════════════════════════════════════════════════════════


def levenshtein(a: str, b: str) -> int:
    """Edit distance (insert/delete/substitute, unit cost)."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (ca != cb),
            ))
        previous = current
    return previous[-1]


def suggest_suffixes(token: str, limit: int = 8, max_distance: int = 3) -> list[str]:
    """Closest codes/words to ``token``.

    Ordered by edit distance, then length, then table order, so the result is
    stable for a given input.
    """
    needle = _squash(token)
    scored: list[tuple[int, int, int, str]] = []
    position = 0
    for unit in SUFFIX_TABLE:
        for candidate in (unit.code, *unit.words):
            if abs(len(needle) - len(candidate)) > max_distance:
                position += 1
                continue
            dist = levenshtein(needle, candidate)
            if dist <= max_distance:
                scored.append((dist, len(candidate), position, candidate))
            position += 1
    scored.sort()
    return [candidate for *_, candidate in scored[:limit]]
