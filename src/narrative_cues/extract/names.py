"""Canonical character names and their inflected variants.

This module is the only place that decides which word forms name which
character. Adding a variant is a one-line edit to NAME_VARIANTS; every
consumer goes through canonicalize() or find_characters().
"""

import unicodedata

SPIRIT = "Holy Spirit"
JESUS = "Jesus"
GOD = "God"

# Canonical name -> surface variants (nominative first, then oblique cases)
NAME_VARIANTS: dict[str, tuple[str, ...]] = {
    JESUS: ("Ιησους", "Ιησου", "Ιησουν"),
    "Peter": ("Πετρος", "Πετρου", "Πετρον", "Πετρω"),
    "Andrew": ("Ανδρεας", "Ανδρεου", "Ανδρεαν"),
    "James": ("Ιακωβος", "Ιακωβου", "Ιακωβον"),
    "John": ("Ιωαννης", "Ιωαννου", "Ιωαννην"),
    "Philip": ("Φιλιππος", "Φιλιππου", "Φιλιππον"),
    "Bartholomew": ("Βαρθολομαιος", "Βαρθολομαιου", "Βαρθολομαιον"),
    "Matthew": ("Μαθθαιος", "Μαθθαιου", "Μαθθαιον"),
    "Thomas": ("Θωμας", "Θωμου", "Θωμαν"),
    "Thaddaeus": ("Θαδδαιος", "Θαδδαιου", "Θαδδαιον"),
    "Simon": ("Σιμων", "Σιμωνος", "Σιμωνα"),
    "Judas": ("Ιουδας", "Ιουδα", "Ιουδαν"),
    SPIRIT: ("Πνευμα", "Πνευματος", "Πνευματι", "Αγιον", "Αγιου", "Αγιω"),
    GOD: ("Θεος", "Θεου", "Θεον", "Θεω"),
    "Abraham": ("Αβρααμ",),
    "David": ("Δαυειδ", "Δαυιδ"),
    "Moses": ("Μωυσης", "Μωυσεως", "Μωυσει", "Μωυσην"),
    "Herod": ("Ηρωδης", "Ηρωδου", "Ηρωδη"),
    "John the Baptist": ("Βαπτιστης", "Βαπτιστου", "Βαπτιζων"),
    "Satan": ("Σατανας", "Σατανα"),
    "Mary": ("Μαρια", "Μαριαμ"),
}

# Characters that act off-stage; never chosen as a chapter's primary agent
BACKGROUND_CHARACTERS: frozenset[str] = frozenset({SPIRIT, GOD})

# Characters whose network importance gets a fixed bonus
SPECIAL_CHARACTERS: frozenset[str] = frozenset({JESUS, SPIRIT, GOD})


def normalize_form(text: str) -> str:
    """Strip diacritics and case so 'Ἰησοῦς' compares equal to 'Ιησους'.

    casefold() also folds final sigma, so both come out as 'ιησουσ'.
    """
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def _build_variant_index() -> dict[str, tuple[str, str]]:
    index: dict[str, tuple[str, str]] = {}
    for canonical, variants in NAME_VARIANTS.items():
        for variant in variants:
            index[normalize_form(variant)] = (canonical, variant)
    return index


# Normalized variant -> (canonical name, table spelling)
VARIANT_TO_CANONICAL: dict[str, tuple[str, str]] = _build_variant_index()


def lookup_variant(form: str) -> tuple[str, str] | None:
    """Exact lookup of a form; returns (canonical name, table variant)."""
    return VARIANT_TO_CANONICAL.get(normalize_form(form))


def canonicalize(variant: str) -> str | None:
    """Map a name variant to its canonical character, or None if unknown."""
    match = lookup_variant(variant)
    return match[0] if match else None


def variants_for(name: str) -> tuple[str, ...]:
    """All table variants of a canonical character."""
    return NAME_VARIANTS.get(name, ())


def find_characters(text: str) -> list[str]:
    """Canonical names with at least one variant contained in the text.

    Names come back in table order, each at most once.
    """
    haystack = normalize_form(text)
    return [
        canonical
        for canonical, variants in NAME_VARIANTS.items()
        if any(normalize_form(v) in haystack for v in variants)
    ]


def mentions_character(text: str, name: str) -> bool:
    """Whether any variant of the named character occurs in the text."""
    haystack = normalize_form(text)
    return any(normalize_form(v) in haystack for v in variants_for(name))


_NORMALIZED_FAMILIES: list[tuple[str, list[tuple[str, str]]]] = [
    (canonical, [(variant, normalize_form(variant)) for variant in variants])
    for canonical, variants in NAME_VARIANTS.items()
]


def match_surface_form(form: str, min_reverse_length: int = 4) -> list[tuple[str, str]]:
    """Match a surface form against every variant family by containment.

    A variant matches when the form contains it, or when the form is
    contained in the variant and is at least ``min_reverse_length`` long.
    At most one (canonical name, variant) pair is returned per family.
    """
    normalized = normalize_form(form)
    if not normalized:
        return []

    allow_reverse = len(normalized) >= min_reverse_length
    matches: list[tuple[str, str]] = []
    for canonical, variants in _NORMALIZED_FAMILIES:
        for variant, key in variants:
            if key in normalized or (allow_reverse and normalized in key):
                matches.append((canonical, variant))
                break
    return matches
