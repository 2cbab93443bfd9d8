"""Rule based singular/plural inflection for table and type names.

Only the last ``_``-separated word of a name is inflected, so
``user_addresses`` becomes ``user_address``.
"""

import re
from typing import List, Pattern, Tuple

UNCOUNTABLE = frozenset(
    {
        "data", "equipment", "fish", "information", "metadata", "money",
        "news", "rice", "series", "sheep", "species",
    }
)

IRREGULAR: List[Tuple[str, str]] = [
    ("person", "people"),
    ("man", "men"),
    ("woman", "women"),
    ("child", "children"),
    ("mouse", "mice"),
    ("goose", "geese"),
    ("tooth", "teeth"),
    ("foot", "feet"),
    ("ox", "oxen"),
]

_SINGULAR_RULES: List[Tuple[Pattern[str], str]] = [
    (re.compile(p, re.IGNORECASE), r)
    for p, r in [
        (r"(quiz)zes$", r"\1"),
        (r"(matr|vert|ind)ices$", r"\1ix"),
        (r"(octop|vir)i$", r"\1us"),
        (r"(alias|status|bus|address)es$", r"\1"),
        (r"(analy|ba|diagno|parenthe|progno|synop|the)ses$", r"\1sis"),
        (r"(m)ovies$", r"\1ovie"),
        (r"([^aeiouy]|qu)ies$", r"\1y"),
        (r"(x|ch|ss|sh)es$", r"\1"),
        (r"(hive|tive)s$", r"\1"),
        (r"([lr])ves$", r"\1f"),
        (r"([^f])ves$", r"\1fe"),
        (r"([ti])a$", r"\1um"),
        (r"(ss|us|is)$", r"\1"),
        (r"s$", ""),
    ]
]

_PLURAL_RULES: List[Tuple[Pattern[str], str]] = [
    (re.compile(p, re.IGNORECASE), r)
    for p, r in [
        (r"(quiz)$", r"\1zes"),
        (r"(matr|vert|ind)(?:ix|ex)$", r"\1ices"),
        (r"(octop|vir)us$", r"\1i"),
        (r"(alias|status|bus|address)$", r"\1es"),
        (r"(x|ch|ss|sh)$", r"\1es"),
        (r"([^aeiouy]|qu)y$", r"\1ies"),
        (r"(hive)$", r"\1s"),
        (r"([^f])fe$", r"\1ves"),
        (r"([lr])f$", r"\1ves"),
        (r"sis$", "ses"),
        (r"([ti])um$", r"\1a"),
        (r"s$", "s"),
        (r"$", "s"),
    ]
]


def _match_case(source: str, replacement: str) -> str:
    if source.isupper() and len(source) > 1:
        return replacement.upper()
    if source[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def _inflect_word(word: str, to_plural: bool) -> str:
    lower = word.lower()
    if not word or lower in UNCOUNTABLE:
        return word
    for singular, plural in IRREGULAR:
        if lower == (singular if to_plural else plural):
            return _match_case(word, plural if to_plural else singular)
        if lower == (plural if to_plural else singular):
            return word
    rules = _PLURAL_RULES if to_plural else _SINGULAR_RULES
    for pattern, replacement in rules:
        if pattern.search(word):
            return pattern.sub(replacement, word, count=1)
    return word


def _inflect(name: str, to_plural: bool) -> str:
    head, sep, last = name.rpartition("_")
    return head + sep + _inflect_word(last, to_plural)


def singularize(name: str) -> str:
    """Singular form of the last word of name.

    >>> singularize("user_addresses")
    'user_address'
    """
    return _inflect(name, to_plural=False)


def pluralize(name: str) -> str:
    """Plural form of the last word of name.

    >>> pluralize("Category")
    'Categories'
    """
    return _inflect(name, to_plural=True)
