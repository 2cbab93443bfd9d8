"""
Case conversion primitives.

Names are split into words on separators, lower/upper boundaries and acronym
runs, so ``userAccount``, ``user_account`` and ``UserAccount`` all produce the
same words. Conversions depend only on the input name and the initialism set.

Examples:
    >>> to_snake("UserAccountID")
    'user_account_id'
    >>> to_pascal("user_account_id")
    'UserAccountID'
    >>> to_camel("HTTPServer")
    'httpServer'
"""

import re
from typing import AbstractSet, List, Optional

DEFAULT_INITIALISMS = frozenset(
    {
        "ACL", "API", "ASCII", "CPU", "CSS", "DNS", "EOF", "GUID", "HTML",
        "HTTP", "HTTPS", "ID", "IP", "JSON", "LHS", "QPS", "RAM", "RHS",
        "RPC", "SLA", "SMTP", "SQL", "SSH", "TCP", "TLS", "TTL", "UDP", "UI",
        "UID", "UUID", "URI", "URL", "UTF8", "VM", "XML", "XMPP", "XSRF", "XSS",
    }
)

_SEPARATOR_RE = re.compile(r"[\W_]+")
_WORD_RE = re.compile(r"[A-Z]{2,}s(?![a-z])|[A-Z]+(?![a-z])\d*|[A-Z]?[a-z]+\d*|\d+|[^\W\d_A-Za-z]+")


def split_words(name: str) -> List[str]:
    """Split an identifier into its constituent words, preserving case."""
    words: List[str] = []
    for chunk in _SEPARATOR_RE.split(name):
        if chunk:
            words.extend(_WORD_RE.findall(chunk))
    return words


def _safe_start(identifier: str) -> str:
    if identifier and identifier[0].isdigit():
        return "_" + identifier
    return identifier


def to_snake(name: str) -> str:
    """Lowercase, underscore-separated form of name."""
    return _safe_start("_".join(w.lower() for w in split_words(name)))


def _capitalize(word: str, initialisms: AbstractSet[str]) -> str:
    if word.upper() in initialisms:
        return word.upper()
    return word[:1].upper() + word[1:].lower()


def to_pascal(name: str, initialisms: Optional[AbstractSet[str]] = None) -> str:
    """Upper-initial, separator-free form of name with initialisms kept upper-case."""
    initialisms = DEFAULT_INITIALISMS if initialisms is None else initialisms
    return _safe_start("".join(_capitalize(w, initialisms) for w in split_words(name)))


def to_camel(name: str, initialisms: Optional[AbstractSet[str]] = None) -> str:
    """Lower-initial variant of :func:`to_pascal`."""
    initialisms = DEFAULT_INITIALISMS if initialisms is None else initialisms
    words = split_words(name)
    if not words:
        return ""
    head = words[0].lower()
    return _safe_start(head + "".join(_capitalize(w, initialisms) for w in words[1:]))
