"""
Identifier resolution.

Converts SQL names into Python identifiers, substitutes reserved words and
derives short names for types. The resolver holds no state of its own apart
from the injected ``NamingRegistry``; two resolvers sharing a registry derive
identical short names.
"""

from typing import Iterable, Literal

from .case import DEFAULT_INITIALISMS, split_words, to_camel, to_pascal, to_snake
from .registry import NamingRegistry
from .reserved import PYTHON_RESERVED_NAMES, TEMPLATE_RESERVED_NAMES

Style = Literal["snake", "pascal", "camel"]

# Words dropped when deriving a short name.
SHORT_NAME_STOP_WORDS = frozenset({"id"})

_RESERVED_BY_LOWER = {k.lower(): v for k, v in PYTHON_RESERVED_NAMES.items()}


class IdentifierResolver:
    """
    Resolve SQL names to safe Python identifiers.

    Args:
        registry: Run-scoped naming registry used for short names
        conflict_suffix: Appended to short names that collide with a
            template-reserved word, and to custom reserved words
        reserved_words: Additional template-reserved names
        initialisms: Additional initialisms kept upper-case in Pascal/camel output

    Example:
        >>> resolver = IdentifierResolver(NamingRegistry())
        >>> resolver.resolve("user_accounts", "pascal")
        'UserAccounts'
        >>> resolver.short_name("UserAccount")
        'ua'
    """

    def __init__(
        self,
        registry: NamingRegistry,
        conflict_suffix: str = "Val",
        reserved_words: Iterable[str] = (),
        initialisms: Iterable[str] = (),
    ):
        self.registry = registry
        self.conflict_suffix = conflict_suffix
        self.custom_reserved = frozenset(w for w in reserved_words if w)
        self.template_reserved = TEMPLATE_RESERVED_NAMES | self.custom_reserved
        self.initialisms = DEFAULT_INITIALISMS | frozenset(
            i.upper() for i in initialisms if i
        )

    def convert(self, name: str, style: Style) -> str:
        """Case-convert name without reserved-word substitution."""
        if style == "snake":
            return to_snake(name)
        if style == "pascal":
            return to_pascal(name, self.initialisms)
        if style == "camel":
            return to_camel(name, self.initialisms)
        raise ValueError(f"unknown identifier style {style!r}")

    def resolve(self, sql_name: str, style: Style = "snake") -> str:
        return self.check_reserved(self.convert(sql_name, style))

    def check_reserved(self, name: str) -> str:
        """Return the substitute for a reserved name, or name itself.

        Lookup is case-sensitive on the already-cased form.
        """
        substitute = PYTHON_RESERVED_NAMES.get(name)
        if substitute is not None:
            return substitute
        if name in self.custom_reserved:
            return name + self.conflict_suffix
        return name

    def short_name(self, type_name: str) -> str:
        """
        Short, collision-free abbreviation of a type name.

        The first character of every word (excluding ``id``) is lower-cased
        and concatenated, so ``UserAccount`` becomes ``ua``. The derived value
        is registered on first use; a later call returns the registered value.
        Names colliding with a template-reserved word get the conflict suffix.
        """
        name = self.registry.get(type_name)
        if name is None:
            letters = [
                word[:1]
                for word in to_snake(type_name).split("_")
                if word and word not in SHORT_NAME_STOP_WORDS
            ]
            derived = "".join(letters) or type_name[:1].lower()
            name = self.registry.register(type_name, self.check_reserved(derived))
        if name in self.template_reserved:
            name += self.conflict_suffix
        return name

    def param_name(self, identifier: str) -> str:
        """
        Accessor parameter name for a resolved field identifier.

        The first word is lower-cased and the remainder kept, then reserved
        names are substituted case-insensitively.
        """
        words = split_words(identifier)
        if not words:
            return identifier
        first = words[0]
        start = identifier.find(first)
        name = identifier[:start] + first.lower() + identifier[start + len(first):]
        substitute = _RESERVED_BY_LOWER.get(name.lower())
        if substitute is not None:
            return substitute
        if name in self.custom_reserved:
            return name + self.conflict_suffix
        return name
