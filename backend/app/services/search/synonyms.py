"""
Static ingredient alias table.
Each group lists names for the same ingredient; every member of a group is an
alias of every other member, so the table is symmetric by construction.
"""

from typing import Iterable

from app.services.search.canonicalize import canonicalize

DEFAULT_ALIAS_GROUPS: tuple[tuple[str, ...], ...] = (
    ("eggplant", "aubergine", "brinjal"),
    ("zucchini", "courgette"),
    ("bell pepper", "capsicum", "sweet pepper"),
    ("cilantro", "coriander", "fresh coriander"),
    ("scallion", "green onion", "spring onion"),
    ("arugula", "rocket", "rucola"),
    ("beetroot", "beet"),
    ("chickpea", "garbanzo bean"),
    ("powdered sugar", "icing sugar", "confectioners sugar"),
    ("heavy cream", "double cream"),
    ("cornstarch", "cornflour"),
    ("shrimp", "prawn"),
)


class SynonymResolver:
    """Read-only alias lookup keyed by canonical name."""

    def __init__(self, alias_groups: Iterable[Iterable[str]] = DEFAULT_ALIAS_GROUPS) -> None:
        table: dict[str, set[str]] = {}
        for group in alias_groups:
            names = {canonicalize(name) for name in group} - {""}
            for name in names:
                table.setdefault(name, set()).update(names - {name})
        self._table = {name: frozenset(aliases) for name, aliases in table.items()}

    def resolve(self, canonical: str) -> frozenset[str]:
        return self._table.get(canonical, frozenset())


default_resolver = SynonymResolver()
