"""Tests for the ingredient alias table."""

from app.services.search.synonyms import DEFAULT_ALIAS_GROUPS, SynonymResolver, default_resolver


def test_eggplant_aliases():
    aliases = default_resolver.resolve("eggplant")
    assert "aubergine" in aliases
    assert "brinjal" in aliases
    assert "eggplant" not in aliases


def test_courgette_aliases():
    assert "zucchini" in default_resolver.resolve("courgette")


def test_unknown_name_returns_empty_set():
    assert default_resolver.resolve("unobtainium") == frozenset()
    assert default_resolver.resolve("") == frozenset()


def test_default_table_is_symmetric():
    for group in DEFAULT_ALIAS_GROUPS:
        for name in group:
            for other in group:
                if other != name:
                    assert other in default_resolver.resolve(name)


def test_custom_groups_are_canonicalized():
    resolver = SynonymResolver([("Spring Onion!", "Scallion"), ("Rocket", "arugula")])
    assert resolver.resolve("spring onion") == frozenset({"scallion"})
    assert resolver.resolve("scallion") == frozenset({"spring onion"})
    assert resolver.resolve("eggplant") == frozenset()


def test_overlapping_groups_merge():
    resolver = SynonymResolver([("coriander", "cilantro"), ("coriander", "dhania")])
    assert resolver.resolve("coriander") == frozenset({"cilantro", "dhania"})
    assert resolver.resolve("cilantro") == frozenset({"coriander"})
