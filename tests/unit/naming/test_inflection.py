"""Unit tests for singular/plural inflection."""

import pytest

from schemabind.naming import pluralize, singularize


class TestSingularize:
    """Tests for singularize."""

    @pytest.mark.parametrize(
        "plural,singular",
        [
            ("users", "user"),
            ("addresses", "address"),
            ("categories", "category"),
            ("boxes", "box"),
            ("movies", "movie"),
            ("people", "person"),
            ("statuses", "status"),
        ],
    )
    def test_rules(self, plural, singular):
        """Plural table words should become their singular form."""
        assert singularize(plural) == singular

    def test_uncountable_unchanged(self):
        """Uncountable words should be returned unchanged."""
        assert singularize("data") == "data"
        assert singularize("series") == "series"

    def test_already_singular(self):
        """Singular words should be left alone."""
        assert singularize("status") == "status"
        assert singularize("person") == "person"

    def test_only_last_word(self):
        """Only the last underscore separated word is inflected."""
        assert singularize("users_addresses") == "users_address"


class TestPluralize:
    """Tests for pluralize."""

    @pytest.mark.parametrize(
        "singular,plural",
        [
            ("user", "users"),
            ("category", "categories"),
            ("box", "boxes"),
            ("status", "statuses"),
            ("child", "children"),
        ],
    )
    def test_rules(self, singular, plural):
        """Singular words should take their plural form."""
        assert pluralize(singular) == plural

    def test_case_preserved(self):
        """The capitalisation of the input should be kept."""
        assert pluralize("Category") == "Categories"
        assert pluralize("Person") == "People"
