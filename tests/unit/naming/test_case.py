"""Unit tests for case conversion primitives."""

import pytest

from schemabind.naming import split_words, to_camel, to_pascal, to_snake


class TestSplitWords:
    """Tests for split_words."""

    @pytest.mark.parametrize(
        "name",
        ["userAccount", "user_account", "UserAccount", "user-account", "USER_ACCOUNT"],
    )
    def test_equivalent_spellings(self, name):
        """Every spelling of the same name yields the same lower-cased words."""
        assert [w.lower() for w in split_words(name)] == ["user", "account"]

    def test_acronym_run(self):
        """An upper-case run followed by a word splits before the word."""
        assert split_words("HTTPServer") == ["HTTP", "Server"]

    def test_trailing_acronym(self):
        """A trailing acronym should be its own word."""
        assert split_words("UserAccountID") == ["User", "Account", "ID"]

    def test_plural_acronym(self):
        """A pluralised acronym should stay one word."""
        assert split_words("userIDs") == ["user", "IDs"]
        assert split_words("URLsCount") == ["URLs", "Count"]

    def test_plural_word_after_acronym(self):
        """An acronym followed by a capitalised word starting with s should split."""
        assert split_words("IDSort") == ["ID", "Sort"]

    def test_empty(self):
        """An empty name should have no words."""
        assert split_words("") == []


class TestToSnake:
    """Tests for to_snake."""

    def test_pascal(self):
        """Pascal case with an initialism should become snake case."""
        assert to_snake("UserAccountID") == "user_account_id"

    def test_already_snake(self):
        """Snake case input should be unchanged."""
        assert to_snake("user_account") == "user_account"

    def test_plural_acronym(self):
        """A pluralised acronym should not be split mid-word."""
        assert to_snake("userIDs") == "user_ids"

    def test_leading_digit_is_prefixed(self):
        """Identifiers cannot start with a digit."""
        assert to_snake("2fa").startswith("_")


class TestToPascal:
    """Tests for to_pascal."""

    def test_initialism_kept_upper(self):
        """Known initialisms should stay upper-case."""
        assert to_pascal("user_account_id") == "UserAccountID"

    def test_plain(self):
        """Plain words should be capitalised and joined."""
        assert to_pascal("user_status") == "UserStatus"

    def test_custom_initialisms(self):
        """Only the given initialisms are kept upper-case."""
        assert to_pascal("api_key", initialisms=frozenset()) == "ApiKey"
        assert to_pascal("api_key", initialisms=frozenset({"API"})) == "APIKey"


class TestToCamel:
    """Tests for to_camel."""

    def test_lower_initial(self):
        """The first word should be lower-cased, acronyms included."""
        assert to_camel("HTTPServer") == "httpServer"

    def test_snake_input(self):
        """Snake case input should keep a trailing initialism upper-case."""
        assert to_camel("user_id") == "userID"

    def test_empty(self):
        """An empty name should stay empty."""
        assert to_camel("") == ""
