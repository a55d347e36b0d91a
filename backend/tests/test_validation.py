"""
Tests for request sanitizing and the per-operation rule sets.
"""

import pytest

from bookshelf.validation import BOOK_BODY, BOOK_ID, LOGIN, REGISTER, Field, Rule, RuleSet
from bookshelf.validation.rules import escape, is_email, normalize_email, not_empty, trim


def _messages(result, field=None):
    return [error.message for error in result.errors if field is None or error.field == field]


class TestSanitizers:
    def test_trim(self):
        assert trim("  Dune \n") == "Dune"
        assert trim(None) == ""
        assert trim(42) == 42

    def test_escape_replaces_html_characters(self):
        assert escape("<b>Tom & Jerry's</b>") == "&lt;b&gt;Tom &amp; Jerry&#x27;s&lt;&#x2F;b&gt;"
        assert escape('say "hi"') == "say &quot;hi&quot;"
        assert escape(7) == 7

    def test_normalize_email(self):
        assert normalize_email("John.Doe@Example.COM") == "john.doe@example.com"
        assert normalize_email("J.Doe+books@googlemail.com") == "jdoe@gmail.com"
        assert normalize_email("Reader+spam@Outlook.com") == "reader@outlook.com"
        assert normalize_email("reader+news@hotmail.co.uk") == "reader@hotmail.co.uk"
        assert normalize_email("reader+a@icloud.com") == "reader@icloud.com"
        assert normalize_email("reader-lists@yahoo.com") == "reader@yahoo.com"
        assert normalize_email("reader@ya.ru") == "reader@yandex.ru"
        assert normalize_email("first.last+x@example.com") == "first.last+x@example.com"
        assert normalize_email("+tag@outlook.com") == "+tag@outlook.com"
        assert normalize_email("not-an-email") == "not-an-email"

    def test_is_email(self):
        assert is_email("reader@example.com")
        assert not is_email("reader@localhost")
        assert not is_email("reader.example.com")
        assert not is_email("")

    @pytest.mark.parametrize(
        "email",
        ["john..doe@example.com", ".john@example.com", "john.@example.com", "a" * 70 + "@example.com"],
    )
    def test_is_email_rejects_malformed_local_part(self, email):
        assert not is_email(email)


class TestRuleSet:
    def test_every_failing_rule_is_reported_in_declaration_order(self):
        rules = RuleSet(
            (
                Field("a", rules=(Rule(not_empty, "a is required"), Rule(lambda v: v == "x", "a must be x"))),
                Field("b", rules=(Rule(not_empty, "b is required"),)),
            )
        )
        result = rules.validate({"a": "", "b": ""})

        assert [(e.field, e.message) for e in result.errors] == [
            ("a", "a is required"),
            ("a", "a must be x"),
            ("b", "b is required"),
        ]

    def test_validate_does_not_mutate_input(self):
        data = {"title": "  1984  ", "author": "Orwell"}
        result = BOOK_BODY.validate(data)

        assert result.values["title"] == "1984"
        assert data["title"] == "  1984  "

    def test_optional_field_skips_rules_when_empty(self):
        result = REGISTER.validate(
            {"username": "reader", "email": "reader@example.com", "password": "Abcdef1!", "first_name": "  "}
        )

        assert result.is_valid
        assert result.values["first_name"] is None
        assert result.values["last_name"] is None


class TestBookRules:
    def test_valid_body(self):
        result = BOOK_BODY.validate({"title": " 1984 ", "author": " George Orwell "})

        assert result.is_valid
        assert result.values == {"title": "1984", "author": "George Orwell"}

    def test_missing_fields(self):
        result = BOOK_BODY.validate({})

        assert _messages(result) == ["Title is required", "Author is required"]

    def test_non_string_title(self):
        result = BOOK_BODY.validate({"title": 1984, "author": "Orwell"})

        assert _messages(result, "title") == ["Title must be string"]

    def test_length_limit(self):
        assert BOOK_BODY.validate({"title": "x" * 150, "author": "a"}).is_valid

        result = BOOK_BODY.validate({"title": "x" * 151, "author": "a"})
        assert _messages(result, "title") == ["Title must not exceed 150 characters long"]

    @pytest.mark.parametrize("bookid", ["1", " 42 ", "+7", "007"])
    def test_valid_book_ids(self, bookid):
        assert BOOK_ID.validate({"bookid": bookid}).is_valid

    @pytest.mark.parametrize("bookid", ["0", "-3", "abc", "1.5", "99999999999"])
    def test_invalid_book_ids(self, bookid):
        result = BOOK_ID.validate({"bookid": bookid})

        assert _messages(result) == ["bookid must be positive integer"]

    def test_empty_book_id(self):
        result = BOOK_ID.validate({"bookid": "  "})

        assert _messages(result) == ["bookid is required", "bookid must be positive integer"]


class TestRegisterRules:
    def test_strong_password_passes(self):
        result = REGISTER.validate({"username": "reader", "email": "reader@example.com", "password": "Abcdef1!"})

        assert result.is_valid

    def test_weak_password_lists_each_missing_class(self):
        result = REGISTER.validate({"username": "reader", "email": "reader@example.com", "password": "abcdefgh"})

        assert _messages(result, "password") == [
            "Password must contain at least one uppercase letter",
            "Password must contain at least one number",
            "Password must contain at least one special character",
        ]

    def test_short_password(self):
        result = REGISTER.validate({"username": "reader", "email": "reader@example.com", "password": "Ab1!"})

        assert _messages(result, "password") == ["Password must be at least 8 characters long"]

    @pytest.mark.parametrize("username", ["ab", "a" * 21])
    def test_username_length(self, username):
        result = REGISTER.validate({"username": username, "email": "reader@example.com", "password": "Abcdef1!"})

        assert _messages(result, "username") == ["username must be between 3 and 20 characters long"]

    def test_missing_email(self):
        result = REGISTER.validate({"username": "reader", "password": "Abcdef1!"})

        assert _messages(result, "email") == ["Email address is not valid", "Email address is required"]

    @pytest.mark.parametrize("email", ["john..doe@example.com", "a" * 70 + "@example.com"])
    def test_malformed_email(self, email):
        result = REGISTER.validate({"username": "reader", "email": email, "password": "Abcdef1!"})

        assert _messages(result, "email") == ["Email address is not valid"]

    def test_email_is_normalized(self):
        result = REGISTER.validate({"username": "reader", "email": " Reader@Example.com ", "password": "Abcdef1!"})

        assert result.values["email"] == "reader@example.com"


class TestLoginRules:
    def test_missing_credentials(self):
        result = LOGIN.validate({})

        assert [(e.field, e.message) for e in result.errors] == [
            ("username", "username is required"),
            ("password", "password is required"),
        ]

    def test_password_is_not_escaped(self):
        result = LOGIN.validate({"username": "reader", "password": "Abc&def1!"})

        assert result.values["password"] == "Abc&def1!"
