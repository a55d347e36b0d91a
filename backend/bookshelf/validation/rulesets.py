"""Rule sets for each inbound operation."""
from __future__ import annotations

from .rules import (
    Field,
    Rule,
    RuleSet,
    escape,
    is_email,
    is_positive_int,
    is_string,
    length_between,
    matches,
    max_length,
    min_length,
    normalize_email,
    not_empty,
    required_string,
    trim,
)

TITLE_MAX_LENGTH = 150
AUTHOR_MAX_LENGTH = 150
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 8
NAME_MAX_LENGTH = 100
PASSWORD_SPECIAL_CHARACTERS = "!@#$%&?*"

BOOK_BODY = RuleSet(
    (
        Field(
            "title",
            sanitizers=(trim, escape),
            rules=(
                *required_string("title", "Title"),
                Rule(
                    max_length(TITLE_MAX_LENGTH),
                    f"Title must not exceed {TITLE_MAX_LENGTH} characters long",
                ),
            ),
        ),
        Field(
            "author",
            sanitizers=(trim, escape),
            rules=(
                *required_string("author", "Author"),
                Rule(
                    max_length(AUTHOR_MAX_LENGTH),
                    f"Author must not exceed {AUTHOR_MAX_LENGTH} characters long",
                ),
            ),
        ),
    )
)

BOOK_ID = RuleSet(
    (
        Field(
            "bookid",
            sanitizers=(trim, escape),
            rules=(
                Rule(not_empty, "bookid is required"),
                Rule(is_positive_int, "bookid must be positive integer"),
            ),
        ),
    )
)

REGISTER = RuleSet(
    (
        Field(
            "username",
            sanitizers=(trim, escape),
            rules=(
                *required_string("username"),
                Rule(
                    length_between(USERNAME_MIN_LENGTH, USERNAME_MAX_LENGTH),
                    f"username must be between {USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH} characters long",
                ),
            ),
        ),
        Field(
            "email",
            sanitizers=(trim, normalize_email),
            rules=(
                Rule(is_email, "Email address is not valid"),
                Rule(not_empty, "Email address is required"),
            ),
        ),
        Field(
            "password",
            sanitizers=(trim,),
            rules=(
                *required_string("password", "Password"),
                Rule(
                    min_length(PASSWORD_MIN_LENGTH),
                    f"Password must be at least {PASSWORD_MIN_LENGTH} characters long",
                ),
                Rule(matches(r"[A-Z]"), "Password must contain at least one uppercase letter"),
                Rule(matches(r"[a-z]"), "Password must contain at least one lowercase letter"),
                Rule(matches(r"[0-9]"), "Password must contain at least one number"),
                Rule(
                    matches(f"[{PASSWORD_SPECIAL_CHARACTERS}]"),
                    "Password must contain at least one special character",
                ),
            ),
        ),
        Field(
            "first_name",
            sanitizers=(trim, escape),
            rules=(
                Rule(is_string, "first_name must be string"),
                Rule(max_length(NAME_MAX_LENGTH), f"first_name must not exceed {NAME_MAX_LENGTH} characters long"),
            ),
            optional=True,
        ),
        Field(
            "last_name",
            sanitizers=(trim, escape),
            rules=(
                Rule(is_string, "last_name must be string"),
                Rule(max_length(NAME_MAX_LENGTH), f"last_name must not exceed {NAME_MAX_LENGTH} characters long"),
            ),
            optional=True,
        ),
    )
)

LOGIN = RuleSet(
    (
        Field("username", sanitizers=(trim, escape), rules=required_string("username")),
        Field("password", sanitizers=(trim,), rules=required_string("password")),
    )
)
