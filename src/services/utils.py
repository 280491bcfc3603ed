"""Shared utilities for the service layer."""
import re
import secrets
import string

_NON_WORD = re.compile(r"[^\w\-]+", re.ASCII)
_WHITESPACE = re.compile(r"\s+")
_MULTI_DASH = re.compile(r"-{2,}")

SLUG_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
SLUG_SUFFIX_LENGTH = 4


def escape_ilike(value: str) -> str:
    r"""
    Escape special LIKE/ILIKE characters so they match literally.

    `%` and `_` are wildcards and `\` is the escape character. Callers pass
    `escape="\\"` to `ilike()` so SQLite and PostgreSQL agree on the escape.
    """
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def slugify(text: str) -> str:
    """
    Convert text to a URL slug.

    Lowercases, turns whitespace runs into single hyphens, drops everything
    that is not a word character or hyphen, and trims hyphens at both ends.
    """
    slug = _WHITESPACE.sub("-", text.lower().strip())
    slug = _NON_WORD.sub("", slug)
    slug = _MULTI_DASH.sub("-", slug)
    return slug.strip("-")


def slug_with_suffix(base_slug: str) -> str:
    """Append a random 4-character suffix, used when the base slug is taken."""
    suffix = "".join(secrets.choice(SLUG_SUFFIX_ALPHABET) for _ in range(SLUG_SUFFIX_LENGTH))
    return f"{base_slug}-{suffix}" if base_slug else suffix
