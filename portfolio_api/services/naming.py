"""Slug and display-name helpers shared by records and catalog import"""

import re

from slugify import slugify

_WORD_SPLIT = re.compile(r"[\s_-]+")


def make_slug(value: str) -> str:
    return slugify(value or "")


def title_case(value: str) -> str:
    """
    Turn a folder name into a display name.

    Splits on whitespace, hyphens and underscores and upper-cases the first
    letter of each word, leaving the rest of the word untouched.
    """
    words = [word for word in _WORD_SPLIT.split(value or "") if word]
    return " ".join(word[0].upper() + word[1:] for word in words)
