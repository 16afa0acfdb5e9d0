"""Identifier splitting helpers shared by the convention resolvers."""

from __future__ import annotations

import re

from .types import NAMESPACE_SEPARATOR

# Boundary between a lowercase letter or digit and an uppercase letter: "FooBar2Baz" -> Foo|Bar2|Baz
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")

# Same boundary, but a run of capitals stays together until the last one
# starts a new word: "HTMLView" -> HTML|View
_GROUPED_CAMEL_BOUNDARY = re.compile(r"(?<=[^A-Z_])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][^A-Z_])")


def split_camel_case(name: str) -> list[str]:
    """Split a name at lowercase-or-digit to uppercase transitions.

    Example:
        >>> split_camel_case("DatabaseDriverMysql")
        ['Database', 'Driver', 'Mysql']
        >>> split_camel_case("Foo")
        ['Foo']
    """
    return _CAMEL_BOUNDARY.split(name)


def split_camel_case_grouped(name: str) -> list[str]:
    """Split a name into words, keeping runs of capitals together.

    Example:
        >>> split_camel_case_grouped("ArticlesLatest")
        ['Articles', 'Latest']
        >>> split_camel_case_grouped("HTMLView")
        ['HTML', 'View']
    """
    return _GROUPED_CAMEL_BOUNDARY.split(name)


def strip_leading_separator(identifier: str) -> str:
    """Remove one leading namespace separator, if present.

    Example:
        >>> strip_leading_separator(".Acme.Blog")
        'Acme.Blog'
    """
    if identifier and identifier[0] == NAMESPACE_SEPARATOR:
        return identifier[1:]
    return identifier


__all__ = [
    "split_camel_case",
    "split_camel_case_grouped",
    "strip_leading_separator",
]
