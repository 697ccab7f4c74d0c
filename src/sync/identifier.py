"""Parsing of cargo installation identifiers.

cargo keys every entry of ``.crates2.json`` with a composite string such as
``ripgrep 14.1.0 (registry+https://github.com/rust-lang/crates.io-index)``.
"""

from __future__ import annotations

from .models import MalformedIdentifier, ParsedIdentifier, SourceKind, parse_version

GIT_PREFIX = "git+"
PATH_PREFIX = "path+file://"


def _strip_parens(origin: str) -> str:
    """Remove one leading '(' and one trailing ')' if present."""
    if origin.startswith("("):
        origin = origin[1:]
    if origin.endswith(")"):
        origin = origin[:-1]
    return origin


def parse_identifier(raw: str) -> ParsedIdentifier:
    """Split an installation identifier into name, version and source.

    Only the first two spaces separate tokens, so a path with spaces inside
    the parenthesized origin stays intact.

    Raises:
        MalformedIdentifier: Fewer than three tokens.
        InvalidVersion: The second token is not a semantic version.
    """
    tokens = raw.split(" ", 2)
    if len(tokens) < 3:
        raise MalformedIdentifier(
            f"Expected '<name> <version> (<source>)', got '{raw}'"
        )
    name, version_str, origin = tokens
    version = parse_version(version_str)
    origin = _strip_parens(origin)

    if origin.startswith(GIT_PREFIX):
        return ParsedIdentifier(name, version, SourceKind.GIT)
    if origin.startswith(PATH_PREFIX):
        return ParsedIdentifier(name, version, SourceKind.LOCAL, origin[len(PATH_PREFIX):])
    return ParsedIdentifier(name, version, SourceKind.REGISTRY)
