"""Resource and type name inflection."""

from __future__ import annotations

import re

__all__ = ["classify", "controller_name", "pluralize", "singularize", "underscore"]

_UNCOUNTABLE = frozenset({"equipment", "information", "news", "series", "species", "data"})

_IRREGULAR = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "mouse": "mice",
}
_IRREGULAR_PLURALS = {plural: singular for singular, plural in _IRREGULAR.items()}

# (pattern, replacement), first match wins.
_PLURAL_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"(quiz)$"), r"\1zes"),
    (re.compile(r"(matr|vert|ind)(?:ix|ex)$"), r"\1ices"),
    (re.compile(r"(x|ch|ss|sh|s|z)$"), r"\1es"),
    (re.compile(r"([^aeiouy])y$"), r"\1ies"),
    (re.compile(r"([lr])f$"), r"\1ves"),
    (re.compile(r"$"), "s"),
]

_SINGULAR_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"(quiz)zes$"), r"\1"),
    (re.compile(r"(matr)ices$"), r"\1ix"),
    (re.compile(r"(vert|ind)ices$"), r"\1ex"),
    (re.compile(r"(us)es$"), r"\1"),
    (re.compile(r"(x|ch|ss|sh|z)es$"), r"\1"),
    (re.compile(r"([^aeiouy])ies$"), r"\1y"),
    (re.compile(r"([lr])ves$"), r"\1f"),
    (re.compile(r"(ss|us)$"), r"\1"),
    (re.compile(r"s$"), ""),
]

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def _last_word(word: str) -> tuple[str, str]:
    head, sep, tail = word.rpartition("_")
    return head + sep, tail


def pluralize(word: str) -> str:
    """Return the plural form of an underscored word (``"note"`` -> ``"notes"``).

    Only the last underscore-separated segment is inflected, so
    ``"blog_post"`` becomes ``"blog_posts"``.
    """
    prefix, tail = _last_word(word)
    if not tail or tail in _UNCOUNTABLE:
        return word
    if tail in _IRREGULAR:
        return prefix + _IRREGULAR[tail]
    if tail in _IRREGULAR_PLURALS:
        return word
    for pattern, replacement in _PLURAL_RULES:
        if pattern.search(tail):
            return prefix + pattern.sub(replacement, tail, count=1)
    return word  # pragma: no cover


def singularize(word: str) -> str:
    """Return the singular form of an underscored word (``"people"`` -> ``"person"``)."""
    prefix, tail = _last_word(word)
    if not tail or tail in _UNCOUNTABLE:
        return word
    if tail in _IRREGULAR_PLURALS:
        return prefix + _IRREGULAR_PLURALS[tail]
    if tail in _IRREGULAR:
        return word
    for pattern, replacement in _SINGULAR_RULES:
        if pattern.search(tail):
            return prefix + pattern.sub(replacement, tail, count=1)
    return word


def underscore(name: str) -> str:
    """Convert ``CamelCase`` to ``snake_case`` (``"BlogPost"`` -> ``"blog_post"``)."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def classify(name: str) -> str:
    """Convert a (possibly plural) underscored name to a class name.

    Example::

        classify("blog_posts")  # "BlogPost"
    """
    return "".join(part.capitalize() for part in singularize(name).split("_"))


def controller_name(cls: type) -> str:
    """Return the plural resource name for a controller class.

    ``NotesController`` -> ``"notes"``, ``BlogPostsController`` ->
    ``"blog_posts"``.
    """
    name = cls.__name__
    if name.endswith("Controller") and name != "Controller":
        name = name[: -len("Controller")]
    return underscore(name)
