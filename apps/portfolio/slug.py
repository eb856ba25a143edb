"""
Slug generation for project titles.

Slugs are the public identifier of a project (routes, lookups) and are
derived from the title on create and on rename.
"""
import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """
    Turn a title into a URL-safe slug.

    Lower-cases the title, collapses every run of characters outside
    [a-z0-9] into one hyphen and strips hyphens from both ends.
    Never fails: an empty or all-symbol title yields "".

    >>> slugify("Complex Title! 123")
    'complex-title-123'
    """
    return _NON_ALNUM.sub("-", title.lower()).strip("-")
