"""
Fluent element queries.

Public API remains small: `ElementQuery` plus the tag vocabulary used to build queries.
"""

from .criteria import AttributeCriterion, SearchCriteria, TextCriterion
from .query import ElementQuery
from .tags import JavaScriptEvent, TagAttribute, TagName

__all__ = [
    "AttributeCriterion",
    "ElementQuery",
    "JavaScriptEvent",
    "SearchCriteria",
    "TagAttribute",
    "TagName",
    "TextCriterion",
]
