from enum import Enum
from typing import Union


class TagAttribute(str, Enum):
    ID = "id"
    NAME = "name"
    CLASS = "class"
    VALUE = "value"
    ON_CLICK = "onclick"
    SRC = "src"
    TITLE = "title"
    HREF = "href"
    TYPE = "type"
    STYLE = "style"
    REL = "rel"
    DATA_POLICY_ID = "data-policy-id"


class TagName(str, Enum):
    TEXT_AREA = "textarea"
    INPUT = "input"
    LINK = "a"
    SPAN = "span"
    INLINE_FRAME = "iframe"
    DIV = "div"
    IMAGE = "img"
    SELECT = "select"


class JavaScriptEvent(str, Enum):
    KEY_UP = "keyup"
    CLICK = "click"
    CHANGE = "change"


# Tags cleared with WebElement.clear(); everything else gets select-all + delete.
CLEARABLE_TAGS = frozenset({TagName.INPUT.value, TagName.TEXT_AREA.value})


def tag_value(tag: Union[TagName, str]) -> str:
    """Canonical lower-case tag name for an enum member or a plain string."""
    if isinstance(tag, TagName):
        return tag.value
    return str(tag).lower()


def attribute_value(attribute: Union[TagAttribute, str]) -> str:
    if isinstance(attribute, TagAttribute):
        return attribute.value
    return str(attribute)
