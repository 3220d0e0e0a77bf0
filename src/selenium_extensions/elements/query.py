import logging
import time
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, TypeVar, Union

from selenium.common.exceptions import WebDriverException
from selenium.webdriver.common.keys import Keys
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support.select import Select

from ..core.errors import (
    AmbiguousResultError,
    ConfigurationError,
    ElementNotFoundError,
    OutOfRangeError,
    PreconditionViolation,
)
from ..utils.helpers import to_int
from ..utils.wait_helper import spin_wait, try_run
from .criteria import AttributeCriterion, SearchCriteria, TextCriterion
from .tags import CLEARABLE_TAGS, JavaScriptEvent, TagAttribute, TagName, attribute_value, tag_value

if TYPE_CHECKING:
    from ..core.browser_manager import Browser

logger = logging.getLogger(__name__)

T = TypeVar("T")

EXISTS_POLL_INTERVAL_SECONDS = 0.2
NOT_CLICKABLE_RETRY_DELAY_SECONDS = 2.0
SET_CHECK_ATTEMPTS = 10

SET_VALUE_SCRIPT = "arguments[0].value = arguments[1];"
INNER_HTML_SCRIPT = "return arguments[0].innerHTML;"
# Goes through jQuery when the page has it so handlers bound with $(...).on() fire.
FIRE_EVENT_SCRIPT = (
    "var el = arguments[0], name = arguments[1];"
    "if (typeof window.jQuery === 'function') { window.jQuery(el).trigger(name); return; }"
    "el.dispatchEvent(new Event(name, {bubbles: true, cancelable: true}));"
)


class ElementQuery:
    """
    Fluent, immutable element query bound to a Browser session.

    Criterion methods (by_id, by_tag_name, first, ...) return a new query;
    terminal members (exists, count, text, click, ...) resolve it against the
    live page, or against a snapshot taken with cache_search_result().

        login = browser.element().by_tag_name(TagName.INPUT).by_name("login")
        login.text = "admin"
        browser.element().by_text("Sign in").click()
    """

    __slots__ = ("_browser", "_criteria", "_search_cache", "_snapshot_criteria")

    def __init__(
        self,
        browser: "Browser",
        criteria: Optional[SearchCriteria] = None,
        search_cache: Optional[Sequence[WebElement]] = None,
        snapshot_criteria: Optional[SearchCriteria] = None,
    ):
        self._browser = browser
        self._criteria = criteria if criteria is not None else SearchCriteria()
        self._search_cache = tuple(search_cache) if search_cache is not None else None
        # Criteria the snapshot was resolved under; later criteria still filter it.
        self._snapshot_criteria = snapshot_criteria if snapshot_criteria is not None else self._criteria

    def _derive(self, criteria: SearchCriteria) -> "ElementQuery":
        return ElementQuery(self._browser, criteria, self._search_cache, self._snapshot_criteria)

    @property
    def criteria(self) -> SearchCriteria:
        return self._criteria

    @property
    def is_cached(self) -> bool:
        return self._search_cache is not None

    # -------- criteria --------

    def by_attribute(self, attribute: Union[TagAttribute, str], value: Union[str, int], exact_match: bool = True) -> "ElementQuery":
        criterion = AttributeCriterion(attribute_value(attribute), str(value), exact_match)
        return self._derive(self._criteria.with_attribute(criterion))

    def by_id(self, element_id: Union[str, int], exact_match: bool = True) -> "ElementQuery":
        return self.by_attribute(TagAttribute.ID, element_id, exact_match)

    def by_name(self, name: str, exact_match: bool = True) -> "ElementQuery":
        return self.by_attribute(TagAttribute.NAME, name, exact_match)

    def by_class(self, class_name: str, exact_match: bool = True) -> "ElementQuery":
        return self.by_attribute(TagAttribute.CLASS, class_name, exact_match)

    def by_title(self, title: str, exact_match: bool = True) -> "ElementQuery":
        return self.by_attribute(TagAttribute.TITLE, title, exact_match)

    def by_href(self, href: str, exact_match: bool = True) -> "ElementQuery":
        return self.by_attribute(TagAttribute.HREF, href, exact_match)

    def by_type(self, type_name: str, exact_match: bool = True) -> "ElementQuery":
        return self.by_attribute(TagAttribute.TYPE, type_name, exact_match)

    def by_tag_name(self, tag: Union[TagName, str]) -> "ElementQuery":
        return self._derive(self._criteria.with_tag(tag_value(tag)))

    def by_xpath(self, xpath: str) -> "ElementQuery":
        return self._derive(self._criteria.with_xpath(xpath))

    def by_text(self, text: str, exact_match: bool = True) -> "ElementQuery":
        return self._derive(self._criteria.with_text(TextCriterion(text, exact_match)))

    def by_index(self, index: int) -> "ElementQuery":
        return self._derive(self._criteria.with_index(index))

    def first(self) -> "ElementQuery":
        return self.by_index(0)

    def last(self) -> "ElementQuery":
        return self.by_index(-1)

    def include_hidden(self) -> "ElementQuery":
        return self._derive(self._criteria.with_hidden())

    # -------- snapshot --------

    def cache_search_result(self) -> "ElementQuery":
        """Returns a copy of this query that reads from a snapshot of the current matches."""
        return ElementQuery(self._browser, self._criteria, self.find_elements(), self._criteria)

    def clear_search_result_cache(self) -> "ElementQuery":
        return ElementQuery(self._browser, self._criteria)

    # -------- resolution --------

    def find_elements(self) -> List[WebElement]:
        """
        Resolves the criteria, ignoring the positional index.

        A snapshot stands in for the live lookup and is narrowed by any
        criteria added after it was taken.

        Returns:
            List[WebElement]: The matches in document order.

        Raises:
            ConfigurationError: If no criterion produced a primary selector.
        """
        if self._search_cache is not None:
            return self._criteria.added_since(self._snapshot_criteria).refine(self._search_cache)

        primary = self._criteria.primary_selector
        if primary is None:
            raise ConfigurationError("No search criteria were specified.", criteria=self.describe())

        found = self._browser.find_elements(primary)
        result = self._criteria.refine(found)
        logger.debug(f"{primary[0]}={primary[1]!r}: {len(found)} found, {len(result)} after filters ({self.describe()})")
        return result

    def find_single(self) -> WebElement:
        """
        Resolves the criteria to exactly one element.

        Raises:
            ElementNotFoundError: If nothing matches.
            OutOfRangeError: If the positional index is outside the matches.
            AmbiguousResultError: If several elements match and no index was given.
        """
        elements = self.find_elements()
        index = self._criteria.index

        if not elements:
            raise ElementNotFoundError("Element was not found.", criteria=self.describe())

        if index is not None:
            try:
                return elements[index]
            except IndexError:
                raise OutOfRangeError(
                    f"Index {index} is out of range for {len(elements)} element(s).",
                    index=index,
                    count=len(elements),
                    criteria=self.describe(),
                ) from None

        if len(elements) > 1:
            raise AmbiguousResultError(
                f"Found {len(elements)} elements where one was expected; use by_index(), first() or last().",
                count=len(elements),
                criteria=self.describe(),
            )
        return elements[0]

    # -------- common properties --------

    @property
    def count(self) -> int:
        return len(self.find_elements())

    @property
    def enabled(self) -> bool:
        return self.find_single().is_enabled()

    @property
    def displayed(self) -> bool:
        return self.find_single().is_displayed()

    @property
    def selected(self) -> bool:
        return self.find_single().is_selected()

    @property
    def text(self) -> Optional[str]:
        """The element text, or its value attribute when the text is empty (form fields)."""
        element = self.find_single()
        return element.text or element.get_attribute(TagAttribute.VALUE.value)

    @text.setter
    def text(self, value: Optional[str]) -> None:
        self.set_text(value)

    @property
    def text_int(self) -> int:
        return to_int(self.text)

    @text_int.setter
    def text_int(self, value: int) -> None:
        self.set_text(str(value))

    @property
    def inner_html(self) -> str:
        return str(self._browser.execute_script(INNER_HTML_SCRIPT, self.find_single()))

    def get_attribute(self, attribute: Union[TagAttribute, str]) -> Optional[str]:
        return self.find_single().get_attribute(attribute_value(attribute))

    # -------- common methods --------

    def exists(self, timeout: Optional[float] = None) -> bool:
        """
        Checks whether at least one element matches.

        Args:
            timeout (float, optional): Seconds to keep polling (every 200 ms) for a match.
                                       None checks once.
        """
        if timeout is None:
            return bool(self.find_elements())
        return spin_wait(self.exists, timeout, EXISTS_POLL_INTERVAL_SECONDS)

    def set_text(self, value: Optional[str]) -> None:
        element = self.find_single()

        if (element.tag_name or "").lower() in CLEARABLE_TAGS:
            element.clear()
        else:
            element.send_keys(Keys.CONTROL + "a")
            element.send_keys(Keys.DELETE)

        if not value:
            return

        self._browser.execute_script(SET_VALUE_SCRIPT, element, value)

        result = try_run(lambda: self._fire_event(element, JavaScriptEvent.KEY_UP))
        if not result:
            logger.debug(f"keyup after setting text was not delivered: {result.error}")

    def click(self, use_native_click: bool = False) -> None:
        """
        Clicks the element.

        By default a synthetic click event is dispatched, except on links which
        always get a native click. A native click rejected as "not clickable"
        is retried once after a short pause.
        """
        element = self.find_single()
        self._ensure_enabled(element)

        if not use_native_click and (element.tag_name or "").lower() != TagName.LINK.value:
            self._fire_event(element, JavaScriptEvent.CLICK)
            return

        try:
            element.click()
        except WebDriverException as e:
            if "not clickable" not in (e.msg or str(e)):
                raise
            logger.info(f"Element not clickable yet, retrying in {NOT_CLICKABLE_RETRY_DELAY_SECONDS}s ({self.describe()})")
            time.sleep(NOT_CLICKABLE_RETRY_DELAY_SECONDS)
            element.click()

    def send_keys(self, keys: str) -> None:
        self.find_single().send_keys(keys)

    def set_check(self, value: bool, use_native_click: bool = False) -> None:
        """
        Clicks a checkbox or radio button until its checked state equals `value`.

        Raises:
            PreconditionViolation: If the element is disabled or never reaches the state.
        """
        self._ensure_enabled(self.find_single())

        for attempt in range(SET_CHECK_ATTEMPTS):
            if self.selected == value:
                return
            logger.debug(f"set_check({value}) attempt {attempt + 1}/{SET_CHECK_ATTEMPTS}")
            self.click(use_native_click)

        if self.selected != value:
            raise PreconditionViolation(
                f"Checked state did not become {value} after {SET_CHECK_ATTEMPTS} clicks.",
                criteria=self.describe(),
            )

    def select_by_value(self, value: Union[str, int]) -> None:
        self._select(str(value), by_text=False)

    def select_by_text(self, text: str) -> None:
        self._select(text, by_text=True)

    def fire_event(self, event: Union[JavaScriptEvent, str]) -> None:
        self._fire_event(self.find_single(), event)

    # -------- iteration --------

    def for_each(self, action: Callable[["ElementQuery"], object]) -> None:
        """
        Calls `action` once per match, each addressed by position.

        The matches are snapshotted first, so actions that change the page do
        not shift the remaining iterations.
        """
        cached = self.cache_search_result()
        for i in range(cached.count):
            action(cached.by_index(i))

    def select(self, transform: Callable[["ElementQuery"], T]) -> List[T]:
        result: List[T] = []
        self.for_each(lambda e: result.append(transform(e)))
        return result

    def where(self, predicate: Callable[["ElementQuery"], bool]) -> List["ElementQuery"]:
        result: List[ElementQuery] = []

        def collect(e: ElementQuery) -> None:
            if predicate(e):
                result.append(e)

        self.for_each(collect)
        return result

    def single(self, predicate: Callable[["ElementQuery"], bool]) -> "ElementQuery":
        matches = self.where(predicate)
        if not matches:
            raise ElementNotFoundError("No element satisfies the predicate.", criteria=self.describe())
        if len(matches) > 1:
            raise AmbiguousResultError(
                f"{len(matches)} elements satisfy the predicate where one was expected.",
                count=len(matches),
                criteria=self.describe(),
            )
        return matches[0]

    # -------- helpers --------

    def describe(self) -> str:
        return self._criteria.describe()

    def __repr__(self) -> str:
        cached = ", cached" if self._search_cache is not None else ""
        return f"ElementQuery({self.describe()}{cached})"

    def _ensure_enabled(self, element: WebElement) -> None:
        if not element.is_enabled():
            raise PreconditionViolation("Element is disabled.", criteria=self.describe())

    def _select(self, option: str, by_text: bool) -> None:
        if not option:
            raise ValueError("Option must not be empty.")

        element = self.find_single()
        self._ensure_enabled(element)

        if by_text:
            Select(element).select_by_visible_text(option)
        else:
            Select(element).select_by_value(option)

    def _fire_event(self, element: WebElement, event: Union[JavaScriptEvent, str]) -> None:
        name = event.value if isinstance(event, JavaScriptEvent) else str(event)
        self._browser.execute_script(FIRE_EVENT_SCRIPT, element, name)
