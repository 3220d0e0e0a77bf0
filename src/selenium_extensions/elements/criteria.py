"""
Search criteria for ElementQuery and the in-memory refinement filters.

SearchCriteria is an immutable value: every `with_*` method returns a copy
with one more criterion, so a query can be branched without the branches
seeing each other's criteria.
"""

from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Tuple

from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webelement import WebElement

from ..core.errors import ConfigurationError
from ..utils.helpers import xpath_literal


Locator = Tuple[str, str]


@dataclass(frozen=True)
class AttributeCriterion:
    name: str
    value: str
    exact_match: bool = True

    def to_locator(self) -> Locator:
        literal = xpath_literal(self.value)
        if self.exact_match:
            return By.XPATH, f"//*[@{self.name}={literal}]"
        return By.XPATH, f"//*[contains(@{self.name}, {literal})]"

    def matches(self, element: WebElement) -> bool:
        actual = element.get_attribute(self.name)
        if actual is None:
            return False
        return actual == self.value if self.exact_match else self.value in actual

    def describe(self) -> str:
        return f"{self.name}: {self.value} ({'exact' if self.exact_match else 'contains'})"


@dataclass(frozen=True)
class TextCriterion:
    text: str
    exact_match: bool = True

    def to_locator(self) -> Locator:
        literal = xpath_literal(self.text)
        if self.exact_match:
            return By.XPATH, f"//*[text()={literal}]"
        return By.XPATH, f"//*[contains(text(), {literal})]"

    def matches(self, element: WebElement) -> bool:
        actual = element.text or ""
        if self.exact_match:
            return actual == self.text
        return self.text.casefold() in actual.casefold()

    def describe(self) -> str:
        return f"text: {self.text} ({'exact' if self.exact_match else 'contains'})"


@dataclass(frozen=True)
class SearchCriteria:
    primary_selector: Optional[Locator] = None
    xpath: Optional[str] = None
    attributes: Tuple[AttributeCriterion, ...] = ()
    tags: Tuple[str, ...] = ()
    text: Optional[TextCriterion] = None
    include_hidden: bool = False
    index: Optional[int] = None

    def _with_primary(self, locator: Locator) -> Optional[Locator]:
        # The first criterion wins; later ones only refine in memory.
        return self.primary_selector or locator

    def with_attribute(self, criterion: AttributeCriterion) -> "SearchCriteria":
        return replace(
            self,
            primary_selector=self._with_primary(criterion.to_locator()),
            attributes=self.attributes + (criterion,),
        )

    def with_tag(self, tag: str) -> "SearchCriteria":
        return replace(
            self,
            primary_selector=self._with_primary((By.TAG_NAME, tag)),
            tags=self.tags + (tag,),
        )

    def with_text(self, criterion: TextCriterion) -> "SearchCriteria":
        return replace(self, primary_selector=self._with_primary(criterion.to_locator()), text=criterion)

    def with_xpath(self, xpath: str) -> "SearchCriteria":
        if self.primary_selector is not None:
            raise ConfigurationError("XPath can be only the first search criteria.", criteria=self.describe())
        return replace(self, primary_selector=(By.XPATH, xpath), xpath=xpath)

    def with_index(self, index: int) -> "SearchCriteria":
        return replace(self, index=index)

    def with_hidden(self) -> "SearchCriteria":
        return replace(self, include_hidden=True)

    def added_since(self, base: "SearchCriteria") -> "SearchCriteria":
        """
        Filters this value holds on top of `base`, for refining a snapshot taken under `base`.

        Visibility is left as `base` resolved it, so snapshot elements are not re-checked.
        """
        return SearchCriteria(
            attributes=self.attributes[len(base.attributes):],
            tags=self.tags[len(base.tags):],
            text=self.text if self.text != base.text else None,
            include_hidden=True,
        )

    def refine(self, elements: Iterable[WebElement]) -> List[WebElement]:
        """Applies visibility, tag, text and attribute filters, in that order."""
        result = list(elements)
        if not self.include_hidden:
            result = [item for item in result if item.is_displayed()]
        for tag in self.tags:
            result = [item for item in result if (item.tag_name or "").lower() == tag]
        if self.text is not None:
            result = [item for item in result if self.text.matches(item)]
        for criterion in self.attributes:
            result = [item for item in result if criterion.matches(item)]
        return result

    def describe(self) -> str:
        parts = [criterion.describe() for criterion in self.attributes]
        parts.extend(f"tag: {tag}" for tag in self.tags)
        if self.xpath is not None:
            parts.append(f"XPath: {self.xpath}")
        if self.text is not None:
            parts.append(self.text.describe())
        if self.index is not None:
            parts.append(f"index: {self.index}")
        if self.include_hidden:
            parts.append("including hidden")
        return ", ".join(parts) or "<no criteria>"
