"""
In-memory stand-ins for a Selenium WebDriver session.

FakeDriver.find_elements() is deliberately coarse: a tag-name lookup filters by
tag, any other locator returns the whole document. Narrowing down is left to
ElementQuery's in-memory refinement, which is what these tests exercise.
"""

from typing import Any, Dict, List, Optional

import pytest
from selenium.common.exceptions import NoAlertPresentException, WebDriverException
from selenium.webdriver.common.by import By
from selenium.webdriver.common.keys import Keys

from selenium_extensions import Browser, ConfigLoader
from selenium_extensions.core.browser_manager import constants as browser_constants
from selenium_extensions.core.browser_manager import service as browser_service
from selenium_extensions.elements import query as query_module
from selenium_extensions.utils import wait_helper as wait_helper_module


class FakeElement:
    def __init__(
        self,
        tag_name: str,
        text: str = "",
        attributes: Optional[Dict[str, str]] = None,
        displayed: bool = True,
        enabled: bool = True,
        selected: bool = False,
        inner_html: str = "",
        click_failures: Optional[List[Exception]] = None,
        stuck: bool = False,
    ):
        self.tag_name = tag_name
        self._text = text
        self.attributes = dict(attributes or {})
        self.displayed = displayed
        self.enabled = enabled
        self.selected = selected
        self.inner_html = inner_html
        self.click_failures = list(click_failures or [])
        self.stuck = stuck
        self.clicks = 0
        self.events: List[str] = []
        self.sent_keys: List[str] = []

    @property
    def text(self) -> str:
        return self._text

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def is_displayed(self) -> bool:
        return self.displayed

    def is_enabled(self) -> bool:
        return self.enabled

    def is_selected(self) -> bool:
        return self.selected

    def clear(self) -> None:
        self.attributes["value"] = ""

    def send_keys(self, keys: str) -> None:
        self.sent_keys.append(keys)
        if keys == Keys.DELETE:
            self._text = ""

    def click(self) -> None:
        if self.click_failures:
            raise self.click_failures.pop(0)
        self.clicks += 1
        self.toggle()

    def toggle(self) -> None:
        if self.attributes.get("type") in ("checkbox", "radio") and not self.stuck:
            self.selected = not self.selected

    def __repr__(self) -> str:
        return f"FakeElement({self.tag_name!r}, {self._text!r}, {self.attributes!r})"


class FakeAlert:
    def __init__(self, driver: "FakeDriver"):
        self._driver = driver

    def accept(self) -> None:
        self._driver.alert_open = False
        self._driver.alerts_accepted += 1


class FakeSwitchTo:
    def __init__(self, driver: "FakeDriver"):
        self._driver = driver

    @property
    def alert(self) -> FakeAlert:
        if not self._driver.alert_open:
            raise NoAlertPresentException("no such alert")
        return FakeAlert(self._driver)

    def window(self, handle: str) -> None:
        self._driver.current_window_handle = handle

    def frame(self, frame: Any) -> None:
        self._driver.current_frame = frame

    def default_content(self) -> None:
        self._driver.current_frame = None


class FakeDriver:
    def __init__(self, document: Optional[List[FakeElement]] = None):
        self.document: List[FakeElement] = list(document or [])
        self.find_calls: List[tuple] = []
        self.scripts: List[tuple] = []
        self.on_find = None
        self.ready = True
        self.fail_events = False
        self.title = "Example"
        self.current_url = "about:blank"
        self.page_source = "<html></html>"
        self.current_window_handle = "main"
        self.window_handles = ["main"]
        self.current_frame = None
        self.alert_open = False
        self.alerts_accepted = 0
        self.maximized = False
        self.quit_called = False
        self.visited: List[str] = []
        self.history: List[str] = []
        self.timeouts: Dict[str, float] = {}
        self.switch_to = FakeSwitchTo(self)

    def find_elements(self, by: str, value: str) -> List[FakeElement]:
        self.find_calls.append((by, value))
        if self.on_find is not None:
            self.on_find(self)
        if by == By.TAG_NAME:
            return [e for e in self.document if e.tag_name == value]
        return list(self.document)

    def execute_script(self, script: str, *args: Any) -> Any:
        self.scripts.append((script, args))
        if script == query_module.SET_VALUE_SCRIPT:
            args[0].attributes["value"] = args[1]
        elif script == query_module.FIRE_EVENT_SCRIPT:
            if self.fail_events:
                raise WebDriverException("javascript error: $ is not defined")
            element, name = args
            element.events.append(name)
            if name == "click":
                element.toggle()
        elif script == query_module.INNER_HTML_SCRIPT:
            return args[0].inner_html
        elif script == browser_constants.READY_STATE_SCRIPT:
            return self.ready
        elif script == browser_constants.AJAX_IDLE_SCRIPT:
            return True
        return None

    def maximize_window(self) -> None:
        self.maximized = True

    def get(self, url: str) -> None:
        self.visited.append(url)
        self.current_url = url

    def get_screenshot_as_png(self) -> bytes:
        return b"\x89PNG\r\n\x1a\nfake"

    def back(self) -> None:
        self.history.append("back")

    def refresh(self) -> None:
        self.history.append("refresh")

    def set_page_load_timeout(self, seconds: float) -> None:
        self.timeouts["page_load"] = seconds

    def set_script_timeout(self, seconds: float) -> None:
        self.timeouts["script"] = seconds

    def quit(self) -> None:
        self.quit_called = True


class FakeTime:
    """Replaces the `time` module inside the code under test; sleeping only advances the clock."""

    def __init__(self):
        self.now = 0.0
        self.sleeps: List[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_time(monkeypatch) -> FakeTime:
    clock = FakeTime()
    monkeypatch.setattr(wait_helper_module, "time", clock)
    monkeypatch.setattr(query_module, "time", clock)
    monkeypatch.setattr(browser_service, "time", clock)
    return clock


@pytest.fixture
def driver() -> FakeDriver:
    return FakeDriver()


@pytest.fixture
def config_loader() -> ConfigLoader:
    return ConfigLoader.from_dict({})


@pytest.fixture
def browser(driver, config_loader) -> Browser:
    return Browser(driver=driver, config_loader=config_loader)
