import logging
import time
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from ...data_models import BrowserSettings, BrowserType, WaitSettings
from ...elements.query import ElementQuery
from ...utils.helpers import force_delete
from ...utils.wait_helper import WaitHelper, make_try, spin_wait, try_run
from ..config_loader import ConfigLoader
from .constants import AJAX_IDLE_SCRIPT, READY_STATE_SCRIPT, RESIZE_WINDOW_SCRIPT, set_wdm_ssl_verify
from .drivers import init_chrome_driver, init_firefox_driver
from .options import configure_driver_options

logger = logging.getLogger(__name__)

Locator = Tuple[str, str]


class Browser:
    """
    One browser session: owns a WebDriver and the page-level operations on it.

    Pass an existing driver to wrap it, or leave it out to have one started
    from the 'browser_settings' block on first use. Several Browser objects
    can live side by side; none of them is safe to share between threads.
    """

    def __init__(self, driver: Optional[WebDriver] = None, config_loader: Optional[ConfigLoader] = None):
        self.config_loader = config_loader if config_loader else ConfigLoader()
        self.browser_settings = BrowserSettings.model_validate(self.config_loader.get_setting('browser_settings', {}) or {})
        self.wait_settings = WaitSettings.model_validate(self.config_loader.get_setting('wait_settings', {}) or {})
        self._driver: Optional[WebDriver] = driver
        self._main_window_handle: Optional[str] = None

        if self.browser_settings.webdriver_manager_ssl_verify is not None:
            set_wdm_ssl_verify(self.browser_settings.webdriver_manager_ssl_verify)
            logger.info("WebDriver Manager SSL verification set.")

        if driver is not None:
            self._after_start()

    # -------- lifecycle --------

    @property
    def selected_browser(self) -> BrowserType:
        return self.browser_settings.type

    @property
    def driver(self) -> WebDriver:
        if self._driver is None:
            self.start()
        return self._driver

    def start(self) -> WebDriver:
        if self._driver is not None:
            return self._driver

        settings = self.browser_settings
        if settings.type == BrowserType.CHROME:
            if settings.profile_cleanup_path:
                result = try_run(lambda: force_delete(settings.profile_cleanup_path))
                if not result:
                    logger.warning(f"Could not clean profile directory {settings.profile_cleanup_path}: {result.error}")
            options = configure_driver_options(ChromeOptions(), settings)
            self._driver = init_chrome_driver(
                options,
                configured_path=settings.chrome_driver_path,
                service_args=settings.chrome_service_args,
            )
        else:
            options = configure_driver_options(FirefoxOptions(), settings)
            self._driver = init_firefox_driver(
                options,
                configured_path=settings.gecko_driver_path,
                service_args=settings.firefox_service_args,
            )

        self._driver.set_page_load_timeout(settings.page_load_timeout_seconds)
        self._driver.set_script_timeout(settings.script_timeout_seconds)
        logger.info(f"{settings.type.display_name} WebDriver initialized successfully.")

        self._after_start()
        return self._driver

    def _after_start(self) -> None:
        if self.browser_settings.maximize_window:
            result = try_run(self._driver.maximize_window)
            if not result:
                logger.warning(f"Could not maximize browser window: {result.error}")
        self._main_window_handle = self._driver.current_window_handle

    def quit(self) -> None:
        if self._driver is None:
            return
        try:
            self._driver.quit()
            logger.info("WebDriver session closed.")
        finally:
            self._driver = None
            self._main_window_handle = None

    def is_active(self) -> bool:
        if self._driver is None:
            return False
        result = try_run(lambda: self._driver.current_url)
        if not result:
            logger.warning("WebDriver is not responsive.")
        return result.ok

    def __enter__(self) -> 'Browser':
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.quit()

    # -------- page --------

    @property
    def url(self) -> str:
        return self.driver.current_url

    @property
    def title(self) -> str:
        return f"{self.driver.title} - {self.selected_browser.display_name}"

    @property
    def page_source(self) -> str:
        return self.driver.page_source

    def navigate(self, url: str) -> None:
        if not url:
            raise ValueError("url must not be empty.")
        logger.info(f"Navigating to {url}")
        self.driver.get(url)

    def navigate_back(self) -> None:
        self.driver.back()

    def refresh(self) -> None:
        self.driver.refresh()

    def resize_window(self, width: int, height: int) -> None:
        self.execute_script(RESIZE_WINDOW_SCRIPT, width, height)

    def execute_script(self, script: str, *args: Any) -> Any:
        return self.driver.execute_script(script, *args)

    def wait_ready_state(self) -> None:
        """Blocks until document.readyState is 'complete'. Raises WaitTimeoutError otherwise."""
        self._wait_page(READY_STATE_SCRIPT, "Document did not reach readyState 'complete'.")

    def wait_ajax(self) -> None:
        """Blocks until jQuery reports no active requests (pages without jQuery pass at once)."""
        self._wait_page(AJAX_IDLE_SCRIPT, "AJAX requests are still active.")

    def _wait_page(self, script: str, message: str) -> None:
        WaitHelper.with_timeout(
            self.wait_settings.page_ready_timeout_seconds,
            self.wait_settings.page_ready_poll_interval_seconds,
        ).wait_for(lambda: bool(self.execute_script(script))).ensure_satisfied(message)

    # -------- elements --------

    def element(self) -> ElementQuery:
        """Starts a new element query on this session."""
        return ElementQuery(self)

    def find_elements(self, locator: Locator) -> List[WebElement]:
        by, value = locator
        return self.driver.find_elements(by, value)

    # -------- screenshots --------

    def get_screenshot(self) -> bytes:
        """Returns a PNG screenshot taken once the page has finished loading."""
        self.wait_ready_state()
        return self.driver.get_screenshot_as_png()

    def save_screenshot(self, path: Union[str, Path]) -> Path:
        if not path:
            raise ValueError("path must not be empty.")
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(self.get_screenshot())
        logger.info(f"Saved screenshot to {target}")
        return target

    # -------- keyboard & alerts --------

    def key_down(self, key: str) -> None:
        ActionChains(self.driver).key_down(key).perform()

    def key_up(self, key: str) -> None:
        ActionChains(self.driver).key_up(key).perform()

    def alert_accept(self) -> None:
        time.sleep(self.wait_settings.alert_accept_delay_seconds)
        self.driver.switch_to.alert.accept()
        self.driver.switch_to.default_content()

    def accept_alert(self, timeout: Optional[float] = None) -> bool:
        """Keeps trying to accept an alert until one shows up. Returns whether one was accepted."""
        if timeout is None:
            timeout = self.wait_settings.alert_timeout_seconds
        accepted = spin_wait(make_try(lambda: self.driver.switch_to.alert.accept()), timeout)
        if not accepted:
            logger.debug(f"No alert to accept within {timeout}s.")
        return accepted

    # -------- windows & frames --------

    def switch_to_frame(self, frame: Union[WebElement, ElementQuery, str, int]) -> None:
        if isinstance(frame, ElementQuery):
            frame = frame.find_single()
        self.driver.switch_to.frame(frame)

    def switch_to_popup_window(self) -> None:
        """Switches to the most recently listed window other than the main one."""
        for handle in self.driver.window_handles:
            if handle != self._main_window_handle:
                self.driver.switch_to.window(handle)

    def switch_to_main_window(self) -> None:
        self.driver.switch_to.window(self._main_window_handle)

    def switch_to_default_content(self) -> None:
        self.driver.switch_to.default_content()

    def drag_and_drop(self, source: Union[WebElement, ElementQuery], target: Union[WebElement, ElementQuery]) -> None:
        if isinstance(source, ElementQuery):
            source = source.find_single()
        if isinstance(target, ElementQuery):
            target = target.find_single()
        ActionChains(self.driver).drag_and_drop(source, target).perform()
