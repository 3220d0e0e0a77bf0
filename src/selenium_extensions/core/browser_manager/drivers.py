import logging
import shutil
from typing import Callable, List, Optional

from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.chrome.service import Service as ChromeService
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.firefox.service import Service as FirefoxService
from selenium.webdriver.remote.webdriver import WebDriver
from webdriver_manager.chrome import ChromeDriverManager
from webdriver_manager.firefox import GeckoDriverManager

logger = logging.getLogger(__name__)


def resolve_driver_binary(
    binary_name: str,
    configured_path: Optional[str],
    download: Callable[[], str],
) -> str:
    """
    Picks the driver executable: the configured path, then one found on PATH,
    then a webdriver_manager download (requires internet).
    """
    local_driver = configured_path or shutil.which(binary_name)
    if local_driver:
        logger.info(f"Using local {binary_name} at: {local_driver}")
        return local_driver
    logger.info(f"Local {binary_name} not found. Falling back to webdriver_manager (requires internet).")
    return download()


def init_chrome_driver(
    options: ChromeOptions,
    *,
    configured_path: Optional[str],
    service_args: Optional[List[str]],
) -> WebDriver:
    executable = resolve_driver_binary('chromedriver', configured_path, lambda: ChromeDriverManager().install())
    service = ChromeService(executable_path=executable, service_args=service_args or None)
    return webdriver.Chrome(service=service, options=options)


def init_firefox_driver(
    options: FirefoxOptions,
    *,
    configured_path: Optional[str],
    service_args: Optional[List[str]],
) -> WebDriver:
    executable = resolve_driver_binary('geckodriver', configured_path, lambda: GeckoDriverManager().install())
    service = FirefoxService(executable_path=executable, service_args=service_args or None)
    return webdriver.Firefox(service=service, options=options)
