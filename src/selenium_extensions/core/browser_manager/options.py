import logging
from typing import Union

from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.firefox.options import Options as FirefoxOptions

from ...data_models import BrowserSettings, BrowserType
from .ua import get_user_agent

logger = logging.getLogger(__name__)


def configure_driver_options(
    options: Union[ChromeOptions, FirefoxOptions],
    settings: BrowserSettings,
) -> Union[ChromeOptions, FirefoxOptions]:
    user_agent = get_user_agent(settings)
    if user_agent:
        if settings.type == BrowserType.CHROME:
            options.add_argument(f"user-agent={user_agent}")
        else:
            options.set_preference('general.useragent.override', user_agent)

    if settings.headless:
        if settings.type == BrowserType.CHROME:
            options.add_argument('--headless=new')
        else:
            options.add_argument('--headless')
        options.add_argument('--disable-gpu')

    if settings.window_size:
        if settings.type == BrowserType.CHROME:
            options.add_argument(f"--window-size={settings.window_size}")
        else:
            width, _, height = settings.window_size.partition(',')
            options.add_argument(f"--width={width.strip()}")
            options.add_argument(f"--height={height.strip()}")

    options.accept_insecure_certs = settings.accept_insecure_certs

    for opt in settings.driver_options:
        options.add_argument(opt)

    return options
