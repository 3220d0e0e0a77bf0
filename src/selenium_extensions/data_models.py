from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class BrowserType(str, Enum):
    FIREFOX = "firefox"
    CHROME = "chrome"

    @property
    def display_name(self) -> str:
        return BROWSER_DISPLAY_NAMES[self]


BROWSER_DISPLAY_NAMES = {
    BrowserType.FIREFOX: "Mozilla Firefox",
    BrowserType.CHROME: "Google Chrome",
}


class BrowserSettings(BaseModel):
    # Mirrors the 'browser_settings' block of settings.json
    type: BrowserType = Field(BrowserType.CHROME, description="Browser to start: 'chrome' or 'firefox'.")
    headless: bool = False
    window_size: Optional[str] = Field(None, description="e.g. '1920,1080'. The window is maximized on start regardless.")
    maximize_window: bool = True
    user_agent_generation: Literal["default", "random", "custom"] = Field(
        "default", description="'default' keeps the browser UA, 'random' uses fake-headers, 'custom' uses custom_user_agent."
    )
    custom_user_agent: Optional[str] = None
    accept_insecure_certs: bool = True
    driver_options: List[str] = Field(default_factory=list, description="Extra command line arguments for the browser.")
    chrome_driver_path: Optional[str] = None
    gecko_driver_path: Optional[str] = None
    chrome_service_args: List[str] = Field(default_factory=list)
    firefox_service_args: List[str] = Field(default_factory=list)
    webdriver_manager_ssl_verify: Optional[bool] = None
    profile_cleanup_path: Optional[str] = Field(
        None, description="Profile directory force-deleted before Chrome starts, to avoid stale state."
    )
    page_load_timeout_seconds: int = 30
    script_timeout_seconds: int = 30


class WaitSettings(BaseModel):
    # Mirrors the 'wait_settings' block of settings.json
    page_ready_timeout_seconds: float = Field(60.0, ge=0)
    page_ready_poll_interval_seconds: float = Field(0.1, ge=0)
    alert_timeout_seconds: float = Field(5.0, ge=0)
    alert_accept_delay_seconds: float = Field(2.0, ge=0)
