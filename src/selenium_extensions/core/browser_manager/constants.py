import os

READY_STATE_SCRIPT = "return document.readyState == 'complete';"
AJAX_IDLE_SCRIPT = "return (typeof($) === 'undefined') ? true : !$.active;"
RESIZE_WINDOW_SCRIPT = "window.resizeTo(arguments[0], arguments[1]);"

# Environment variable key used by webdriver_manager to control SSL verification
WDM_SSL_VERIFY_ENV = "WDM_SSL_VERIFY"


def set_wdm_ssl_verify(enabled: bool) -> None:
    os.environ[WDM_SSL_VERIFY_ENV] = '1' if enabled else '0'
