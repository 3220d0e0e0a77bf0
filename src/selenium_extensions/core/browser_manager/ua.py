import logging
from typing import Optional

from fake_headers import Headers

from ...data_models import BrowserSettings

logger = logging.getLogger(__name__)


def get_user_agent(settings: BrowserSettings) -> Optional[str]:
    """Returns the user agent to force, or None to keep the browser's own."""
    if settings.user_agent_generation == 'custom':
        if not settings.custom_user_agent:
            logger.warning("user_agent_generation is 'custom' but no custom_user_agent is set; keeping default UA.")
            return None
        logger.debug(f"Using custom user agent: {settings.custom_user_agent}")
        return settings.custom_user_agent
    if settings.user_agent_generation == 'random':
        browser = settings.type.value
        ua = Headers(browser=browser, headers=False).generate().get('User-Agent')
        logger.debug(f"Generated random user agent: {ua}")
        return ua
    return None
