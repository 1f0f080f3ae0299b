"""Session cookie settings."""

import logging
import secrets
from typing import Any, Dict

from whoa.settings import Settings

logger = logging.getLogger(__name__)


class SessionSettings(Settings):
    """
    Signed cookie session.

    Read from the ``session`` configuration section. Without a secret key a
    random one is generated, so sessions do not survive a restart.
    """

    KEY_SECRET_KEY = "secret_key"
    KEY_COOKIE_NAME = "cookie_name"
    KEY_MAX_AGE = "max_age"
    KEY_SAME_SITE = "same_site"
    KEY_HTTPS_ONLY = "https_only"

    def get(self, app_config: Dict[str, Any]) -> Dict[str, Any]:
        section = app_config.get("session") or {}
        settings = {
            self.KEY_SECRET_KEY: section.get(self.KEY_SECRET_KEY),
            self.KEY_COOKIE_NAME: section.get(self.KEY_COOKIE_NAME) or "session",
            self.KEY_MAX_AGE: section.get(self.KEY_MAX_AGE, 14 * 24 * 60 * 60),
            self.KEY_SAME_SITE: section.get(self.KEY_SAME_SITE) or "lax",
            self.KEY_HTTPS_ONLY: bool(section.get(self.KEY_HTTPS_ONLY, False)),
        }
        settings.update(self.get_settings())

        if not settings[self.KEY_SECRET_KEY]:
            logger.warning("No session secret key configured, using a random one")
            settings[self.KEY_SECRET_KEY] = secrets.token_hex(32)

        return settings

    def get_settings(self) -> Dict[str, Any]:
        return {}
