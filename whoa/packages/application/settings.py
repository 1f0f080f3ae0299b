"""Application settings."""

from typing import Any, Dict

from whoa.settings import Settings


class ApplicationSettings(Settings):
    """
    Application wide settings read from the ``app`` configuration section.

    ``KEY_EXCEPTION_HANDLER`` is ``text``, ``html``, ``json`` or a dotted
    path to a :class:`~whoa.exception_handlers.ThrowableHandler` subclass.
    """

    KEY_APP_NAME = "name"
    KEY_IS_DEBUG = "debug"
    KEY_EXCEPTION_HANDLER = "exception_handler"
    KEY_EXCEPTION_DUMPER = "exception_dumper"

    def get(self, app_config: Dict[str, Any]) -> Dict[str, Any]:
        section = app_config.get("app") or {}
        settings = {
            self.KEY_APP_NAME: section.get(self.KEY_APP_NAME) or "Whoa",
            self.KEY_IS_DEBUG: bool(section.get(self.KEY_IS_DEBUG, False)),
            self.KEY_EXCEPTION_HANDLER: section.get(self.KEY_EXCEPTION_HANDLER) or "json",
            self.KEY_EXCEPTION_DUMPER: section.get(self.KEY_EXCEPTION_DUMPER),
        }
        settings.update(self.get_settings())

        return settings

    def get_settings(self) -> Dict[str, Any]:
        return {}
