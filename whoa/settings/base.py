"""Settings base class."""

from abc import ABC, abstractmethod
from typing import Any, Dict


class Settings(ABC):
    """
    Application settings section.

    Concrete settings are registered in a settings provider and looked up by
    their class or by any of their base classes.
    """

    @abstractmethod
    def get(self, app_config: Dict[str, Any]) -> Dict[str, Any]:
        """Build settings values for the given application configuration."""
        pass
