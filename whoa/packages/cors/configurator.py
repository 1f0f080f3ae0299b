"""Container configurator for CORS analysis."""

from whoa.core import Container, ContainerConfigurator
from whoa.http import CorsAnalyzer, CorsSettings
from whoa.settings import InstanceSettingsProvider


class CorsContainerConfigurator(ContainerConfigurator):
    @classmethod
    def configure_container(cls, container: Container):
        container.share(
            CorsAnalyzer,
            lambda c: CorsAnalyzer(c.get(InstanceSettingsProvider).get(CorsSettings)),
        )
