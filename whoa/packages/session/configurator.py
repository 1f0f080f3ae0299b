"""Container configurator for the session."""

from whoa.core import Container, ContainerConfigurator
from whoa.http import RequestStorage
from whoa.session import Session, SessionFunctions


class SessionContainerConfigurator(ContainerConfigurator):
    """Registers :class:`Session` backed by the Starlette request session."""

    @classmethod
    def configure_container(cls, container: Container):
        container.share(Session, cls.create_session)

    @staticmethod
    def create_session(container: Container) -> Session:
        request = container.get(RequestStorage).get()
        return Session(SessionFunctions.from_mapping(request.session))
