"""Package system for provider-based application assembly."""

import logging
from typing import Dict, List, Optional, Any, Type
from dataclasses import dataclass, field
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


@dataclass
class PackageConfig:
    """Configuration for a package."""
    enabled: bool = True
    priority: int = 100  # Lower = configured first, middleware runs outermost
    config: Dict[str, Any] = field(default_factory=dict)


class Package(ABC):
    """Base class for all framework packages."""

    DEFAULT_PRIORITY = 100

    def __init__(self, config: PackageConfig = None):
        """
        Initialize the package.

        Args:
            config: Package configuration
        """
        self.config = config or PackageConfig(priority=self.DEFAULT_PRIORITY)
        self.enabled = self.config.enabled
        self._configurators = []
        self._middleware = []
        self._settings = []
        self._commands = []
        self._command_middleware = []

    @property
    @abstractmethod
    def name(self) -> str:
        """Package name (unique identifier)."""
        pass

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human-readable package name."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Package description."""
        pass

    @property
    def version(self) -> str:
        """Package version."""
        return "1.0.0"

    @property
    def author(self) -> str:
        """Package author."""
        return "Whoa Team"

    def initialize(self) -> bool:
        """
        Initialize the package.
        Called once when the application is assembled.

        Returns:
            True if initialization succeeded
        """
        logger.info(f"Initializing package: {self.display_name}")
        return True

    def shutdown(self):
        """Cleanup when package is unloaded."""
        logger.info(f"Shutting down package: {self.display_name}")

    def get_container_configurators(self) -> List[Type]:
        """
        Get container configurators for this package.

        Returns:
            List of classes with a ``configure_container(container)`` classmethod
        """
        return self._configurators

    def get_middleware(self) -> List[Type]:
        """
        Get HTTP middleware classes for this package.

        Returns:
            List of Starlette middleware classes, outermost first
        """
        return self._middleware

    def get_settings(self) -> List[Type]:
        """
        Get default settings classes for this package.

        Returns:
            List of concrete settings classes used when the application
            does not provide its own
        """
        return self._settings

    def get_commands(self) -> List[Type]:
        """
        Get CLI commands for this package.

        Returns:
            List of command classes
        """
        return self._commands

    def get_command_middleware(self) -> List[Type]:
        """
        Get middleware run around every CLI command.

        Returns:
            List of classes with a ``handle(io, next_handler, container)`` classmethod
        """
        return self._command_middleware

    def __repr__(self):
        return f"<Package: {self.display_name} v{self.version} (enabled={self.enabled})>"


class PackageRegistry:
    """Registry for managing framework packages."""

    def __init__(self):
        self._packages: Dict[str, Package] = {}
        self._initialized = False

    def register(self, package: Package):
        """
        Register a package.

        Args:
            package: Package instance to register
        """
        if package.name in self._packages:
            logger.warning(f"Package {package.name} already registered, replacing")

        self._packages[package.name] = package
        logger.info(f"Registered package: {package.display_name} v{package.version}")

    def unregister(self, package_name: str):
        """Unregister a package."""
        if package_name in self._packages:
            package = self._packages[package_name]
            package.shutdown()
            del self._packages[package_name]
            logger.info(f"Unregistered package: {package_name}")

    def get(self, package_name: str) -> Optional[Package]:
        """Get a package by name."""
        return self._packages.get(package_name)

    def get_all(self) -> List[Package]:
        """Get all registered packages."""
        return list(self._packages.values())

    def get_enabled(self) -> List[Package]:
        """Get all enabled packages ordered by priority (lower = first)."""
        enabled = [p for p in self._packages.values() if p.enabled]
        return sorted(enabled, key=lambda p: p.config.priority)

    def initialize_all(self) -> bool:
        """
        Initialize all enabled packages in priority order.

        Returns:
            True if all packages initialized successfully
        """
        if self._initialized:
            logger.warning("Packages already initialized")
            return True

        packages = self.get_enabled()
        for package in packages:
            try:
                if not package.initialize():
                    logger.error(f"Failed to initialize package: {package.name}")
                    return False
            except Exception as e:
                logger.error(f"Error initializing package {package.name}: {e}")
                return False

        self._initialized = True
        logger.info(f"Initialized {len(packages)} packages")
        return True

    def shutdown_all(self):
        """Shutdown all packages."""
        for package in self._packages.values():
            try:
                package.shutdown()
            except Exception as e:
                logger.error(f"Error shutting down package {package.name}: {e}")

        self._initialized = False

    def get_all_configurators(self) -> List[Type]:
        """Get container configurators from enabled packages."""
        configurators = []
        for package in self.get_enabled():
            configurators.extend(package.get_container_configurators())
        return configurators

    def get_all_middleware(self) -> List[Type]:
        """Get middleware from enabled packages, outermost first."""
        middleware = []
        for package in self.get_enabled():
            middleware.extend(package.get_middleware())
        return middleware

    def get_all_settings(self) -> List[Type]:
        """Get default settings classes from enabled packages."""
        settings = []
        for package in self.get_enabled():
            settings.extend(package.get_settings())
        return settings

    def get_all_commands(self) -> List[Type]:
        """Get commands from enabled packages."""
        commands = []
        for package in self.get_enabled():
            commands.extend(package.get_commands())
        return commands

    def get_all_command_middleware(self) -> List[Type]:
        """Get command middleware from enabled packages, outermost first."""
        middleware = []
        for package in self.get_enabled():
            middleware.extend(package.get_command_middleware())
        return middleware

    def get_package_info(self) -> List[Dict[str, Any]]:
        """Get information about all packages."""
        return [
            {
                "name": p.name,
                "display_name": p.display_name,
                "description": p.description,
                "version": p.version,
                "author": p.author,
                "enabled": p.enabled,
                "priority": p.config.priority,
            }
            for p in self._packages.values()
        ]


# Global package registry instance
registry = PackageRegistry()
