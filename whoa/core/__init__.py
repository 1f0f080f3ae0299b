"""Core framework functionality."""

from .container import Container, ContainerConfigurator
from .package_system import Package, PackageRegistry, PackageConfig

__all__ = ["Container", "ContainerConfigurator", "Package", "PackageRegistry", "PackageConfig"]
