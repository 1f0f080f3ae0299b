"""Package loader for assembling framework packages from configuration."""

import logging
import yaml
import importlib
from pathlib import Path
from typing import Dict, List
from .package_system import PackageRegistry, PackageConfig, registry

logger = logging.getLogger(__name__)


class PackageLoader:
    """Loads and initializes framework packages from configuration."""

    def __init__(self, config: Dict = None, config_path: str = None,
                 package_registry: PackageRegistry = None):
        """
        Initialize the package loader.

        Args:
            config: Already loaded configuration with ``packages`` and
                ``package_settings`` sections
            config_path: Path to a YAML file with the same sections, used
                when ``config`` is not given
            package_registry: Registry to fill (global registry by default)
        """
        self.config_path = Path(config_path) if config_path else None
        self.registry = package_registry if package_registry is not None else registry
        self.config = config

    def load_config(self) -> Dict:
        """Load package configuration."""
        if self.config is not None:
            return self.config

        if self.config_path is None or not self.config_path.exists():
            logger.warning(f"Package config not found: {self.config_path}, using defaults")
            self.config = {"packages": {}, "package_settings": {}}
            return self.config

        with open(self.config_path, 'r') as f:
            self.config = yaml.safe_load(f) or {}

        logger.info(f"Loaded package configuration from {self.config_path}")
        return self.config

    def get_available_packages(self) -> List[str]:
        """
        Discover available packages in the packages directory.

        Returns:
            List of package names
        """
        packages_dir = Path(__file__).parent.parent / "packages"
        if not packages_dir.exists():
            logger.warning(f"Packages directory not found: {packages_dir}")
            return []

        available = []
        for package_dir in sorted(packages_dir.iterdir()):
            if package_dir.is_dir() and not package_dir.name.startswith('_'):
                if (package_dir / "package.py").exists():
                    available.append(package_dir.name)

        logger.info(f"Found {len(available)} available packages: {available}")
        return available

    def load_package(self, package_name: str, package_config: Dict) -> bool:
        """
        Load a single package.

        Args:
            package_name: Name of the package to load
            package_config: Package configuration dict

        Returns:
            True if package loaded successfully
        """
        try:
            package_path = f"whoa.packages.{package_name}"
            package_module = importlib.import_module(package_path)

            # Package class is named {PackageName}Package
            class_name = f"{package_name.replace('_', ' ').title().replace(' ', '')}Package"

            if not hasattr(package_module, class_name):
                logger.error(f"Package {package_name} does not export {class_name}")
                return False

            package_class = getattr(package_module, class_name)

            config = PackageConfig(
                enabled=package_config.get('enabled', True),
                priority=package_config.get('priority', package_class.DEFAULT_PRIORITY),
                config=package_config.get('config', {})
            )

            self.registry.register(package_class(config))

            logger.info(f"Loaded package: {package_name}")
            return True

        except Exception as e:
            logger.error(f"Failed to load package {package_name}: {e}")
            return False

    def load_all_packages(self) -> bool:
        """
        Load all enabled packages from configuration.

        Returns:
            True if all packages loaded successfully
        """
        config = self.load_config()
        packages_config = config.get('packages') or {}
        package_settings = config.get('package_settings') or {}

        available = self.get_available_packages()

        loaded = 0
        failed = 0

        for package_name in available:
            package_config = packages_config.get(package_name) or {}

            # Skip if explicitly disabled
            if not package_config.get('enabled', True):
                logger.info(f"Skipping disabled package: {package_name}")
                continue

            if self.load_package(package_name, package_config):
                loaded += 1
            else:
                failed += 1
                if package_settings.get('fail_on_error', False):
                    logger.error("Failing due to package load error (fail_on_error=true)")
                    return False

        logger.info(f"Package loading complete: {loaded} loaded, {failed} failed")

        if not self.registry.initialize_all():
            logger.error("Failed to initialize packages")
            return False

        return True

    def get_package_status(self) -> Dict:
        """
        Get status of all packages.

        Returns:
            Dict with package status information
        """
        return {
            "total_packages": len(self.registry.get_all()),
            "enabled_packages": len(self.registry.get_enabled()),
            "packages": self.registry.get_package_info(),
        }
