"""Discovery of classes defined in Python source files."""

import glob
import hashlib
import importlib
import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Iterator, Type

logger = logging.getLogger(__name__)


def _dotted_name(path: Path):
    """Dotted module name for a file inside an importable package, or None."""
    parts = [path.stem]
    folder = path.parent
    while (folder / "__init__.py").exists():
        parts.insert(0, folder.name)
        folder = folder.parent

    if len(parts) == 1:
        return None

    root = str(folder.resolve())
    if not any(Path(entry or ".").resolve() == Path(root) for entry in sys.path):
        return None

    return ".".join(parts)


def import_file(file_path: str) -> ModuleType:
    """Import a Python file, as part of its package when it lives in one."""
    path = Path(file_path).resolve()

    dotted = _dotted_name(path)
    if dotted is not None:
        return importlib.import_module(dotted)

    digest = hashlib.md5(str(path).encode()).hexdigest()[:12]
    module_name = f"_whoa_loaded_{path.stem}_{digest}"
    if module_name in sys.modules:
        return sys.modules[module_name]

    spec = importlib.util.spec_from_file_location(module_name, str(path))
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot import file {path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        del sys.modules[module_name]
        raise

    return module


def select_classes(path_pattern: str, base_class: Type) -> Iterator[Type]:
    """
    Yield concrete subclasses of ``base_class`` defined in files matching a glob.

    Only classes defined in the matched file are returned, imported names
    are skipped so a class is reported once.
    """
    seen = set()
    for file_path in sorted(glob.glob(path_pattern)):
        if Path(file_path).name.startswith("_"):
            continue

        module = import_file(file_path)
        logger.debug(f"Scanning {file_path} for {base_class.__name__} classes")

        for _, cls in inspect.getmembers(module, inspect.isclass):
            if cls.__module__ != module.__name__ or cls in seen:
                continue
            if issubclass(cls, base_class) and not inspect.isabstract(cls):
                seen.add(cls)
                yield cls


def import_string(dotted_path: str):
    """Import an attribute given as ``package.module.attribute``."""
    module_path, _, attribute = dotted_path.rpartition(".")
    if not module_path:
        raise ImportError(f"`{dotted_path}` is not a dotted path")

    module = importlib.import_module(module_path)
    try:
        return getattr(module, attribute)
    except AttributeError as e:
        raise ImportError(f"Module `{module_path}` has no attribute `{attribute}`") from e
