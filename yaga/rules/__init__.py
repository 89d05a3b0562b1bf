"""Rule engine package -- loads built-in and plugin rule modules."""

import hashlib
import importlib.util
import logging
import pkgutil
import sys
from importlib import import_module
from pathlib import Path
from typing import Iterable

from yaga.rules.base import (
    Rule,
    get_registered_rules,
    implements_rule,
    register_rule,
)

logger = logging.getLogger(__name__)

_PLUGIN_MODULE_PREFIX = "yaga_plugin_rules"


def _builtin_rule_modules() -> list[str]:
    """Return sorted module names in this package that define rules."""
    names = [
        info.name
        for info in pkgutil.iter_modules(__path__)
        if not info.ispkg and not info.name.startswith("_") and info.name != "base"
    ]
    return sorted(names)


def _load_plugin_file(path: Path) -> None:
    # Directory hash keeps same-named files from different directories apart
    dir_hash = hashlib.sha256(str(path.resolve().parent).encode()).hexdigest()[:8]
    module_name = f"{_PLUGIN_MODULE_PREFIX}.{path.stem}_{dir_hash}"
    if module_name in sys.modules:
        return
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load rule module from {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        del sys.modules[module_name]
        raise
    logger.info("Loaded rule plugin %s", path)


def load_rule_modules(plugin_dirs: Iterable[Path] = ()) -> None:
    """Import every rule module so @register_rule decorators fire.

    Built-in modules come first, then ``*.py`` files of each plugin
    directory in name order. Modules already imported are skipped.
    """
    for name in _builtin_rule_modules():
        import_module(f"{__name__}.{name}")

    for directory in plugin_dirs:
        directory = Path(directory)
        if not directory.is_dir():
            logger.warning("Rule plugin directory %s does not exist", directory)
            continue
        for path in sorted(directory.glob("*.py")):
            if path.name.startswith("_"):
                continue
            _load_plugin_file(path)


__all__ = [
    "Rule",
    "get_registered_rules",
    "implements_rule",
    "load_rule_modules",
    "register_rule",
]
