"""Binding table loading.

Reads router bindings from a YAML file grouped by category and registers
them with a router.
"""

from collections.abc import Hashable
from pathlib import Path
from typing import TYPE_CHECKING

import yaml

from cockpitbind.utils.logger import get_logger, log_error

if TYPE_CHECKING:
    from cockpitbind.router.router import KeybindRouter

logger = get_logger(__name__)

# Entry fields that must be usable as command ids
KEY_FIELDS = ("direct_key", "cycle_key", "increment_key", "decrement_key")

# YAML entry fields accepted by KeybindRouter.register
REGISTER_FIELDS = (
    "direct_key",
    "cycle_key",
    "values",
    "increment_key",
    "decrement_key",
    "mirror_to_external",
    "default",
)


def load_bindings(router: "KeybindRouter", config_path: Path) -> int:
    """Register every binding in a YAML binding table.

    Args:
        router: Router to register bindings with.
        config_path: Path to bindings YAML file.

    Returns:
        Number of bindings newly registered.
    """
    if not config_path.exists():
        logger.warning("bindings_file_not_found", path=str(config_path))
        return 0

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        log_error(e, {"path": str(config_path)})
        return 0

    if not isinstance(data, dict):
        logger.warning("bindings_file_malformed", path=str(config_path))
        return 0

    loaded = 0
    for category, binds in data.items():
        if not isinstance(binds, dict):
            continue

        for name, bind_data in binds.items():
            if not isinstance(bind_data, dict):
                continue

            actuator = bind_data.get("actuator")
            if actuator is None:
                logger.warning("binding_missing_actuator", category=category, name=name)
                continue

            malformed = [
                field
                for field in ("actuator",) + KEY_FIELDS
                if not isinstance(bind_data.get(field), Hashable)
            ]
            if malformed:
                logger.warning(
                    "binding_malformed", category=category, name=name, fields=malformed
                )
                continue

            if actuator in router:
                logger.debug("binding_already_registered", actuator=actuator, name=name)
                continue

            kwargs = {key: bind_data[key] for key in REGISTER_FIELDS if key in bind_data}
            router.register(actuator, **kwargs)
            loaded += 1

    logger.info("bindings_loaded", path=str(config_path), total=loaded)
    return loaded
