"""Builder for UI-facing keybind table rows.

Emits the rows a simulator's input settings screen lists for a device:
one row per bindable action, with press/release commands and values.
"""

from dataclasses import dataclass
from typing import Hashable, Iterable, Optional, Union

Categories = Union[str, Iterable[str]]


@dataclass
class KeybindRow:
    """A single row in a keybind table.

    Attributes:
        name: Display name of the action.
        category: Categories the row is listed under.
        down: Command sent on press.
        up: Command sent on release.
        value_down: Value sent on press.
        value_up: Value sent on release.
    """

    name: str
    category: tuple[str, ...]
    down: Optional[Hashable] = None
    up: Optional[Hashable] = None
    value_down: Optional[float] = None
    value_up: Optional[float] = None


def normalize_categories(categories: Optional[Categories]) -> tuple[str, ...]:
    """Normalize a category or list of categories to a tuple.

    Raises:
        ValueError: If no categories are given.
    """
    if categories is None:
        raise ValueError("categories are required per keybind (string or list of strings)")
    if isinstance(categories, str):
        return (categories,)
    return tuple(categories)


def two_position_rows(
    switch_cmd: Hashable,
    base_name: Optional[str],
    categories: Optional[Categories],
    toggle_cmd: Optional[Hashable] = None,
) -> list[KeybindRow]:
    """Build the rows for a two-position switch.

    Yields ON <> OFF, optional TOGGLE, ON, OFF in that order.
    """
    category = normalize_categories(categories)
    base = base_name or "Unnamed"

    rows = [
        KeybindRow(
            name=f"{base} - ON <> OFF",
            category=category,
            down=switch_cmd,
            up=switch_cmd,
            value_down=1,
            value_up=0,
        ),
        KeybindRow(
            name=f"{base} - ON",
            category=category,
            down=switch_cmd,
            value_down=1,
            value_up=0,
        ),
        KeybindRow(
            name=f"{base} - OFF",
            category=category,
            down=switch_cmd,
            value_down=0,
            value_up=1,
        ),
    ]

    if toggle_cmd is not None:
        rows.insert(1, KeybindRow(name=f"{base} - TOGGLE", category=category, down=toggle_cmd))

    return rows


class KeybindBlockBuilder:
    """Appends keybind rows to a destination table.

    Attributes:
        target: List the rows are appended to.
    """

    def __init__(self, target: list):
        """Initialize the builder.

        Args:
            target: List to append rows into.

        Raises:
            TypeError: If target is not a list.
        """
        if not isinstance(target, list):
            raise TypeError("KeybindBlockBuilder requires a target list")
        self.target = target

    def add_two_position(
        self,
        switch_cmd: Hashable,
        base_name: Optional[str],
        categories: Optional[Categories],
        toggle_cmd: Optional[Hashable] = None,
    ) -> None:
        """Add a two-position switch block (with optional toggle).

        Args:
            switch_cmd: Switch command for the ON/OFF rows.
            base_name: Display base, e.g. "Beacon Lights".
            categories: Category or categories for every row.
            toggle_cmd: Toggle command; omit for no TOGGLE row.
        """
        self.add(two_position_rows(switch_cmd, base_name, categories, toggle_cmd))

    def add(self, rows: Iterable[KeybindRow]) -> None:
        """Add arbitrary rows."""
        self.target.extend(rows)
