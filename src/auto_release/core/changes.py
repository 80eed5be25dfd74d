"""Change categories and the category-keyed change container.

The six Keep a Changelog categories form a closed set whose declaration
order is the canonical rendering order.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping


class ChangeCategory(StrEnum):
    """Keep a Changelog change category, in canonical order."""

    ADDED = "Added"
    CHANGED = "Changed"
    DEPRECATED = "Deprecated"
    REMOVED = "Removed"
    FIXED = "Fixed"
    SECURITY = "Security"

    @classmethod
    def from_name(cls, name: str) -> ChangeCategory | None:
        """Look up a category by name, case-insensitively."""
        return _CATEGORIES_BY_NAME.get(name.strip().lower())

    @property
    def field_name(self) -> str:
        return self.value.lower()


_CATEGORIES_BY_NAME = {category.value.lower(): category for category in ChangeCategory}


@dataclass(frozen=True, slots=True)
class ChangeSet:
    """Ordered items for every change category.

    All six categories are always present. Iteration follows the canonical
    category order, never the order in which items were added.
    """

    added: tuple[str, ...] = ()
    changed: tuple[str, ...] = ()
    deprecated: tuple[str, ...] = ()
    removed: tuple[str, ...] = ()
    fixed: tuple[str, ...] = ()
    security: tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, mapping: Mapping[str | ChangeCategory, Iterable[str]]) -> ChangeSet:
        """Build a ChangeSet from a category-name to items mapping.

        Raises:
            ValueError: If a key is not a known category
        """
        values: dict[str, tuple[str, ...]] = {}
        for key, items in mapping.items():
            category = key if isinstance(key, ChangeCategory) else ChangeCategory.from_name(key)
            if category is None:
                raise ValueError(f"Unknown change category: {key!r}")
            values[category.field_name] = values.get(category.field_name, ()) + tuple(items)
        return cls(**values)

    def __getitem__(self, category: ChangeCategory) -> tuple[str, ...]:
        return getattr(self, category.field_name)

    def items(self) -> Iterator[tuple[ChangeCategory, tuple[str, ...]]]:
        for category in ChangeCategory:
            yield category, self[category]

    def non_empty(self) -> Iterator[tuple[ChangeCategory, tuple[str, ...]]]:
        return ((category, items) for category, items in self.items() if items)

    @property
    def is_empty(self) -> bool:
        return not any(getattr(self, f.name) for f in fields(self))

    @property
    def item_count(self) -> int:
        return sum(len(getattr(self, f.name)) for f in fields(self))

    def append(self, category: ChangeCategory, *items: str) -> ChangeSet:
        """Return a copy with items appended to one category."""
        return self.extend(ChangeSet(**{category.field_name: items}))

    def extend(self, other: ChangeSet) -> ChangeSet:
        """Return a copy with every category of ``other`` concatenated onto this one."""
        return ChangeSet(**{f.name: getattr(self, f.name) + getattr(other, f.name) for f in fields(self)})

    def to_dict(self) -> dict[str, list[str]]:
        return {str(category): list(items) for category, items in self.items()}
