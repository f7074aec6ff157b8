"""ABOUTME: Read-only catalogue of event categories and their subcategories
ABOUTME: Loaded once from a bundled JSON resource and handed to the validators that need it"""

import functools
import json
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

from planit.config import get_categories_path

SIMPLE_MEETING = "Simple Meeting"


class CategoryConfigError(Exception):
    """The category resource is missing or malformed."""


class CategoryCatalogue(Mapping[str, tuple[str, ...]]):
    """Immutable mapping of category name to its allowed subcategories.

    Lookups through `find` and `subcategories` ignore case, but the catalogue always
    hands back the configured spelling of a category name.
    """

    def __init__(self, categories: Mapping[str, list[str] | tuple[str, ...]]) -> None:
        self._categories = MappingProxyType({name: tuple(subs) for name, subs in categories.items()})
        self._by_lower_name = MappingProxyType({name.lower(): name for name in self._categories})

    def __getitem__(self, name: str) -> tuple[str, ...]:
        return self._categories[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def __repr__(self) -> str:
        return f"CategoryCatalogue({list(self._categories)!r})"

    @property
    def names(self) -> list[str]:
        return list(self._categories)

    def find(self, name: str | None) -> str | None:
        """Return the configured spelling of `name`, or None when it is not a category."""
        if name is None:
            return None
        return self._by_lower_name.get(name.strip().lower())

    def subcategories(self, name: str) -> tuple[str, ...]:
        canonical = self.find(name)
        if canonical is None:
            return ()
        return self._categories[canonical]

    def as_dict(self) -> dict[str, list[str]]:
        return {name: list(subs) for name, subs in self._categories.items()}


def load_category_catalogue(path: Path) -> CategoryCatalogue:
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise CategoryConfigError(f"Categories file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise CategoryConfigError(f"Categories file is not valid JSON: {path}: {e}") from e

    if not isinstance(raw, dict):
        raise CategoryConfigError(f"Categories file must hold a JSON object: {path}")
    for name, subs in raw.items():
        if not isinstance(subs, list) or not all(isinstance(sub, str) for sub in subs):
            raise CategoryConfigError(f"Subcategories of '{name}' must be a list of strings")
    return CategoryCatalogue(raw)


@functools.cache
def default_catalogue() -> CategoryCatalogue:
    """The process-wide catalogue, read from CATEGORIES_PATH or the bundled resource on first use."""
    return load_category_catalogue(get_categories_path())
