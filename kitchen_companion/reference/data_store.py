from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Protocol, Sequence

import pandas as pd

from .config import DEFAULT_REFERENCE_CONFIG, ReferenceConfig

logger = logging.getLogger(__name__)

TIME_UNIT_CODE_BOOK_ID = 1
DAYS_OF_WEEK_CODE_BOOK_ID = 2
NON_RECIPE_SUBSTITUTION_CODE_BOOK_ID = 3


@dataclass(frozen=True)
class Category:
    id: int
    name: str

    def __str__(self) -> str:
        return f"{self.id}: {self.name}"


@dataclass(frozen=True)
class CodeValue:
    code: int
    description: str

    def __str__(self) -> str:
        return f"{self.code}: {self.description}"


class ReferenceDataProvider(Protocol):
    def list_categories(self) -> Sequence[Category]:
        ...

    def list_code_values(self, code_book_id: int) -> Sequence[CodeValue] | None:
        """Return the code book's values in order, or ``None`` if it is unknown."""
        ...


@dataclass(frozen=True)
class ReferenceSnapshot:
    """Point-in-time copy of the reference data one request was built from."""

    categories: tuple[Category, ...] = ()
    code_books: dict[int, tuple[CodeValue, ...] | None] = field(default_factory=dict)

    def code_values(self, code_book_id: int) -> tuple[CodeValue, ...] | None:
        return self.code_books.get(code_book_id)

    def category_ids(self) -> frozenset[int]:
        return frozenset(c.id for c in self.categories)

    def codes(self, code_book_id: int) -> frozenset[int]:
        return frozenset(v.code for v in self.code_values(code_book_id) or ())


def take_snapshot(
    provider: ReferenceDataProvider,
    code_book_ids: Iterable[int],
) -> ReferenceSnapshot:
    """Read categories and the given code books from ``provider``, uncached."""
    code_books: dict[int, tuple[CodeValue, ...] | None] = {}
    for book_id in code_book_ids:
        values = provider.list_code_values(book_id)
        if values is None:
            logger.warning("Code book %s not found, its prompt section will be omitted", book_id)
            code_books[book_id] = None
        else:
            code_books[book_id] = tuple(values)

    return ReferenceSnapshot(
        categories=tuple(provider.list_categories()),
        code_books=code_books,
    )


class CsvReferenceDataProvider:
    """
    Reads the category catalogue and code values from CSV tables.

    The files are re-read on every call so edits show up in the next prompt.
    """

    def __init__(self, config: ReferenceConfig = DEFAULT_REFERENCE_CONFIG) -> None:
        self.config = config

    def list_categories(self) -> list[Category]:
        df = pd.read_csv(self.config.categories_path)
        return [
            Category(id=int(row.id), name=str(row.name))
            for row in df.itertuples(index=False)
        ]

    def list_code_values(self, code_book_id: int) -> list[CodeValue] | None:
        df = pd.read_csv(self.config.code_values_path)
        rows = df.loc[df["code_book_id"] == code_book_id]

        # A code book without values is as good as unknown
        if rows.empty:
            return None

        return [
            CodeValue(code=int(row.code), description=str(row.description))
            for row in rows.fillna("").itertuples(index=False)
        ]
