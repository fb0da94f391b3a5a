import logging
import uuid
from dataclasses import replace
from typing import Dict, Iterator, Optional, Tuple

from .domain import Category
from .errors import InvalidArgument
from .ftypes import Maybe

logger = logging.getLogger(__name__)


# Рекурсивное разворачивание дерева категорий


def flatten_categories(cats: Tuple[Category, ...], root: str) -> Tuple[Category, ...]:
    """
    Возвращает все категории в поддереве, включая сам root

    Пример:
      root -> (cat1, cat2)
        cat1 -> (cat3)
      flatten_categories(...) -> (root, cat1, cat3, cat2)
    """
    root_cat = next((c for c in cats if c.id == root), None)
    if not root_cat:
        return ()

    direct_children = tuple(filter(lambda c: c.parent_id == root, cats))
    nested = tuple(
        cat for child in direct_children for cat in flatten_categories(cats, child.id)
    )
    return (root_cat,) + nested


class CategoryTree:
    """
    Хранилище категорий по id. Родитель хранится как parent_id,
    поэтому ссылочных циклов между объектами нет, а циклы в дереве
    отсекаются при назначении родителя.
    """

    def __init__(self, categories: Tuple[Category, ...] = ()):
        self._categories: Dict[str, Category] = {}
        for cat in categories:
            self._insert(cat)
        for cat in categories:
            if cat.parent_id is not None:
                self.assign_parent(cat.id, cat.parent_id)

    def _insert(self, category: Category) -> None:
        if category.id in self._categories:
            raise InvalidArgument(f"duplicate category id '{category.id}'")
        self._categories[category.id] = replace(category, parent_id=None)

    def add(self, title: str, category_id: Optional[str] = None) -> Category:
        cat = Category(id=category_id or str(uuid.uuid4()), title=title)
        self._insert(cat)
        return cat

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._categories

    def __iter__(self) -> Iterator[Category]:
        return iter(self._categories.values())

    def __len__(self) -> int:
        return len(self._categories)

    def get(self, category_id: str) -> Maybe[Category]:
        return Maybe.from_optional(self._categories.get(category_id))

    def title_of(self, category_id: str) -> str:
        return self._require(category_id).title

    def _require(self, category_id: Optional[str]) -> Category:
        if category_id is None:
            raise InvalidArgument("category id is required")
        found = self._categories.get(category_id)
        if found is None:
            raise InvalidArgument(f"unknown category '{category_id}'")
        return found

    def ancestors(self, category_id: str) -> Iterator[Category]:
        """Лениво идёт вверх по parent_id, не включая саму категорию"""
        current = self._require(category_id)
        while current.parent_id is not None:
            current = self._categories[current.parent_id]
            yield current

    def assign_parent(self, category_id: str, parent_id: Optional[str]) -> Category:
        if parent_id is None:
            raise InvalidArgument("parent category is required")
        child = self._require(category_id)
        self._require(parent_id)
        if parent_id == category_id:
            raise InvalidArgument(f"category '{category_id}' cannot be its own parent")
        if self.is_ancestor_of(category_id, parent_id):
            raise InvalidArgument(
                f"category '{parent_id}' is a descendant of '{category_id}'"
            )

        updated = replace(child, parent_id=parent_id)
        self._categories[category_id] = updated
        logger.debug("Category %s now has parent %s", category_id, parent_id)
        return updated

    def is_ancestor_of(self, ancestor_id: str, candidate_id: str) -> bool:
        """True, если ancestor_id встречается при подъёме от candidate_id"""
        return any(c.id == ancestor_id for c in self.ancestors(candidate_id))

    def covers(self, category_id: str, candidate_id: str) -> bool:
        """Категория кампании совпадает с категорией товара или является её предком"""
        return category_id == candidate_id or self.is_ancestor_of(
            category_id, candidate_id
        )

    def subtree(self, root_id: str) -> Tuple[Category, ...]:
        return flatten_categories(tuple(self._categories.values()), root_id)
