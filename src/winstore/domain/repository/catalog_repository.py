"""Abstract repository for categories and factories."""

from __future__ import annotations

from abc import ABC, abstractmethod

from winstore.domain.model.catalog import Category, Factory


class CatalogRepository(ABC):

    @abstractmethod
    def get_category(self, category_id: int) -> Category | None:
        """Return a category by its ID, or None."""

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """Return every category."""

    @abstractmethod
    def add_category(self, category: Category) -> Category:
        """Insert a category and return it with its ID assigned."""

    @abstractmethod
    def get_factory(self, factory_id: int) -> Factory | None:
        """Return a factory by its ID, or None."""

    @abstractmethod
    def list_factories(self) -> list[Factory]:
        """Return every factory."""

    @abstractmethod
    def add_factory(self, factory: Factory) -> Factory:
        """Insert a factory and return it with its ID assigned."""
