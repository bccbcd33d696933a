"""Application service: categories and factories."""

from __future__ import annotations

from winstore.application.dto import CategoryDTO, FactoryDTO, category_to_dto, factory_to_dto
from winstore.domain.exceptions import EntityNotFoundError, ValidationError
from winstore.domain.model.catalog import Category, Factory
from winstore.domain.repository.unit_of_work import UnitOfWork


class CatalogHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def list_categories(self) -> list[CategoryDTO]:
        with self._uow as uow:
            return [category_to_dto(c) for c in uow.catalog.list_categories()]

    def list_factories(self) -> list[FactoryDTO]:
        with self._uow as uow:
            return [factory_to_dto(f) for f in uow.catalog.list_factories()]

    def get_factory(self, factory_id: int) -> FactoryDTO:
        with self._uow as uow:
            factory = uow.catalog.get_factory(factory_id)
        if factory is None:
            raise EntityNotFoundError.for_entity("Factory", factory_id)
        return factory_to_dto(factory)

    def add_category(self, name: str, description: str | None = None) -> CategoryDTO:
        if not name or not name.strip():
            raise ValidationError("Category name is required")
        with self._uow as uow:
            category = uow.catalog.add_category(Category(id=None, name=name.strip(), description=description))
            uow.commit()
        return category_to_dto(category)

    def add_factory(self, name: str, location: str, description: str = "") -> FactoryDTO:
        if not name or not name.strip():
            raise ValidationError("Factory name is required")
        if not location or not location.strip():
            raise ValidationError("Factory location is required")
        with self._uow as uow:
            factory = uow.catalog.add_factory(
                Factory(id=None, name=name.strip(), location=location.strip(), description=description)
            )
            uow.commit()
        return factory_to_dto(factory)
