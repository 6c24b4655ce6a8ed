"""Public API of the catalog module for other modules."""

from typing import List

from .schemas import CatalogItem


class CatalogInterface:
    @staticmethod
    def list_flags() -> List[CatalogItem]:
        from .services.catalog_service import CatalogService
        return CatalogService.list_flags()

    @staticmethod
    def get_flags_by_ids(flag_ids) -> List[CatalogItem]:
        from .services.catalog_service import CatalogService
        return CatalogService.get_flags_by_ids(flag_ids)
