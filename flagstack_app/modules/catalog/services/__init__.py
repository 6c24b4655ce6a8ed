from .catalog_service import CatalogService, load_bundled_flags

__all__ = ['CatalogService', 'load_bundled_flags']
