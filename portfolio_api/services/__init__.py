"""Services package"""

from .catalog_importer import CatalogImporter
from .media_storage import MediaStorageService
from .order_service import OrderService
from .portfolio_service import PortfolioService
from .record_store import RecordStore

__all__ = [
    "CatalogImporter",
    "MediaStorageService",
    "OrderService",
    "PortfolioService",
    "RecordStore",
]
