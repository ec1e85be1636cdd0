from kore.schemas.catalog import CatalogCreate, CatalogUpdate, CatalogResponse, VariantIn, VariantResponse
from kore.schemas.po import POCreate, POUpdate, POResponse, POLineIn, POLineResponse
from kore.schemas.vendor import VendorCreate, VendorUpdate, VendorResponse
from kore.schemas.user import UserCreate, UserResponse, ApiResponse
from kore.schemas.order import OrderCreate, OrderResponse, InventoryResponse

__all__ = [
    "CatalogCreate",
    "CatalogUpdate",
    "CatalogResponse",
    "VariantIn",
    "VariantResponse",
    "POCreate",
    "POUpdate",
    "POResponse",
    "POLineIn",
    "POLineResponse",
    "VendorCreate",
    "VendorUpdate",
    "VendorResponse",
    "UserCreate",
    "UserResponse",
    "ApiResponse",
    "OrderCreate",
    "OrderResponse",
    "InventoryResponse",
]
