from kore.models.master_catalog import MasterCatalog, CatalogVariant
from kore.models.vendor import Vendor
from kore.models.purchase_order import PurchaseOrder
from kore.models.po_line import POLine
from kore.models.user import User
from kore.models.inventory import Inventory
from kore.models.distributor_order import DistributorOrder, DistributorOrderItem

__all__ = ["MasterCatalog", "CatalogVariant", "Vendor", "PurchaseOrder", "POLine", "User", "Inventory", "DistributorOrder", "DistributorOrderItem"]
