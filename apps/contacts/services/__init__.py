"""Services for customers and sellers."""

from .exceptions import (
    ContactsServiceError,
    CustomerNotFoundError,
    SellerNotFoundError,
    InvalidContactError,
    DuplicateWhatsAppError,
    ContactInUseError,
    InvalidImportFileError,
    ImportFileTooLargeError,
)
from .phone import normalize_whatsapp
from .customer_management import (
    get_customer,
    create_customer,
    update_customer,
    delete_customer,
    search_customers,
    find_customer_by_whatsapp,
)
from .seller_management import (
    get_seller,
    create_seller,
    update_seller,
    delete_seller,
    search_sellers,
)
from .party import upsert_party
from .customer_csv import export_customers, import_customers

__all__ = [
    # Exceptions
    'ContactsServiceError',
    'CustomerNotFoundError',
    'SellerNotFoundError',
    'InvalidContactError',
    'DuplicateWhatsAppError',
    'ContactInUseError',
    'InvalidImportFileError',
    'ImportFileTooLargeError',
    # Phone
    'normalize_whatsapp',
    # Customers
    'get_customer',
    'create_customer',
    'update_customer',
    'delete_customer',
    'search_customers',
    'find_customer_by_whatsapp',
    # Sellers
    'get_seller',
    'create_seller',
    'update_seller',
    'delete_seller',
    'search_sellers',
    # Orders
    'upsert_party',
    # CSV
    'export_customers',
    'import_customers',
]
