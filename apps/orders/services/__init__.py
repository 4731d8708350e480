"""Services for customer orders and seller orders."""

from .exceptions import (
    OrderServiceError,
    OrderNotFoundError,
    EmptyOrderError,
    InvalidOrderItemError,
)
from .pricing import normalize_qty, line_amount, compute_totals
from .stock import stock_effect, stock_delta, apply_stock_delta
from .order_management import (
    get_order,
    create_order,
    update_order,
    mark_order,
    delete_order,
    search_orders,
)
from .seller_order_management import (
    get_seller_order,
    create_seller_order,
    update_seller_order,
    mark_seller_order,
    delete_seller_order,
    search_seller_orders,
)

__all__ = [
    # Exceptions
    'OrderServiceError',
    'OrderNotFoundError',
    'EmptyOrderError',
    'InvalidOrderItemError',
    # Pricing
    'normalize_qty',
    'line_amount',
    'compute_totals',
    # Stock
    'stock_effect',
    'stock_delta',
    'apply_stock_delta',
    # Customer orders
    'get_order',
    'create_order',
    'update_order',
    'mark_order',
    'delete_order',
    'search_orders',
    # Seller orders
    'get_seller_order',
    'create_seller_order',
    'update_seller_order',
    'mark_seller_order',
    'delete_seller_order',
    'search_seller_orders',
]
