from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'orders'

router = DefaultRouter(trailing_slash=True)
router.register(r'orders', views.OrderViewSet, basename='order')
router.register(r'seller-orders', views.SellerOrderViewSet, basename='seller-order')

urlpatterns = [
    # GET    /api/orders/                   - List orders (?search=&page=&limit=)
    # POST   /api/orders/                   - Create order
    # GET    /api/orders/{id}/              - Get order
    # PATCH  /api/orders/{id}/              - Update order (lines, party, amounts, status)
    # DELETE /api/orders/{id}/              - Delete order (restores stock if delivered)
    # PATCH  /api/orders/{id}/mark/         - Set payment/delivery status

    # GET    /api/seller-orders/            - List (?search=&include_items=0&page=&limit=)
    # POST   /api/seller-orders/            - Create
    # GET    /api/seller-orders/{id}/       - Get
    # PATCH  /api/seller-orders/{id}/       - Update
    # DELETE /api/seller-orders/{id}/       - Delete
    # PATCH  /api/seller-orders/{id}/mark/  - Set payment/delivery status
    path('', include(router.urls)),
]
