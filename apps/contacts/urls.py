from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'contacts'

router = DefaultRouter(trailing_slash=True)
router.register(r'customers', views.CustomerViewSet, basename='customer')
router.register(r'sellers', views.SellerViewSet, basename='seller')

urlpatterns = [
    # GET    /api/customers/                - List customers (?q=&wa=&page=&limit=)
    # POST   /api/customers/                - Create / upsert by WhatsApp
    # GET    /api/customers/search/?wa=     - Exact lookup (record or null)
    # GET    /api/customers/export/         - CSV (?simple=1&excel=1)
    # POST   /api/customers/import/         - CSV upload (?replace=1)
    # PATCH  /api/customers/{id}/           - Patch
    # DELETE /api/customers/{id}/           - Delete (refused while used by orders)

    # GET    /api/sellers/                  - List sellers (?q=&page=&limit=)
    # POST   /api/sellers/                  - Create
    # GET    /api/sellers/{id}/             - Get
    # PATCH  /api/sellers/{id}/             - Patch
    # DELETE /api/sellers/{id}/             - Delete (refused while used by seller orders)
    path('', include(router.urls)),
]
