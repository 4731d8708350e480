from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'catalog'

router = DefaultRouter(trailing_slash=True)
router.register(r'items', views.ItemViewSet, basename='item')
router.register(r'categories', views.CategoryViewSet, basename='category')

urlpatterns = [
    # GET    /api/items/              - List items (?cat=&q=&page=&limit=)
    # POST   /api/items/              - Create item
    # GET    /api/items/{id}/         - Get item
    # PATCH  /api/items/{id}/         - Update item
    # DELETE /api/items/{id}/         - Delete item (refused while referenced)

    # GET    /api/categories/         - List categories
    # POST   /api/categories/         - Upsert category by name
    # DELETE /api/categories/{id}/    - Detach items and delete
    path('', include(router.urls)),
]
