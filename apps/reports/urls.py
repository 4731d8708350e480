from django.urls import path
from . import views

app_name = 'reports'

urlpatterns = [
    path('dashboard/', views.dashboard, name='dashboard'),
    path('accounting/', views.accounting, name='accounting'),
    path('accounting/export/', views.accounting_export, name='accounting-export'),
]
