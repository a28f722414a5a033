from django.urls import path
from . import views

app_name = 'transactions'

urlpatterns = [
    path('<int:pk>/delete/', views.transaction_delete, name='transaction_delete'),

    # excel
    path('export/', views.transaction_export_view, name='transaction_export'),
]
