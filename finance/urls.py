"""
URL routing for finance API endpoints.
"""
from django.urls import path
from . import views

app_name = 'finance'

urlpatterns = [
    path('admin/expenses/', views.ExpenseListCreateView.as_view(), name='expense-list'),
    path('admin/expenses/<int:pk>/', views.ExpenseDetailView.as_view(), name='expense-detail'),
    path('admin/finance/summary/', views.FinanceSummaryView.as_view(), name='finance-summary'),
]
