"""
Finance API Views.

Implements:
- GET/POST /admin/expenses/ - List and record expenses
- GET/PUT/PATCH/DELETE /admin/expenses/{id}/ - Single expense
- GET /admin/finance/summary/ - Sales, profit and expense totals
"""
import logging

from rest_framework import generics
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsStaffMember
from .models import Expense
from .serializers import ExpenseSerializer, FinancialSummarySerializer
from .services import compute_financials

logger = logging.getLogger(__name__)


class ExpenseListCreateView(generics.ListCreateAPIView):
    """
    GET: Expenses, newest first
    POST: Record an expense

    Query Parameters (GET):
        - type: capital or operational
    """
    permission_classes = [IsStaffMember]
    serializer_class = ExpenseSerializer

    def get_queryset(self):
        queryset = Expense.objects.all()
        expense_type = self.request.query_params.get('type', '').lower()
        if expense_type in Expense.ExpenseType.values:
            queryset = queryset.filter(expense_type=expense_type)
        return queryset

    def perform_create(self, serializer):
        expense = serializer.save()
        logger.info(f"Recorded {expense.expense_type} expense #{expense.id}: K{expense.amount}")


class ExpenseDetailView(generics.RetrieveUpdateDestroyAPIView):
    permission_classes = [IsStaffMember]
    serializer_class = ExpenseSerializer
    queryset = Expense.objects.all()

    def perform_destroy(self, instance):
        logger.info(f"Deleted expense #{instance.id}")
        instance.delete()


class FinanceSummaryView(APIView):
    permission_classes = [IsStaffMember]

    def get(self, request):
        return Response(FinancialSummarySerializer(compute_financials()).data)
