"""
Order API Views.

Implements:
- POST /orders/ - Place a chicken order
- POST /orders/generic/ - Place a generic product order
- POST /orders/quote/ - Price preview
- GET /orders/history/ - Orders placed from a device
- GET /admin/orders/ - List orders for staff
- GET /admin/orders/{id}/ - Order detail
- POST /admin/orders/{id}/{action}/ - Lifecycle transition
- GET /admin/orders/stats/ - Order statistics
- POST /admin/orders/clear/ - Delete every order
"""
import logging
from datetime import datetime, time

from django.db import models
from django.utils import timezone
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsStaffMember
from core.rate_limiting import RateLimitMixin, rate_limit
from . import lifecycle
from .exceptions import (
    InvalidTransitionError,
    OrderNotFoundError,
    OrderValidationError,
    PersistenceError,
)
from .models import Order
from .serializers import (
    ChickenOrderSubmitSerializer,
    ClearOrdersSerializer,
    GenericOrderSubmitSerializer,
    OrderListSerializer,
    OrderSerializer,
    QuoteSerializer,
)
from .services import SubmissionResult, clear_all_orders, quote, submit_order, transition_order

logger = logging.getLogger(__name__)

SUBMISSION_STATUS = {
    SubmissionResult.VALIDATION: status.HTTP_400_BAD_REQUEST,
    SubmissionResult.CAPACITY: status.HTTP_409_CONFLICT,
    SubmissionResult.PERSISTENCE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

SUBMISSION_ERROR = {
    SubmissionResult.VALIDATION: 'Validation Error',
    SubmissionResult.CAPACITY: 'Slots Full',
    SubmissionResult.PERSISTENCE: 'Server Error',
}

# URL slug -> lifecycle action
TRANSITION_ACTIONS = {
    'confirm': lifecycle.CONFIRM_DELIVERY,
    'deliver': lifecycle.MARK_AS_DELIVERED,
    'cancel': lifecycle.CANCEL_ORDER,
    'restore': lifecycle.RESTORE_ORDER,
    'drop': lifecycle.DROP_ORDER,
}


class BaseOrderSubmitView(RateLimitMixin, APIView):
    """
    Shared POST handling for both order forms.

    Returns:
        - 201: Order placed (Pending)
        - 400: Validation error, with field errors
        - 409: Slots full, detail is the configured message
        - 500: Database failure
    """
    serializer_class = None
    rate_limit_max_requests = 10
    rate_limit_window_seconds = 60

    def post(self, request):
        serializer = self.serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)

        device_id = serializer.validated_data.get('device_id') or request.META.get('HTTP_X_DEVICE_ID', '')
        result = submit_order(
            serializer.get_selection(),
            serializer.get_contact(),
            device_id=device_id,
            user=request.user,
        )

        if result.success:
            order = Order.objects.get(id=result.order_id)
            return Response(
                {
                    'message': result.message,
                    'order': OrderSerializer(order).data,
                },
                status=status.HTTP_201_CREATED
            )

        body = {'error': SUBMISSION_ERROR[result.reason], 'detail': result.message}
        if result.errors:
            body['errors'] = result.errors
        return Response(body, status=SUBMISSION_STATUS[result.reason])


class OrderSubmitView(BaseOrderSubmitView):
    serializer_class = ChickenOrderSubmitSerializer


class GenericOrderSubmitView(BaseOrderSubmitView):
    serializer_class = GenericOrderSubmitSerializer


class QuoteView(APIView):
    """
    POST: Price a selection without placing an order.

    Request Body:
    {"product_type": "chicken", "chicken_type": "whole", "quantity": 2}
    """

    @rate_limit(60, 60)
    def post(self, request):
        serializer = QuoteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        total = quote(serializer.validated_data['selection'])
        return Response({'price': str(total)})


class OrderHistoryView(generics.ListAPIView):
    """
    GET: Orders placed from one device, newest first.

    Query Parameters:
        - device_id: Required device identifier (or X-Device-Id header)
    """
    serializer_class = OrderListSerializer

    def get_queryset(self):
        device_id = (
            self.request.query_params.get('device_id')
            or self.request.META.get('HTTP_X_DEVICE_ID', '')
        ).strip()
        if not device_id:
            return Order.objects.none()
        return Order.objects.filter(device_id=device_id).order_by('-created_at')


class AdminOrderListView(generics.ListAPIView):
    """
    GET: List orders for staff.

    Query Parameters:
        - status: Pending, Confirmed, Delivered or Cancelled
        - open: "true" for Pending and Confirmed only
    """
    permission_classes = [IsStaffMember]
    serializer_class = OrderListSerializer

    def get_queryset(self):
        queryset = Order.objects.all()

        status_filter = self.request.query_params.get('status', '').capitalize()
        if status_filter in Order.Status.values:
            queryset = queryset.filter(status=status_filter)

        if self.request.query_params.get('open', '').lower() == 'true':
            queryset = queryset.filter(status__in=lifecycle.OPEN_STATUSES)

        return queryset.order_by('-created_at')


class AdminOrderDetailView(generics.RetrieveAPIView):
    permission_classes = [IsStaffMember]
    serializer_class = OrderSerializer
    queryset = Order.objects.select_related('product', 'user')


class OrderTransitionView(APIView):
    """
    POST: Apply a lifecycle action to an order.

    Actions: confirm, deliver, cancel, restore, drop

    Returns:
        - 200: Updated order (or a message when dropped)
        - 404: Unknown order or action
        - 409: Action not allowed from the order's status
        - 500: Database failure
    """
    permission_classes = [IsStaffMember]

    def post(self, request, pk, action):
        lifecycle_action = TRANSITION_ACTIONS.get(action)
        if lifecycle_action is None:
            return Response(
                {'error': 'Not Found', 'detail': f'Unknown action: {action}'},
                status=status.HTTP_404_NOT_FOUND
            )

        try:
            order = transition_order(pk, lifecycle_action)
        except OrderNotFoundError as e:
            return Response(
                {'error': 'Not Found', 'detail': str(e)},
                status=status.HTTP_404_NOT_FOUND
            )
        except InvalidTransitionError as e:
            return Response(
                {
                    'error': 'Invalid Transition',
                    'detail': str(e),
                    'status': e.status,
                    'allowed_actions': lifecycle.allowed_actions(e.status),
                },
                status=status.HTTP_409_CONFLICT
            )
        except PersistenceError as e:
            logger.error(f"Transition {lifecycle_action} failed for order #{pk}: {e}")
            return Response(
                {'error': 'Server Error', 'detail': 'Failed to update the order. Please try again.'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        if order is None:
            return Response({'detail': f'Order {pk} has been dropped.'})
        return Response(OrderSerializer(order).data)


class OrderStatsView(APIView):
    """
    GET: Order counts per status and sales from delivered orders.
    """
    permission_classes = [IsStaffMember]

    def get(self, request):
        from django.db.models import Sum, Count, Avg

        delivered = models.Q(status=Order.Status.DELIVERED)
        stats = Order.objects.aggregate(
            total_orders=Count('id'),
            pending_orders=Count('id', filter=models.Q(status=Order.Status.PENDING)),
            confirmed_orders=Count('id', filter=models.Q(status=Order.Status.CONFIRMED)),
            delivered_orders=Count('id', filter=delivered),
            cancelled_orders=Count('id', filter=models.Q(status=Order.Status.CANCELLED)),
            total_revenue=Sum('price', filter=delivered),
            avg_order_value=Avg('price', filter=delivered)
        )

        today = timezone.localdate()
        month_start = timezone.make_aware(datetime.combine(today.replace(day=1), time.min))
        month_revenue = Order.objects.filter(
            delivered, created_at__gte=month_start
        ).aggregate(total=Sum('price'))['total']

        # Handle None values
        stats['total_revenue'] = str(stats['total_revenue'] or '0.00')
        stats['month_revenue'] = str(month_revenue or '0.00')
        stats['avg_order_value'] = str(round(stats['avg_order_value'] or 0, 2))

        return Response(stats)


class ClearOrdersView(APIView):
    """
    POST: Permanently delete every order.

    Request Body:
    {"confirmation_code": "0305"}
    """
    permission_classes = [IsStaffMember]

    def post(self, request):
        serializer = ClearOrdersSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            deleted = clear_all_orders(serializer.validated_data['confirmation_code'])
        except OrderValidationError as e:
            return Response(
                {'error': 'Validation Error', 'detail': str(e), 'errors': e.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        except PersistenceError:
            return Response(
                {'error': 'Server Error', 'detail': 'Failed to clear orders. Please try again.'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return Response({'deleted': deleted})
