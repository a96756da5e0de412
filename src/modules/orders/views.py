"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into appropriate
HTTP status codes here; anything else propagates.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import ViewSet

from modules.core.pagination import StandardResultsSetPagination
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.exceptions import (
    InsufficientStock,
    OrderAlreadyPaid,
    OrderNotFound,
    ProductNotFound,
)
from modules.orders.repositories.django_repository import (
    OrderDjangoRepository,
    OrderLineItemDjangoRepository,
)
from modules.orders.serializers import CreateOrderSerializer, OrderListQuerySerializer
from modules.orders.services import OrderService
from modules.products.repositories.django_repository import ProductDjangoRepository


class OrderViewSet(ViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP).  Responses
    are the service's ``OrderViewDTO`` read models dumped to JSON; no
    ORM access happens here.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            line_item_repository=OrderLineItemDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )

    def get_throttles(self) -> list[BaseThrottle]:
        """Pick the throttling scope for the current action."""
        throttle_scope: str | None
        if self.action == "create":
            throttle_scope = "order_creation"
        elif self.action == "pay":
            throttle_scope = "order_payment"
        elif self.action in {"list", "retrieve"}:
            throttle_scope = "order_listing"
        else:
            throttle_scope = None
        self.throttle_scope = throttle_scope
        return super().get_throttles()

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        create_serializer = CreateOrderSerializer(data=request.data)
        create_serializer.is_valid(raise_exception=True)

        dto = CreateOrderDTO(
            items=[
                CreateOrderItemDTO(
                    product_id=item["product_id"],
                    quantity=item["quantity"],
                )
                for item in create_serializer.validated_data["items"]
            ],
        )

        try:
            view = self._service.create_order(dto)
        except ProductNotFound as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_404_NOT_FOUND,
            )
        except InsufficientStock as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_409_CONFLICT,
            )

        return Response(view.model_dump(mode="json"), status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/?paid=<bool>

        Without ``paid`` every order is returned.  Results are paginated.
        """
        # Plain dict: a QueryDict would make a missing boolean read as False.
        query = OrderListQuerySerializer(data=request.query_params.dict())
        query.is_valid(raise_exception=True)
        paid = query.validated_data.get("paid")

        if paid is None:
            views = self._service.get_all_orders()
        else:
            views = self._service.get_orders_by_paid_status(paid)

        paginator = StandardResultsSetPagination()
        page = paginator.paginate_queryset(views, request, view=self)
        return paginator.get_paginated_response(
            [view.model_dump(mode="json") for view in page]
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        try:
            view = self._service.get_order(pk)
        except OrderNotFound:
            return Response(
                {"detail": "Order not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(view.model_dump(mode="json"))

    # ------------------------------------------------------------------
    # Pay (dedicated action)
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"])
    def pay(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/pay/"""
        try:
            view = self._service.pay_order(pk)
        except OrderNotFound as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_404_NOT_FOUND,
            )
        except OrderAlreadyPaid as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_409_CONFLICT,
            )
        return Response(view.model_dump(mode="json"))
