"""
Orders management endpoints.

Create, list, query, close, refund and purge native-payment orders.
Domain errors raised by the service are mapped to HTTP in `api.main`.
"""
from typing import Optional
import logging

from fastapi import APIRouter, Depends, status

from api.dependencies import get_order_service
from core.application.dtos.order_dto import (
    CloseOrderResponse,
    CreateOrderRequest,
    CreateOrderResponse,
    OrderDTO,
    OrderListDTO,
    RefundRequest,
    RefundResponse,
)
from core.application.services.order_service import OrderApplicationService


logger = logging.getLogger(__name__)
router = APIRouter()


# =============================================================================
# CREATE ORDER
# =============================================================================

@router.post(
    "/order",
    response_model=CreateOrderResponse,
    status_code=status.HTTP_200_OK,
    summary="Create a native payment order",
    description="""
    Create an order and obtain the QR code URL to pay it.

    Passing `out_trade_no` of an existing unpaid order places that order
    upstream again with its stored description and amount.
    """
)
async def create_order(
    request: CreateOrderRequest,
    service: OrderApplicationService = Depends(get_order_service),
) -> CreateOrderResponse:
    return await service.create_order(request)


# =============================================================================
# LIST ORDERS
# =============================================================================

@router.get(
    "/orders",
    response_model=OrderListDTO,
    response_model_exclude_none=True,
    summary="List all orders",
    description="All orders, newest first"
)
async def list_orders(
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderListDTO:
    return service.list_orders()


# =============================================================================
# GET ORDER BY ID
# =============================================================================

@router.get(
    "/order/{order_id}",
    response_model=OrderDTO,
    response_model_exclude_none=True,
    summary="Get order by merchant order number",
)
async def get_order(
    order_id: str,
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderDTO:
    """
    Get order by merchant order number.

    If the order is still unpaid, its state is refreshed from the payment
    provider before answering.
    """
    return await service.get_order(order_id)


# =============================================================================
# CLOSE / REFUND / PURGE
# =============================================================================

@router.post(
    "/order/{order_id}/close",
    response_model=CloseOrderResponse,
    summary="Close an unpaid order",
)
async def close_order(
    order_id: str,
    service: OrderApplicationService = Depends(get_order_service),
) -> CloseOrderResponse:
    return await service.close_order(order_id)


@router.post(
    "/order/{order_id}/refund",
    response_model=RefundResponse,
    summary="Refund a paid order",
    description="""
    **Body (optional):**
    - `refund_fee`: amount in fen; 0 or above the order amount refunds in full
    - `reason`: refund reason
    """
)
async def refund_order(
    order_id: str,
    request: Optional[RefundRequest] = None,
    service: OrderApplicationService = Depends(get_order_service),
) -> RefundResponse:
    return await service.refund_order(order_id, request)


@router.delete(
    "/order/{order_id}",
    summary="Purge an order from local storage",
)
async def delete_order(
    order_id: str,
    service: OrderApplicationService = Depends(get_order_service),
):
    service.purge_order(order_id)
    logger.info(f"Order purged: {order_id}")
    return {"message": "Order deleted", "order_id": order_id}
