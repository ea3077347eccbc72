"""
Payment provider callback endpoint.

Verification and decryption are delegated to the payment gateway (and from
there to the provider SDK). Responses follow the provider's contract:
204 when handled, `{"code": "FAIL", ...}` when rejected.
"""
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from api.dependencies import get_notification_service, get_payment_gateway
from core.application.exceptions import InvalidNotificationError, NotificationVerificationError
from core.application.interfaces import IPaymentGateway
from core.application.services.notification_service import (
    NotificationOutcome,
    PaymentNotificationService,
)


logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/notify", summary="Payment and refund notifications")
async def payment_notify(
    request: Request,
    background_tasks: BackgroundTasks,
    gateway: IPaymentGateway = Depends(get_payment_gateway),
    service: PaymentNotificationService = Depends(get_notification_service),
):
    logger.info("[Notify] Callback received")
    body = await request.body()

    try:
        event = await gateway.parse_notification(request.headers, body)
    except NotificationVerificationError as e:
        logger.warning(f"[Notify] Verification failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"code": "FAIL", "message": "Signature verification failed"},
        )

    try:
        result = service.handle(event)
    except InvalidNotificationError as e:
        logger.warning(f"[Notify] {e}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"code": "FAIL", "message": "Failed to parse notification"},
        )

    if result.outcome == NotificationOutcome.IGNORED:
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={"code": "SUCCESS", "message": "Unknown event type"},
        )

    if result.outcome == NotificationOutcome.PAYMENT_APPLIED:
        background_tasks.add_task(service.process_payment_success, result.resource)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
