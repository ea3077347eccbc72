"""
Native Pay Demo - Main FastAPI Application.

REST API for a QR-code (native) payment flow: create orders, poll their
state, close them, refund them, and receive the provider's callbacks.

Run with `nativepay-demo` (or `python -m api.main`); uvicorn builds the app
through the `create_app` factory.
"""
from typing import Optional
import logging
import sys
import time

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.dependencies import build_payment_gateway
from api.routes import health, notify, orders
from core.application.exceptions import PaymentConfigurationError, PaymentGatewayError
from core.application.interfaces import IPaymentGateway
from core.domain.exceptions import InvalidOrderStateError, OrderNotFoundError
from core.domain.repositories.order_repository import OrderRepository
from core.infrastructure.adapters.persistence.in_memory_order_repository import InMemoryOrderRepository
from core.infrastructure.logging import configure_logging
from core.settings import AppSettings, get_app_settings


logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[AppSettings] = None,
    order_repository: Optional[OrderRepository] = None,
    payment_gateway: Optional[IPaymentGateway] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    The registry and gateway are created here unless injected, and live on
    `app.state` for the lifetime of the app.

    Raises:
        PaymentConfigurationError: If the real gateway cannot be initialized
    """
    if settings is None:
        settings = get_app_settings()

    # =========================================================================
    # CREATE FASTAPI APP
    # =========================================================================

    app = FastAPI(
        title="Native Pay Demo - Order Management API",
        description="""
        Order management for the WeChat Pay native (QR code) flow.

        Features:
        - Create / re-pay orders and get a QR code URL
        - Live status refresh for unpaid orders
        - Close and refund
        - Payment and refund callbacks
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.state.settings = settings
    if order_repository is None:
        order_repository = InMemoryOrderRepository()
    if payment_gateway is None:
        payment_gateway = build_payment_gateway(settings)
    app.state.order_repository = order_repository
    app.state.payment_gateway = payment_gateway

    # =========================================================================
    # CORS MIDDLEWARE
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # =========================================================================
    # REQUEST LOGGING MIDDLEWARE
    # =========================================================================

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests with timing."""
        start_time = time.time()
        logger.info(f"→ {request.method} {request.url.path}")

        response = await call_next(request)

        duration = time.time() - start_time
        logger.info(
            f"← {request.method} {request.url.path} "
            f"[{response.status_code}] ({duration:.3f}s)"
        )
        return response

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Malformed JSON or invalid fields are client errors (400)."""
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(InvalidOrderStateError)
    async def invalid_state_handler(request: Request, exc: InvalidOrderStateError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": str(exc), "status": exc.status.value},
        )

    @app.exception_handler(OrderNotFoundError)
    async def not_found_handler(request: Request, exc: OrderNotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "Order not found", "order_id": exc.order_id},
        )

    @app.exception_handler(PaymentGatewayError)
    async def gateway_error_handler(request: Request, exc: PaymentGatewayError) -> JSONResponse:
        logger.error(f"Payment gateway error on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc)},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle all uncaught exceptions."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "detail": str(exc),
                "path": request.url.path,
            },
        )

    # =========================================================================
    # STARTUP/SHUTDOWN EVENTS
    # =========================================================================

    @app.on_event("startup")
    async def startup_event():
        logger.info("🚀 Native Pay Demo API starting up...")
        logger.info(f"🔔 Notify URL: {settings.wechatpay.notify_url or '<not set>'}")
        logger.info("📚 Swagger UI available at: /docs")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("👋 Native Pay Demo API shutting down...")

    # =========================================================================
    # INCLUDE ROUTERS
    # =========================================================================

    app.include_router(health.router, tags=["Health"])
    app.include_router(orders.router, prefix="/api", tags=["Orders"])
    app.include_router(notify.router, prefix="/api", tags=["Notify"])

    @app.get("/", tags=["Root"])
    async def root():
        """API root endpoint."""
        return {
            "message": "Native Pay Demo - Order Management API",
            "version": "1.0.0",
            "docs": "/docs",
            "health": "/health",
        }

    return app


def main() -> None:
    """Console entry point: configure logging, check config, serve."""
    import uvicorn

    settings = get_app_settings()
    configure_logging(settings.server.log_level)

    # Fail fast on bad merchant config or unreadable keys
    try:
        build_payment_gateway(settings)
    except PaymentConfigurationError as e:
        logger.critical(f"Failed to initialize payment gateway: {e}")
        sys.exit(1)

    logger.info(f"Server listening on http://localhost:{settings.server.port}")
    uvicorn.run(
        "api.main:create_app",
        factory=True,
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.server.log_level.lower(),
    )


if __name__ == "__main__":
    main()
