import os
from contextlib import asynccontextmanager
from typing import List

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from booking_service import BookingService
from config import Settings, get_settings
from database import BookingStore
from errors import NotFoundError, RenderError, StoreError, ValidationError
from generate_invoice import InvoiceRenderer
from middleware import RequestLoggingMiddleware
from schemas import (
    BookingCreate,
    BookingCreated,
    BookingDeleted,
    BookingOut,
    BookingUpdate,
    BookingUpdated,
    InvoiceRequest,
    InvoiceResponse,
    PaymentUpdate,
    validation_error_from,
)
from utils.log import setup_logging, get_logger

logger = get_logger(__name__)


# ===============================
# DEPENDENCIES
# ===============================
def get_booking_service(request: Request) -> BookingService:
    return request.app.state.booking_service


def get_invoice_renderer(request: Request) -> InvoiceRenderer:
    return request.app.state.invoice_renderer


# ===============================
# ERROR MAPPING
# ===============================
def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"error": exc.message})


def request_validation_handler(request: Request, exc: RequestValidationError):
    return validation_error_handler(request, validation_error_from(exc.errors()))


def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"error": exc.message})


def render_error_handler(request: Request, exc: RenderError):
    return JSONResponse(status_code=500, content={"success": False, "message": exc.message})


def store_error_handler(request: Request, exc: StoreError):
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


def http_error_handler(request: Request, exc: StarletteHTTPException):
    # a known path with the wrong method is still an unmatched route
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content={"error": "Route not found"})
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled_error", error=str(exc))
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


# ===============================
# APP INIT
# ===============================
def create_app(settings: Settings = None, launcher=None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = BookingStore(settings.DATABASE_URL)
        store.open()
        app.state.store = store
        app.state.booking_service = BookingService(store)
        app.state.invoice_renderer = InvoiceRenderer(settings, launcher=launcher)
        logger.info("application_starting", app=settings.APP_NAME, environment=settings.ENVIRONMENT)

        yield

        store.close()
        logger.info("application_shutdown")

    app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(RenderError, render_error_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # generated invoices are served from here
    os.makedirs(settings.PUBLIC_DIR, exist_ok=True)
    mount = "/" + settings.PUBLIC_MOUNT.strip("/")
    app.mount(mount, StaticFiles(directory=settings.PUBLIC_DIR), name="public")

    register_routes(app)
    return app


# ===============================
# ROUTES
# ===============================
def register_routes(app: FastAPI) -> None:

    @app.get("/")
    def home():
        return {"status": "Backend running"}

    @app.post("/book", status_code=201, response_model=BookingCreated)
    def create_booking(data: BookingCreate, service: BookingService = Depends(get_booking_service)):
        booking = service.create_booking(data)
        return BookingCreated(message="Booking successful!", booking=BookingOut.model_validate(booking))

    @app.get("/bookings", response_model=List[BookingOut])
    def list_bookings(service: BookingService = Depends(get_booking_service)):
        return [BookingOut.model_validate(b) for b in service.list_bookings()]

    @app.get("/bookings/invoice/{booking_id}", response_model=BookingOut)
    def get_booking_for_invoice(booking_id: str, service: BookingService = Depends(get_booking_service)):
        return BookingOut.model_validate(service.get_booking(booking_id))

    @app.delete("/booking/{booking_id}", response_model=BookingDeleted)
    def delete_booking(booking_id: str, service: BookingService = Depends(get_booking_service)):
        booking = service.delete_booking(booking_id)
        return BookingDeleted(
            message="Booking deleted successfully",
            deletedBooking=BookingOut.model_validate(booking),
        )

    @app.put("/booking/payment/{booking_id}", response_model=BookingUpdated)
    def update_payment(
        booking_id: str,
        data: PaymentUpdate,
        service: BookingService = Depends(get_booking_service),
    ):
        booking = service.update_payment(booking_id, data)
        return BookingUpdated(
            message="Payment updated successfully",
            updatedBooking=BookingOut.model_validate(booking),
        )

    @app.put("/booking/{booking_id}", response_model=BookingUpdated)
    def update_booking(
        booking_id: str,
        data: BookingUpdate,
        service: BookingService = Depends(get_booking_service),
    ):
        booking = service.update_booking(booking_id, data)
        return BookingUpdated(
            message="Booking updated successfully",
            updatedBooking=BookingOut.model_validate(booking),
        )

    @app.post("/generate-invoice", response_model=InvoiceResponse)
    def generate_invoice(data: InvoiceRequest, renderer: InvoiceRenderer = Depends(get_invoice_renderer)):
        result = renderer.render_invoice(
            contact_no=data.contact_no,
            customer_name=data.customer_name,
            from_location=data.from_location,
            to_location=data.to_location,
            date=data.date,
            amount=data.amount,
        )
        return InvoiceResponse(imageUrl=result.image_url, whatsappURL=result.whatsapp_url)


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", 8000)))
