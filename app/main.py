from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import admin, admin_analytics, bookings, catalog

# Import logging system
from app.core.logging_config import get_logger

logger = get_logger()

app = FastAPI(
    title="Venue Booking API",
    version="1.0.0",
    description="Event space catalog, pricing quotes, booking requests and admin review"
)


# Request Logging Middleware
@app.middleware("http")
async def log_requests(request, call_next):
    logger.info(f"REQUEST: {request.method} {request.url}")

    try:
        response = await call_next(request)
        logger.info(f"RESPONSE: {response.status_code} {request.url}")
        return response

    except Exception as e:
        logger.error(f"ERROR: {request.url} -> {str(e)}")
        raise


# CORS (public booking site + admin dashboard)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -------- ROUTERS REGISTER ORDER MATTERS --------
app.include_router(catalog.router)
app.include_router(bookings.router)
app.include_router(admin.router)
app.include_router(admin_analytics.router)


@app.get("/", tags=["Root"])
def root():
    return {"message": "Backend running successfully"}
