import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import LOG_LEVEL
from .database import engine, Base
from .exceptions import VolunteerHubError
from .routes import users, events, admin, organization

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create database tables
Base.metadata.create_all(bind=engine)

# Create FastAPI app
app = FastAPI(
    title="Volunteer Hub API",
    description="Volunteer coordination: events split into time slots, reservations and donations",
    version="1.0.0"
)

@app.exception_handler(VolunteerHubError)
async def volunteer_hub_error_handler(request: Request, exc: VolunteerHubError):
    """Render engine errors with their notification key"""
    logger.info(f"{request.method} {request.url.path} failed: {exc.kind} ({exc.notification}) {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.kind,
            "notification": exc.notification,
            "detail": exc.message,
            **exc.details,
        },
    )

# Include routers
app.include_router(users.router, prefix="/users", tags=["users"])
app.include_router(events.router, prefix="/events", tags=["events"])
app.include_router(organization.router, prefix="/organization", tags=["organization"])
app.include_router(admin.router, prefix="/admin", tags=["admin"])

@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": "Welcome to Volunteer Hub API",
        "version": "1.0.0",
        "endpoints": {
            "register": "POST /users/register - Create a new user",
            "login": "POST /users/login - Login with username and password",
            "refresh": "POST /users/refresh - Refresh access token",
            "events": "GET /events/ - Browse active events and their open time slots",
            "reserve": "POST /events/{id}/reserve - Volunteer for time slots",
            "cancel": "POST /events/{id}/cancel - Give time slots back",
            "donate": "POST /events/{id}/donate, POST /organization/donate",
            "admin": "/admin/* - Create, cancel and reschedule events, manage users"
        },
        "authentication": "Bearer token in Authorization header",
        "swagger_ui": "/docs - Interactive API documentation",
    }

@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "API is running"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("volunteer_hub.main:app", host="0.0.0.0", port=8000, reload=True)
