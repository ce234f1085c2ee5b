from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from busbooking.config import settings
from busbooking.exception_handlers import register_exception_handlers
from busbooking.buses import router as buses_router
from busbooking.routes import router as routes_router
from busbooking.agents import router as agents_router
from busbooking.bookings import router as bookings_router

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description="Bus ticket booking API",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(
    buses_router,
    prefix=f"{settings.API_V1_STR}/buses",
    tags=["Fleet"]
)

app.include_router(
    routes_router,
    prefix=f"{settings.API_V1_STR}/routes",
    tags=["Routes & Search"]
)

app.include_router(
    agents_router,
    prefix=f"{settings.API_V1_STR}/agents",
    tags=["Agents"]
)

app.include_router(
    bookings_router,
    prefix=f"{settings.API_V1_STR}/bookings",
    tags=["Bookings"]
)

@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "BusLink Booking API",
        "version": "1.0.0",
        "docs": "/docs"
    }

@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
