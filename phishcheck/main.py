import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from phishcheck.config import settings
from phishcheck.database import SessionLocal, init_db
from phishcheck.api import routes
from phishcheck.services.state_service import get_state
from phishcheck.services.state_store import StateStore

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    print("🚀 Starting PhishCheck...")
    init_db()
    db = SessionLocal()
    try:
        get_state(StateStore(db))
    finally:
        db.close()
    print("✓ Weights and domain lists loaded")
    yield
    # Shutdown
    print("👋 Shutting down PhishCheck...")

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(routes.router, prefix=settings.API_PREFIX, tags=["Analysis"])

@app.get("/")
def root():
    return {
        "message": "PhishCheck API",
        "version": settings.VERSION,
        "docs": "/docs"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("phishcheck.main:app", host="0.0.0.0", port=8000, reload=False)
