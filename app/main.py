# app/main.py

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_exception_handlers
from app.api.v1 import products, stores
from app.config import settings
from app.db.supabase_client import SupabaseClientManager
from app.services.cache_service import cache_service

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Store Catalog API",
    description="Store and product catalog with inventory and market density analytics.",
    version="1.0.0",
)

# --- CORS (Cross-Origin Resource Sharing) ---
# Origins come from settings so the frontend dev servers can reach the API.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# --- API Routers ---
app.include_router(stores.router, prefix="/api/stores", tags=["Stores"])
app.include_router(products.router, prefix="/api/products", tags=["Products"])


@app.get("/health", tags=["Health Check"])
async def health_check():
    """
    Health check endpoint reporting which backing components are configured.
    """
    return {
        "status": "OK",
        "message": "Server is running",
        "components": {
            "supabase": {
                "configured": bool(settings.SUPABASE_URL and settings.SUPABASE_KEY),
                "connected": SupabaseClientManager.is_connected(),
            },
            "cache": {"enabled": cache_service.enabled},
        },
    }


@app.get("/", tags=["Health Check"])
def read_root():
    """A public health check endpoint to confirm the API is running."""
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT, reload=True)
