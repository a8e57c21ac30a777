from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .api.recipes import router as recipes_router
from .core.config import get_settings

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

app = FastAPI(title="recipegen", version="0.1.0", description="Turns generated recipe text into structured recipes")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(recipes_router)


@app.get("/api/health")
async def health_check():
    return {"status": "ok", "message": "recipegen API is running", "generation_configured": bool(settings.google_api_key)}
