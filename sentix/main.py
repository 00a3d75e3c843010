from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sentix.config import settings
from sentix.dashboard.router import router as dashboard_router
from sentix.exception_handlers import register_exception_handlers
from sentix.logging_config import setup_logging
from sentix.sentiment.router import router as sentiment_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    yield


app = FastAPI(
    title="Sentix",
    description="AI-generated stock market sentiment rankings",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(sentiment_router, prefix="/api/v1/sentiment", tags=["sentiment"])
app.include_router(dashboard_router, tags=["dashboard"])


@app.get("/api/v1/health")
async def health():
    return {"status": "healthy"}
