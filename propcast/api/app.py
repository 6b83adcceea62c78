"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from propcast.api.routes import comparison, projections
from propcast.config import settings

app = FastAPI(
    title="Propcast",
    description="Leveraged Property Investment Projections",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(projections.router)
app.include_router(comparison.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
