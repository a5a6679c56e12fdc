# main.py

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.logging_utils import setup_logger

from app.api.calculations import router as calculations_router

app = FastAPI(
    title="Manna Alive Landed Cost API",
    version="0.2.0",
)

# === CORS: liberar acesso do front (Next em localhost:3000) ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,   # CORS_ORIGINS no .env
    allow_credentials=True,
    allow_methods=["*"],            # libera GET, POST, PUT, DELETE, OPTIONS etc.
    allow_headers=["*"],
)

@app.on_event("startup")
def on_startup():
    setup_logger()


app.include_router(calculations_router)


@app.get("/health")
def health_check():
    return {"status": "ok"}
