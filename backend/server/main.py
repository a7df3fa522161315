"""QuestCraft — FastAPI application."""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from server.config import ALLOWED_ORIGINS, ENVIRONMENT, LOG_LEVEL, PORT
from brain.exceptions import ModelCallError, PlanParseError, ProviderNotConfigured
from brain.llm_client import resolve_provider
from brain.routes import router as brain_router
from quests.routes import router as quests_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    ready = [
        name for name in ("doubao", "deepseek", "claude")
        if resolve_provider(name).is_configured
    ]
    logger.info(f"QuestCraft starting ({ENVIRONMENT}) — configured providers: {ready or 'none'}")
    yield
    # Shutdown
    logger.info("QuestCraft shutting down")


app = FastAPI(title="QuestCraft API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


# ─── Error mapping ───────────────────────────────────────────
# Every error body has an "error" key.

@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "请求格式错误", "detail": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(ProviderNotConfigured)
async def provider_not_configured(request: Request, exc: ProviderNotConfigured):
    logger.error(str(exc))
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.exception_handler(PlanParseError)
async def plan_parse_error(request: Request, exc: PlanParseError):
    return JSONResponse(status_code=502, content={"error": str(exc), "raw": exc.raw})


@app.exception_handler(ModelCallError)
async def model_call_error(request: Request, exc: ModelCallError):
    return JSONResponse(
        status_code=502,
        content={"error": "模型调用失败", "detail": jsonable_encoder(exc.detail)},
    )


# ─── API routes ──────────────────────────────────────────────
@app.get("/api/health")
def health_check():
    return {"ok": True}


app.include_router(brain_router, prefix="/api", tags=["brain"])
app.include_router(quests_router, prefix="/api", tags=["quests"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.main:app", host="0.0.0.0", port=PORT)
