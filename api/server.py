import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from config import ALLOWED_ORIGINS, LEGACY_SYMBOL, WATCH_LIST
from errors import ArbitrageError, NotFoundError

logger = logging.getLogger(__name__)


def _error_response(err: ArbitrageError, status_code: int) -> JSONResponse:
    return JSONResponse({"hata": True, "mesaj": str(err)}, status_code=status_code)


def create_app(cache_guard, allowed_origins=None) -> FastAPI:
    """Build the HTTP app around an injected CacheGuard."""
    app = FastAPI(title="Crypto Spread Tracker")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins if allowed_origins is not None else ALLOWED_ORIGINS,
        allow_methods=["GET"],
        allow_headers=["Origin", "Content-Type", "Accept"],
    )

    # Sync handlers: FastAPI runs each request on its own worker thread
    @app.get("/", response_class=PlainTextResponse)
    def index():
        return f"Arbitrage bot ready! Tracking {len(WATCH_LIST)} coins."

    @app.get("/coins")
    def coins():
        try:
            result = cache_guard.get()
        except ArbitrageError as e:
            logger.error(f"[API] /coins failed: {e}")
            return _error_response(e, 503)
        return result.to_dict()

    @app.get("/fiyatlar")
    def legacy_prices():
        try:
            result = cache_guard.get()
        except ArbitrageError as e:
            logger.error(f"[API] /fiyatlar failed: {e}")
            return _error_response(e, 503)

        record = result.find(LEGACY_SYMBOL)
        if record is None:
            return _error_response(NotFoundError(LEGACY_SYMBOL), 404)
        return record.to_legacy_dict()

    @app.get("/health")
    def health():
        age = cache_guard.age()
        return {
            "status": "ok",
            "cached": age is not None,
            "age_seconds": round(age, 3) if age is not None else None,
        }

    return app
