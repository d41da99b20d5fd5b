# app/main.py
import logging
import time
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.routing import Match

from .auth import require_api_key
from .config import Settings, get_settings
from .database import ProductStore
from .errors import ValidationError, register_error_handlers
from .handlers import (
    create_product_logic, delete_product_logic, get_product_logic,
    list_products_logic, statistics_logic, update_product_logic,
)
from .logging_config import configure_logging
from .models import Product, ProductPage, ProductStatistics

logger = logging.getLogger(__name__)

# ---------------------------
# Dependencies
# ---------------------------
def get_store(request: Request) -> ProductStore:
    return request.app.state.store


async def read_json_object(request: Request) -> Dict[str, Any]:
    try:
        payload = await request.json()
    except ValueError:
        raise ValidationError("Request body must be a JSON object.")
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object.")
    return payload

# ---------------------------
# Product endpoints
# ---------------------------
products_router = APIRouter(prefix="/products", tags=["products"])

@products_router.get("", response_model=ProductPage)
async def list_products(
    request: Request,
    category: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    store: ProductStore = Depends(get_store),
):
    settings: Settings = request.app.state.settings
    return list_products_logic(store, category, search, page, limit, max_limit=settings.MAX_PAGE_SIZE)

# must stay above /{product_id}
@products_router.get("/statistics", response_model=ProductStatistics)
async def product_statistics(store: ProductStore = Depends(get_store)):
    return statistics_logic(store)

@products_router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    return get_product_logic(store, product_id)

@products_router.post("", response_model=Product, status_code=201)
async def create_product(request: Request, store: ProductStore = Depends(get_store)):
    payload = await read_json_object(request)
    return create_product_logic(store, payload)

@products_router.put("/{product_id}", response_model=Product)
async def update_product(product_id: str, request: Request, store: ProductStore = Depends(get_store)):
    payload = await read_json_object(request)
    return update_product_logic(store, product_id, payload)

@products_router.delete("/{product_id}", status_code=204, response_class=Response)
async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
    delete_product_logic(store, product_id)
    return Response(status_code=204)

# ---------------------------
# Fallback for the rest of the API prefix
# ---------------------------
ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

async def unmatched_api_path(request: Request):
    """Runs after the key check: 405, trailing-slash redirect or 404, like the router would."""
    routes = [r for r in request.app.router.routes if getattr(r, "endpoint", None) is not unmatched_api_path]
    if any(route.matches(request.scope)[0] == Match.PARTIAL for route in routes):
        raise StarletteHTTPException(status_code=405)

    path = request.scope["path"]
    if path.endswith("/") and path != "/":
        stripped = {**request.scope, "path": path.rstrip("/")}
        if any(route.matches(stripped)[0] == Match.FULL for route in routes):
            return RedirectResponse(url=str(request.url.replace(path=stripped["path"])), status_code=307)
    raise StarletteHTTPException(status_code=404)

# ---------------------------
# App factory
# ---------------------------
def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    settings = settings or get_settings()
    if store is None:
        store = ProductStore.seeded() if settings.SEED_DATA else ProductStore()

    app = FastAPI(title=f"{settings.PROJECT_NAME} (in-memory demo)", version=settings.VERSION)
    app.state.settings = settings
    app.state.store = store
    app.state.api_key = settings.API_KEY

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info("%s %s -> %d (%.1f ms)", request.method, request.url.path, status_code, elapsed_ms)

    register_error_handlers(app)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def root():
        return "Hello World! Welcome to the Product API."

    @app.get("/health", include_in_schema=False)
    async def health():
        return {"status": "ok"}

    api_router = APIRouter(prefix=settings.API_PREFIX, dependencies=[Depends(require_api_key)])
    api_router.include_router(products_router)
    # everything else under the prefix still goes through the key check first
    for path in ("", "/{rest:path}"):
        api_router.add_api_route(path, unmatched_api_path, methods=ALL_METHODS, include_in_schema=False)
    app.include_router(api_router)

    logger.debug("App created with %d seeded products", len(store))
    return app


_settings = get_settings()
configure_logging(_settings.LOG_LEVEL)
app = create_app(_settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=_settings.HOST, port=_settings.PORT)
