import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import get_settings
from routers.health import router as health_router
from routers.orders import router as orders_router

# --- CONFIGURACIÓN ---
settings = get_settings()

logging.basicConfig(level=settings.log_level, format='%(asctime)s - %(message)s')
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.shopify_configured:
        logger.warning(
            " [!] SHOPIFY_STORE_DOMAIN o SHOPIFY_ADMIN_TOKEN no configurados; /create-order responderá 500."
        )
    if settings.allowed_origins == ["*"]:
        logger.warning(" [!] CORS abierto a todos los orígenes; define ALLOWED_ORIGINS para restringirlo.")
    yield


app = FastAPI(title="Order Relay", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Malformed bodies get the same {ok, error} contract as every other failure
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{loc}: {first.get('msg')}" if loc else str(first.get("msg"))
    else:
        message = "Cuerpo de la petición inválido"
    return JSONResponse(status_code=400, content={"ok": False, "error": message})


app.include_router(health_router)
app.include_router(orders_router)


if __name__ == "__main__":
    logger.info(" [*] Server listening on port %s", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
