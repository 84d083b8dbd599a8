import os

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.api.shared.exceptions import PedidoError
from app.core.exception_handlers import (
    validation_exception_handler,
    http_exception_handler,
    pedido_exception_handler,
    general_exception_handler,
)
from app.utils.logger import logger
from app.config.settings import (
    CORS_ORIGINS,
    CORS_ALLOW_ALL,
    BASE_URL as SETTINGS_BASE_URL,
    ENABLE_DOCS,
    INIT_DB_ON_STARTUP,
)

# ───────────────────────────
# Importar modelos antes das rotas
# Garante que todos os modelos estejam registrados no SQLAlchemy
# antes de qualquer query ser executada
# ───────────────────────────
from app.database.init_db import importar_models

importar_models()

from app.api.catalogo.router.router import router as catalogo_router
from app.api.carrinho.router.router import api_carrinho
from app.api.carrinho.services.service_carrinho import CarrinhoSessaoStore
from app.api.pedidos.router.router import api_pedidos
from app.api.monitoring.router import router_public as monitoring_router_public
from app.utils.prometheus_metrics import PrometheusMiddleware

BASE_URL = SETTINGS_BASE_URL or os.getenv("BASE_URL", "http://localhost:8000")

# ──────────────────────────
# Instância FastAPI
# ──────────────────────────
app = FastAPI(
    title="API Pizzaria",
    version="1.0.0",
    description="Cardápio, carrinho e pedidos da pizzaria (checkout com envio pelo WhatsApp)",
    docs_url=("/swagger" if ENABLE_DOCS else None),
    redoc_url=("/redoc" if ENABLE_DOCS else None),
    openapi_url=("/openapi.json" if ENABLE_DOCS else None),
    servers=[{"url": BASE_URL, "description": "Base URL do ambiente"}],
    redirect_slashes=False  # Evita redirecionamento 307 quando URL não termina com /
)

# Sessões de carrinho (uma instância por aplicação)
app.state.carrinho_store = CarrinhoSessaoStore()

# ───────────────────────────
# Exception Handlers Globais
# ───────────────────────────
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(PedidoError, pedido_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# ───────────────────────────
# Middlewares
# ───────────────────────────
# Middlewares são executados na ORDEM REVERSA da adição (último adicionado = primeiro executado)
# ───────────────────────────

# Prometheus Middleware (para coletar métricas)
app.add_middleware(PrometheusMiddleware)

# CORS (adicionado por último, será executado primeiro)
# - Se CORS_ALLOW_ALL=true => allow_origins=["*"], allow_credentials=False
# - Caso contrário => allow_origins=CORS_ORIGINS (se vazio cai para ["*"]), allow_credentials=True somente quando houver origens explícitas
if CORS_ALLOW_ALL:
    allowed_origins = ["*"]
    allow_credentials = False
else:
    allowed_origins = CORS_ORIGINS or ["*"]
    allow_credentials = bool(CORS_ORIGINS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ───────────────────────────
# Startup / Shutdown
# ───────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("Iniciando API e banco de dados...")
    if INIT_DB_ON_STARTUP:
        from app.database.init_db import inicializar_banco
        inicializar_banco()
    logger.info("API iniciada com sucesso.")


@app.on_event("shutdown")
async def shutdown():
    logger.info(f"Encerrando API... sessões de carrinho abertas: {len(app.state.carrinho_store)}")
    logger.info("API encerrada.")


# ───────────────────────────
# Rotas
# ───────────────────────────
@app.get("/")
async def root():
    return {"status": "ok", "message": "API is running"}


@app.get("/health")
async def health():
    return {"status": "healthy"}


# Monitoring - Métricas públicas (sem auth)
app.include_router(monitoring_router_public)

# ───────────────────────────
# Routers
# ───────────────────────────
app.include_router(catalogo_router)
app.include_router(api_carrinho)
app.include_router(api_pedidos)
