from fastapi import APIRouter
from app.api.catalogo.router.public.router_catalogo_public import router as router_catalogo_public

router = APIRouter()

# Rotas públicas (vitrine, sem autenticação)
router.include_router(router_catalogo_public)
