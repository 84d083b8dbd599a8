from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.api.catalogo.schemas.schema_catalogo import CondimentosProdutoResponse, ProdutoResponse
from app.api.catalogo.services.dependencies import get_catalogo_service
from app.api.catalogo.services.service_catalogo import CatalogoService
from app.utils.logger import logger


router = APIRouter(
    prefix="/api/catalogo/public",
    tags=["Public - Catalogo"],
)


@router.get("/produtos", response_model=List[ProdutoResponse])
async def listar_produtos(
    categoria: Optional[str] = Query(None, description="Filtra por categoria (ex.: Pizzas). 'Todos' não filtra."),
    svc: CatalogoService = Depends(get_catalogo_service),
):
    """
    Lista os produtos ativos do cardápio.

    Endpoint público - não requer autenticação.
    """
    logger.info(f"[Catalogo Public] Listar produtos - categoria={categoria}")
    return await svc.listar_produtos(categoria)


@router.get("/categorias", response_model=List[str])
async def listar_categorias(svc: CatalogoService = Depends(get_catalogo_service)):
    return await svc.listar_categorias()


@router.get("/produtos/{id_produto}/condimentos", response_model=CondimentosProdutoResponse)
async def listar_condimentos_produto(
    id_produto: str,
    svc: CatalogoService = Depends(get_catalogo_service),
):
    """
    Lista bordas (escolha única) e adicionais (escolha livre) disponíveis para o produto.
    """
    logger.info(f"[Catalogo Public] Listar condimentos - produto={id_produto}")
    return await svc.listar_condimentos_produto(id_produto)
