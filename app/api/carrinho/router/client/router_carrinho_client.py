from fastapi import APIRouter, Body, Depends, Path, Response, status

from app.api.carrinho.schemas.schema_carrinho import (
    AdicionarItemRequest,
    AtualizarQuantidadeRequest,
    CarrinhoSessaoResponse,
    sessao_to_response,
)
from app.api.carrinho.services.dependencies import get_carrinho_service
from app.api.carrinho.services.service_carrinho import CarrinhoService
from app.utils.logger import logger

router = APIRouter(prefix="/api/carrinho/client", tags=["Client - Carrinho"])


@router.post("/sessoes", response_model=CarrinhoSessaoResponse, status_code=status.HTTP_201_CREATED)
def criar_sessao(svc: CarrinhoService = Depends(get_carrinho_service)):
    """
    Abre um carrinho vazio para uma sessão anônima (uma aba do navegador).
    O `sessao_id` devolvido identifica o carrinho nas demais rotas.
    """
    return sessao_to_response(svc.criar_sessao())


@router.get("/sessoes/{sessao_id}", response_model=CarrinhoSessaoResponse)
def obter_sessao(
    sessao_id: str = Path(..., description="ID da sessão do carrinho"),
    svc: CarrinhoService = Depends(get_carrinho_service),
):
    return sessao_to_response(svc.obter_sessao(sessao_id))


@router.delete("/sessoes/{sessao_id}", status_code=status.HTTP_204_NO_CONTENT)
def descartar_sessao(
    sessao_id: str = Path(..., description="ID da sessão do carrinho"),
    svc: CarrinhoService = Depends(get_carrinho_service),
):
    """Encerra a sessão (ex.: aba fechada). O carrinho é descartado."""
    svc.descartar_sessao(sessao_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/sessoes/{sessao_id}/itens", response_model=CarrinhoSessaoResponse)
async def adicionar_item(
    sessao_id: str = Path(..., description="ID da sessão do carrinho"),
    payload: AdicionarItemRequest = Body(...),
    svc: CarrinhoService = Depends(get_carrinho_service),
):
    """
    Adiciona um produto com os condimentos escolhidos.

    A mesma combinação (produto + condimentos, em qualquer ordem) soma a
    quantidade na linha existente.
    """
    logger.info(
        f"[Carrinho Client] Adicionar item - sessao={sessao_id} produto={payload.id_produto} "
        f"condimentos={payload.ids_condimentos} quantidade={payload.quantidade}"
    )
    sessao, _ = await svc.adicionar_item(
        sessao_id,
        payload.id_produto,
        payload.ids_condimentos,
        payload.quantidade,
    )
    return sessao_to_response(sessao)


@router.patch("/sessoes/{sessao_id}/itens/{item_id}", response_model=CarrinhoSessaoResponse)
def atualizar_quantidade(
    sessao_id: str = Path(..., description="ID da sessão do carrinho"),
    item_id: str = Path(..., description="ID do item no carrinho"),
    payload: AtualizarQuantidadeRequest = Body(...),
    svc: CarrinhoService = Depends(get_carrinho_service),
):
    """Quantidade zero ou negativa remove o item."""
    return sessao_to_response(svc.atualizar_quantidade(sessao_id, item_id, payload.quantidade))


@router.delete("/sessoes/{sessao_id}/itens/{item_id}", response_model=CarrinhoSessaoResponse)
def remover_item(
    sessao_id: str = Path(..., description="ID da sessão do carrinho"),
    item_id: str = Path(..., description="ID do item no carrinho"),
    svc: CarrinhoService = Depends(get_carrinho_service),
):
    return sessao_to_response(svc.remover_item(sessao_id, item_id))


@router.delete("/sessoes/{sessao_id}/itens", response_model=CarrinhoSessaoResponse)
def limpar_carrinho(
    sessao_id: str = Path(..., description="ID da sessão do carrinho"),
    svc: CarrinhoService = Depends(get_carrinho_service),
):
    """Esvazia o carrinho (e cancela a edição de pedido, se houver)."""
    return sessao_to_response(svc.limpar(sessao_id))
