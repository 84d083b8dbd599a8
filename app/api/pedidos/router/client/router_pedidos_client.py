from fastapi import APIRouter, Body, Depends, Path, status

from app.api.carrinho.services.dependencies import get_carrinho_service
from app.api.carrinho.services.service_carrinho import CarrinhoService
from app.api.pedidos.schemas.schema_pedido import CheckoutResponse
from app.api.pedidos.services.dependencies import get_pedido_service
from app.api.pedidos.services.service_pedido import PedidoService
from app.api.pedidos.services.service_pedido_responses import PedidoResponseBuilder
from app.api.shared.schemas.schema_cliente import DadosCliente
from app.utils.logger import logger

router = APIRouter(prefix="/api/pedidos/client", tags=["Client - Pedidos"])


# ======================================================================
# ============================ CHECKOUT ================================
@router.post(
    "/sessoes/{sessao_id}/checkout",
    response_model=CheckoutResponse,
    status_code=status.HTTP_201_CREATED,
)
async def finalizar_checkout(
    sessao_id: str = Path(..., description="ID da sessão do carrinho"),
    payload: DadosCliente = Body(...),
    carrinho_svc: CarrinhoService = Depends(get_carrinho_service),
    svc: PedidoService = Depends(get_pedido_service),
):
    """
    Grava o pedido do carrinho da sessão e devolve o código do pedido,
    o resumo em texto e o link do WhatsApp da pizzaria.

    Se a sessão estiver editando um pedido reaberto, o mesmo pedido
    (mesmo código) é atualizado em vez de criar outro.
    Depois da gravação completa, os itens gravados saem do carrinho da sessão.
    """
    sessao = carrinho_svc.obter_sessao(sessao_id)
    logger.info(
        f"[Pedidos Client] Checkout - sessao={sessao_id} itens={sessao.carrinho.total_itens} "
        f"edicao={sessao.codigo_em_edicao}"
    )

    if sessao.em_edicao:
        finalizado = await svc.atualizar_pedido(sessao.codigo_em_edicao, sessao.carrinho, payload)
    else:
        finalizado = await svc.finalizar_pedido(sessao.carrinho, payload)

    carrinho_svc.concluir_checkout(sessao_id, finalizado.carrinho)
    return PedidoResponseBuilder.checkout_to_response(finalizado)
