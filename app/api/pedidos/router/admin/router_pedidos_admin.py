"""
Router de pedidos para a equipe: busca por código, edição, aprovação e descarte.
"""
from typing import Optional

from fastapi import APIRouter, Body, Depends, Path, Query, status

from app.api.carrinho.services.dependencies import get_carrinho_service
from app.api.carrinho.services.service_carrinho import CarrinhoService
from app.api.pedidos.schemas.schema_pedido import (
    AprovacaoResponse,
    AtualizarAprovacaoRequest,
    DescartePedidoResponse,
    EditarPedidoResponse,
    PedidoDetalheResponse,
)
from app.api.pedidos.services.dependencies import get_pedido_service
from app.api.pedidos.services.service_pedido import PedidoService
from app.api.pedidos.services.service_pedido_responses import PedidoResponseBuilder
from app.api.pedidos.utils.codigo_carrinho import normalizar_codigo_carrinho
from app.utils.logger import logger

router = APIRouter(prefix="/api/pedidos/admin", tags=["Admin - Pedidos"])


@router.get("/{codigo}", response_model=PedidoDetalheResponse, status_code=status.HTTP_200_OK)
async def buscar_pedido(
    codigo: str = Path(..., description="Código do pedido (ex.: AB12CD ou #AB12CD)"),
    svc: PedidoService = Depends(get_pedido_service),
):
    """
    Busca o pedido pelo código e reconstrói os itens com os preços atuais do catálogo.

    `produtos_descartados` e `condimentos_degradados` listam o que não existe mais no catálogo.
    `produtos_nao_uniformes` lista produtos cujas unidades tinham condimentos diferentes.
    """
    logger.info(f"[Pedidos Admin] Buscar pedido - codigo={codigo}")
    pedido = await svc.buscar_pedido(codigo)
    return PedidoResponseBuilder.detalhe_to_response(pedido)


@router.post("/{codigo}/editar", response_model=EditarPedidoResponse, status_code=status.HTTP_200_OK)
async def editar_pedido(
    codigo: str = Path(..., description="Código do pedido"),
    sessao_id: Optional[str] = Query(None, description="Sessão que vai receber o pedido; se omitida, uma nova é criada"),
    svc: PedidoService = Depends(get_pedido_service),
    carrinho_svc: CarrinhoService = Depends(get_carrinho_service),
):
    """
    Reabre o pedido para edição: o carrinho da sessão é substituído pelo pedido
    reconstruído e o próximo checkout dessa sessão atualiza o mesmo pedido.
    """
    logger.info(f"[Pedidos Admin] Editar pedido - codigo={codigo} sessao={sessao_id}")
    if sessao_id:
        # falha cedo se a sessão não existir, antes de ler o pedido
        carrinho_svc.obter_sessao(sessao_id)
    pedido = await svc.reabrir_pedido(codigo)

    if not sessao_id:
        sessao_id = carrinho_svc.criar_sessao().id
    sessao = carrinho_svc.carregar_pedido(
        sessao_id,
        pedido.cabecalho.carrinho,
        pedido.resultado.carrinho,
        pedido.cliente,
    )
    return PedidoResponseBuilder.edicao_to_response(pedido, sessao)


@router.put("/{codigo}/aprovacao", response_model=AprovacaoResponse, status_code=status.HTTP_200_OK)
async def atualizar_aprovacao(
    codigo: str = Path(..., description="Código do pedido"),
    payload: AtualizarAprovacaoRequest = Body(...),
    svc: PedidoService = Depends(get_pedido_service),
):
    """Marca o pedido (cabeçalho e itens) como aprovado, rejeitado ou não definido."""
    aprovado = await svc.atualizar_aprovacao(codigo, payload.aprovado)
    return AprovacaoResponse(carrinho=normalizar_codigo_carrinho(codigo), aprovado=aprovado)


@router.delete("/{codigo}", response_model=DescartePedidoResponse, status_code=status.HTTP_200_OK)
async def descartar_pedido(
    codigo: str = Path(..., description="Código do pedido"),
    svc: PedidoService = Depends(get_pedido_service),
):
    """
    Remove o pedido e todos os seus itens.
    Usado para limpar pedidos com gravação interrompida (cabeçalho sem itens).
    """
    logger.info(f"[Pedidos Admin] Descartar pedido - codigo={codigo}")
    removidas = await svc.descartar_pedido(codigo)
    return DescartePedidoResponse(carrinho=normalizar_codigo_carrinho(codigo), linhas_removidas=removidas)
