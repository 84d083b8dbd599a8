"""
Schemas (DTOs) do bounded context de Pedidos.
"""

from .schema_pedido import (
    # Request schemas
    AtualizarAprovacaoRequest,
    # Response schemas
    PedidoCabecalhoResponse,
    CheckoutResponse,
    ReconstrucaoAvisos,
    PedidoDetalheResponse,
    EditarPedidoResponse,
    AprovacaoResponse,
    DescartePedidoResponse,
)

__all__ = [
    "AtualizarAprovacaoRequest",
    "PedidoCabecalhoResponse",
    "CheckoutResponse",
    "ReconstrucaoAvisos",
    "PedidoDetalheResponse",
    "EditarPedidoResponse",
    "AprovacaoResponse",
    "DescartePedidoResponse",
]
