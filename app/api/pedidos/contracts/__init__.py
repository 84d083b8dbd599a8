"""
Contracts do bounded context de Pedidos.
"""

from .pedido_store_contract import (
    IPedidoStoreContract,
    PedidoCabecalho,
    RegistroProdutoVendido,
)

__all__ = [
    "IPedidoStoreContract",
    "PedidoCabecalho",
    "RegistroProdutoVendido",
]
