"""
Models do bounded context de Pedidos.
"""

from .model_pedido import PedidoModel
from .model_produto_vendido import ProdutoVendidoModel

__all__ = [
    "PedidoModel",
    "ProdutoVendidoModel",
]
