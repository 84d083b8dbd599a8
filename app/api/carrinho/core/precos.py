"""
Cálculo de preços do carrinho.

Os valores são mantidos com precisão total; arredondamento só acontece na
formatação (`app.utils.formatacao`).
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable, Tuple

from app.utils.formatacao import to_decimal


def calcular_total_item(produto: Any, condimentos: Iterable[Any], quantidade: int) -> Decimal:
    """(preço do produto + soma dos condimentos) x quantidade."""
    valor_condimentos = sum(
        (to_decimal(c.valor_adicional) for c in condimentos),
        Decimal("0"),
    )
    return (to_decimal(produto.valor) + valor_condimentos) * quantidade


def calcular_totais(itens: Iterable[Any]) -> Tuple[int, Decimal]:
    """Retorna (total de itens, valor total) somando as linhas."""
    total_itens = 0
    total_preco = Decimal("0")
    for item in itens:
        total_itens += item.quantidade
        total_preco += item.total
    return total_itens, total_preco
