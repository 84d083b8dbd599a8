from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any

CENTAVOS = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    """
    Converte valores monetários para Decimal passando por `str`, para que
    artefatos de ponto flutuante (ex.: 19.995 -> 19.99499...) não entrem no cálculo.
    Valores vazios ou inválidos viram zero.
    """
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, str):
        value = value.strip().replace("R$", "").strip()
        # "1.234,56" -> "1234.56"
        if "," in value:
            value = value.replace(".", "").replace(",", ".")
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal("0")


def arredondar_centavos(valor: Any) -> Decimal:
    """Arredonda para centavos (meio para cima). Usado apenas na exibição/gravação de textos."""
    return to_decimal(valor).quantize(CENTAVOS, rounding=ROUND_HALF_UP)


def formatar_valor(valor: Any) -> str:
    """
    Formata no padrão brasileiro: milhar com ponto e decimal com vírgula.

    >>> formatar_valor(Decimal("1234.5"))
    '1.234,50'
    """
    arredondado = arredondar_centavos(valor)
    texto = f"{arredondado:,.2f}"  # 1,234.50
    return texto.replace(",", "_").replace(".", ",").replace("_", ".")


def formatar_preco(valor: Any) -> str:
    return f"R$ {formatar_valor(valor)}"
