from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.api.pedidos.utils.codigo_carrinho import (
    ALFABETO_CODIGO,
    codigo_valido,
    gerar_codigo_carrinho,
    normalizar_codigo_carrinho,
)
from app.api.shared.schemas.schema_cliente import DadosCliente
from app.utils.database_utils import TZ_SP, formatar_data_br
from app.utils.formatacao import formatar_preco, formatar_valor, to_decimal
from app.utils.telefone import normalizar_cep, normalizar_telefone, numero_whatsapp


@pytest.mark.parametrize(
    "valor, esperado",
    [
        (Decimal("19.995"), "20,00"),
        (Decimal("19.994"), "19,99"),
        (Decimal("19.999"), "20,00"),
        (Decimal("0.125"), "0,13"),
        (Decimal("1234.5"), "1.234,50"),
        (Decimal("1234567.891"), "1.234.567,89"),
        (19.995, "20,00"),
        (19.999, "20,00"),
        (0, "0,00"),
    ],
)
def test_formatar_valor_arredonda_meio_para_cima(valor, esperado):
    assert formatar_valor(valor) == esperado


def test_formatar_preco():
    assert formatar_preco(Decimal("76")) == "R$ 76,00"


@pytest.mark.parametrize(
    "valor, esperado",
    [
        ("1.234,56", Decimal("1234.56")),
        ("R$ 10,50", Decimal("10.50")),
        ("12.5", Decimal("12.5")),
        (None, Decimal("0")),
        ("", Decimal("0")),
        ("abc", Decimal("0")),
    ],
)
def test_to_decimal(valor, esperado):
    assert to_decimal(valor) == esperado


def test_formatar_data_br():
    assert formatar_data_br(datetime(2026, 10, 18, 23, 59, tzinfo=TZ_SP)) == "18/10/2026"
    assert formatar_data_br(None) == ""


def test_telefone_e_whatsapp():
    assert normalizar_telefone("(11) 98765-4321") == "11987654321"
    assert normalizar_telefone("0055 11 98765-4321") == "5511987654321"
    assert numero_whatsapp("(11) 98765-4321") == "5511987654321"
    assert numero_whatsapp("+55 11 97691-6761") == "5511976916761"
    assert normalizar_cep("01310-100") == "01310100"


def test_codigo_carrinho():
    for _ in range(50):
        codigo = gerar_codigo_carrinho()
        assert len(codigo) == 6
        assert set(codigo) <= set(ALFABETO_CODIGO)
        assert codigo_valido(codigo)

    assert normalizar_codigo_carrinho(" #ab12cd ") == "AB12CD"
    assert not codigo_valido("AB12C")
    assert not codigo_valido("ab12cd")


def test_dados_cliente_normaliza_campos(dados_cliente):
    cliente = DadosCliente(**dados_cliente)

    assert cliente.telefone == "11987654321"
    assert cliente.cep == "01310100"
    assert cliente.complemento is None


def test_dados_cliente_rejeita_pagamento_desconhecido(dados_cliente):
    with pytest.raises(ValidationError):
        DadosCliente(**{**dados_cliente, "tipo_pagamento": "Cheque"})
