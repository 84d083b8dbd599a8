from decimal import Decimal
from itertools import count

from app.api.carrinho.core.carrinho import Carrinho, CondimentoSelecionado, gerar_id_item
from app.api.pedidos.contracts.pedido_store_contract import RegistroProdutoVendido
from app.api.pedidos.services.service_achatamento import achatar_pedido
from app.api.pedidos.services.service_reconstrucao import (
    NOME_CONDIMENTO_DESCONHECIDO,
    ids_referenciados,
    reconstruir_carrinho,
)
from app.api.shared.schemas.schema_cliente import DadosCliente
from app.api.shared.schemas.schema_shared_enums import AprovacaoEnum
from tests.fakes import condimento, produto

PIZZA = produto("P2", "20.00", "Pizza Marguerita")
BACON_DTO = condimento("A1", "3.00", "Bacon")
BACON = CondimentoSelecionado.from_dto(BACON_DTO)


def _carrinho(*linhas):
    carrinho = Carrinho()
    for prod, condimentos, quantidade in linhas:
        carrinho.adicionar_item(prod, condimentos, quantidade)
    return carrinho


_SEQUENCIA = count(1)


def _registro(id_produto, id_condimento=None, valor="0"):
    return RegistroProdutoVendido(
        id_produtos_vendidos=f"PED_{id_produto}_{next(_SEQUENCIA)}",
        id_pedido="PED",
        id_produto=id_produto,
        id_condimento=id_condimento,
        valor=Decimal(valor),
        carrinho="AB12CD",
    )


def test_achatar_gera_linha_base_e_linha_por_condimento(dados_cliente):
    carrinho = _carrinho((PIZZA, [BACON], 2))

    achatado = achatar_pedido(
        carrinho,
        DadosCliente(**dados_cliente),
        id_pedido="PED1",
        codigo_carrinho="AB12CD",
    )

    registros = achatado.registros
    assert len(registros) == 4
    assert [(r.id_condimento, r.valor) for r in registros] == [
        (None, Decimal("20.00")),
        ("A1", Decimal("3.00")),
        (None, Decimal("20.00")),
        ("A1", Decimal("3.00")),
    ]
    assert len({r.id_produtos_vendidos for r in registros}) == 4
    assert registros[0].id_produtos_vendidos == "PED1_P2_1"
    assert all(r.carrinho == "AB12CD" and r.id_pedido == "PED1" for r in registros)
    assert all(r.aprovado == AprovacaoEnum.NAO_DEFINIDO for r in registros)
    assert all(r.data_pedido == achatado.cabecalho.data_pedido for r in registros)
    # soma das linhas = total do carrinho
    assert sum(r.valor for r in registros) == carrinho.total_preco == Decimal("46.00")


def test_cabecalho_tem_snapshot_do_cliente(dados_cliente):
    achatado = achatar_pedido(
        _carrinho((PIZZA, [], 1)),
        DadosCliente(**dados_cliente),
        id_pedido="PED1",
        codigo_carrinho="AB12CD",
    )

    cabecalho = achatado.cabecalho
    assert cabecalho.nome_usuario == "Maria Souza"
    assert cabecalho.telefone == "11987654321"
    assert cabecalho.tipo_pagamento == "PIX"
    assert cabecalho.aprovado == AprovacaoEnum.NAO_DEFINIDO


def test_reconstrucao_volta_ao_mesmo_carrinho(dados_cliente):
    borda = condimento("B1", "5.00", "Borda Catupiry")
    calabresa = produto("P1", "30.00", "Pizza Calabresa")
    original = _carrinho(
        (PIZZA, [BACON], 2),
        (calabresa, [CondimentoSelecionado.from_dto(borda)], 1),
    )
    achatado = achatar_pedido(original, DadosCliente(**dados_cliente), id_pedido="PED1", codigo_carrinho="AB12CD")

    resultado = reconstruir_carrinho(achatado.registros, [PIZZA, calabresa], [BACON_DTO, borda])

    assert resultado.completo
    assert [(i.id, i.quantidade) for i in resultado.carrinho.itens] == [
        (i.id, i.quantidade) for i in original.itens
    ]
    assert resultado.carrinho.total_preco == original.total_preco == Decimal("81.00")


def test_reconstrucao_usa_preco_atual_do_catalogo():
    registros = [_registro("P2", valor="20.00"), _registro("P2", "A1", "3.00")]
    mais_caro = produto("P2", "25.00")

    resultado = reconstruir_carrinho(registros, [mais_caro], [BACON_DTO])

    assert resultado.carrinho.total_preco == Decimal("28.00")


def test_produto_fora_do_catalogo_e_descartado():
    registros = [
        _registro("P2", valor="20.00"),
        _registro("P9", valor="50.00"),
        _registro("P9", "A1", "3.00"),
    ]

    resultado = reconstruir_carrinho(registros, [PIZZA], [BACON_DTO])

    assert resultado.produtos_descartados == ("P9",)
    assert len(resultado.carrinho) == 1
    assert resultado.carrinho.total_preco == Decimal("20.00")
    assert not resultado.completo


def test_condimento_fora_do_catalogo_vira_substituto():
    registros = [_registro("P2", valor="20.00"), _registro("P2", "X9", "4.00")]

    resultado = reconstruir_carrinho(registros, [PIZZA], [])

    item = resultado.carrinho.itens[0]
    assert item.condimentos[0].id_condimento == "X9"
    assert item.condimentos[0].nome_condimento == NOME_CONDIMENTO_DESCONHECIDO
    assert item.condimentos[0].valor_adicional == Decimal("0")
    assert item.total == Decimal("20.00")
    assert resultado.condimentos_degradados == ("X9",)
    assert item.id == gerar_id_item("P2", ["X9"])


def test_sentinelas_antigas_contam_como_unidade():
    registros = [
        _registro("P2", "", "20.00"),
        _registro("P2", "0", "20.00"),
        _registro("P2", None, "20.00"),
        _registro("P2", "A1", "3.00"),
    ]

    resultado = reconstruir_carrinho(registros, [PIZZA], [BACON_DTO])

    item = resultado.carrinho.itens[0]
    assert item.quantidade == 3
    assert [c.id_condimento for c in item.condimentos] == ["A1"]
    assert ids_referenciados(registros) == (["P2"], ["A1"])


def test_grupo_so_com_condimentos_tem_quantidade_um():
    registros = [_registro("P2", "A1", "3.00"), _registro("P2", "A1", "3.00")]

    resultado = reconstruir_carrinho(registros, [PIZZA], [BACON_DTO])

    assert resultado.carrinho.itens[0].quantidade == 1
    assert resultado.carrinho.total_preco == Decimal("23.00")


def test_ordem_de_aparicao_dos_produtos_e_mantida():
    registros = [_registro("P3", valor="8.50"), _registro("P2", valor="20.00"), _registro("P3", valor="8.50")]
    refri = produto("P3", "8.50", categoria="Bebidas")

    resultado = reconstruir_carrinho(registros, [PIZZA, refri], [])

    assert [(i.produto.id_produto, i.quantidade) for i in resultado.carrinho.itens] == [("P3", 2), ("P2", 1)]


def test_sem_registros_gera_carrinho_vazio():
    resultado = reconstruir_carrinho([], [PIZZA], [])

    assert resultado.carrinho.vazio
    assert resultado.completo


def test_produto_com_condimentos_diferentes_entre_linhas_e_reportado(dados_cliente):
    original = _carrinho((PIZZA, [BACON], 1), (PIZZA, [], 1))
    achatado = achatar_pedido(original, DadosCliente(**dados_cliente), id_pedido="PED1", codigo_carrinho="AB12CD")

    resultado = reconstruir_carrinho(achatado.registros, [PIZZA], [BACON_DTO])

    assert original.total_preco == Decimal("43.00")
    assert resultado.carrinho.total_preco != original.total_preco
    assert resultado.produtos_nao_uniformes == ("P2",)
    assert resultado.produtos_descartados == ()
    assert resultado.condimentos_degradados == ()
    assert not resultado.completo


def test_condimento_em_todas_as_unidades_nao_e_reportado():
    registros = [
        _registro("P2", valor="20.00"),
        _registro("P2", "A1", "3.00"),
        _registro("P2", valor="20.00"),
        _registro("P2", "A1", "3.00"),
    ]

    resultado = reconstruir_carrinho(registros, [PIZZA], [BACON_DTO])

    assert resultado.produtos_nao_uniformes == ()
    assert resultado.completo
