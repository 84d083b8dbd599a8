import random
from decimal import Decimal

import pytest

from app.api.carrinho.core.carrinho import Carrinho, CondimentoSelecionado, gerar_id_item, montar_item
from tests.fakes import condimento, produto

PIZZA = produto("P1", "30.00")
BORDA = CondimentoSelecionado.from_dto(condimento("B1", "5.00"))
BACON = CondimentoSelecionado.from_dto(condimento("A1", "3.00"))


def test_mesma_combinacao_soma_quantidade_na_linha():
    carrinho = Carrinho()
    carrinho.adicionar_item(PIZZA, [BORDA], 1)
    carrinho.adicionar_item(PIZZA, [BORDA], 2)

    assert len(carrinho) == 1
    item = carrinho.itens[0]
    assert item.quantidade == 3
    assert item.total == Decimal("105.00")
    assert carrinho.total_itens == 3
    assert carrinho.total_preco == Decimal("105.00")


def test_ordem_dos_condimentos_nao_muda_a_identidade():
    carrinho = Carrinho()
    primeiro = carrinho.adicionar_item(PIZZA, [BORDA, BACON])
    segundo = carrinho.adicionar_item(PIZZA, [BACON, BORDA])

    assert primeiro.id == segundo.id == gerar_id_item("P1", ["B1", "A1"])
    assert len(carrinho) == 1
    assert carrinho.itens[0].quantidade == 2


def test_combinacoes_diferentes_geram_linhas_diferentes():
    carrinho = Carrinho()
    carrinho.adicionar_item(PIZZA, [])
    carrinho.adicionar_item(PIZZA, [BORDA])

    assert len(carrinho) == 2
    assert carrinho.itens[0].id != carrinho.itens[1].id
    assert carrinho.total_preco == Decimal("65.00")


def test_id_sem_condimentos():
    assert gerar_id_item("P1", []) == "P1-"


def test_condimento_repetido_conta_uma_vez():
    item = montar_item(PIZZA, [BACON, BACON], 1)

    assert len(item.condimentos) == 1
    assert item.total == Decimal("33.00")


@pytest.mark.parametrize("quantidade", [0, -1])
def test_quantidade_zero_ou_negativa_remove_linha(quantidade):
    carrinho = Carrinho()
    item = carrinho.adicionar_item(PIZZA, [BORDA], 2)

    assert carrinho.atualizar_quantidade(item.id, quantidade) is None
    assert carrinho.vazio
    assert carrinho.total_itens == 0
    assert carrinho.total_preco == Decimal("0")


def test_atualizar_quantidade_recalcula_total():
    carrinho = Carrinho()
    item = carrinho.adicionar_item(PIZZA, [BACON], 1)

    atualizado = carrinho.atualizar_quantidade(item.id, 4)

    assert atualizado.quantidade == 4
    assert atualizado.total == Decimal("132.00")
    assert carrinho.total_preco == Decimal("132.00")


def test_item_desconhecido_nao_altera_carrinho():
    carrinho = Carrinho()
    carrinho.adicionar_item(PIZZA, [], 1)

    assert carrinho.atualizar_quantidade("nao-existe", 5) is None
    assert carrinho.remover_item("nao-existe") is False
    assert carrinho.total_itens == 1


@pytest.mark.parametrize("quantidade", [0, -3])
def test_adicionar_com_quantidade_invalida(quantidade):
    carrinho = Carrinho()
    with pytest.raises(ValueError):
        carrinho.adicionar_item(PIZZA, [], quantidade)
    assert carrinho.vazio


def test_limpar():
    carrinho = Carrinho()
    carrinho.adicionar_item(PIZZA, [BORDA], 2)
    carrinho.limpar()

    assert carrinho.vazio
    assert carrinho.total_itens == 0
    assert carrinho.total_preco == Decimal("0")


def test_carregar_substitui_linhas_e_une_identidades():
    carrinho = Carrinho()
    carrinho.adicionar_item(produto("P9", "1.00"), [], 7)

    carrinho.carregar([
        montar_item(PIZZA, [BORDA], 1),
        montar_item(PIZZA, [BORDA], 2),
        montar_item(PIZZA, [], 1),
    ])

    assert [i.quantidade for i in carrinho.itens] == [3, 1]
    assert carrinho.total_itens == 4
    assert carrinho.total_preco == Decimal("135.00")


def test_carregar_rejeita_quantidade_invalida():
    item = montar_item(PIZZA, [], 1)
    invalido = item.__class__(id=item.id, produto=PIZZA, quantidade=0)

    with pytest.raises(ValueError):
        Carrinho().carregar([invalido])


def test_totais_sempre_batem_com_as_linhas():
    rng = random.Random(20261018)
    produtos = [produto(f"P{i}", f"{rng.randint(100, 9999) / 100:.2f}") for i in range(5)]
    condimentos = [
        CondimentoSelecionado.from_dto(condimento(f"C{i}", f"{rng.randint(0, 999) / 100:.2f}"))
        for i in range(4)
    ]
    carrinho = Carrinho()

    for _ in range(200):
        operacao = rng.random()
        if operacao < 0.6 or carrinho.vazio:
            escolhidos = rng.sample(condimentos, rng.randint(0, len(condimentos)))
            carrinho.adicionar_item(rng.choice(produtos), escolhidos, rng.randint(1, 3))
        elif operacao < 0.85:
            item = rng.choice(carrinho.itens)
            carrinho.atualizar_quantidade(item.id, rng.randint(-1, 5))
        else:
            carrinho.remover_item(rng.choice(carrinho.itens).id)

        assert carrinho.total_itens == sum(i.quantidade for i in carrinho.itens)
        assert carrinho.total_preco == sum((i.total for i in carrinho.itens), Decimal("0"))
        for item in carrinho.itens:
            unitario = item.produto.valor + sum((c.valor_adicional for c in item.condimentos), Decimal("0"))
            assert item.total == unitario * item.quantidade
        assert len({i.id for i in carrinho.itens}) == len(carrinho)
