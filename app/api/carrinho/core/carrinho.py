"""
Carrinho de compras em memória.

Cada linha é identificada por (produto, conjunto ordenado de condimentos);
adicionar a mesma combinação de novo soma a quantidade na linha existente.
Os totais do carrinho são sempre recalculados a partir das linhas.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from app.api.catalogo.contracts.catalogo_contract import CondimentoDTO, ProdutoDTO
from app.api.carrinho.core.precos import calcular_total_item, calcular_totais
from app.api.shared.schemas.schema_shared_enums import TipoCondimentoEnum
from app.utils.formatacao import to_decimal


@dataclass(frozen=True)
class CondimentoSelecionado:
    """Snapshot do condimento no momento da escolha."""
    id_condimento: str
    nome_condimento: str
    valor_adicional: Decimal
    tipo_condimento: TipoCondimentoEnum = TipoCondimentoEnum.ADICIONAIS

    @classmethod
    def from_dto(cls, condimento: CondimentoDTO) -> "CondimentoSelecionado":
        return cls(
            id_condimento=condimento.id_condimento,
            nome_condimento=condimento.nome_condimento,
            valor_adicional=to_decimal(condimento.valor_adicional),
            tipo_condimento=condimento.tipo_condimento,
        )


@dataclass(frozen=True)
class ItemCarrinho:
    id: str
    produto: ProdutoDTO
    quantidade: int
    condimentos: Tuple[CondimentoSelecionado, ...] = field(default_factory=tuple)
    total: Decimal = Decimal("0")


def gerar_id_item(id_produto: str, ids_condimento: Iterable[str]) -> str:
    """Identidade da linha: independe da ordem em que os condimentos foram escolhidos."""
    return f"{id_produto}-{'-'.join(sorted(set(ids_condimento)))}"


def _sem_repetidos(condimentos: Iterable[CondimentoSelecionado]) -> Tuple[CondimentoSelecionado, ...]:
    vistos: Dict[str, CondimentoSelecionado] = {}
    for condimento in condimentos:
        vistos.setdefault(condimento.id_condimento, condimento)
    return tuple(vistos.values())


def montar_item(
    produto: ProdutoDTO,
    condimentos: Sequence[CondimentoSelecionado],
    quantidade: int,
) -> ItemCarrinho:
    condimentos = _sem_repetidos(condimentos)
    return ItemCarrinho(
        id=gerar_id_item(produto.id_produto, (c.id_condimento for c in condimentos)),
        produto=produto,
        quantidade=quantidade,
        condimentos=condimentos,
        total=calcular_total_item(produto, condimentos, quantidade),
    )


class Carrinho:
    def __init__(self, itens: Optional[Iterable[ItemCarrinho]] = None):
        self._itens: List[ItemCarrinho] = []
        self.total_itens: int = 0
        self.total_preco: Decimal = Decimal("0")
        if itens:
            self.carregar(itens)

    @property
    def itens(self) -> Tuple[ItemCarrinho, ...]:
        return tuple(self._itens)

    @property
    def vazio(self) -> bool:
        return not self._itens

    def __len__(self) -> int:
        return len(self._itens)

    def obter_item(self, item_id: str) -> Optional[ItemCarrinho]:
        for item in self._itens:
            if item.id == item_id:
                return item
        return None

    def _indice(self, item_id: str) -> int:
        for indice, item in enumerate(self._itens):
            if item.id == item_id:
                return indice
        return -1

    def _recalcular_totais(self) -> None:
        self.total_itens, self.total_preco = calcular_totais(self._itens)

    # -------------------- Mutations -------------------
    def adicionar_item(
        self,
        produto: ProdutoDTO,
        condimentos: Sequence[CondimentoSelecionado],
        quantidade: int = 1,
    ) -> ItemCarrinho:
        """
        Adiciona a combinação ao carrinho. Se a linha já existir, soma a quantidade
        e recalcula o total com o snapshot de condimentos que já estava na linha.
        """
        if quantidade < 1:
            raise ValueError("quantidade deve ser maior ou igual a 1")

        novo = montar_item(produto, condimentos, quantidade)
        indice = self._indice(novo.id)
        if indice >= 0:
            existente = self._itens[indice]
            nova_quantidade = existente.quantidade + quantidade
            novo = replace(
                existente,
                quantidade=nova_quantidade,
                total=calcular_total_item(existente.produto, existente.condimentos, nova_quantidade),
            )
            self._itens[indice] = novo
        else:
            self._itens.append(novo)

        self._recalcular_totais()
        return novo

    def remover_item(self, item_id: str) -> bool:
        indice = self._indice(item_id)
        if indice < 0:
            return False
        del self._itens[indice]
        self._recalcular_totais()
        return True

    def atualizar_quantidade(self, item_id: str, quantidade: int) -> Optional[ItemCarrinho]:
        """Quantidade <= 0 remove a linha. Retorna a linha atualizada (ou None)."""
        if quantidade <= 0:
            self.remover_item(item_id)
            return None

        indice = self._indice(item_id)
        if indice < 0:
            return None

        item = self._itens[indice]
        atualizado = replace(
            item,
            quantidade=quantidade,
            total=calcular_total_item(item.produto, item.condimentos, quantidade),
        )
        self._itens[indice] = atualizado
        self._recalcular_totais()
        return atualizado

    def limpar(self) -> None:
        self._itens = []
        self._recalcular_totais()

    def carregar(self, itens: Iterable[ItemCarrinho]) -> None:
        """
        Substitui todas as linhas (usado ao reabrir um pedido para edição).
        Linhas com a mesma identidade são unidas; totais de linha são recalculados.
        """
        novos: List[ItemCarrinho] = []
        posicoes: Dict[str, int] = {}
        for item in itens:
            if item.quantidade < 1:
                raise ValueError(f"quantidade inválida para o item {item.id}")
            if item.id in posicoes:
                indice = posicoes[item.id]
                existente = novos[indice]
                quantidade = existente.quantidade + item.quantidade
                novos[indice] = replace(
                    existente,
                    quantidade=quantidade,
                    total=calcular_total_item(existente.produto, existente.condimentos, quantidade),
                )
                continue
            posicoes[item.id] = len(novos)
            novos.append(
                replace(item, total=calcular_total_item(item.produto, item.condimentos, item.quantidade))
            )

        self._itens = novos
        self._recalcular_totais()
