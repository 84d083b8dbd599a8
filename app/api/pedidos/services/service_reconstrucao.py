"""
Reconstrução do carrinho a partir das linhas planas de produtos vendidos.

As linhas são agrupadas por produto; a quantidade é a contagem de linhas base
(sem condimento) e os condimentos do item são os ids distintos das linhas de
condimento, na ordem em que aparecem. Preços vêm sempre do catálogo atual.

Um produto gravado em mais de uma linha do carrinho com condimentos diferentes
não pode ser separado de volta; ele é remontado com todos os condimentos e
reportado em `produtos_nao_uniformes`, pois o total deixa de bater.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Set, Tuple

from app.api.carrinho.core.carrinho import Carrinho, CondimentoSelecionado, ItemCarrinho, montar_item
from app.api.catalogo.contracts.catalogo_contract import CondimentoDTO, ProdutoDTO
from app.api.pedidos.contracts.pedido_store_contract import RegistroProdutoVendido
from app.api.shared.schemas.schema_shared_enums import TipoCondimentoEnum

NOME_CONDIMENTO_DESCONHECIDO = "Condimento"


@dataclass
class ResultadoReconstrucao:
    carrinho: Carrinho
    produtos_descartados: Tuple[str, ...] = field(default_factory=tuple)
    condimentos_degradados: Tuple[str, ...] = field(default_factory=tuple)
    produtos_nao_uniformes: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def completo(self) -> bool:
        return not (self.produtos_descartados or self.condimentos_degradados or self.produtos_nao_uniformes)


@dataclass
class _GrupoProduto:
    unidades: int = 0
    linhas_por_condimento: Dict[str, int] = field(default_factory=dict)

    @property
    def ids_condimento(self) -> List[str]:
        return list(self.linhas_por_condimento)

    @property
    def uniforme(self) -> bool:
        """Cada condimento aparece uma vez por unidade."""
        unidades = max(self.unidades, 1)
        return all(linhas == unidades for linhas in self.linhas_por_condimento.values())


def ids_referenciados(registros: Iterable[RegistroProdutoVendido]) -> Tuple[List[str], List[str]]:
    """Ids distintos de produtos e de condimentos citados nas linhas (ordem de aparição)."""
    ids_produto: Dict[str, None] = {}
    ids_condimento: Dict[str, None] = {}
    for registro in registros:
        ids_produto.setdefault(registro.id_produto, None)
        if not registro.unidade_base:
            ids_condimento.setdefault(registro.id_condimento.strip(), None)
    return list(ids_produto), list(ids_condimento)


def _agrupar(registros: Iterable[RegistroProdutoVendido]) -> Dict[str, _GrupoProduto]:
    grupos: Dict[str, _GrupoProduto] = {}
    for registro in registros:
        grupo = grupos.setdefault(registro.id_produto, _GrupoProduto())
        if registro.unidade_base:
            grupo.unidades += 1
            continue
        id_condimento = registro.id_condimento.strip()
        grupo.linhas_por_condimento[id_condimento] = grupo.linhas_por_condimento.get(id_condimento, 0) + 1
    return grupos


def _condimento_substituto(id_condimento: str) -> CondimentoSelecionado:
    return CondimentoSelecionado(
        id_condimento=id_condimento,
        nome_condimento=NOME_CONDIMENTO_DESCONHECIDO,
        valor_adicional=Decimal("0"),
        tipo_condimento=TipoCondimentoEnum.ADICIONAIS,
    )


def reconstruir_carrinho(
    registros: Iterable[RegistroProdutoVendido],
    produtos: Iterable[ProdutoDTO],
    condimentos: Iterable[CondimentoDTO],
) -> ResultadoReconstrucao:
    """
    Monta o carrinho equivalente às linhas gravadas.

    - Produto ausente do catálogo: o grupo é descartado e reportado.
    - Condimento ausente do catálogo: entra com nome genérico e valor zero, e é reportado.
    - Grupo só com linhas de condimento conta como quantidade 1.
    - Produto com condimentos diferentes entre unidades: remontado e reportado.
    """
    produtos_por_id = {p.id_produto: p for p in produtos}
    condimentos_por_id = {c.id_condimento: c for c in condimentos}

    itens: List[ItemCarrinho] = []
    descartados: List[str] = []
    degradados: List[str] = []
    nao_uniformes: List[str] = []
    vistos_degradados: Set[str] = set()

    for id_produto, grupo in _agrupar(registros).items():
        produto = produtos_por_id.get(id_produto)
        if produto is None:
            descartados.append(id_produto)
            continue
        if not grupo.uniforme:
            nao_uniformes.append(id_produto)

        selecionados: List[CondimentoSelecionado] = []
        for id_condimento in grupo.ids_condimento:
            condimento = condimentos_por_id.get(id_condimento)
            if condimento is None:
                if id_condimento not in vistos_degradados:
                    vistos_degradados.add(id_condimento)
                    degradados.append(id_condimento)
                selecionados.append(_condimento_substituto(id_condimento))
            else:
                selecionados.append(CondimentoSelecionado.from_dto(condimento))

        itens.append(montar_item(produto, selecionados, max(grupo.unidades, 1)))

    carrinho = Carrinho()
    carrinho.carregar(itens)
    return ResultadoReconstrucao(
        carrinho=carrinho,
        produtos_descartados=tuple(descartados),
        condimentos_degradados=tuple(degradados),
        produtos_nao_uniformes=tuple(nao_uniformes),
    )
