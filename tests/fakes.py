"""
Implementações em memória dos contratos de catálogo e de armazenamento de pedidos.
"""
import asyncio
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set

from app.api.catalogo.contracts.catalogo_contract import (
    AssociacaoProdutoCondimentoDTO,
    CondimentoDTO,
    ICatalogoContract,
    ProdutoDTO,
)
from app.api.pedidos.contracts.pedido_store_contract import (
    IPedidoStoreContract,
    PedidoCabecalho,
    RegistroProdutoVendido,
)
from app.api.shared.exceptions import FalhaBuscaCatalogo, FalhaConsultaPedido, FalhaPersistenciaPedido
from app.api.shared.schemas.schema_shared_enums import AprovacaoEnum, TipoCondimentoEnum


def produto(id_produto: str, valor: str, titulo: Optional[str] = None, categoria: str = "Pizzas") -> ProdutoDTO:
    return ProdutoDTO(
        id_produto=id_produto,
        titulo=titulo or f"Produto {id_produto}",
        valor=Decimal(valor),
        categoria=categoria,
    )


def condimento(
    id_condimento: str,
    valor: str,
    nome: Optional[str] = None,
    tipo: TipoCondimentoEnum = TipoCondimentoEnum.ADICIONAIS,
) -> CondimentoDTO:
    return CondimentoDTO(
        id_condimento=id_condimento,
        nome_condimento=nome or f"Condimento {id_condimento}",
        valor_adicional=Decimal(valor),
        tipo_condimento=tipo,
    )


class FakeCatalogo(ICatalogoContract):
    def __init__(
        self,
        produtos: Iterable[ProdutoDTO] = (),
        condimentos: Iterable[CondimentoDTO] = (),
        associacoes: Iterable[tuple] = (),
    ):
        self.produtos: Dict[str, ProdutoDTO] = {p.id_produto: p for p in produtos}
        self.condimentos: Dict[str, CondimentoDTO] = {c.id_condimento: c for c in condimentos}
        self.associacoes = [
            AssociacaoProdutoCondimentoDTO(id_produto=p, id_condimento=c) for p, c in associacoes
        ]
        self.indisponivel = False

    def _checar(self):
        if self.indisponivel:
            raise FalhaBuscaCatalogo("Catálogo indisponível")

    async def listar_produtos(self) -> List[ProdutoDTO]:
        self._checar()
        return list(self.produtos.values())

    async def listar_condimentos(self) -> List[CondimentoDTO]:
        self._checar()
        return list(self.condimentos.values())

    async def listar_associacoes(self) -> List[AssociacaoProdutoCondimentoDTO]:
        self._checar()
        return list(self.associacoes)

    async def buscar_produtos_por_ids(self, ids_produto: Sequence[str]) -> List[ProdutoDTO]:
        self._checar()
        return [self.produtos[i] for i in ids_produto if i in self.produtos]

    async def buscar_condimentos_por_ids(self, ids_condimento: Sequence[str]) -> List[CondimentoDTO]:
        self._checar()
        return [self.condimentos[i] for i in ids_condimento if i in self.condimentos]


class FakePedidoStore(IPedidoStoreContract):
    """
    `falhar_em`: nomes de métodos que levantam a falha de domínio correspondente.
    `atraso`: segundos de espera em toda chamada (para testar timeout).
    `ao_inserir_registros`: chamado no meio da gravação das linhas.
    """

    def __init__(self):
        self.cabecalhos: Dict[str, PedidoCabecalho] = {}
        self.registros: List[RegistroProdutoVendido] = []
        self.falhar_em: Set[str] = set()
        self.atraso: float = 0
        self.ao_inserir_registros: Optional[Callable[[], None]] = None

    async def _entrar(self, metodo: str, carrinho: str = "", leitura: bool = False):
        if self.atraso:
            await asyncio.sleep(self.atraso)
        if metodo in self.falhar_em:
            if leitura:
                raise FalhaConsultaPedido(f"Falha simulada em {metodo}")
            raise FalhaPersistenciaPedido(f"Falha simulada em {metodo}", carrinho=carrinho)

    def registros_do(self, carrinho: str) -> List[RegistroProdutoVendido]:
        return [r for r in self.registros if r.carrinho == carrinho]

    async def inserir_cabecalho(self, cabecalho: PedidoCabecalho) -> None:
        await self._entrar("inserir_cabecalho", cabecalho.carrinho)
        if cabecalho.carrinho in self.cabecalhos:
            raise FalhaPersistenciaPedido("Código duplicado", carrinho=cabecalho.carrinho)
        self.cabecalhos[cabecalho.carrinho] = cabecalho

    async def atualizar_cabecalho(self, cabecalho: PedidoCabecalho) -> bool:
        await self._entrar("atualizar_cabecalho", cabecalho.carrinho)
        existente = self.cabecalhos.get(cabecalho.carrinho)
        if existente is None:
            return False
        self.cabecalhos[cabecalho.carrinho] = cabecalho.model_copy(update={"id_pedido": existente.id_pedido})
        return True

    async def atualizar_aprovacao(self, carrinho: str, aprovado: AprovacaoEnum) -> bool:
        await self._entrar("atualizar_aprovacao", carrinho)
        existente = self.cabecalhos.get(carrinho)
        if existente is None:
            return False
        self.cabecalhos[carrinho] = existente.model_copy(update={"aprovado": aprovado})
        self.registros = [
            r.model_copy(update={"aprovado": aprovado}) if r.carrinho == carrinho else r
            for r in self.registros
        ]
        return True

    async def inserir_registros(self, registros: Sequence[RegistroProdutoVendido]) -> None:
        await self._entrar("inserir_registros", registros[0].carrinho if registros else "")
        if self.ao_inserir_registros:
            self.ao_inserir_registros()
        self.registros.extend(registros)

    async def remover_registros(self, carrinho: str) -> int:
        await self._entrar("remover_registros", carrinho)
        antes = len(self.registros)
        self.registros = [r for r in self.registros if r.carrinho != carrinho]
        return antes - len(self.registros)

    async def remover_cabecalho(self, carrinho: str) -> bool:
        await self._entrar("remover_cabecalho", carrinho)
        return self.cabecalhos.pop(carrinho, None) is not None

    async def buscar_registros_por_carrinho(self, carrinho: str) -> List[RegistroProdutoVendido]:
        await self._entrar("buscar_registros_por_carrinho", leitura=True)
        return self.registros_do(carrinho)

    async def buscar_cabecalho_por_carrinho(self, carrinho: str) -> Optional[PedidoCabecalho]:
        await self._entrar("buscar_cabecalho_por_carrinho", leitura=True)
        return self.cabecalhos.get(carrinho)

    async def existe_carrinho(self, carrinho: str) -> bool:
        await self._entrar("existe_carrinho", leitura=True)
        return carrinho in self.cabecalhos
