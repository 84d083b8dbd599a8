from __future__ import annotations

from typing import Callable, List, Optional, Sequence, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from starlette.concurrency import run_in_threadpool

from app.api.pedidos.contracts.pedido_store_contract import (
    IPedidoStoreContract,
    PedidoCabecalho,
    RegistroProdutoVendido,
)
from app.api.pedidos.models.model_pedido import PedidoModel
from app.api.pedidos.models.model_produto_vendido import ProdutoVendidoModel
from app.api.pedidos.repositories.repo_pedido_store import PedidoStoreRepository
from app.api.shared.exceptions import FalhaConsultaPedido, FalhaPersistenciaPedido
from app.api.shared.schemas.schema_shared_enums import AprovacaoEnum
from app.utils.formatacao import to_decimal
from app.utils.logger import logger

T = TypeVar("T")

_APROVACOES = {a.value: a for a in AprovacaoEnum}


def _aprovacao(valor: Optional[str]) -> AprovacaoEnum:
    # valores desconhecidos de linhas antigas contam como "não definido"
    return _APROVACOES.get((valor or "").strip().lower(), AprovacaoEnum.NAO_DEFINIDO)


class PedidoStoreAdapter(IPedidoStoreContract):
    """
    Implementação do armazenamento de pedidos sobre SQLAlchemy.

    Cada chamada usa a própria sessão e faz o próprio commit; gravar o
    cabeçalho e gravar as linhas são operações independentes.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    # ------------- Conversões -------------
    @staticmethod
    def _to_cabecalho(pedido: PedidoModel) -> PedidoCabecalho:
        return PedidoCabecalho(
            id_pedido=pedido.id_pedido,
            carrinho=pedido.carrinho,
            nome_usuario=pedido.nome_usuario,
            telefone=pedido.telefone,
            cep=pedido.cep,
            logradouro=pedido.logradouro,
            numero=pedido.numero,
            complemento=pedido.complemento,
            cidade=pedido.cidade,
            bairro=pedido.bairro,
            tipo_pagamento=pedido.tipo_pagamento,
            data_pedido=pedido.data_pedido,
            aprovado=_aprovacao(pedido.aprovado),
        )

    @staticmethod
    def _to_registro(linha: ProdutoVendidoModel) -> RegistroProdutoVendido:
        return RegistroProdutoVendido(
            id_produtos_vendidos=linha.id_produtos_vendidos,
            id_pedido=linha.id_pedido,
            id_produto=linha.id_produto,
            id_condimento=linha.id_condimento,
            valor=to_decimal(linha.valor),
            carrinho=linha.carrinho,
            data_pedido=linha.data_pedido,
            aprovado=_aprovacao(linha.aprovado),
        )

    @staticmethod
    def _dados_cabecalho(cabecalho: PedidoCabecalho) -> dict:
        data = cabecalho.model_dump(exclude={"data_pedido"})
        data["aprovado"] = cabecalho.aprovado.value
        if cabecalho.data_pedido is not None:
            data["data_pedido"] = cabecalho.data_pedido
        return data

    # ------------- Execução -------------
    async def _executar(self, operacao: Callable[[PedidoStoreRepository], T]) -> T:
        def _run() -> T:
            db: Session = self.session_factory()
            repo = PedidoStoreRepository(db)
            try:
                return operacao(repo)
            except SQLAlchemyError:
                repo.rollback()
                raise
            finally:
                db.close()

        return await run_in_threadpool(_run)

    async def _gravar(self, descricao: str, carrinho: str, operacao: Callable[[PedidoStoreRepository], T]) -> T:
        try:
            return await self._executar(operacao)
        except SQLAlchemyError as e:
            logger.error(f"[Pedidos] Erro ao {descricao} (carrinho={carrinho}): {e}")
            raise FalhaPersistenciaPedido(f"Não foi possível {descricao}", carrinho=carrinho) from e

    async def _ler(self, descricao: str, operacao: Callable[[PedidoStoreRepository], T]) -> T:
        try:
            return await self._executar(operacao)
        except SQLAlchemyError as e:
            logger.error(f"[Pedidos] Erro ao buscar {descricao}: {e}")
            raise FalhaConsultaPedido(f"Não foi possível buscar {descricao}") from e

    # ------------- Gravação -------------
    async def inserir_cabecalho(self, cabecalho: PedidoCabecalho) -> None:
        dados = self._dados_cabecalho(cabecalho)
        await self._gravar(
            "gravar o cabeçalho do pedido",
            cabecalho.carrinho,
            lambda repo: repo.criar_pedido(**dados),
        )

    async def atualizar_cabecalho(self, cabecalho: PedidoCabecalho) -> bool:
        dados = self._dados_cabecalho(cabecalho)
        # identificação do pedido não muda na edição
        dados.pop("id_pedido")
        carrinho = dados.pop("carrinho")
        pedido = await self._gravar(
            "atualizar o cabeçalho do pedido",
            carrinho,
            lambda repo: repo.atualizar_pedido(carrinho, **dados),
        )
        return pedido is not None

    async def atualizar_aprovacao(self, carrinho: str, aprovado: AprovacaoEnum) -> bool:
        return await self._gravar(
            "atualizar a aprovação do pedido",
            carrinho,
            lambda repo: repo.atualizar_aprovacao(carrinho, aprovado.value),
        )

    async def inserir_registros(self, registros: Sequence[RegistroProdutoVendido]) -> None:
        if not registros:
            return
        linhas = []
        for registro in registros:
            dados = registro.model_dump(exclude={"data_pedido"})
            dados["aprovado"] = registro.aprovado.value
            if registro.data_pedido is not None:
                dados["data_pedido"] = registro.data_pedido
            linhas.append(dados)
        await self._gravar(
            "gravar os itens do pedido",
            registros[0].carrinho,
            lambda repo: repo.inserir_produtos_vendidos(linhas),
        )

    async def remover_registros(self, carrinho: str) -> int:
        return await self._gravar(
            "remover os itens do pedido",
            carrinho,
            lambda repo: repo.remover_produtos_vendidos(carrinho),
        )

    async def remover_cabecalho(self, carrinho: str) -> bool:
        return await self._gravar(
            "remover o cabeçalho do pedido",
            carrinho,
            lambda repo: repo.remover_pedido(carrinho),
        )

    # ------------- Leitura -------------
    async def buscar_registros_por_carrinho(self, carrinho: str) -> List[RegistroProdutoVendido]:
        return await self._ler(
            f"itens do pedido {carrinho}",
            lambda repo: [self._to_registro(l) for l in repo.list_produtos_vendidos(carrinho)],
        )

    async def buscar_cabecalho_por_carrinho(self, carrinho: str) -> Optional[PedidoCabecalho]:
        def _buscar(repo: PedidoStoreRepository) -> Optional[PedidoCabecalho]:
            pedido = repo.get_pedido_by_carrinho(carrinho)
            return self._to_cabecalho(pedido) if pedido else None

        return await self._ler(f"pedido {carrinho}", _buscar)

    async def existe_carrinho(self, carrinho: str) -> bool:
        return await self._ler(
            f"código de carrinho {carrinho}",
            lambda repo: repo.existe_carrinho(carrinho),
        )
