from __future__ import annotations

from typing import Callable, List, Sequence, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from starlette.concurrency import run_in_threadpool

from app.api.catalogo.contracts.catalogo_contract import (
    AssociacaoProdutoCondimentoDTO,
    CondimentoDTO,
    ICatalogoContract,
    ProdutoDTO,
)
from app.api.catalogo.models.model_condimento import CondimentoModel
from app.api.catalogo.models.model_produto import ProdutoModel
from app.api.catalogo.repositories.repo_catalogo import CatalogoRepository
from app.api.shared.exceptions import FalhaBuscaCatalogo
from app.utils.formatacao import to_decimal
from app.utils.logger import logger

T = TypeVar("T")


class CatalogoAdapter(ICatalogoContract):
    """
    Implementação do contrato de catálogo sobre SQLAlchemy.

    Cada leitura abre a própria sessão e roda no threadpool, então leituras
    independentes podem ser aguardadas em paralelo (asyncio.gather).
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @staticmethod
    def _to_produto_dto(produto: ProdutoModel) -> ProdutoDTO:
        return ProdutoDTO(
            id_produto=produto.id_produto,
            titulo=produto.titulo,
            descricao=produto.descricao or "",
            valor=to_decimal(produto.valor),
            categoria=produto.categoria,
            link_imagem=produto.link_imagem or "",
        )

    @staticmethod
    def _to_condimento_dto(condimento: CondimentoModel) -> CondimentoDTO:
        return CondimentoDTO(
            id_condimento=condimento.id_condimento,
            nome_condimento=condimento.nome_condimento,
            valor_adicional=to_decimal(condimento.valor_adicional),
            tipo_condimento=condimento.tipo_condimento,
            selecao_multipla=condimento.selecao_multipla or "sim",
            link_imagem=condimento.link_imagem or "",
        )

    async def _executar(self, descricao: str, operacao: Callable[[CatalogoRepository], T]) -> T:
        def _run() -> T:
            db: Session = self.session_factory()
            try:
                return operacao(CatalogoRepository(db))
            finally:
                db.close()

        try:
            return await run_in_threadpool(_run)
        except SQLAlchemyError as e:
            logger.error(f"[Catalogo] Erro ao buscar {descricao}: {e}")
            raise FalhaBuscaCatalogo(f"Não foi possível buscar {descricao}") from e

    async def listar_produtos(self) -> List[ProdutoDTO]:
        return await self._executar(
            "produtos",
            lambda repo: [self._to_produto_dto(p) for p in repo.listar_produtos()],
        )

    async def listar_condimentos(self) -> List[CondimentoDTO]:
        return await self._executar(
            "condimentos",
            lambda repo: [self._to_condimento_dto(c) for c in repo.listar_condimentos()],
        )

    async def listar_associacoes(self) -> List[AssociacaoProdutoCondimentoDTO]:
        return await self._executar(
            "associações produto-condimento",
            lambda repo: [
                AssociacaoProdutoCondimentoDTO(id_produto=id_produto, id_condimento=id_condimento)
                for id_produto, id_condimento in repo.listar_associacoes()
            ],
        )

    async def buscar_produtos_por_ids(self, ids_produto: Sequence[str]) -> List[ProdutoDTO]:
        ids = list(ids_produto)
        return await self._executar(
            "produtos por id",
            lambda repo: [self._to_produto_dto(p) for p in repo.buscar_produtos_por_ids(ids)],
        )

    async def buscar_condimentos_por_ids(self, ids_condimento: Sequence[str]) -> List[CondimentoDTO]:
        ids = list(ids_condimento)
        return await self._executar(
            "condimentos por id",
            lambda repo: [self._to_condimento_dto(c) for c in repo.buscar_condimentos_por_ids(ids)],
        )
