from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.catalogo.models.model_produto import ProdutoModel
from app.api.catalogo.models.model_condimento import CondimentoModel
from app.api.catalogo.models.association_tables import associacao_produto_condimento


class CatalogoRepository:
    """Repository de leitura/escrita do catálogo (produtos, condimentos e associações)."""

    def __init__(self, db: Session):
        self.db = db

    # -------- Produtos --------
    def listar_produtos(self, apenas_ativos: bool = True) -> List[ProdutoModel]:
        query = self.db.query(ProdutoModel)
        if apenas_ativos:
            query = query.filter(ProdutoModel.ativo.is_(True))
        return query.order_by(ProdutoModel.categoria, ProdutoModel.titulo).all()

    def buscar_produto(self, id_produto: str) -> Optional[ProdutoModel]:
        return self.db.query(ProdutoModel).filter_by(id_produto=id_produto).first()

    def buscar_produtos_por_ids(self, ids_produto: Sequence[str]) -> List[ProdutoModel]:
        if not ids_produto:
            return []
        return (
            self.db.query(ProdutoModel)
            .filter(ProdutoModel.id_produto.in_(list(ids_produto)))
            .all()
        )

    def criar_produto(self, **data) -> ProdutoModel:
        obj = ProdutoModel(**data)
        self.db.add(obj)
        self.db.flush()
        return obj

    # -------- Condimentos --------
    def listar_condimentos(self, apenas_ativos: bool = True) -> List[CondimentoModel]:
        query = self.db.query(CondimentoModel)
        if apenas_ativos:
            query = query.filter(CondimentoModel.ativo.is_(True))
        return query.order_by(CondimentoModel.tipo_condimento, CondimentoModel.nome_condimento).all()

    def buscar_condimentos_por_ids(self, ids_condimento: Sequence[str]) -> List[CondimentoModel]:
        if not ids_condimento:
            return []
        return (
            self.db.query(CondimentoModel)
            .filter(CondimentoModel.id_condimento.in_(list(ids_condimento)))
            .all()
        )

    def criar_condimento(self, **data) -> CondimentoModel:
        obj = CondimentoModel(**data)
        self.db.add(obj)
        self.db.flush()
        return obj

    # -------- Associações --------
    def listar_associacoes(self) -> List[tuple]:
        rows = self.db.execute(
            select(
                associacao_produto_condimento.c.id_produto,
                associacao_produto_condimento.c.id_condimento,
            )
        ).all()
        return [(row.id_produto, row.id_condimento) for row in rows]

    def vincular_condimentos_produto(self, id_produto: str, ids_condimento: Sequence[str]) -> None:
        """Substitui os vínculos do produto pelos ids informados."""
        self.db.execute(
            associacao_produto_condimento.delete().where(
                associacao_produto_condimento.c.id_produto == id_produto
            )
        )
        for id_condimento in dict.fromkeys(ids_condimento):
            self.db.execute(
                associacao_produto_condimento.insert().values(
                    id_produto=id_produto,
                    id_condimento=id_condimento,
                )
            )
        self.db.flush()
