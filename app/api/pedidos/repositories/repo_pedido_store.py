from __future__ import annotations

from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from app.api.pedidos.models.model_pedido import PedidoModel
from app.api.pedidos.models.model_produto_vendido import ProdutoVendidoModel


class PedidoStoreRepository:
    def __init__(self, db: Session):
        self.db = db

    # ------------- Queries -------------
    def get_pedido_by_carrinho(self, carrinho: str) -> Optional[PedidoModel]:
        return self.db.query(PedidoModel).filter(PedidoModel.carrinho == carrinho).first()

    def existe_carrinho(self, carrinho: str) -> bool:
        return (
            self.db.query(PedidoModel.id).filter(PedidoModel.carrinho == carrinho).first() is not None
        )

    def list_produtos_vendidos(self, carrinho: str) -> List[ProdutoVendidoModel]:
        return (
            self.db.query(ProdutoVendidoModel)
            .filter(ProdutoVendidoModel.carrinho == carrinho)
            .order_by(ProdutoVendidoModel.id)
            .all()
        )

    # ------------- Mutations -------------
    def criar_pedido(self, **data) -> PedidoModel:
        pedido = PedidoModel(**data)
        self.db.add(pedido)
        self.db.commit()
        self.db.refresh(pedido)
        return pedido

    def atualizar_pedido(self, carrinho: str, **data) -> Optional[PedidoModel]:
        pedido = self.get_pedido_by_carrinho(carrinho)
        if not pedido:
            return None
        for campo, valor in data.items():
            setattr(pedido, campo, valor)
        self.db.commit()
        self.db.refresh(pedido)
        return pedido

    def atualizar_aprovacao(self, carrinho: str, aprovado: str) -> bool:
        pedido = self.get_pedido_by_carrinho(carrinho)
        if not pedido:
            return False
        pedido.aprovado = aprovado
        (
            self.db.query(ProdutoVendidoModel)
            .filter(ProdutoVendidoModel.carrinho == carrinho)
            .update({ProdutoVendidoModel.aprovado: aprovado}, synchronize_session=False)
        )
        self.db.commit()
        return True

    def inserir_produtos_vendidos(self, registros: Sequence[dict]) -> int:
        self.db.add_all([ProdutoVendidoModel(**r) for r in registros])
        self.db.commit()
        return len(registros)

    def remover_produtos_vendidos(self, carrinho: str) -> int:
        removidos = (
            self.db.query(ProdutoVendidoModel)
            .filter(ProdutoVendidoModel.carrinho == carrinho)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return removidos

    def remover_pedido(self, carrinho: str) -> bool:
        removidos = (
            self.db.query(PedidoModel)
            .filter(PedidoModel.carrinho == carrinho)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return removidos > 0

    def rollback(self):
        self.db.rollback()
