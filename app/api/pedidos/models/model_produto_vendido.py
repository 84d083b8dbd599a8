# app/api/pedidos/models/model_produto_vendido.py
from sqlalchemy import Column, Integer, String, DateTime, Numeric, Index

from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed


class ProdutoVendidoModel(Base):
    """
    Uma linha por unidade de produto vendida (id_condimento nulo, valor = preço do produto)
    ou por condimento aplicado a uma unidade (id_condimento preenchido, valor = preço do condimento).

    A quantidade de um produto no pedido é a contagem de linhas base desse produto.
    Sem FK para o cabeçalho: cabeçalho e itens são gravados em operações separadas.
    """
    __tablename__ = "produtos_vendidos"
    __table_args__ = (
        Index("idx_produtos_vendidos_carrinho", "carrinho"),
        Index("idx_produtos_vendidos_pedido", "id_pedido"),
        {"schema": "pedidos"},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    id_produtos_vendidos = Column(String(120), unique=True, nullable=False)
    id_pedido = Column(String(40), nullable=False)
    id_produto = Column(String(50), nullable=False)
    id_condimento = Column(String(50), nullable=True)
    valor = Column(Numeric(18, 2), nullable=False, default=0)

    carrinho = Column(String(6), nullable=False)
    data_pedido = Column(DateTime(timezone=True), default=now_trimmed, nullable=False)
    aprovado = Column(String(3), nullable=False, default="")

    def __repr__(self):
        return (
            f"<ProdutoVendido(id='{self.id_produtos_vendidos}', produto='{self.id_produto}', "
            f"condimento='{self.id_condimento}')>"
        )
