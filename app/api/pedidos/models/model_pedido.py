# app/api/pedidos/models/model_pedido.py
from sqlalchemy import Column, Integer, String, DateTime, Index

from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed


class PedidoModel(Base):
    """
    Cabeçalho do pedido: snapshot do cliente, forma de pagamento e aprovação.

    `carrinho` é o código curto compartilhado com o cliente e com a equipe
    (busca, edição e aprovação); é único por pedido.
    """
    __tablename__ = "pedidos"
    __table_args__ = (
        Index("idx_pedidos_carrinho", "carrinho", unique=True),
        {"schema": "pedidos"},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    id_pedido = Column(String(40), unique=True, nullable=False)
    carrinho = Column(String(6), nullable=False)

    # Snapshot do cliente
    nome_usuario = Column(String(120), nullable=False)
    telefone = Column(String(30), nullable=False)
    cep = Column(String(10), nullable=False)
    logradouro = Column(String(255), nullable=False)
    numero = Column(String(20), nullable=False)
    complemento = Column(String(120), nullable=True)
    cidade = Column(String(120), nullable=False)
    bairro = Column(String(120), nullable=False)

    tipo_pagamento = Column(String(30), nullable=False)
    data_pedido = Column(DateTime(timezone=True), default=now_trimmed, nullable=False)

    # "" (não definido), "sim" (aprovado) ou "não" (rejeitado)
    aprovado = Column(String(3), nullable=False, default="")

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=now_trimmed, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_trimmed, onupdate=now_trimmed, nullable=False)

    def __repr__(self):
        return f"<Pedido(id_pedido='{self.id_pedido}', carrinho='{self.carrinho}', aprovado='{self.aprovado}')>"
