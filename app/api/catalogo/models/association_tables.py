# app/api/catalogo/models/association_tables.py
from sqlalchemy import (
    Table,
    Column,
    String,
    ForeignKey,
    DateTime,
    func,
)
from app.database.db_connection import Base

# Tabela de associação Produto-Condimento
associacao_produto_condimento = Table(
    "associacao_produto_condimento",
    Base.metadata,
    Column("id_produto", String(50), ForeignKey("catalogo.produtos.id_produto", ondelete="CASCADE"), primary_key=True),
    Column("id_condimento", String(50), ForeignKey("catalogo.condimentos.id_condimento", ondelete="CASCADE"), primary_key=True),
    Column("created_at", DateTime(timezone=True), server_default=func.now(), nullable=False),
    schema="catalogo",
    info={"description": "Tabela de relacionamento N:N entre produtos e condimentos"}
)
