from pydantic import ConfigDict
from sqlalchemy import Column, Integer, String, Numeric, Boolean, DateTime, func
from sqlalchemy.orm import relationship
from app.database.db_connection import Base


class ProdutoModel(Base):
    __tablename__ = "produtos"
    __table_args__ = {"schema": "catalogo"}

    # PK técnica (estável). `id_produto` é o identificador de negócio usado nos pedidos.
    id = Column(Integer, primary_key=True, autoincrement=True)
    id_produto = Column(String(50), unique=True, index=True, nullable=False)
    titulo = Column(String(120), nullable=False)
    descricao = Column(String(255), nullable=True)
    valor = Column(Numeric(18, 2), nullable=False, default=0)
    categoria = Column(String(60), nullable=False, index=True)
    link_imagem = Column(String(255), nullable=True)

    ativo = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relacionamento N:N com condimentos
    condimentos = relationship(
        "CondimentoModel",
        secondary="catalogo.associacao_produto_condimento",
        back_populates="produtos",
        viewonly=True,
    )

    model_config = ConfigDict(from_attributes=True)

    def __repr__(self):
        return f"<Produto(id_produto='{self.id_produto}', titulo='{self.titulo}')>"
