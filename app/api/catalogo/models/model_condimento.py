from pydantic import ConfigDict
from sqlalchemy import Column, Integer, String, Numeric, Boolean, DateTime, func
from sqlalchemy.orm import relationship
from app.database.db_connection import Base


class CondimentoModel(Base):
    """Condimentos (bordas recheadas e adicionais) que podem ser escolhidos para um produto."""
    __tablename__ = "condimentos"
    __table_args__ = {"schema": "catalogo"}

    id = Column(Integer, primary_key=True, autoincrement=True)
    id_condimento = Column(String(50), unique=True, index=True, nullable=False)
    nome_condimento = Column(String(100), nullable=False)
    valor_adicional = Column(Numeric(18, 2), nullable=False, default=0)
    link_imagem = Column(String(255), nullable=True)

    # "Bordas" (escolha única) ou "Adicionais" (escolha livre)
    tipo_condimento = Column(String(20), nullable=False, default="Adicionais")
    # Reservado: hoje a regra de seleção é definida apenas pelo tipo
    selecao_multipla = Column(String(3), nullable=False, default="sim")

    ativo = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    produtos = relationship(
        "ProdutoModel",
        secondary="catalogo.associacao_produto_condimento",
        back_populates="condimentos",
        viewonly=True,  # Leitura apenas, pois a relação real é na tabela de associação
    )

    model_config = ConfigDict(from_attributes=True)

    def __repr__(self):
        return f"<Condimento(id_condimento='{self.id_condimento}', nome='{self.nome_condimento}')>"
