from typing import List
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.api.shared.schemas.schema_shared_enums import TipoCondimentoEnum


# ------ Responses ------
class ProdutoResponse(BaseModel):
    id_produto: str
    titulo: str
    descricao: str = ""
    valor: Decimal
    categoria: str
    link_imagem: str = ""

    model_config = ConfigDict(from_attributes=True)


class CondimentoResponse(BaseModel):
    id_condimento: str
    nome_condimento: str
    valor_adicional: Decimal
    tipo_condimento: TipoCondimentoEnum
    link_imagem: str = ""

    model_config = ConfigDict(from_attributes=True)


class CondimentosProdutoResponse(BaseModel):
    """Condimentos disponíveis para um produto, separados pela regra de escolha."""
    id_produto: str
    bordas: List[CondimentoResponse] = Field(default_factory=list)  # escolha única
    adicionais: List[CondimentoResponse] = Field(default_factory=list)  # escolha livre
