from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.api.carrinho.schemas.schema_carrinho import CarrinhoResponse, CarrinhoSessaoResponse
from app.api.shared.schemas.schema_shared_enums import AprovacaoEnum


# ======================================================================
# ============================ REQUESTS ================================
# ======================================================================

class AtualizarAprovacaoRequest(BaseModel):
    aprovado: AprovacaoEnum = Field(description='"sim", "não" ou "" (volta para não definido)')


# ======================================================================
# ============================ RESPONSES ===============================
# ======================================================================

class PedidoCabecalhoResponse(BaseModel):
    id_pedido: str
    carrinho: str
    nome_usuario: str
    telefone: str
    cep: str
    logradouro: str
    numero: str
    complemento: Optional[str] = None
    cidade: str
    bairro: str
    tipo_pagamento: str
    data_pedido: Optional[datetime] = None
    aprovado: AprovacaoEnum

    model_config = ConfigDict(from_attributes=True)


class CheckoutResponse(BaseModel):
    carrinho: str = Field(description="Código do pedido (6 caracteres)")
    id_pedido: str
    editado: bool = Field(default=False, description="True quando o checkout atualizou um pedido reaberto")
    pedido: PedidoCabecalhoResponse
    itens: CarrinhoResponse
    mensagem_whatsapp: str
    link_whatsapp: str


class ReconstrucaoAvisos(BaseModel):
    """Itens que não puderam ser reconstruídos fielmente com o catálogo atual."""
    produtos_descartados: List[str] = Field(default_factory=list)
    condimentos_degradados: List[str] = Field(default_factory=list)
    produtos_nao_uniformes: List[str] = Field(default_factory=list)


class PedidoDetalheResponse(ReconstrucaoAvisos):
    pedido: PedidoCabecalhoResponse
    itens: CarrinhoResponse


class EditarPedidoResponse(ReconstrucaoAvisos):
    sessao: CarrinhoSessaoResponse


class AprovacaoResponse(BaseModel):
    carrinho: str
    aprovado: AprovacaoEnum


class DescartePedidoResponse(BaseModel):
    carrinho: str
    linhas_removidas: int
