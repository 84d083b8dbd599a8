"""
Schemas compartilhados entre diferentes domínios
"""

from app.api.shared.schemas.schema_shared_enums import (
    AprovacaoEnum,
    TipoCondimentoEnum,
    TipoPagamentoEnum,
)
from app.api.shared.schemas.schema_cliente import DadosCliente

__all__ = [
    "AprovacaoEnum",
    "TipoCondimentoEnum",
    "TipoPagamentoEnum",
    "DadosCliente",
]
