from typing import Optional

from pydantic import BaseModel, constr, field_validator

from app.api.shared.schemas.schema_shared_enums import TipoPagamentoEnum
from app.utils.telefone import normalizar_cep, normalizar_telefone


class DadosCliente(BaseModel):
    """Dados de entrega e pagamento informados no checkout."""
    nome: constr(strip_whitespace=True, min_length=1, max_length=120)
    telefone: constr(strip_whitespace=True, min_length=8, max_length=30)
    cep: constr(strip_whitespace=True, min_length=8, max_length=10)
    logradouro: constr(strip_whitespace=True, min_length=1, max_length=255)
    numero: constr(strip_whitespace=True, min_length=1, max_length=20)
    complemento: Optional[constr(strip_whitespace=True, max_length=120)] = None
    cidade: constr(strip_whitespace=True, min_length=1, max_length=120)
    bairro: constr(strip_whitespace=True, min_length=1, max_length=120)
    tipo_pagamento: TipoPagamentoEnum

    @field_validator('telefone', mode='before')
    @classmethod
    def validar_telefone(cls, v):
        if isinstance(v, str):
            return normalizar_telefone(v)
        return v

    @field_validator('cep', mode='before')
    @classmethod
    def validar_cep(cls, v):
        if isinstance(v, str):
            return normalizar_cep(v)
        return v

    @field_validator('complemento', mode='before')
    @classmethod
    def validar_complemento(cls, v):
        if v is None:
            return None
        if isinstance(v, str) and v.strip() == "":
            return None
        return v
