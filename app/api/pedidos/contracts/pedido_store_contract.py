"""
Contract (Interface) do armazenamento de pedidos.

O armazenamento é plano: um cabeçalho por pedido e uma linha por unidade de
produto ou por condimento aplicado a uma unidade. Não há transação entre
operações; cada método é uma gravação/leitura independente.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from app.api.shared.schemas.schema_shared_enums import AprovacaoEnum

# Esquema antigo gravava "" ou "0" no lugar de nulo para linhas sem condimento
SENTINELAS_SEM_CONDIMENTO = ("", "0")


class PedidoCabecalho(BaseModel):
    """Cabeçalho do pedido com o snapshot do cliente."""
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
    aprovado: AprovacaoEnum = AprovacaoEnum.NAO_DEFINIDO

    model_config = ConfigDict(from_attributes=True, frozen=True)


class RegistroProdutoVendido(BaseModel):
    id_produtos_vendidos: str
    id_pedido: str
    id_produto: str
    id_condimento: Optional[str] = None
    valor: Decimal
    carrinho: str
    data_pedido: Optional[datetime] = None
    aprovado: AprovacaoEnum = AprovacaoEnum.NAO_DEFINIDO

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @property
    def unidade_base(self) -> bool:
        """Linha da unidade do produto (sem condimento)."""
        return self.id_condimento is None or self.id_condimento.strip() in SENTINELAS_SEM_CONDIMENTO


class IPedidoStoreContract(ABC):
    """
    Contrato de acesso ao armazenamento de pedidos.

    Falhas de gravação viram `FalhaPersistenciaPedido`; falhas de leitura
    viram `FalhaConsultaPedido`. "Não encontrado" é sinalizado pelo retorno
    (None / lista vazia / False), nunca por exceção.
    """

    @abstractmethod
    async def inserir_cabecalho(self, cabecalho: PedidoCabecalho) -> None:
        raise NotImplementedError

    @abstractmethod
    async def atualizar_cabecalho(self, cabecalho: PedidoCabecalho) -> bool:
        """Regrava o snapshot do cliente e a aprovação do pedido `cabecalho.carrinho`."""
        raise NotImplementedError

    @abstractmethod
    async def atualizar_aprovacao(self, carrinho: str, aprovado: AprovacaoEnum) -> bool:
        """Atualiza a aprovação do cabeçalho e de todas as linhas do carrinho."""
        raise NotImplementedError

    @abstractmethod
    async def inserir_registros(self, registros: Sequence[RegistroProdutoVendido]) -> None:
        raise NotImplementedError

    @abstractmethod
    async def remover_registros(self, carrinho: str) -> int:
        raise NotImplementedError

    @abstractmethod
    async def remover_cabecalho(self, carrinho: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def buscar_registros_por_carrinho(self, carrinho: str) -> List[RegistroProdutoVendido]:
        raise NotImplementedError

    @abstractmethod
    async def buscar_cabecalho_por_carrinho(self, carrinho: str) -> Optional[PedidoCabecalho]:
        raise NotImplementedError

    @abstractmethod
    async def existe_carrinho(self, carrinho: str) -> bool:
        raise NotImplementedError
