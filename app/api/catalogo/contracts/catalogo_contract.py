from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Sequence

from pydantic import BaseModel, ConfigDict

from app.api.shared.schemas.schema_shared_enums import TipoCondimentoEnum


class ProdutoDTO(BaseModel):
    """Produto do cardápio."""
    id_produto: str
    titulo: str
    descricao: str = ""
    valor: Decimal
    categoria: str
    link_imagem: str = ""

    model_config = ConfigDict(from_attributes=True, frozen=True)


class CondimentoDTO(BaseModel):
    """Condimento (borda ou adicional) com preço incremental."""
    id_condimento: str
    nome_condimento: str
    valor_adicional: Decimal
    tipo_condimento: TipoCondimentoEnum = TipoCondimentoEnum.ADICIONAIS
    selecao_multipla: str = "sim"
    link_imagem: str = ""

    model_config = ConfigDict(from_attributes=True, frozen=True)


class AssociacaoProdutoCondimentoDTO(BaseModel):
    id_produto: str
    id_condimento: str

    model_config = ConfigDict(from_attributes=True, frozen=True)


class ICatalogoContract(ABC):
    """
    Contrato de leitura do catálogo.

    Implementações convertem falhas de acesso em `FalhaBuscaCatalogo`.
    """

    @abstractmethod
    async def listar_produtos(self) -> List[ProdutoDTO]:
        raise NotImplementedError

    @abstractmethod
    async def listar_condimentos(self) -> List[CondimentoDTO]:
        raise NotImplementedError

    @abstractmethod
    async def listar_associacoes(self) -> List[AssociacaoProdutoCondimentoDTO]:
        raise NotImplementedError

    @abstractmethod
    async def buscar_produtos_por_ids(self, ids_produto: Sequence[str]) -> List[ProdutoDTO]:
        """Retorna apenas os produtos encontrados; ids ausentes são ignorados."""
        raise NotImplementedError

    @abstractmethod
    async def buscar_condimentos_por_ids(self, ids_condimento: Sequence[str]) -> List[CondimentoDTO]:
        """Retorna apenas os condimentos encontrados; ids ausentes são ignorados."""
        raise NotImplementedError
