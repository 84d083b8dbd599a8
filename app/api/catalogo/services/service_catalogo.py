from __future__ import annotations

import asyncio
from typing import List, Optional

from app.api.catalogo.contracts.catalogo_contract import (
    CondimentoDTO,
    ICatalogoContract,
    ProdutoDTO,
)
from app.api.catalogo.schemas.schema_catalogo import (
    CondimentoResponse,
    CondimentosProdutoResponse,
    ProdutoResponse,
)
from app.api.shared.exceptions import FalhaBuscaCatalogo
from app.api.shared.schemas.schema_shared_enums import TipoCondimentoEnum
from app.utils.logger import logger


class CatalogoService:
    """
    Navegação do cardápio.

    Falhas de leitura do catálogo resultam em listas vazias (visão degradada);
    quem chama decide se tenta de novo.
    """

    def __init__(self, catalogo_contract: ICatalogoContract):
        self.catalogo = catalogo_contract

    async def listar_produtos(self, categoria: Optional[str] = None) -> List[ProdutoResponse]:
        try:
            produtos = await self.catalogo.listar_produtos()
        except FalhaBuscaCatalogo as e:
            logger.warning(f"[Catalogo] Listagem de produtos indisponível: {e.mensagem}")
            return []

        # "Todos" é a aba padrão da vitrine
        if categoria and categoria != "Todos":
            produtos = [p for p in produtos if p.categoria == categoria]
        return [ProdutoResponse.model_validate(p) for p in produtos]

    async def listar_categorias(self) -> List[str]:
        try:
            produtos = await self.catalogo.listar_produtos()
        except FalhaBuscaCatalogo as e:
            logger.warning(f"[Catalogo] Listagem de categorias indisponível: {e.mensagem}")
            return []
        return list(dict.fromkeys(p.categoria for p in produtos))

    async def condimentos_do_produto(self, id_produto: str) -> List[CondimentoDTO]:
        """Condimentos vinculados ao produto. Propaga `FalhaBuscaCatalogo`."""
        condimentos, associacoes = await asyncio.gather(
            self.catalogo.listar_condimentos(),
            self.catalogo.listar_associacoes(),
        )
        vinculados = {a.id_condimento for a in associacoes if a.id_produto == id_produto}
        return [c for c in condimentos if c.id_condimento in vinculados]

    async def listar_condimentos_produto(self, id_produto: str) -> CondimentosProdutoResponse:
        try:
            condimentos = await self.condimentos_do_produto(id_produto)
        except FalhaBuscaCatalogo as e:
            logger.warning(f"[Catalogo] Condimentos do produto {id_produto} indisponíveis: {e.mensagem}")
            condimentos = []

        return CondimentosProdutoResponse(
            id_produto=id_produto,
            bordas=[
                CondimentoResponse.model_validate(c)
                for c in condimentos
                if c.tipo_condimento == TipoCondimentoEnum.BORDAS
            ],
            adicionais=[
                CondimentoResponse.model_validate(c)
                for c in condimentos
                if c.tipo_condimento == TipoCondimentoEnum.ADICIONAIS
            ],
        )

    async def buscar_produto(self, id_produto: str) -> Optional[ProdutoDTO]:
        """Busca um produto pelo id. Propaga `FalhaBuscaCatalogo`."""
        produtos = await self.catalogo.buscar_produtos_por_ids([id_produto])
        return produtos[0] if produtos else None
