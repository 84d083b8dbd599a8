"""
Sessões de carrinho.

Cada sessão anônima (uma aba do navegador) tem o próprio `Carrinho`. O store
é criado junto com a aplicação e injetado via dependência; não há carrinho global.
"""
from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence, Tuple
from uuid import uuid4

from app.api.carrinho.core.carrinho import Carrinho, CondimentoSelecionado, ItemCarrinho
from app.api.catalogo.contracts.catalogo_contract import CondimentoDTO, ICatalogoContract
from app.api.catalogo.services.service_catalogo import CatalogoService
from app.api.shared.exceptions import SelecaoInvalida, SessaoNaoEncontrada
from app.api.shared.schemas.schema_cliente import DadosCliente
from app.api.shared.schemas.schema_shared_enums import TipoCondimentoEnum
from app.config.settings import CARRINHO_SESSAO_TTL_SECONDS
from app.utils.database_utils import now_trimmed
from app.utils.logger import logger


@dataclass
class CarrinhoSessao:
    id: str
    carrinho: Carrinho = field(default_factory=Carrinho)
    # Pedido reaberto para edição: o checkout atualiza esse código em vez de criar outro
    codigo_em_edicao: Optional[str] = None
    cliente: Optional[DadosCliente] = None
    atualizada_em: datetime = field(default_factory=now_trimmed)

    @property
    def em_edicao(self) -> bool:
        return self.codigo_em_edicao is not None

    def tocar(self) -> None:
        self.atualizada_em = now_trimmed()

    def sair_da_edicao(self) -> None:
        self.codigo_em_edicao = None
        self.cliente = None


class CarrinhoSessaoStore:
    """Sessões em memória, com expiração por inatividade."""

    def __init__(self, ttl_seconds: float = CARRINHO_SESSAO_TTL_SECONDS):
        self.ttl = timedelta(seconds=ttl_seconds)
        self._lock = threading.Lock()
        self._sessoes: Dict[str, CarrinhoSessao] = {}

    def __len__(self) -> int:
        return len(self._sessoes)

    def _expirar(self) -> None:
        limite = now_trimmed() - self.ttl
        expiradas = [sid for sid, s in self._sessoes.items() if s.atualizada_em < limite]
        for sid in expiradas:
            del self._sessoes[sid]
        if expiradas:
            logger.info(f"[Carrinho] {len(expiradas)} sessões expiradas removidas")

    def criar_sessao(self) -> CarrinhoSessao:
        with self._lock:
            self._expirar()
            sessao = CarrinhoSessao(id=uuid4().hex)
            self._sessoes[sessao.id] = sessao
        return sessao

    def obter_sessao(self, sessao_id: str) -> CarrinhoSessao:
        with self._lock:
            sessao = self._sessoes.get(sessao_id)
        if sessao is None:
            raise SessaoNaoEncontrada(sessao_id)
        return sessao

    def descartar_sessao(self, sessao_id: str) -> bool:
        with self._lock:
            return self._sessoes.pop(sessao_id, None) is not None


class CarrinhoService:
    """Operações do carrinho de uma sessão, com validação das escolhas contra o catálogo."""

    def __init__(self, store: CarrinhoSessaoStore, catalogo_contract: ICatalogoContract):
        self.store = store
        self.catalogo = CatalogoService(catalogo_contract)

    def criar_sessao(self) -> CarrinhoSessao:
        sessao = self.store.criar_sessao()
        logger.info(f"[Carrinho] Sessão criada {sessao.id}")
        return sessao

    def obter_sessao(self, sessao_id: str) -> CarrinhoSessao:
        return self.store.obter_sessao(sessao_id)

    def descartar_sessao(self, sessao_id: str) -> None:
        if not self.store.descartar_sessao(sessao_id):
            raise SessaoNaoEncontrada(sessao_id)
        logger.info(f"[Carrinho] Sessão descartada {sessao_id}")

    @staticmethod
    def _validar_condimentos(
        id_produto: str,
        ids_condimentos: Sequence[str],
        disponiveis: List[CondimentoDTO],
    ) -> List[CondimentoSelecionado]:
        por_id = {c.id_condimento: c for c in disponiveis}
        escolhidos: List[CondimentoDTO] = []
        for id_condimento in dict.fromkeys(ids_condimentos):
            condimento = por_id.get(id_condimento)
            if condimento is None:
                raise SelecaoInvalida(
                    f"Condimento {id_condimento} não está disponível para o produto {id_produto}",
                    detalhes={"id_produto": id_produto, "id_condimento": id_condimento},
                )
            escolhidos.append(condimento)

        bordas = [c for c in escolhidos if c.tipo_condimento == TipoCondimentoEnum.BORDAS]
        if len(bordas) > 1:
            raise SelecaoInvalida(
                "Escolha no máximo uma borda",
                detalhes={"id_produto": id_produto, "bordas": [c.id_condimento for c in bordas]},
            )
        return [CondimentoSelecionado.from_dto(c) for c in escolhidos]

    async def adicionar_item(
        self,
        sessao_id: str,
        id_produto: str,
        ids_condimentos: Sequence[str],
        quantidade: int = 1,
    ) -> Tuple[CarrinhoSessao, ItemCarrinho]:
        sessao = self.obter_sessao(sessao_id)
        if quantidade < 1:
            raise SelecaoInvalida("Quantidade deve ser maior ou igual a 1", detalhes={"quantidade": quantidade})

        # snapshot do produto e dos condimentos no momento da escolha
        produto, disponiveis = await asyncio.gather(
            self.catalogo.buscar_produto(id_produto),
            self.catalogo.condimentos_do_produto(id_produto),
        )
        if produto is None:
            raise SelecaoInvalida(f"Produto {id_produto} não encontrado", detalhes={"id_produto": id_produto})

        selecionados = self._validar_condimentos(id_produto, ids_condimentos, disponiveis)
        item = sessao.carrinho.adicionar_item(produto, selecionados, quantidade)
        sessao.tocar()
        logger.info(f"[Carrinho] Sessão {sessao_id}: item {item.id} quantidade={item.quantidade}")
        return sessao, item

    def atualizar_quantidade(self, sessao_id: str, item_id: str, quantidade: int) -> CarrinhoSessao:
        """Quantidade <= 0 remove o item; item desconhecido não altera o carrinho."""
        sessao = self.obter_sessao(sessao_id)
        sessao.carrinho.atualizar_quantidade(item_id, quantidade)
        sessao.tocar()
        return sessao

    def remover_item(self, sessao_id: str, item_id: str) -> CarrinhoSessao:
        sessao = self.obter_sessao(sessao_id)
        sessao.carrinho.remover_item(item_id)
        sessao.tocar()
        return sessao

    def limpar(self, sessao_id: str) -> CarrinhoSessao:
        """Esvazia o carrinho e sai do modo de edição."""
        sessao = self.obter_sessao(sessao_id)
        sessao.carrinho.limpar()
        sessao.sair_da_edicao()
        sessao.tocar()
        return sessao

    def carregar_pedido(
        self,
        sessao_id: str,
        codigo: str,
        carrinho: Carrinho,
        cliente: Optional[DadosCliente],
    ) -> CarrinhoSessao:
        """Substitui o carrinho da sessão pelo pedido reaberto e entra em modo de edição."""
        sessao = self.obter_sessao(sessao_id)
        sessao.carrinho.carregar(carrinho.itens)
        sessao.codigo_em_edicao = codigo
        sessao.cliente = cliente
        sessao.tocar()
        logger.info(f"[Carrinho] Sessão {sessao_id} editando pedido {codigo}")
        return sessao

    def concluir_checkout(self, sessao_id: str, pedido: Carrinho) -> CarrinhoSessao:
        """
        Retira do carrinho da sessão as quantidades gravadas em `pedido` e sai do
        modo de edição. Itens adicionados durante a gravação continuam no carrinho.
        """
        sessao = self.obter_sessao(sessao_id)
        for gravado in pedido.itens:
            atual = sessao.carrinho.obter_item(gravado.id)
            if atual is not None:
                sessao.carrinho.atualizar_quantidade(gravado.id, atual.quantidade - gravado.quantidade)
        sessao.sair_da_edicao()
        sessao.tocar()
        if not sessao.carrinho.vazio:
            logger.info(
                f"[Carrinho] Sessão {sessao_id}: {sessao.carrinho.total_itens} item(ns) fora do pedido "
                f"permanecem no carrinho"
            )
        return sessao
