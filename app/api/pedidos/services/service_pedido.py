from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple, TypeVar
from uuid import uuid4

from pydantic import ValidationError

from app.api.carrinho.core.carrinho import Carrinho
from app.api.catalogo.contracts.catalogo_contract import CondimentoDTO, ICatalogoContract, ProdutoDTO
from app.api.pedidos.contracts.pedido_store_contract import (
    IPedidoStoreContract,
    PedidoCabecalho,
    RegistroProdutoVendido,
)
from app.api.pedidos.services.service_achatamento import PedidoAchatado, achatar_pedido
from app.api.pedidos.services.service_reconstrucao import (
    ResultadoReconstrucao,
    ids_referenciados,
    reconstruir_carrinho,
)
from app.api.pedidos.utils.codigo_carrinho import gerar_codigo_carrinho, normalizar_codigo_carrinho
from app.api.pedidos.utils.mensagem_whatsapp import gerar_link_whatsapp, gerar_mensagem_pedido
from app.api.shared.exceptions import (
    CarrinhoVazio,
    CodigoCarrinhoIndisponivel,
    FalhaBuscaCatalogo,
    FalhaConsultaPedido,
    FalhaPersistenciaPedido,
    PedidoNaoEncontrado,
)
from app.api.shared.schemas.schema_cliente import DadosCliente
from app.api.shared.schemas.schema_shared_enums import AprovacaoEnum
from app.config.settings import CODIGO_CARRINHO_MAX_TENTATIVAS, PEDIDOS_STORE_TIMEOUT_SECONDS
from app.utils.logger import logger
from app.utils.prometheus_metrics import (
    pedidos_falhas_persistencia_total,
    pedidos_finalizados_total,
    reconstrucao_itens_descartados_total,
)

T = TypeVar("T")


@dataclass(frozen=True)
class PedidoFinalizado:
    cabecalho: PedidoCabecalho
    carrinho: Carrinho
    mensagem_whatsapp: str
    link_whatsapp: str
    editado: bool = False


@dataclass(frozen=True)
class PedidoReconstruido:
    cabecalho: PedidoCabecalho
    resultado: ResultadoReconstrucao

    @property
    def cliente(self) -> Optional[DadosCliente]:
        return cliente_do_cabecalho(self.cabecalho)


def cliente_do_cabecalho(cabecalho: PedidoCabecalho) -> Optional[DadosCliente]:
    """Dados do cliente para preencher o checkout; None se o snapshot gravado não for mais válido."""
    try:
        return DadosCliente(
            nome=cabecalho.nome_usuario,
            telefone=cabecalho.telefone,
            cep=cabecalho.cep,
            logradouro=cabecalho.logradouro,
            numero=cabecalho.numero,
            complemento=cabecalho.complemento,
            cidade=cabecalho.cidade,
            bairro=cabecalho.bairro,
            tipo_pagamento=cabecalho.tipo_pagamento,
        )
    except ValidationError:
        logger.warning(f"[Pedidos] Dados do cliente do pedido {cabecalho.carrinho} não puderam ser reaproveitados")
        return None


class PedidoService:
    """
    Orquestra a gravação e a leitura de pedidos.

    Toda chamada ao armazenamento ou ao catálogo passa por `asyncio.wait_for`;
    estouro de tempo vira a mesma exceção de domínio que uma falha de I/O.
    """

    def __init__(
        self,
        pedido_store: IPedidoStoreContract,
        catalogo_contract: ICatalogoContract,
        *,
        timeout: float = PEDIDOS_STORE_TIMEOUT_SECONDS,
        max_tentativas_codigo: int = CODIGO_CARRINHO_MAX_TENTATIVAS,
        gerar_codigo: Callable[[], str] = gerar_codigo_carrinho,
    ):
        self.store = pedido_store
        self.catalogo = catalogo_contract
        self.timeout = timeout
        self.max_tentativas_codigo = max_tentativas_codigo
        self.gerar_codigo = gerar_codigo

    # ------------- I/O com timeout -------------
    async def _ler(self, descricao: str, chamada: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(chamada, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"[Pedidos] Timeout ao buscar {descricao}")
            raise FalhaConsultaPedido(f"Tempo esgotado ao buscar {descricao}") from e

    async def _ler_catalogo(self, descricao: str, chamada: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(chamada, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"[Pedidos] Timeout ao buscar {descricao} no catálogo")
            raise FalhaBuscaCatalogo(f"Tempo esgotado ao buscar {descricao}") from e

    async def _gravar(
        self,
        descricao: str,
        carrinho: str,
        chamada: Awaitable[T],
        *,
        etapa: str,
        cabecalho_persistido: bool = False,
    ) -> T:
        try:
            return await asyncio.wait_for(chamada, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            pedidos_falhas_persistencia_total.labels(etapa=etapa).inc()
            logger.error(f"[Pedidos] Timeout ao {descricao} (carrinho={carrinho})")
            raise FalhaPersistenciaPedido(
                f"Tempo esgotado ao {descricao}",
                carrinho=carrinho,
                cabecalho_persistido=cabecalho_persistido,
            ) from e
        except FalhaPersistenciaPedido as e:
            pedidos_falhas_persistencia_total.labels(etapa=etapa).inc()
            if cabecalho_persistido and not e.cabecalho_persistido:
                raise FalhaPersistenciaPedido(
                    e.mensagem,
                    carrinho=carrinho,
                    cabecalho_persistido=True,
                ) from e
            raise

    @staticmethod
    async def _em_paralelo(*chamadas: Awaitable):
        """gather que espera todas as chamadas e só então propaga a primeira falha."""
        resultados = await asyncio.gather(*chamadas, return_exceptions=True)
        for resultado in resultados:
            if isinstance(resultado, BaseException):
                raise resultado
        return resultados

    # ------------- Código do carrinho -------------
    async def _novo_codigo(self) -> str:
        for tentativa in range(1, self.max_tentativas_codigo + 1):
            codigo = self.gerar_codigo()
            if not await self._ler("código de carrinho", self.store.existe_carrinho(codigo)):
                return codigo
            logger.warning(f"[Pedidos] Código {codigo} já existe, gerando outro (tentativa {tentativa})")
        raise CodigoCarrinhoIndisponivel(
            f"Não foi possível gerar um código de pedido livre após {self.max_tentativas_codigo} tentativas"
        )

    # ------------- Gravação -------------
    async def _gravar_registros(self, achatado: PedidoAchatado, *, etapa: str) -> None:
        codigo = achatado.cabecalho.carrinho
        await self._gravar(
            "gravar os itens do pedido",
            codigo,
            self.store.inserir_registros(achatado.registros),
            etapa=etapa,
            cabecalho_persistido=True,
        )

    def _finalizado(self, achatado: PedidoAchatado, carrinho: Carrinho, *, editado: bool) -> PedidoFinalizado:
        mensagem = gerar_mensagem_pedido(achatado.cabecalho, carrinho)
        return PedidoFinalizado(
            cabecalho=achatado.cabecalho,
            carrinho=carrinho,
            mensagem_whatsapp=mensagem,
            link_whatsapp=gerar_link_whatsapp(mensagem),
            editado=editado,
        )

    async def finalizar_pedido(self, carrinho: Carrinho, cliente: DadosCliente) -> PedidoFinalizado:
        """
        Grava um pedido novo: cabeçalho primeiro, depois as linhas.

        Se as linhas falharem o cabeçalho fica gravado; a exceção informa
        `cabecalho_persistido=True` e a limpeza fica com quem chamou
        (`descartar_pedido`).

        O carrinho é copiado na entrada; mudanças no carrinho da sessão durante
        a gravação não entram neste pedido.
        """
        carrinho = Carrinho(carrinho.itens)
        if carrinho.vazio:
            raise CarrinhoVazio()

        codigo = await self._novo_codigo()
        achatado = achatar_pedido(carrinho, cliente, id_pedido=uuid4().hex, codigo_carrinho=codigo)

        await self._gravar(
            "gravar o cabeçalho do pedido",
            codigo,
            self.store.inserir_cabecalho(achatado.cabecalho),
            etapa="cabecalho",
        )
        await self._gravar_registros(achatado, etapa="itens")

        pedidos_finalizados_total.labels(operacao="novo").inc()
        logger.info(
            f"[Pedidos] Pedido {codigo} gravado - itens={carrinho.total_itens} "
            f"linhas={len(achatado.registros)} total={carrinho.total_preco}"
        )
        return self._finalizado(achatado, carrinho, editado=False)

    async def atualizar_pedido(self, codigo: str, carrinho: Carrinho, cliente: DadosCliente) -> PedidoFinalizado:
        """
        Regrava um pedido reaberto para edição mantendo `id_pedido` e código.
        A aprovação volta para "não definido" e as linhas são substituídas.
        """
        codigo = normalizar_codigo_carrinho(codigo)
        carrinho = Carrinho(carrinho.itens)
        if carrinho.vazio:
            raise CarrinhoVazio()

        existente = await self._ler(f"pedido {codigo}", self.store.buscar_cabecalho_por_carrinho(codigo))
        if existente is None:
            raise PedidoNaoEncontrado(codigo)

        achatado = achatar_pedido(
            carrinho,
            cliente,
            id_pedido=existente.id_pedido,
            codigo_carrinho=codigo,
            data_pedido=existente.data_pedido,
        )

        atualizado = await self._gravar(
            "atualizar o cabeçalho do pedido",
            codigo,
            self.store.atualizar_cabecalho(achatado.cabecalho),
            etapa="cabecalho",
        )
        if not atualizado:
            raise PedidoNaoEncontrado(codigo)

        await self._gravar(
            "remover os itens antigos do pedido",
            codigo,
            self.store.remover_registros(codigo),
            etapa="itens",
            cabecalho_persistido=True,
        )
        await self._gravar_registros(achatado, etapa="itens")

        pedidos_finalizados_total.labels(operacao="edicao").inc()
        logger.info(f"[Pedidos] Pedido {codigo} atualizado - linhas={len(achatado.registros)}")
        return self._finalizado(achatado, carrinho, editado=True)

    async def atualizar_aprovacao(self, codigo: str, aprovado: AprovacaoEnum) -> AprovacaoEnum:
        codigo = normalizar_codigo_carrinho(codigo)
        encontrado = await self._gravar(
            "atualizar a aprovação do pedido",
            codigo,
            self.store.atualizar_aprovacao(codigo, aprovado),
            etapa="aprovacao",
        )
        if not encontrado:
            raise PedidoNaoEncontrado(codigo)
        logger.info(f"[Pedidos] Pedido {codigo} - aprovado={aprovado.value!r}")
        return aprovado

    async def descartar_pedido(self, codigo: str) -> int:
        """Remove linhas e cabeçalho de um pedido (ex.: gravação interrompida). Retorna as linhas removidas."""
        codigo = normalizar_codigo_carrinho(codigo)
        removidos = await self._gravar(
            "remover os itens do pedido",
            codigo,
            self.store.remover_registros(codigo),
            etapa="descarte",
        )
        cabecalho_removido = await self._gravar(
            "remover o cabeçalho do pedido",
            codigo,
            self.store.remover_cabecalho(codigo),
            etapa="descarte",
        )
        if not cabecalho_removido and not removidos:
            raise PedidoNaoEncontrado(codigo)
        logger.info(f"[Pedidos] Pedido {codigo} descartado - linhas removidas={removidos}")
        return removidos

    # ------------- Leitura / reconstrução -------------
    async def _buscar_catalogo(
        self, registros: Sequence[RegistroProdutoVendido]
    ) -> Tuple[List[ProdutoDTO], List[CondimentoDTO]]:
        ids_produto, ids_condimento = ids_referenciados(registros)

        async def _sem_condimentos() -> List[CondimentoDTO]:
            return []

        return await self._em_paralelo(
            self._ler_catalogo("produtos", self.catalogo.buscar_produtos_por_ids(ids_produto)),
            self._ler_catalogo(
                "condimentos",
                self.catalogo.buscar_condimentos_por_ids(ids_condimento) if ids_condimento else _sem_condimentos(),
            ),
        )

    async def _reconstruir(self, codigo: str, registros: Sequence[RegistroProdutoVendido]) -> ResultadoReconstrucao:
        if not registros:
            return ResultadoReconstrucao(carrinho=Carrinho())

        produtos, condimentos = await self._buscar_catalogo(registros)
        resultado = reconstruir_carrinho(registros, produtos, condimentos)

        if resultado.produtos_descartados:
            reconstrucao_itens_descartados_total.labels(tipo="produto").inc(len(resultado.produtos_descartados))
            logger.warning(
                f"[Pedidos] Pedido {codigo}: produtos fora do catálogo descartados "
                f"{list(resultado.produtos_descartados)}"
            )
        if resultado.condimentos_degradados:
            reconstrucao_itens_descartados_total.labels(tipo="condimento").inc(len(resultado.condimentos_degradados))
            logger.warning(
                f"[Pedidos] Pedido {codigo}: condimentos fora do catálogo "
                f"{list(resultado.condimentos_degradados)}"
            )
        if resultado.produtos_nao_uniformes:
            reconstrucao_itens_descartados_total.labels(tipo="produto_nao_uniforme").inc(
                len(resultado.produtos_nao_uniformes)
            )
            logger.warning(
                f"[Pedidos] Pedido {codigo}: produtos com condimentos diferentes entre unidades, "
                f"total reconstruído difere do gravado {list(resultado.produtos_nao_uniformes)}"
            )
        return resultado

    async def buscar_pedido(self, codigo: str) -> PedidoReconstruido:
        """
        Cabeçalho + carrinho reconstruído (visão da equipe).
        Um cabeçalho sem linhas (gravação interrompida) volta com carrinho vazio.
        """
        codigo = normalizar_codigo_carrinho(codigo)
        cabecalho, registros = await self._em_paralelo(
            self._ler(f"pedido {codigo}", self.store.buscar_cabecalho_por_carrinho(codigo)),
            self._ler(f"itens do pedido {codigo}", self.store.buscar_registros_por_carrinho(codigo)),
        )
        if cabecalho is None:
            raise PedidoNaoEncontrado(codigo)
        return PedidoReconstruido(cabecalho=cabecalho, resultado=await self._reconstruir(codigo, registros))

    async def reabrir_pedido(self, codigo: str) -> PedidoReconstruido:
        """Carrinho reconstruído para edição; exige cabeçalho e ao menos uma linha."""
        pedido = await self.buscar_pedido(codigo)
        if pedido.resultado.carrinho.vazio and not pedido.resultado.produtos_descartados:
            raise PedidoNaoEncontrado(pedido.cabecalho.carrinho)
        logger.info(f"[Pedidos] Pedido {pedido.cabecalho.carrinho} reaberto para edição")
        return pedido
