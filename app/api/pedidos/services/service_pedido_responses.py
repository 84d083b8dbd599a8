from __future__ import annotations

from app.api.carrinho.schemas.schema_carrinho import carrinho_to_response, sessao_to_response
from app.api.pedidos.contracts.pedido_store_contract import PedidoCabecalho
from app.api.pedidos.schemas.schema_pedido import (
    CheckoutResponse,
    EditarPedidoResponse,
    PedidoCabecalhoResponse,
    PedidoDetalheResponse,
)
from app.api.pedidos.services.service_pedido import PedidoFinalizado, PedidoReconstruido


class PedidoResponseBuilder:
    """Classe responsável por converter resultados do PedidoService em responses."""

    @staticmethod
    def cabecalho_to_response(cabecalho: PedidoCabecalho) -> PedidoCabecalhoResponse:
        return PedidoCabecalhoResponse.model_validate(cabecalho)

    @staticmethod
    def checkout_to_response(finalizado: PedidoFinalizado) -> CheckoutResponse:
        return CheckoutResponse(
            carrinho=finalizado.cabecalho.carrinho,
            id_pedido=finalizado.cabecalho.id_pedido,
            editado=finalizado.editado,
            pedido=PedidoResponseBuilder.cabecalho_to_response(finalizado.cabecalho),
            itens=carrinho_to_response(finalizado.carrinho),
            mensagem_whatsapp=finalizado.mensagem_whatsapp,
            link_whatsapp=finalizado.link_whatsapp,
        )

    @staticmethod
    def detalhe_to_response(pedido: PedidoReconstruido) -> PedidoDetalheResponse:
        """Converte pedido reconstruído para a visão de busca da equipe."""
        resultado = pedido.resultado
        return PedidoDetalheResponse(
            pedido=PedidoResponseBuilder.cabecalho_to_response(pedido.cabecalho),
            itens=carrinho_to_response(resultado.carrinho),
            produtos_descartados=list(resultado.produtos_descartados),
            condimentos_degradados=list(resultado.condimentos_degradados),
            produtos_nao_uniformes=list(resultado.produtos_nao_uniformes),
        )

    @staticmethod
    def edicao_to_response(pedido: PedidoReconstruido, sessao) -> EditarPedidoResponse:
        resultado = pedido.resultado
        return EditarPedidoResponse(
            sessao=sessao_to_response(sessao),
            produtos_descartados=list(resultado.produtos_descartados),
            condimentos_degradados=list(resultado.condimentos_degradados),
            produtos_nao_uniformes=list(resultado.produtos_nao_uniformes),
        )
