"""
Erros de domínio do fluxo de pedidos.

Todas as falhas de I/O são convertidas em uma destas exceções na fronteira
(adapters/services); o handler global as transforma em respostas JSON.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from starlette import status


class PedidoError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    codigo_erro: str = "pedido_erro"

    def __init__(self, mensagem: str, *, detalhes: Optional[Dict[str, Any]] = None):
        super().__init__(mensagem)
        self.mensagem = mensagem
        self.detalhes = detalhes or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "detail": self.mensagem,
            "error_type": self.codigo_erro,
            **self.detalhes,
        }


class FalhaBuscaCatalogo(PedidoError):
    """Não foi possível ler produtos/condimentos/associações do catálogo."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    codigo_erro = "falha_busca_catalogo"


class FalhaPersistenciaPedido(PedidoError):
    """
    Gravação do pedido falhou. Se `cabecalho_persistido` for True o cabeçalho
    ficou gravado sem os itens e precisa de limpeza (não há rollback automático).
    """
    status_code = status.HTTP_502_BAD_GATEWAY
    codigo_erro = "falha_persistencia_pedido"

    def __init__(self, mensagem: str, *, carrinho: str, cabecalho_persistido: bool = False):
        super().__init__(
            mensagem,
            detalhes={"carrinho": carrinho, "cabecalho_persistido": cabecalho_persistido},
        )
        self.carrinho = carrinho
        self.cabecalho_persistido = cabecalho_persistido


class FalhaConsultaPedido(PedidoError):
    """Falha de leitura no armazenamento de pedidos (diferente de 'pedido não existe')."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    codigo_erro = "falha_consulta_pedido"


class PedidoNaoEncontrado(PedidoError):
    status_code = status.HTTP_404_NOT_FOUND
    codigo_erro = "pedido_nao_encontrado"

    def __init__(self, carrinho: str):
        super().__init__(f"Pedido {carrinho} não encontrado", detalhes={"carrinho": carrinho})
        self.carrinho = carrinho


class CarrinhoVazio(PedidoError):
    status_code = status.HTTP_400_BAD_REQUEST
    codigo_erro = "carrinho_vazio"

    def __init__(self):
        super().__init__("O carrinho está vazio")


class SelecaoInvalida(PedidoError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    codigo_erro = "selecao_invalida"


class SessaoNaoEncontrada(PedidoError):
    status_code = status.HTTP_404_NOT_FOUND
    codigo_erro = "sessao_nao_encontrada"

    def __init__(self, sessao_id: str):
        super().__init__("Sessão de carrinho não encontrada", detalhes={"sessao_id": sessao_id})


class CodigoCarrinhoIndisponivel(PedidoError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    codigo_erro = "codigo_carrinho_indisponivel"
