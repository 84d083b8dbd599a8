"""
Resumo do pedido em texto para envio pelo WhatsApp da pizzaria.

O envio em si fica com o cliente (abre o link); aqui só montamos o texto e a URL.
"""
from typing import List, Optional
from urllib.parse import quote

from app.api.carrinho.core.carrinho import Carrinho
from app.api.pedidos.contracts.pedido_store_contract import PedidoCabecalho
from app.config.settings import NOME_ESTABELECIMENTO, WHATSAPP_NUMBER
from app.utils.database_utils import formatar_data_br
from app.utils.formatacao import formatar_preco
from app.utils.telefone import numero_whatsapp

# Mesmo conjunto de caracteres que o encodeURIComponent do navegador mantém
_SEGUROS_URI = "-_.!~*'()"


def gerar_mensagem_pedido(cabecalho: PedidoCabecalho, carrinho: Carrinho) -> str:
    linhas: List[str] = [f"🍕 NOVO PEDIDO - {NOME_ESTABELECIMENTO}", ""]

    linhas += [
        "👤 CLIENTE:",
        f"Nome: {cabecalho.nome_usuario}",
        f"Telefone: {cabecalho.telefone}",
        "",
    ]

    endereco = f"{cabecalho.logradouro}, {cabecalho.numero}"
    if cabecalho.complemento:
        endereco += f" - {cabecalho.complemento}"
    linhas += [
        "📍 ENDEREÇO DE ENTREGA:",
        f"CEP: {cabecalho.cep}",
        endereco,
        f"{cabecalho.bairro} - {cabecalho.cidade}",
        "",
    ]

    linhas.append("🛒 PEDIDO:")
    for indice, item in enumerate(carrinho.itens, start=1):
        linhas.append(f"{indice}. {item.produto.titulo} - Qtd: {item.quantidade}")
        linhas.append(f"   {formatar_preco(item.produto.valor)}")
        if item.condimentos:
            linhas.append("   Condimentos:")
            for condimento in item.condimentos:
                linhas.append(f"   + {condimento.nome_condimento} - {formatar_preco(condimento.valor_adicional)}")
        linhas.append(f"   Subtotal: {formatar_preco(item.total)}")
        linhas.append("")

    linhas += [
        f"💰 TOTAL: {formatar_preco(carrinho.total_preco)}",
        "",
        "💳 FORMA DE PAGAMENTO:",
        cabecalho.tipo_pagamento,
        "",
        f"Código: #{cabecalho.carrinho}",
    ]
    if cabecalho.data_pedido:
        linhas.append(f"Data: {formatar_data_br(cabecalho.data_pedido)}")
    linhas += [
        "---",
        "Pedido feito pelo site 🌐",
        "Obrigado pela preferência! 😊",
    ]
    return "\n".join(linhas)


def gerar_link_whatsapp(mensagem: str, numero: Optional[str] = None) -> str:
    destino = numero_whatsapp(numero or WHATSAPP_NUMBER)
    return f"https://wa.me/{destino}?text={quote(mensagem, safe=_SEGUROS_URI)}"
