"""
Achatamento do pedido: carrinho + cliente -> cabeçalho + linhas de produtos vendidos.

Cada unidade de cada item gera uma linha base (id_condimento nulo, valor do
produto) seguida de uma linha por condimento do item (valor do condimento).
Todas as unidades de um item recebem o mesmo conjunto de condimentos; é isso
que permite a reconstrução a partir das linhas.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from itertools import count
from typing import List, Optional, Tuple

from app.api.carrinho.core.carrinho import Carrinho
from app.api.pedidos.contracts.pedido_store_contract import PedidoCabecalho, RegistroProdutoVendido
from app.api.shared.schemas.schema_cliente import DadosCliente
from app.api.shared.schemas.schema_shared_enums import AprovacaoEnum
from app.utils.database_utils import now_trimmed
from app.utils.formatacao import to_decimal


@dataclass(frozen=True)
class PedidoAchatado:
    cabecalho: PedidoCabecalho
    registros: Tuple[RegistroProdutoVendido, ...]


def montar_cabecalho(
    cliente: DadosCliente,
    *,
    id_pedido: str,
    carrinho: str,
    data_pedido: datetime,
) -> PedidoCabecalho:
    return PedidoCabecalho(
        id_pedido=id_pedido,
        carrinho=carrinho,
        nome_usuario=cliente.nome,
        telefone=cliente.telefone,
        cep=cliente.cep,
        logradouro=cliente.logradouro,
        numero=cliente.numero,
        complemento=cliente.complemento,
        cidade=cliente.cidade,
        bairro=cliente.bairro,
        tipo_pagamento=cliente.tipo_pagamento.value,
        data_pedido=data_pedido,
        aprovado=AprovacaoEnum.NAO_DEFINIDO,
    )


def achatar_pedido(
    carrinho: Carrinho,
    cliente: DadosCliente,
    *,
    id_pedido: str,
    codigo_carrinho: str,
    data_pedido: Optional[datetime] = None,
) -> PedidoAchatado:
    data_pedido = data_pedido or now_trimmed()
    cabecalho = montar_cabecalho(
        cliente,
        id_pedido=id_pedido,
        carrinho=codigo_carrinho,
        data_pedido=data_pedido,
    )

    # contador único no lote; ids não dependem do relógio
    sequencia = count(1)
    registros: List[RegistroProdutoVendido] = []

    def _registro(id_produto: str, id_condimento: Optional[str], valor) -> RegistroProdutoVendido:
        return RegistroProdutoVendido(
            id_produtos_vendidos=f"{id_pedido}_{id_produto}_{next(sequencia)}",
            id_pedido=id_pedido,
            id_produto=id_produto,
            id_condimento=id_condimento,
            valor=to_decimal(valor),
            carrinho=codigo_carrinho,
            data_pedido=data_pedido,
            aprovado=AprovacaoEnum.NAO_DEFINIDO,
        )

    for item in carrinho.itens:
        id_produto = item.produto.id_produto
        for _ in range(item.quantidade):
            registros.append(_registro(id_produto, None, item.produto.valor))
            for condimento in item.condimentos:
                registros.append(_registro(id_produto, condimento.id_condimento, condimento.valor_adicional))

    return PedidoAchatado(cabecalho=cabecalho, registros=tuple(registros))
