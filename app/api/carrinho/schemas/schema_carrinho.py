from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.api.carrinho.core.carrinho import Carrinho, ItemCarrinho
from app.api.shared.schemas.schema_cliente import DadosCliente
from app.api.shared.schemas.schema_shared_enums import TipoCondimentoEnum
from app.utils.formatacao import formatar_preco


# ======================================================================
# ============================ REQUESTS ================================
# ======================================================================

class AdicionarItemRequest(BaseModel):
    id_produto: str = Field(min_length=1)
    ids_condimentos: List[str] = Field(
        default_factory=list,
        description="Condimentos escolhidos (no máximo uma borda)",
    )
    quantidade: int = Field(default=1, ge=1)


class AtualizarQuantidadeRequest(BaseModel):
    quantidade: int = Field(description="Zero ou negativo remove o item do carrinho")


# ======================================================================
# ============================ RESPONSES ===============================
# ======================================================================

class CondimentoSelecionadoResponse(BaseModel):
    id_condimento: str
    nome_condimento: str
    valor_adicional: Decimal
    tipo_condimento: TipoCondimentoEnum

    model_config = ConfigDict(from_attributes=True)


class ItemCarrinhoResponse(BaseModel):
    id: str
    id_produto: str
    titulo: str
    categoria: str
    link_imagem: str = ""
    valor_unitario: Decimal
    quantidade: int
    condimentos: List[CondimentoSelecionadoResponse] = Field(default_factory=list)
    total: Decimal
    total_formatado: str


class CarrinhoResponse(BaseModel):
    itens: List[ItemCarrinhoResponse] = Field(default_factory=list)
    total_itens: int = 0
    total_preco: Decimal = Decimal("0")
    total_formatado: str = formatar_preco(0)


class CarrinhoSessaoResponse(BaseModel):
    sessao_id: str
    codigo_em_edicao: Optional[str] = Field(
        default=None,
        description="Código do pedido reaberto para edição (checkout atualiza esse pedido)",
    )
    cliente: Optional[DadosCliente] = None
    carrinho: CarrinhoResponse


def item_to_response(item: ItemCarrinho) -> ItemCarrinhoResponse:
    return ItemCarrinhoResponse(
        id=item.id,
        id_produto=item.produto.id_produto,
        titulo=item.produto.titulo,
        categoria=item.produto.categoria,
        link_imagem=item.produto.link_imagem,
        valor_unitario=item.produto.valor,
        quantidade=item.quantidade,
        condimentos=[CondimentoSelecionadoResponse.model_validate(c) for c in item.condimentos],
        total=item.total,
        total_formatado=formatar_preco(item.total),
    )


def carrinho_to_response(carrinho: Carrinho) -> CarrinhoResponse:
    return CarrinhoResponse(
        itens=[item_to_response(i) for i in carrinho.itens],
        total_itens=carrinho.total_itens,
        total_preco=carrinho.total_preco,
        total_formatado=formatar_preco(carrinho.total_preco),
    )


def sessao_to_response(sessao) -> CarrinhoSessaoResponse:
    return CarrinhoSessaoResponse(
        sessao_id=sessao.id,
        codigo_em_edicao=sessao.codigo_em_edicao,
        cliente=sessao.cliente,
        carrinho=carrinho_to_response(sessao.carrinho),
    )
