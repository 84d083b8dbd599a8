from .model_produto import ProdutoModel
from .model_condimento import CondimentoModel
from .association_tables import associacao_produto_condimento

__all__ = [
    "ProdutoModel",
    "CondimentoModel",
    "associacao_produto_condimento",
]
