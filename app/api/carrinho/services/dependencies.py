from fastapi import Depends, Request

from app.api.carrinho.services.service_carrinho import CarrinhoService, CarrinhoSessaoStore
from app.api.catalogo.contracts.catalogo_contract import ICatalogoContract
from app.api.catalogo.services.dependencies import get_catalogo_contract


def get_carrinho_store(request: Request) -> CarrinhoSessaoStore:
    # criado no startup da aplicação (app.state.carrinho_store)
    return request.app.state.carrinho_store


def get_carrinho_service(
    store: CarrinhoSessaoStore = Depends(get_carrinho_store),
    catalogo_contract: ICatalogoContract = Depends(get_catalogo_contract),
) -> CarrinhoService:
    return CarrinhoService(store, catalogo_contract)
