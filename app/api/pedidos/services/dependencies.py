from fastapi import Depends
from sqlalchemy.orm import sessionmaker

from app.database.db_connection import get_session_factory
from app.api.catalogo.contracts.catalogo_contract import ICatalogoContract
from app.api.catalogo.services.dependencies import get_catalogo_contract
from app.api.pedidos.adapters.pedido_store_adapter import PedidoStoreAdapter
from app.api.pedidos.contracts.pedido_store_contract import IPedidoStoreContract
from app.api.pedidos.services.service_pedido import PedidoService


def get_pedido_store_contract(
    session_factory: sessionmaker = Depends(get_session_factory),
) -> IPedidoStoreContract:
    return PedidoStoreAdapter(session_factory)


def get_pedido_service(
    pedido_store: IPedidoStoreContract = Depends(get_pedido_store_contract),
    catalogo_contract: ICatalogoContract = Depends(get_catalogo_contract),
) -> PedidoService:
    return PedidoService(pedido_store, catalogo_contract)
