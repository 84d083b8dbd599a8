from fastapi import Depends
from sqlalchemy.orm import sessionmaker

from app.database.db_connection import get_session_factory
from app.api.catalogo.contracts.catalogo_contract import ICatalogoContract
from app.api.catalogo.adapters.catalogo_adapter import CatalogoAdapter
from app.api.catalogo.services.service_catalogo import CatalogoService


def get_catalogo_contract(
    session_factory: sessionmaker = Depends(get_session_factory),
) -> ICatalogoContract:
    return CatalogoAdapter(session_factory)


def get_catalogo_service(
    catalogo_contract: ICatalogoContract = Depends(get_catalogo_contract),
) -> CatalogoService:
    return CatalogoService(catalogo_contract)
