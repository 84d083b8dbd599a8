"""
Router principal do bounded context de Carrinho.
"""
from fastapi import APIRouter

from app.api.carrinho.router.client.router_carrinho_client import router as router_carrinho_client

api_carrinho = APIRouter()

api_carrinho.include_router(router_carrinho_client)
