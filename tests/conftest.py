import os
import tempfile

# Configuração lida no import de app.config.settings
os.environ.setdefault("DB_URL", "sqlite://")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="pizzaria-logs-"))
os.environ.setdefault("INIT_DB_ON_STARTUP", "false")
os.environ.setdefault("WHATSAPP_NUMBER", "5511999990000")
os.environ.setdefault("NOME_ESTABELECIMENTO", "Pizzaria Teste")

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.api.carrinho.services.service_carrinho import CarrinhoSessaoStore
from app.api.catalogo.services.dependencies import get_catalogo_contract
from app.api.pedidos.services.dependencies import get_pedido_store_contract
from app.api.shared.schemas.schema_shared_enums import TipoCondimentoEnum
from tests.fakes import FakeCatalogo, FakePedidoStore, condimento, produto


@pytest.fixture
def catalogo_fake():
    return FakeCatalogo(
        produtos=[
            produto("P1", "30.00", "Pizza Calabresa"),
            produto("P2", "20.00", "Pizza Marguerita"),
            produto("P3", "8.50", "Refrigerante", categoria="Bebidas"),
        ],
        condimentos=[
            condimento("B1", "5.00", "Borda Catupiry", TipoCondimentoEnum.BORDAS),
            condimento("B2", "6.00", "Borda Cheddar", TipoCondimentoEnum.BORDAS),
            condimento("A1", "3.00", "Bacon"),
            condimento("A2", "2.00", "Azeitona"),
        ],
        associacoes=[("P1", "B1"), ("P1", "B2"), ("P1", "A1"), ("P1", "A2"), ("P2", "A1")],
    )


@pytest.fixture
def pedido_store_fake():
    return FakePedidoStore()


@pytest.fixture
def dados_cliente():
    return {
        "nome": "Maria Souza",
        "telefone": "(11) 98765-4321",
        "cep": "01310-100",
        "logradouro": "Av. Paulista",
        "numero": "1000",
        "complemento": "",
        "cidade": "São Paulo",
        "bairro": "Bela Vista",
        "tipo_pagamento": "PIX",
    }


@pytest.fixture
def client(catalogo_fake, pedido_store_fake):
    app.dependency_overrides[get_catalogo_contract] = lambda: catalogo_fake
    app.dependency_overrides[get_pedido_store_contract] = lambda: pedido_store_fake
    app.state.carrinho_store = CarrinhoSessaoStore()
    yield TestClient(app)
    app.dependency_overrides.clear()
