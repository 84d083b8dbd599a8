from decimal import Decimal


def _nova_sessao(client):
    resp = client.post("/api/carrinho/client/sessoes")
    assert resp.status_code == 201, resp.text
    return resp.json()["sessao_id"]


def _adicionar(client, sessao_id, id_produto, condimentos=(), quantidade=1):
    return client.post(
        f"/api/carrinho/client/sessoes/{sessao_id}/itens",
        json={"id_produto": id_produto, "ids_condimentos": list(condimentos), "quantidade": quantidade},
    )


# ---------------- Catálogo ----------------
def test_listar_produtos(client):
    resp = client.get("/api/catalogo/public/produtos")
    assert resp.status_code == 200, resp.text
    assert [p["id_produto"] for p in resp.json()] == ["P1", "P2", "P3"]


def test_listar_produtos_por_categoria(client):
    resp = client.get("/api/catalogo/public/produtos", params={"categoria": "Bebidas"})
    assert [p["id_produto"] for p in resp.json()] == ["P3"]

    todos = client.get("/api/catalogo/public/produtos", params={"categoria": "Todos"})
    assert len(todos.json()) == 3


def test_listar_categorias(client):
    resp = client.get("/api/catalogo/public/categorias")
    assert resp.json() == ["Pizzas", "Bebidas"]


def test_condimentos_do_produto_separados_por_tipo(client):
    resp = client.get("/api/catalogo/public/produtos/P1/condimentos")
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert [c["id_condimento"] for c in body["bordas"]] == ["B1", "B2"]
    assert [c["id_condimento"] for c in body["adicionais"]] == ["A1", "A2"]

    sem_vinculo = client.get("/api/catalogo/public/produtos/P3/condimentos").json()
    assert sem_vinculo["bordas"] == [] and sem_vinculo["adicionais"] == []


def test_catalogo_indisponivel_devolve_listas_vazias(client, catalogo_fake):
    catalogo_fake.indisponivel = True

    assert client.get("/api/catalogo/public/produtos").json() == []
    assert client.get("/api/catalogo/public/categorias").json() == []
    assert client.get("/api/catalogo/public/produtos/P1/condimentos").json()["bordas"] == []


# ---------------- Carrinho ----------------
def test_sessao_nova_comeca_vazia(client):
    sessao_id = _nova_sessao(client)

    resp = client.get(f"/api/carrinho/client/sessoes/{sessao_id}")
    body = resp.json()
    assert body["carrinho"]["itens"] == []
    assert body["carrinho"]["total_itens"] == 0
    assert body["carrinho"]["total_formatado"] == "R$ 0,00"
    assert body["codigo_em_edicao"] is None


def test_sessoes_sao_independentes(client):
    primeira = _nova_sessao(client)
    segunda = _nova_sessao(client)

    _adicionar(client, primeira, "P1")

    assert client.get(f"/api/carrinho/client/sessoes/{segunda}").json()["carrinho"]["total_itens"] == 0


def test_adicionar_mesma_combinacao_soma_na_linha(client):
    sessao_id = _nova_sessao(client)

    _adicionar(client, sessao_id, "P1", ["B1"], 1)
    resp = _adicionar(client, sessao_id, "P1", ["B1"], 2)

    assert resp.status_code == 200, resp.text
    carrinho = resp.json()["carrinho"]
    assert len(carrinho["itens"]) == 1
    assert carrinho["itens"][0]["quantidade"] == 3
    assert Decimal(carrinho["total_preco"]) == Decimal("105.00")
    assert carrinho["total_formatado"] == "R$ 105,00"


def test_duas_bordas_sao_rejeitadas(client):
    sessao_id = _nova_sessao(client)

    resp = _adicionar(client, sessao_id, "P1", ["B1", "B2"])

    assert resp.status_code == 422
    assert resp.json()["error_type"] == "selecao_invalida"
    assert client.get(f"/api/carrinho/client/sessoes/{sessao_id}").json()["carrinho"]["itens"] == []


def test_condimento_nao_vinculado_e_rejeitado(client):
    sessao_id = _nova_sessao(client)

    resp = _adicionar(client, sessao_id, "P2", ["B1"])

    assert resp.status_code == 422
    assert resp.json()["id_condimento"] == "B1"


def test_produto_inexistente_e_rejeitado(client):
    sessao_id = _nova_sessao(client)

    resp = _adicionar(client, sessao_id, "P404")

    assert resp.status_code == 422


def test_quantidade_zero_no_adicionar_e_erro_de_validacao(client):
    sessao_id = _nova_sessao(client)

    resp = _adicionar(client, sessao_id, "P1", quantidade=0)

    assert resp.status_code == 422
    assert resp.json()["message"] == "Erro de validação nos dados fornecidos"


def test_adicionar_com_catalogo_indisponivel(client, catalogo_fake):
    sessao_id = _nova_sessao(client)
    catalogo_fake.indisponivel = True

    resp = _adicionar(client, sessao_id, "P1")

    assert resp.status_code == 503
    assert resp.json()["error_type"] == "falha_busca_catalogo"


def test_atualizar_quantidade_e_remover(client):
    sessao_id = _nova_sessao(client)
    item_id = _adicionar(client, sessao_id, "P2", ["A1"]).json()["carrinho"]["itens"][0]["id"]

    resp = client.patch(f"/api/carrinho/client/sessoes/{sessao_id}/itens/{item_id}", json={"quantidade": 4})
    assert resp.json()["carrinho"]["itens"][0]["quantidade"] == 4
    assert Decimal(resp.json()["carrinho"]["total_preco"]) == Decimal("92.00")

    resp = client.patch(f"/api/carrinho/client/sessoes/{sessao_id}/itens/{item_id}", json={"quantidade": 0})
    assert resp.json()["carrinho"]["itens"] == []

    _adicionar(client, sessao_id, "P2", ["A1"])
    resp = client.delete(f"/api/carrinho/client/sessoes/{sessao_id}/itens/{item_id}")
    assert resp.json()["carrinho"]["total_itens"] == 0


def test_item_desconhecido_nao_altera_carrinho(client):
    sessao_id = _nova_sessao(client)
    _adicionar(client, sessao_id, "P3")

    resp = client.patch(f"/api/carrinho/client/sessoes/{sessao_id}/itens/nao-existe", json={"quantidade": 9})

    assert resp.status_code == 200
    assert resp.json()["carrinho"]["total_itens"] == 1


def test_limpar_carrinho(client):
    sessao_id = _nova_sessao(client)
    _adicionar(client, sessao_id, "P1", ["A1", "A2"], 2)

    resp = client.delete(f"/api/carrinho/client/sessoes/{sessao_id}/itens")

    assert resp.status_code == 200
    assert resp.json()["carrinho"]["itens"] == []


def test_sessao_inexistente(client):
    resp = client.get("/api/carrinho/client/sessoes/nao-existe")

    assert resp.status_code == 404
    assert resp.json()["error_type"] == "sessao_nao_encontrada"


# ---------------- Infra ----------------
def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").json()["status"] == "ok"


def test_metricas(client):
    client.get("/api/catalogo/public/produtos")

    resp = client.get("/api/monitoring/metrics")

    assert resp.status_code == 200
    assert "http_requests_total" in resp.text
    assert "pedidos_finalizados_total" in resp.text
