# tests/integration/test_api_analise.py
from decimal import Decimal

import duckdb
from fastapi.testclient import TestClient


def test_ficha_da_analise_retorna_200(client: TestClient) -> None:
    response = client.get("/api/analises/1")
    assert response.status_code == 200
    data = response.json()
    assert data["analise"]["status_workflow"] == "PENDENTE"
    assert data["cliente"]["cnpj"] == "11.222.333/0001-81"
    assert data["cliente"]["qtd_socios"] == 2
    assert data["grupo"]["grupo_real"] is True
    assert data["alertas"] == ["RESTRIÇÕES (2)"]
    assert data["status_permitidos"] == ["EM_ANALISE_FINANCEIRO"]
    assert data["parecer_crm"] is None
    assert data["duracao_horas"] is None
    assert data["analise"]["aguardando_acao"] is False
    assert [d["colecao"] for d in data["dados_bi"]] == ["Jan/2025", "Jul/2024", "Jan/2023"]


def test_ficha_nao_encontrada_retorna_404(client: TestClient) -> None:
    response = client.get("/api/analises/999")
    assert response.status_code == 404
    assert "detail" in response.json()


def test_headers_seguranca_presentes(client: TestClient) -> None:
    response = client.get("/api/analises/1")
    assert response.headers.get("X-Content-Type-Options") == "nosniff"
    assert response.headers.get("X-Frame-Options") == "DENY"
    assert response.headers.get("Referrer-Policy") == "strict-origin-when-cross-origin"


# ---------- Transicoes ----------


def test_transicao_valida(client: TestClient) -> None:
    response = client.post(
        "/api/analises/1/transicoes",
        json={"novo_status": "EM_ANALISE_FINANCEIRO", "analista": "ana"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status_workflow"] == "EM_ANALISE_FINANCEIRO"
    assert data["analista_responsavel"] == "ana"
    assert data["data_inicio"] is not None


def test_transicao_invalida_retorna_409_sem_alterar(client: TestClient) -> None:
    response = client.post("/api/analises/1/transicoes", json={"novo_status": "FINALIZADO"})
    assert response.status_code == 409
    assert "Transicao invalida" in response.json()["detail"]
    assert response.headers.get("X-Frame-Options") == "DENY"
    assert client.get("/api/analises/1").json()["analise"]["status_workflow"] == "PENDENTE"


def test_status_desconhecido_retorna_422(client: TestClient) -> None:
    response = client.post("/api/analises/1/transicoes", json={"novo_status": "INEXISTENTE"})
    assert response.status_code == 422


def test_transicao_de_analise_inexistente_retorna_404(client: TestClient) -> None:
    response = client.post("/api/analises/999/transicoes", json={"novo_status": "FINALIZADO"})
    assert response.status_code == 404


def test_finalizar_grava_limites_no_grupo(
    client: TestClient, test_db: duckdb.DuckDBPyConnection
) -> None:
    response = client.post(
        "/api/analises/2/transicoes",
        json={"novo_status": "FINALIZADO", "analista": "gestor"},
    )
    assert response.status_code == 200
    assert response.json()["finalizada"] is True

    aprovado, disponivel, versao = test_db.execute(
        "SELECT limite_aprovado, limite_disponivel, versao FROM grupo_economico WHERE id = 10"
    ).fetchone()  # type: ignore[misc]
    assert aprovado == Decimal("60000")
    assert disponivel == Decimal("20000")
    assert versao == 2


# ---------- Conclusao ----------


def test_concluir_aprovado(client: TestClient) -> None:
    client.post("/api/analises/1/transicoes", json={"novo_status": "EM_ANALISE_FINANCEIRO"})
    response = client.post(
        "/api/analises/1/concluir",
        json={"decisao": "APROVADO", "justificativa": "Bom pagador", "analista": "ana"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status_workflow"] == "PARECER_APROVADO"
    assert data["decisao"] == "APROVADO"
    assert Decimal(data["limite_sugerido"]) == Decimal("35000")
    assert Decimal(data["limite_aprovado"]) == Decimal("35000")
    assert data["score_no_momento"] == 820
    assert data["requer_aprovacao_gestor"] is False


def test_concluir_limitado_sem_limite_retorna_422(client: TestClient) -> None:
    client.post("/api/analises/1/transicoes", json={"novo_status": "EM_ANALISE_FINANCEIRO"})
    response = client.post(
        "/api/analises/1/concluir",
        json={"decisao": "LIMITADO", "justificativa": "Reduzir"},
    )
    assert response.status_code == 422
    assert "LIMITADO" in response.json()["detail"]


def test_concluir_sem_justificativa_retorna_422(client: TestClient) -> None:
    response = client.post("/api/analises/1/concluir", json={"decisao": "REPROVADO"})
    assert response.status_code == 422


def test_concluir_fora_de_analise_retorna_409(client: TestClient) -> None:
    response = client.post(
        "/api/analises/1/concluir",
        json={"decisao": "REPROVADO", "justificativa": "Risco"},
    )
    assert response.status_code == 409


# ---------- Consultas da analise ----------


def test_atualizar_limite_sugerido(client: TestClient) -> None:
    response = client.post("/api/analises/1/limite-sugerido")
    assert response.status_code == 200
    assert Decimal(response.json()["limite_sugerido"]) == Decimal("35000")


def test_aprovacao_gestor(client: TestClient) -> None:
    response = client.get("/api/analises/1/aprovacao-gestor")
    assert response.status_code == 200
    assert response.json() == {"analise_id": 1, "requer_aprovacao_gestor": False}


def test_parecer_de_base_prazo_e_nulo(client: TestClient) -> None:
    response = client.get("/api/analises/1/parecer")
    assert response.status_code == 200
    assert response.json()["parecer_crm"] is None


def test_previa_do_parecer_de_cliente_novo(client: TestClient) -> None:
    parecer = client.get("/api/analises/3/parecer").json()["parecer_crm"]
    assert parecer.startswith("[EM ANÁLISE] ")
    assert parecer.endswith(" - S/A - 03/2018 - NÃO - 0 - N/D - N/D - 0 SÓCIOS - 0 PART")
