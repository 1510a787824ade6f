# tests/integration/test_api_cliente_novo.py
from datetime import date, timedelta

import duckdb
from fastapi.testclient import TestClient


def test_pipeline_inicial_avanca_para_protestos(client: TestClient) -> None:
    response = client.post("/api/analises/3/pipeline", json={"analista": "ana"})
    assert response.status_code == 200
    data = response.json()
    assert data["status_destino"] == "CONSULTA_PROTESTOS"
    assert data["analise"]["status_workflow"] == "CONSULTA_PROTESTOS"
    assert data["motivo_desvio"] is None
    assert [g["gate"] for g in data["gates"]] == ["CONSULTA", "CADASTRAL", "FUNDACAO"]
    assert all(g["aprovado"] for g in data["gates"])


def test_loja_recente_encaminha_antecipado(
    client: TestClient, test_db: duckdb.DuckDBPyConnection
) -> None:
    client.post("/api/analises/3/pipeline", json={})
    assert client.post("/api/analises/3/gates/protesto", json={}).json()["status_destino"] == (
        "VERIFICACAO_LOJA_FISICA"
    )

    abertura = (date.today() - timedelta(days=60)).isoformat()
    response = client.post("/api/analises/3/gates/LOJA", json={"data_abertura_loja": abertura})
    assert response.status_code == 200
    data = response.json()
    assert data["analise"]["status_workflow"] == "ENCAMINHADO_ANTECIPADO"
    assert data["analise"]["finalizada"] is True
    assert data["motivo_desvio"] == "Loja física com abertura inferior ao período mínimo"

    tipo, loja = test_db.execute(
        "SELECT tipo_cliente, data_abertura_loja FROM cliente WHERE id = 3"
    ).fetchone()  # type: ignore[misc]
    assert tipo == "ANTECIPADO"
    assert loja.isoformat() == abertura


def test_gate_fora_da_etapa_retorna_409(client: TestClient) -> None:
    response = client.post("/api/analises/3/gates/loja", json={})
    assert response.status_code == 409


def test_gate_desconhecido_retorna_422(client: TestClient) -> None:
    response = client.post("/api/analises/3/gates/xyz", json={})
    assert response.status_code == 422
    assert response.json()["detail"] == "Gate invalido"


def test_pipeline_em_base_prazo_retorna_409(client: TestClient) -> None:
    response = client.post("/api/analises/1/pipeline", json={})
    assert response.status_code == 409
