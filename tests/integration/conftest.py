# tests/integration/conftest.py
from __future__ import annotations

from collections.abc import Generator

import duckdb
import pytest
from fastapi.testclient import TestClient

from credito.infrastructure.duckdb_connection import criar_schema


@pytest.fixture()
def test_db() -> Generator[duckdb.DuckDBPyConnection, None, None]:
    """DuckDB in-memory com schema e dados deterministicos. Um banco por teste:
    os testes de workflow alteram estado."""
    conn = duckdb.connect(":memory:")
    criar_schema(conn)

    # --- Configuracao (valores padrao) ---
    conn.execute("""
        INSERT INTO configuracao VALUES
        (1, 35000.00, 2, 300, 1.50, 1.20, 1.00, 0.70, 100000.00, 200000.00, 5, '',
         1000.00, 1000.00, 12, 10)
    """)

    # --- Grupos: 10 real (2 clientes), 20 individual ---
    conn.execute("""
        INSERT INTO grupo_economico VALUES
        (10, 'G-SUL', 'Grupo Sul', 150000.00, 150000.00, 1),
        (20, 'IND-33000167000101', 'Comercio Norte SA', 0, 0, 1)
    """)

    # --- Clientes ---
    conn.execute("""
        INSERT INTO cliente VALUES
        (1, 10, '11.222.333/0001-81', 'Moda Praia LTDA', 'BASE_PRAZO', FALSE, 720,
         'ATIVA', 'HABILITADO', 'OPTANTE', '4781-4/00', '2019-07-01', '2020-01-10'),
        (2, 10, '11.444.777/0001-61', 'Joana Silva MEI', 'BASE_PRAZO', TRUE, 250,
         'ATIVA', 'HABILITADO', 'SIMEI', '4781-4/00', '2021-02-01', NULL),
        (3, 20, '33.000.167/0001-01', 'Comercio Norte SA', 'NOVO', FALSE, NULL,
         'ATIVA', 'HABILITADO', NULL, '4781-4/00', '2018-03-01', NULL)
    """)

    # --- Restricoes do cliente 1 ---
    conn.execute("INSERT INTO pefin VALUES (1, 1, 400.00, '2025-05-01', 'Banco X')")
    conn.execute("INSERT INTO protesto VALUES (1, 1, 300.00, '2025-06-01', '1o Cartorio')")

    # --- Societario do cliente 1 ---
    conn.execute("""
        INSERT INTO socio VALUES
        (1, 1, 'Ana Souza', '12345678909', 60.00),
        (2, 1, 'Bruno Lima', NULL, 40.00)
    """)
    conn.execute("""
        INSERT INTO participacao VALUES
        (1, 1, '33.000.167/0001-01', 'Comercio Norte SA', 10.00)
    """)

    # --- Pedidos (bloqueio 80 = CLIENTE_NOVO) ---
    conn.execute("""
        INSERT INTO pedido VALUES
        (1, 'P-001', 1, 40000.00, NULL, 'BASE_PRAZO', '2026-03-01', 'Marca A', 202503),
        (2, 'P-002', 2, 20000.00, NULL, 'BASE_PRAZO', '2026-03-02', 'Marca A', 202503),
        (3, 'P-003', 3, 15000.00, '80', 'CLIENTE_NOVO', '2026-03-03', 'Marca B', 202503)
    """)

    # --- Analises ---
    conn.execute("""
        INSERT INTO analise (id, pedido_id, cliente_id, grupo_economico_id, status_workflow,
                             decisao, limite_aprovado)
        VALUES
        (1, 1, 1, 10, 'PENDENTE', NULL, NULL),
        (2, 2, 2, 10, 'PARECER_APROVADO', 'LIMITADO', 60000.00),
        (3, 3, 3, 20, 'PENDENTE', NULL, NULL)
    """)

    # --- BI do grupo 10 (a colecao de 2023 fica fora das duas mais recentes) ---
    conn.execute("""
        INSERT INTO dados_bi VALUES
        (1, 10, 202407, 50000.00, 650, NULL, NULL),
        (2, 10, 202501, 80000.00, 820, 0, 3),
        (3, 10, 202301, 999999.00, 100, NULL, NULL)
    """)

    yield conn
    conn.close()


@pytest.fixture()
def client(test_db: duckdb.DuckDBPyConnection) -> Generator[TestClient, None, None]:
    """TestClient do FastAPI com DuckDB in-memory injetado."""
    from credito.infrastructure import duckdb_connection
    duckdb_connection.set_connection(test_db)

    from credito.infrastructure.config import get_settings
    get_settings.cache_clear()

    from credito.interfaces.api.main import app
    with TestClient(app) as c:
        yield c
