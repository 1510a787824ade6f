# credito/infrastructure/repositories/duckdb_pedido_repo.py
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import duckdb

from credito.domain.pedido.entities import Pedido, PedidoDoGrupo
from credito.domain.pedido.value_objects import TipoWorkflow

_COLUNAS = "p.id, p.numero, p.cliente_id, p.valor, p.workflow, p.bloqueio, p.data, p.marca, p.colecao"


class DuckDBPedidoRepo:
    def __init__(self, conn: duckdb.DuckDBPyConnection) -> None:
        self._conn = conn

    def buscar_por_id(self, pedido_id: int) -> Pedido | None:
        row = self._conn.execute(
            f"SELECT {_COLUNAS} FROM pedido p WHERE p.id = ?",
            [pedido_id],
        ).fetchone()
        if row is None:
            return None
        return self._hidratar(row)

    def listar_por_grupo(self, grupo_id: int) -> list[PedidoDoGrupo]:
        """Pedidos de todos os clientes do grupo, com o estado da analise de cada um."""
        rows = self._conn.execute(
            f"""SELECT {_COLUNAS}, a.id IS NOT NULL, a.data_fim
                FROM pedido p
                JOIN cliente c ON c.id = p.cliente_id
                LEFT JOIN analise a ON a.pedido_id = p.id
                WHERE c.grupo_economico_id = ?
                ORDER BY p.id""",
            [grupo_id],
        ).fetchall()
        return [
            PedidoDoGrupo(
                pedido=self._hidratar(r),
                tem_analise=bool(r[9]),
                data_fim_analise=r[10] if isinstance(r[10], datetime) else None,
            )
            for r in rows
        ]

    def _hidratar(self, row: tuple) -> Pedido:  # type: ignore[type-arg]
        """Colunas: id(0), numero(1), cliente_id(2), valor(3), workflow(4),
        bloqueio(5), data(6), marca(7), colecao(8)"""
        return Pedido(
            id=int(row[0]),
            numero=str(row[1]),
            cliente_id=int(row[2]),
            valor=Decimal(str(row[3])),
            workflow=TipoWorkflow(str(row[4])),
            bloqueio=row[5],
            data=row[6] if isinstance(row[6], date) else None,
            marca=row[7],
            colecao=int(row[8]) if row[8] is not None else None,
        )
