# credito/infrastructure/repositories/duckdb_analise_repo.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import duckdb

from credito.domain.analise.entities import Analise
from credito.domain.analise.value_objects import Decisao, StatusWorkflow

_COLUNAS = (
    "id, pedido_id, cliente_id, grupo_economico_id, status_workflow, decisao, "
    "limite_sugerido, limite_aprovado, requer_aprovacao_gestor, data_inicio, "
    "data_fim, analista_responsavel, justificativa, observacoes, motivo_desvio, "
    "parecer_crm, score_no_momento"
)


def _dec(valor: object) -> Decimal | None:
    return Decimal(str(valor)) if valor is not None else None


def _ts(valor: object) -> datetime | None:
    return valor if isinstance(valor, datetime) else None


class DuckDBAnaliseRepo:
    def __init__(self, conn: duckdb.DuckDBPyConnection) -> None:
        self._conn = conn

    def buscar_por_id(self, analise_id: int) -> Analise | None:
        row = self._conn.execute(
            f"SELECT {_COLUNAS} FROM analise WHERE id = ?",
            [analise_id],
        ).fetchone()
        if row is None:
            return None
        return self._hidratar(row)

    def salvar(self, analise: Analise) -> None:
        self._conn.execute(
            f"INSERT OR REPLACE INTO analise ({_COLUNAS}) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            [
                analise.id,
                analise.pedido_id,
                analise.cliente_id,
                analise.grupo_economico_id,
                analise.status_workflow.value,
                analise.decisao.value if analise.decisao else None,
                analise.limite_sugerido,
                analise.limite_aprovado,
                analise.requer_aprovacao_gestor,
                analise.data_inicio,
                analise.data_fim,
                analise.analista_responsavel,
                analise.justificativa,
                analise.observacoes,
                analise.motivo_desvio,
                analise.parecer_crm,
                analise.score_no_momento,
            ],
        )

    def _hidratar(self, row: tuple) -> Analise:  # type: ignore[type-arg]
        """Colunas na ordem de _COLUNAS."""
        return Analise(
            id=int(row[0]),
            pedido_id=int(row[1]),
            cliente_id=int(row[2]),
            grupo_economico_id=int(row[3]),
            status_workflow=StatusWorkflow(str(row[4])),
            decisao=Decisao(str(row[5])) if row[5] else None,
            limite_sugerido=_dec(row[6]),
            limite_aprovado=_dec(row[7]),
            requer_aprovacao_gestor=bool(row[8]),
            data_inicio=_ts(row[9]),
            data_fim=_ts(row[10]),
            analista_responsavel=row[11],
            justificativa=row[12],
            observacoes=row[13],
            motivo_desvio=row[14],
            parecer_crm=row[15],
            score_no_momento=int(row[16]) if row[16] is not None else None,
        )
