# credito/infrastructure/repositories/duckdb_grupo_repo.py
from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

import duckdb

from credito.domain.exceptions import ConflitoConcorrencia
from credito.domain.grupo.entities import CarteiraGrupo, DadosBI, GrupoEconomico

from .duckdb_cliente_repo import DuckDBClienteRepo
from .duckdb_pedido_repo import DuckDBPedidoRepo


class DuckDBGrupoRepo:
    def __init__(self, conn: duckdb.DuckDBPyConnection) -> None:
        self._conn = conn
        self._clientes = DuckDBClienteRepo(conn)
        self._pedidos = DuckDBPedidoRepo(conn)

    def buscar_por_id(self, grupo_id: int) -> GrupoEconomico | None:
        row = self._conn.execute(
            "SELECT id, codigo, nome, limite_aprovado, limite_disponivel, versao "
            "FROM grupo_economico WHERE id = ?",
            [grupo_id],
        ).fetchone()
        if row is None:
            return None
        return self._hidratar(row)

    def carregar_carteira(self, grupo_id: int) -> CarteiraGrupo | None:
        grupo = self.buscar_por_id(grupo_id)
        if grupo is None:
            return None
        return CarteiraGrupo(
            grupo=grupo,
            clientes=tuple(self._clientes.listar_por_grupo(grupo_id)),
            pedidos=tuple(self._pedidos.listar_por_grupo(grupo_id)),
        )

    def listar_dados_bi(self, grupo_id: int) -> list[DadosBI]:
        """Mais recente primeiro."""
        rows = self._conn.execute(
            "SELECT colecao, credito, score, valor_vencido, atraso_medio "
            "FROM dados_bi WHERE grupo_economico_id = ? ORDER BY colecao DESC",
            [grupo_id],
        ).fetchall()
        return [
            DadosBI(
                colecao=int(r[0]),
                credito=Decimal(str(r[1])),
                score=int(r[2]) if r[2] is not None else None,
                valor_vencido=Decimal(str(r[3])) if r[3] is not None else None,
                atraso_medio=int(r[4]) if r[4] is not None else None,
            )
            for r in rows
        ]

    def salvar(self, grupo: GrupoEconomico, versao_esperada: int) -> GrupoEconomico:
        """Compare-and-swap em `versao`. Zero linhas afetadas = outro escritor gravou antes."""
        try:
            row = self._conn.execute(
                """UPDATE grupo_economico
                   SET limite_aprovado = ?, limite_disponivel = ?, versao = versao + 1
                   WHERE id = ? AND versao = ?
                   RETURNING versao""",
                [grupo.limite_aprovado, grupo.limite_disponivel, grupo.id, versao_esperada],
            ).fetchone()
        except duckdb.TransactionException as err:
            raise ConflitoConcorrencia(f"Grupo {grupo.id}: escrita concorrente") from err
        if row is None:
            raise ConflitoConcorrencia(
                f"Grupo {grupo.id}: versao esperada {versao_esperada} nao confere"
            )
        return replace(grupo, versao=int(row[0]))

    def _hidratar(self, row: tuple) -> GrupoEconomico:  # type: ignore[type-arg]
        """Colunas: id(0), codigo(1), nome(2), limite_aprovado(3), limite_disponivel(4), versao(5)"""
        return GrupoEconomico(
            id=int(row[0]),
            codigo=str(row[1]),
            nome=str(row[2]),
            limite_aprovado=Decimal(str(row[3])) if row[3] is not None else Decimal("0"),
            limite_disponivel=Decimal(str(row[4])) if row[4] is not None else Decimal("0"),
            versao=int(row[5]),
        )
