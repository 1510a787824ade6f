# credito/infrastructure/repositories/duckdb_configuracao_repo.py
from __future__ import annotations

from decimal import Decimal

import duckdb

from credito.domain.configuracao.entities import Configuracao

# Singleton: a configuracao ativa vive sempre na mesma linha.
_ID_CONFIGURACAO = 1

_COLUNAS = (
    "limite_simei, max_simeis_por_grupo, score_baixo_threshold, "
    "score_alto_multiplicador, score_medio_multiplicador, "
    "score_normal_multiplicador, score_baixo_multiplicador, "
    "valor_aprovacao_gestor, total_grupo_aprovacao_gestor, "
    "restricoes_aprovacao_gestor, cnaes_permitidos, "
    "protesto_threshold_antecipado, restricao_threshold_antecipado, "
    "meses_fundacao_threshold, meses_loja_threshold"
)


def _dec(valor: object) -> Decimal:
    return Decimal(str(valor))


class DuckDBConfiguracaoRepo:
    def __init__(self, conn: duckdb.DuckDBPyConnection) -> None:
        self._conn = conn

    def carregar(self) -> Configuracao | None:
        row = self._conn.execute(
            f"SELECT {_COLUNAS} FROM configuracao WHERE id = ?",
            [_ID_CONFIGURACAO],
        ).fetchone()
        if row is None:
            return None
        return self._hidratar(row)

    def substituir(self, config: Configuracao) -> None:
        self._conn.execute(
            f"INSERT OR REPLACE INTO configuracao (id, {_COLUNAS}) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            [
                _ID_CONFIGURACAO,
                config.limite_simei,
                config.max_simeis_por_grupo,
                config.score_baixo_threshold,
                config.score_alto_multiplicador,
                config.score_medio_multiplicador,
                config.score_normal_multiplicador,
                config.score_baixo_multiplicador,
                config.valor_aprovacao_gestor,
                config.total_grupo_aprovacao_gestor,
                config.restricoes_aprovacao_gestor,
                ",".join(config.cnaes_permitidos),
                config.protesto_threshold_antecipado,
                config.restricao_threshold_antecipado,
                config.meses_fundacao_threshold,
                config.meses_loja_threshold,
            ],
        )

    def instalar_padrao(self) -> bool:
        """Grava a configuracao padrao se nenhuma existir. True se gravou."""
        if self.carregar() is not None:
            return False
        self.substituir(Configuracao())
        return True

    def _hidratar(self, row: tuple) -> Configuracao:  # type: ignore[type-arg]
        """Colunas na ordem de _COLUNAS."""
        return Configuracao(
            limite_simei=_dec(row[0]),
            max_simeis_por_grupo=int(row[1]),
            score_baixo_threshold=int(row[2]),
            score_alto_multiplicador=_dec(row[3]),
            score_medio_multiplicador=_dec(row[4]),
            score_normal_multiplicador=_dec(row[5]),
            score_baixo_multiplicador=_dec(row[6]),
            valor_aprovacao_gestor=_dec(row[7]),
            total_grupo_aprovacao_gestor=_dec(row[8]),
            restricoes_aprovacao_gestor=int(row[9]),
            cnaes_permitidos=tuple(str(row[10] or "").split(",")),
            protesto_threshold_antecipado=_dec(row[11]),
            restricao_threshold_antecipado=_dec(row[12]),
            meses_fundacao_threshold=int(row[13]),
            meses_loja_threshold=int(row[14]),
        )
