# credito/infrastructure/repositories/duckdb_cliente_repo.py
from __future__ import annotations

from datetime import date
from decimal import Decimal

import duckdb

from credito.domain.cliente.entities import (
    AcaoJudicial,
    Cheque,
    Cliente,
    Participacao,
    Pefin,
    Protesto,
    Restricao,
    Socio,
    tipo_da_restricao,
)
from credito.domain.cliente.value_objects import CNPJ, RazaoSocial, TipoCliente, TipoRestricao

_COLUNAS = (
    "id, grupo_economico_id, cnpj, razao_social, tipo_cliente, simei, "
    "score_boa_vista, status_receita, sintegra, status_simples, cnae, "
    "data_fundacao, data_abertura_loja"
)


_TABELA_POR_TIPO: dict[TipoRestricao, str] = {
    TipoRestricao.PEFIN: "pefin",
    TipoRestricao.PROTESTO: "protesto",
    TipoRestricao.ACAO_JUDICIAL: "acao_judicial",
    TipoRestricao.CHEQUE: "cheque",
}


def _colunas_restricao(registro: Restricao) -> tuple[str, list[object]]:
    """Colunas especificas de cada tabela de restricao, com os valores do registro."""
    if isinstance(registro, Pefin):
        return "data_ocorrencia, origem", [registro.data_ocorrencia, registro.origem]
    if isinstance(registro, Protesto):
        return "data_protesto, cartorio", [registro.data_protesto, registro.cartorio]
    if isinstance(registro, AcaoJudicial):
        return "data_distribuicao, tipo, vara", [
            registro.data_distribuicao, registro.tipo, registro.vara,
        ]
    return "data_ocorrencia, banco, agencia", [
        registro.data_ocorrencia, registro.banco, registro.agencia,
    ]


def _data(valor: object) -> date | None:
    return valor if isinstance(valor, date) else None


def _dec(valor: object) -> Decimal | None:
    return Decimal(str(valor)) if valor is not None else None


class DuckDBClienteRepo:
    def __init__(self, conn: duckdb.DuckDBPyConnection) -> None:
        self._conn = conn

    def buscar_por_id(self, cliente_id: int) -> Cliente | None:
        row = self._conn.execute(
            f"SELECT {_COLUNAS} FROM cliente WHERE id = ?",
            [cliente_id],
        ).fetchone()
        if row is None:
            return None
        return self._hidratar(row)

    def listar_por_grupo(self, grupo_id: int) -> list[Cliente]:
        rows = self._conn.execute(
            f"SELECT {_COLUNAS} FROM cliente WHERE grupo_economico_id = ? ORDER BY id",
            [grupo_id],
        ).fetchall()
        return [self._hidratar(r) for r in rows]

    def salvar(self, cliente: Cliente) -> None:
        """Grava os campos escalares. Socios e participacoes sao somente-leitura;
        restricoes tem operacoes proprias."""
        self._conn.execute(
            f"INSERT OR REPLACE INTO cliente ({_COLUNAS}) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            [
                cliente.id,
                cliente.grupo_economico_id,
                cliente.cnpj.formatado,
                cliente.razao_social.valor,
                cliente.tipo_cliente.value,
                cliente.simei,
                cliente.score_boa_vista,
                cliente.status_receita,
                cliente.sintegra,
                cliente.status_simples,
                cliente.cnae,
                cliente.data_fundacao,
                cliente.data_abertura_loja,
            ],
        )

    def adicionar_restricao(self, cliente_id: int, registro: Restricao) -> int:
        """Insere o registro com o proximo id da tabela. Retorna o id gerado."""
        tabela = _TABELA_POR_TIPO[tipo_da_restricao(registro)]
        colunas, valores = _colunas_restricao(registro)
        row = self._conn.execute(f"SELECT COALESCE(MAX(id), 0) + 1 FROM {tabela}").fetchone()
        restricao_id = int(row[0])  # type: ignore[index]
        marcadores = ", ".join("?" * (len(valores) + 3))
        self._conn.execute(
            f"INSERT INTO {tabela} (id, cliente_id, valor, {colunas}) VALUES ({marcadores})",
            [restricao_id, cliente_id, registro.valor, *valores],
        )
        return restricao_id

    def remover_restricao(self, cliente_id: int, tipo: TipoRestricao, restricao_id: int) -> bool:
        """Apaga somente se o registro pertence ao cliente."""
        row = self._conn.execute(
            f"DELETE FROM {_TABELA_POR_TIPO[tipo]} WHERE id = ? AND cliente_id = ? RETURNING id",
            [restricao_id, cliente_id],
        ).fetchone()
        return row is not None

    def _restricoes(self, cliente_id: int) -> dict[str, tuple]:  # type: ignore[type-arg]
        pefins = self._conn.execute(
            "SELECT valor, data_ocorrencia, origem, id FROM pefin "
            "WHERE cliente_id = ? ORDER BY id",
            [cliente_id],
        ).fetchall()
        protestos = self._conn.execute(
            "SELECT valor, data_protesto, cartorio, id FROM protesto "
            "WHERE cliente_id = ? ORDER BY id",
            [cliente_id],
        ).fetchall()
        acoes = self._conn.execute(
            "SELECT valor, data_distribuicao, tipo, vara, id FROM acao_judicial "
            "WHERE cliente_id = ? ORDER BY id",
            [cliente_id],
        ).fetchall()
        cheques = self._conn.execute(
            "SELECT valor, data_ocorrencia, banco, agencia, id FROM cheque "
            "WHERE cliente_id = ? ORDER BY id",
            [cliente_id],
        ).fetchall()
        return {
            "pefins": tuple(
                Pefin(Decimal(str(r[0])), _data(r[1]), r[2], int(r[3])) for r in pefins
            ),
            "protestos": tuple(
                Protesto(Decimal(str(r[0])), _data(r[1]), r[2], int(r[3])) for r in protestos
            ),
            "acoes_judiciais": tuple(
                AcaoJudicial(Decimal(str(r[0])), _data(r[1]), r[2], r[3], int(r[4])) for r in acoes
            ),
            "cheques": tuple(
                Cheque(Decimal(str(r[0])), _data(r[1]), r[2], r[3], int(r[4])) for r in cheques
            ),
        }

    def _societario(self, cliente_id: int) -> dict[str, tuple]:  # type: ignore[type-arg]
        socios = self._conn.execute(
            "SELECT nome, cpf, participacao FROM socio WHERE cliente_id = ? ORDER BY id",
            [cliente_id],
        ).fetchall()
        participacoes = self._conn.execute(
            "SELECT cnpj_participada, razao_social, participacao FROM participacao "
            "WHERE cliente_id = ? ORDER BY id",
            [cliente_id],
        ).fetchall()
        return {
            "socios": tuple(Socio(str(r[0]), r[1], _dec(r[2])) for r in socios),
            "participacoes": tuple(
                Participacao(str(r[0]), r[1], _dec(r[2])) for r in participacoes
            ),
        }

    def _hidratar(self, row: tuple) -> Cliente:  # type: ignore[type-arg]
        """Mapeia row do DuckDB para entidade de dominio, com restricoes e societario.
        Colunas: id(0), grupo_economico_id(1), cnpj(2), razao_social(3),
        tipo_cliente(4), simei(5), score_boa_vista(6), status_receita(7),
        sintegra(8), status_simples(9), cnae(10), data_fundacao(11),
        data_abertura_loja(12)"""
        cliente_id = int(row[0])
        return Cliente(
            id=cliente_id,
            grupo_economico_id=int(row[1]),
            cnpj=CNPJ(str(row[2])),
            razao_social=RazaoSocial(str(row[3])),
            tipo_cliente=TipoCliente(str(row[4])) if row[4] else TipoCliente.BASE_PRAZO,
            simei=bool(row[5]),
            score_boa_vista=int(row[6]) if row[6] is not None else None,
            status_receita=row[7],
            sintegra=row[8],
            status_simples=row[9],
            cnae=row[10],
            data_fundacao=_data(row[11]),
            data_abertura_loja=_data(row[12]),
            **self._restricoes(cliente_id),
            **self._societario(cliente_id),
        )
