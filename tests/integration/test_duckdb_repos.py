# tests/integration/test_duckdb_repos.py
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal

import duckdb
import pytest

from credito.domain.analise.value_objects import Decisao, StatusWorkflow
from credito.domain.cliente.entities import AcaoJudicial, Cheque, Pefin
from credito.domain.cliente.value_objects import TipoCliente, TipoRestricao
from credito.domain.configuracao.entities import Configuracao
from credito.domain.exceptions import ConflitoConcorrencia
from credito.domain.pedido.value_objects import TipoWorkflow
from credito.infrastructure.repositories.duckdb_analise_repo import DuckDBAnaliseRepo
from credito.infrastructure.repositories.duckdb_cliente_repo import DuckDBClienteRepo
from credito.infrastructure.repositories.duckdb_configuracao_repo import DuckDBConfiguracaoRepo
from credito.infrastructure.repositories.duckdb_grupo_repo import DuckDBGrupoRepo
from credito.infrastructure.repositories.duckdb_pedido_repo import DuckDBPedidoRepo

# ---------- Cliente ----------


def test_cliente_hidratado_com_restricoes_e_societario(test_db: duckdb.DuckDBPyConnection) -> None:
    cliente = DuckDBClienteRepo(test_db).buscar_por_id(1)
    assert cliente is not None
    assert cliente.cnpj.valor == "11222333000181"
    assert cliente.razao_social.valor == "Moda Praia LTDA"
    assert cliente.score_boa_vista == 720
    assert cliente.total_restricoes == 2
    assert cliente.total_valor_pefin_protesto == Decimal("700")
    assert [s.nome for s in cliente.socios] == ["Ana Souza", "Bruno Lima"]
    assert cliente.participacoes[0].cnpj_participada == "33.000.167/0001-01"
    assert cliente.data_fundacao is not None and cliente.data_fundacao.year == 2019


def test_cliente_inexistente(test_db: duckdb.DuckDBPyConnection) -> None:
    assert DuckDBClienteRepo(test_db).buscar_por_id(999) is None


def test_salvar_cliente_preserva_restricoes(test_db: duckdb.DuckDBPyConnection) -> None:
    repo = DuckDBClienteRepo(test_db)
    cliente = repo.buscar_por_id(1)
    assert cliente is not None
    repo.salvar(replace(cliente, tipo_cliente=TipoCliente.ANTECIPADO, sintegra="SUSPENSO"))

    salvo = repo.buscar_por_id(1)
    assert salvo is not None
    assert salvo.tipo_cliente == TipoCliente.ANTECIPADO
    assert salvo.sintegra == "SUSPENSO"
    assert salvo.total_restricoes == 2


def test_adicionar_restricoes_gera_ids_por_tabela(test_db: duckdb.DuckDBPyConnection) -> None:
    repo = DuckDBClienteRepo(test_db)
    pefin_id = repo.adicionar_restricao(1, Pefin(Decimal("250.50"), date(2026, 2, 1), "Banco Y"))
    cheque_id = repo.adicionar_restricao(3, Cheque(Decimal("80"), None, "Banco Z", "0001"))
    acao_id = repo.adicionar_restricao(3, AcaoJudicial(Decimal("0"), None, "Execucao", "2a Vara"))

    assert (pefin_id, cheque_id, acao_id) == (2, 1, 1)
    cliente = repo.buscar_por_id(1)
    assert cliente is not None
    assert [p.id for p in cliente.pefins] == [1, 2]
    assert cliente.pefins[1] == Pefin(Decimal("250.50"), date(2026, 2, 1), "Banco Y", 2)
    novo = repo.buscar_por_id(3)
    assert novo is not None
    assert novo.cheques == (Cheque(Decimal("80"), None, "Banco Z", "0001", 1),)
    assert novo.acoes_judiciais[0].vara == "2a Vara"


def test_remover_restricao_somente_do_proprio_cliente(test_db: duckdb.DuckDBPyConnection) -> None:
    repo = DuckDBClienteRepo(test_db)
    assert repo.remover_restricao(3, TipoRestricao.PROTESTO, 1) is False
    assert repo.remover_restricao(1, TipoRestricao.PROTESTO, 1) is True
    assert repo.remover_restricao(1, TipoRestricao.PROTESTO, 1) is False

    cliente = repo.buscar_por_id(1)
    assert cliente is not None
    assert cliente.protestos == ()
    assert cliente.total_restricoes == 1


# ---------- Pedido ----------


def test_pedido_hidratado(test_db: duckdb.DuckDBPyConnection) -> None:
    pedido = DuckDBPedidoRepo(test_db).buscar_por_id(3)
    assert pedido is not None
    assert pedido.workflow == TipoWorkflow.CLIENTE_NOVO
    assert pedido.bloqueio == "80"
    assert pedido.valor == Decimal("15000")


def test_pedidos_do_grupo_trazem_estado_da_analise(test_db: duckdb.DuckDBPyConnection) -> None:
    test_db.execute("UPDATE analise SET data_fim = TIMESTAMP '2026-03-05 10:00:00' WHERE id = 2")
    pedidos = DuckDBPedidoRepo(test_db).listar_por_grupo(10)
    assert [p.pedido.id for p in pedidos] == [1, 2]
    assert all(p.tem_analise for p in pedidos)
    assert pedidos[0].em_aberto
    assert not pedidos[1].em_aberto


# ---------- Grupo ----------


def test_carteira_do_grupo(test_db: duckdb.DuckDBPyConnection) -> None:
    carteira = DuckDBGrupoRepo(test_db).carregar_carteira(10)
    assert carteira is not None
    assert carteira.grupo_real
    assert carteira.total_pedidos() == Decimal("60000")
    assert carteira.tem_simei_com_pedido()


def test_carteira_de_grupo_inexistente(test_db: duckdb.DuckDBPyConnection) -> None:
    assert DuckDBGrupoRepo(test_db).carregar_carteira(999) is None


def test_dados_bi_mais_recente_primeiro(test_db: duckdb.DuckDBPyConnection) -> None:
    dados = DuckDBGrupoRepo(test_db).listar_dados_bi(10)
    assert [d.colecao for d in dados] == [202501, 202407, 202301]
    assert dados[0].score == 820
    assert dados[0].atraso_medio == 3


def test_salvar_grupo_incrementa_versao(test_db: duckdb.DuckDBPyConnection) -> None:
    repo = DuckDBGrupoRepo(test_db)
    grupo = repo.buscar_por_id(10)
    assert grupo is not None
    salvo = repo.salvar(
        replace(grupo, limite_aprovado=Decimal("90000"), limite_disponivel=Decimal("30000")),
        versao_esperada=1,
    )
    assert salvo.versao == 2

    relido = repo.buscar_por_id(10)
    assert relido is not None
    assert relido.versao == 2
    assert relido.limite_disponivel == Decimal("30000")


def test_salvar_grupo_com_versao_antiga_e_rejeitado(test_db: duckdb.DuckDBPyConnection) -> None:
    repo = DuckDBGrupoRepo(test_db)
    grupo = repo.buscar_por_id(10)
    assert grupo is not None
    repo.salvar(replace(grupo, limite_aprovado=Decimal("90000")), versao_esperada=1)

    with pytest.raises(ConflitoConcorrencia):
        repo.salvar(replace(grupo, limite_aprovado=Decimal("10000")), versao_esperada=1)

    relido = repo.buscar_por_id(10)
    assert relido is not None
    assert relido.limite_aprovado == Decimal("90000")


# ---------- Analise ----------


def test_salvar_e_reler_analise(test_db: duckdb.DuckDBPyConnection) -> None:
    repo = DuckDBAnaliseRepo(test_db)
    analise = repo.buscar_por_id(1)
    assert analise is not None
    assert analise.status_workflow == StatusWorkflow.PENDENTE

    inicio = datetime(2026, 3, 10, 9, 30)
    repo.salvar(replace(
        analise,
        status_workflow=StatusWorkflow.PARECER_APROVADO,
        decisao=Decisao.APROVADO,
        limite_aprovado=Decimal("35000.00"),
        requer_aprovacao_gestor=True,
        data_inicio=inicio,
        justificativa="Historico bom",
    ))

    relida = repo.buscar_por_id(1)
    assert relida is not None
    assert relida.status_workflow == StatusWorkflow.PARECER_APROVADO
    assert relida.decisao == Decisao.APROVADO
    assert relida.limite_aprovado == Decimal("35000")
    assert relida.requer_aprovacao_gestor is True
    assert relida.data_inicio == inicio
    assert relida.data_fim is None


# ---------- Configuracao ----------


def test_configuracao_carregada(test_db: duckdb.DuckDBPyConnection) -> None:
    assert DuckDBConfiguracaoRepo(test_db).carregar() == Configuracao()


def test_substituir_configuracao(test_db: duckdb.DuckDBPyConnection) -> None:
    repo = DuckDBConfiguracaoRepo(test_db)
    nova = Configuracao(limite_simei=Decimal("50000"), cnaes_permitidos=("4781-4/00", "4782-2/01"))
    repo.substituir(nova)
    assert repo.carregar() == nova
    assert test_db.execute("SELECT COUNT(*) FROM configuracao").fetchone()[0] == 1  # type: ignore[index]


def test_instalar_padrao_nao_sobrescreve(test_db: duckdb.DuckDBPyConnection) -> None:
    repo = DuckDBConfiguracaoRepo(test_db)
    assert repo.instalar_padrao() is False
    test_db.execute("DELETE FROM configuracao")
    assert repo.carregar() is None
    assert repo.instalar_padrao() is True
    assert repo.carregar() == Configuracao()
