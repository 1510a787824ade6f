# credito/interfaces/api/dependencies.py
from credito.application.services.ficha_service import FichaService
from credito.application.services.restricao_service import RestricaoService
from credito.application.services.workflow_service import WorkflowService
from credito.infrastructure.config import get_settings
from credito.infrastructure.duckdb_connection import get_connection
from credito.infrastructure.repositories.duckdb_analise_repo import DuckDBAnaliseRepo
from credito.infrastructure.repositories.duckdb_cliente_repo import DuckDBClienteRepo
from credito.infrastructure.repositories.duckdb_configuracao_repo import DuckDBConfiguracaoRepo
from credito.infrastructure.repositories.duckdb_grupo_repo import DuckDBGrupoRepo
from credito.infrastructure.repositories.duckdb_pedido_repo import DuckDBPedidoRepo


def get_workflow_service() -> WorkflowService:
    conn = get_connection().cursor()
    return WorkflowService(
        analise_repo=DuckDBAnaliseRepo(conn),
        pedido_repo=DuckDBPedidoRepo(conn),
        cliente_repo=DuckDBClienteRepo(conn),
        grupo_repo=DuckDBGrupoRepo(conn),
        configuracao_repo=DuckDBConfiguracaoRepo(conn),
        max_tentativas=get_settings().cas_tentativas,
    )


def get_ficha_service() -> FichaService:
    conn = get_connection().cursor()
    return FichaService(
        analise_repo=DuckDBAnaliseRepo(conn),
        pedido_repo=DuckDBPedidoRepo(conn),
        cliente_repo=DuckDBClienteRepo(conn),
        grupo_repo=DuckDBGrupoRepo(conn),
        configuracao_repo=DuckDBConfiguracaoRepo(conn),
    )


def get_restricao_service() -> RestricaoService:
    conn = get_connection().cursor()
    return RestricaoService(
        analise_repo=DuckDBAnaliseRepo(conn),
        pedido_repo=DuckDBPedidoRepo(conn),
        cliente_repo=DuckDBClienteRepo(conn),
        grupo_repo=DuckDBGrupoRepo(conn),
        configuracao_repo=DuckDBConfiguracaoRepo(conn),
    )


def get_configuracao_repo() -> DuckDBConfiguracaoRepo:
    return DuckDBConfiguracaoRepo(get_connection().cursor())
