# credito/interfaces/api/routes/configuracao_routes.py
from fastapi import APIRouter, Depends, HTTPException

from credito.application.dtos.configuracao_dto import ConfiguracaoDTO
from credito.domain.exceptions import ConfiguracaoAusente
from credito.infrastructure.log import log
from credito.infrastructure.repositories.duckdb_configuracao_repo import DuckDBConfiguracaoRepo
from credito.interfaces.api.dependencies import get_configuracao_repo

router = APIRouter()


@router.get("/configuracao", response_model=ConfiguracaoDTO)
def get_configuracao(
    repo: DuckDBConfiguracaoRepo = Depends(get_configuracao_repo),  # noqa: B008
) -> ConfiguracaoDTO:
    config = repo.carregar()
    if config is None:
        raise ConfiguracaoAusente()
    return ConfiguracaoDTO.from_domain(config)


@router.put("/configuracao", response_model=ConfiguracaoDTO)
def put_configuracao(
    body: ConfiguracaoDTO,
    repo: DuckDBConfiguracaoRepo = Depends(get_configuracao_repo),  # noqa: B008
) -> ConfiguracaoDTO:
    try:
        config = body.to_domain()
    except ValueError as err:
        raise HTTPException(status_code=422, detail=str(err)) from err
    repo.substituir(config)
    log("Configuracao substituida")
    return ConfiguracaoDTO.from_domain(config)
