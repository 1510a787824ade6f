# credito/interfaces/api/routes/restricao_routes.py
from fastapi import APIRouter, Depends, HTTPException

from credito.application.dtos.ficha_dto import ClienteResumoDTO
from credito.application.dtos.restricao_dto import RestricaoRequest
from credito.application.services.restricao_service import RestricaoService
from credito.domain.cliente.value_objects import TipoRestricao
from credito.interfaces.api.dependencies import get_restricao_service

router = APIRouter()


def _tipo(tipo_raw: str) -> TipoRestricao:
    try:
        return TipoRestricao(tipo_raw.upper().replace("-", "_"))
    except ValueError as err:
        raise HTTPException(status_code=422, detail="Tipo de restricao invalido") from err


@router.post(
    "/analises/{analise_id}/restricoes/{tipo_raw}",
    response_model=ClienteResumoDTO,
    status_code=201,
)
def post_restricao(
    analise_id: int,
    tipo_raw: str,
    body: RestricaoRequest,
    service: RestricaoService = Depends(get_restricao_service),  # noqa: B008
) -> ClienteResumoDTO:
    registro = body.registro(_tipo(tipo_raw))
    return ClienteResumoDTO.from_domain(service.adicionar(analise_id, registro))


@router.delete(
    "/analises/{analise_id}/restricoes/{tipo_raw}/{restricao_id}",
    response_model=ClienteResumoDTO,
)
def delete_restricao(
    analise_id: int,
    tipo_raw: str,
    restricao_id: int,
    service: RestricaoService = Depends(get_restricao_service),  # noqa: B008
) -> ClienteResumoDTO:
    return ClienteResumoDTO.from_domain(service.remover(analise_id, _tipo(tipo_raw), restricao_id))
