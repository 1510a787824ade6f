# credito/interfaces/api/routes/cliente_novo_routes.py
from fastapi import APIRouter, Depends, HTTPException

from credito.application.dtos.analise_dto import PipelineRequest, ResultadoPipelineDTO
from credito.application.services.cliente_novo_service import Gate
from credito.application.services.workflow_service import WorkflowService
from credito.interfaces.api.dependencies import get_workflow_service

router = APIRouter()


@router.post("/analises/{analise_id}/pipeline", response_model=ResultadoPipelineDTO)
def post_pipeline(
    analise_id: int,
    body: PipelineRequest,
    service: WorkflowService = Depends(get_workflow_service),  # noqa: B008
) -> ResultadoPipelineDTO:
    analise, etapa = service.avancar_pipeline(analise_id, body.analista, body.dados_consulta())
    return ResultadoPipelineDTO.from_domain(analise, etapa)


@router.post("/analises/{analise_id}/gates/{gate_raw}", response_model=ResultadoPipelineDTO)
def post_gate(
    analise_id: int,
    gate_raw: str,
    body: PipelineRequest,
    service: WorkflowService = Depends(get_workflow_service),  # noqa: B008
) -> ResultadoPipelineDTO:
    try:
        gate = Gate(gate_raw.upper())
    except ValueError as err:
        raise HTTPException(status_code=422, detail="Gate invalido") from err

    analise, etapa = service.executar_gate(analise_id, gate, body.analista, body.dados_consulta())
    return ResultadoPipelineDTO.from_domain(analise, etapa)
