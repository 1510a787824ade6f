# credito/interfaces/api/routes/analise_routes.py
from fastapi import APIRouter, Depends, HTTPException

from credito.application.dtos.analise_dto import (
    AnaliseDTO,
    AprovacaoGestorDTO,
    ConclusaoRequest,
    ParecerDTO,
    TransicaoRequest,
)
from credito.application.dtos.ficha_dto import FichaAnaliseDTO
from credito.application.services.ficha_service import FichaService
from credito.application.services.workflow_service import WorkflowService
from credito.interfaces.api.dependencies import get_ficha_service, get_workflow_service

router = APIRouter()


@router.get("/analises/{analise_id}", response_model=FichaAnaliseDTO)
def get_ficha(
    analise_id: int,
    service: FichaService = Depends(get_ficha_service),  # noqa: B008
) -> FichaAnaliseDTO:
    ficha = service.obter_ficha(analise_id)
    if ficha is None:
        raise HTTPException(status_code=404, detail="Analise nao encontrada")
    return ficha


@router.post("/analises/{analise_id}/transicoes", response_model=AnaliseDTO)
def post_transicao(
    analise_id: int,
    body: TransicaoRequest,
    service: WorkflowService = Depends(get_workflow_service),  # noqa: B008
) -> AnaliseDTO:
    analise = service.transicionar(analise_id, body.novo_status, body.analista)
    return AnaliseDTO.from_domain(analise)


@router.post("/analises/{analise_id}/concluir", response_model=AnaliseDTO)
def post_concluir(
    analise_id: int,
    body: ConclusaoRequest,
    service: WorkflowService = Depends(get_workflow_service),  # noqa: B008
) -> AnaliseDTO:
    analise = service.concluir_analise(
        analise_id,
        decisao=body.decisao,
        justificativa=body.justificativa,
        analista=body.analista,
        limite_aprovado=body.limite_aprovado,
    )
    return AnaliseDTO.from_domain(analise)


@router.post("/analises/{analise_id}/limite-sugerido", response_model=AnaliseDTO)
def post_limite_sugerido(
    analise_id: int,
    service: WorkflowService = Depends(get_workflow_service),  # noqa: B008
) -> AnaliseDTO:
    return AnaliseDTO.from_domain(service.atualizar_limite_sugerido(analise_id))


@router.get("/analises/{analise_id}/aprovacao-gestor", response_model=AprovacaoGestorDTO)
def get_aprovacao_gestor(
    analise_id: int,
    service: WorkflowService = Depends(get_workflow_service),  # noqa: B008
) -> AprovacaoGestorDTO:
    return AprovacaoGestorDTO(
        analise_id=analise_id,
        requer_aprovacao_gestor=service.requer_aprovacao_gestor(analise_id),
    )


@router.get("/analises/{analise_id}/parecer", response_model=ParecerDTO)
def get_parecer(
    analise_id: int,
    service: FichaService = Depends(get_ficha_service),  # noqa: B008
) -> ParecerDTO:
    return ParecerDTO(analise_id=analise_id, parecer_crm=service.gerar_parecer(analise_id))
