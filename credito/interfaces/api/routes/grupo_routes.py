# credito/interfaces/api/routes/grupo_routes.py
from fastapi import APIRouter, Depends

from credito.application.dtos.ficha_dto import LimiteSugeridoDTO
from credito.application.services.ficha_service import FichaService
from credito.interfaces.api.dependencies import get_ficha_service

router = APIRouter()


@router.get("/grupos/{grupo_id}/limite-sugerido", response_model=LimiteSugeridoDTO)
def get_limite_sugerido(
    grupo_id: int,
    service: FichaService = Depends(get_ficha_service),  # noqa: B008
) -> LimiteSugeridoDTO:
    limite = service.calcular_limite_sugerido(grupo_id)
    return LimiteSugeridoDTO(grupo_id=grupo_id, limite_sugerido=str(limite))
