# credito/interfaces/api/routes/pedido_routes.py
from fastapi import APIRouter, Depends

from credito.application.dtos.ficha_dto import AlertasPedidoDTO
from credito.application.services.ficha_service import FichaService
from credito.interfaces.api.dependencies import get_ficha_service

router = APIRouter()


@router.get("/pedidos/{pedido_id}/alertas", response_model=AlertasPedidoDTO)
def get_alertas(
    pedido_id: int,
    service: FichaService = Depends(get_ficha_service),  # noqa: B008
) -> AlertasPedidoDTO:
    return AlertasPedidoDTO(pedido_id=pedido_id, alertas=service.calcular_alertas(pedido_id))
