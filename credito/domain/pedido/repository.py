# credito/domain/pedido/repository.py
from __future__ import annotations

from typing import Protocol

from .entities import Pedido


class PedidoRepository(Protocol):
    def buscar_por_id(self, pedido_id: int) -> Pedido | None: ...
