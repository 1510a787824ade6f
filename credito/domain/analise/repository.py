# credito/domain/analise/repository.py
from __future__ import annotations

from typing import Protocol

from .entities import Analise


class AnaliseRepository(Protocol):
    def buscar_por_id(self, analise_id: int) -> Analise | None: ...
    def salvar(self, analise: Analise) -> None: ...
