# credito/domain/configuracao/repository.py
from __future__ import annotations

from typing import Protocol

from .entities import Configuracao


class ConfiguracaoRepository(Protocol):
    def carregar(self) -> Configuracao | None: ...
    def substituir(self, config: Configuracao) -> None: ...
