# credito/domain/cliente/repository.py
from __future__ import annotations

from typing import Protocol

from .entities import Cliente, Restricao
from .value_objects import TipoRestricao


class ClienteRepository(Protocol):
    def buscar_por_id(self, cliente_id: int) -> Cliente | None: ...
    def salvar(self, cliente: Cliente) -> None: ...
    def adicionar_restricao(self, cliente_id: int, registro: Restricao) -> int: ...
    def remover_restricao(
        self, cliente_id: int, tipo: TipoRestricao, restricao_id: int
    ) -> bool: ...
