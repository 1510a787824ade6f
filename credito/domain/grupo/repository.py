# credito/domain/grupo/repository.py
from __future__ import annotations

from typing import Protocol

from .entities import CarteiraGrupo, DadosBI, GrupoEconomico


class GrupoRepository(Protocol):
    def buscar_por_id(self, grupo_id: int) -> GrupoEconomico | None: ...
    def carregar_carteira(self, grupo_id: int) -> CarteiraGrupo | None: ...
    def listar_dados_bi(self, grupo_id: int) -> list[DadosBI]: ...

    def salvar(self, grupo: GrupoEconomico, versao_esperada: int) -> GrupoEconomico:
        """Compare-and-swap: grava se a versao persistida == versao_esperada.
        Devolve o grupo com a nova versao. Caso contrario, ConflitoConcorrencia."""
        ...
