# credito/application/services/restricao_service.py
"""Restricoes lancadas pelo analista na ficha (PEFIN, protesto, acao judicial,
cheque). Os gates PROTESTO e RESTRICOES leem o que for gravado aqui."""
from __future__ import annotations

from credito.domain.cliente.entities import Cliente, Restricao, tipo_da_restricao
from credito.domain.cliente.value_objects import TipoRestricao
from credito.domain.exceptions import ReferenciaNaoEncontrada
from credito.infrastructure.log import log

from .carregamento import CarregadorAgregados


class RestricaoService(CarregadorAgregados):
    """Imperative Shell: resolve o cliente pela analise e grava no repositorio."""

    def adicionar(self, analise_id: int, registro: Restricao) -> Cliente:
        analise = self._analise(analise_id)
        cliente = self._cliente(analise.cliente_id)
        restricao_id = self._cliente_repo.adicionar_restricao(cliente.id, registro)
        log(
            f"Analise {analise.id}: {tipo_da_restricao(registro)} {restricao_id} "
            f"adicionado ao cliente {cliente.id} (valor {registro.valor})"
        )
        return self._cliente(cliente.id)

    def remover(self, analise_id: int, tipo: TipoRestricao, restricao_id: int) -> Cliente:
        analise = self._analise(analise_id)
        if not self._cliente_repo.remover_restricao(analise.cliente_id, tipo, restricao_id):
            raise ReferenciaNaoEncontrada(tipo.value, restricao_id)
        log(f"Analise {analise.id}: {tipo} {restricao_id} removido do cliente {analise.cliente_id}")
        return self._cliente(analise.cliente_id)
