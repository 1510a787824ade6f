# credito/domain/analise/transicoes.py
"""Tabela de transicoes por tipo de workflow.

Construida uma unica vez no import e exposta somente-leitura
(MappingProxyType + frozenset). Nenhum codigo altera a tabela em runtime.
"""
from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from credito.domain.pedido.value_objects import TipoWorkflow

from .value_objects import StatusWorkflow as S

_CAUDA_PARECER: dict[S, frozenset[S]] = {
    S.PARECER_APROVADO: frozenset({
        S.AGUARDANDO_APROVACAO_GESTOR, S.REANALISE_COMERCIAL_SOLICITADA, S.FINALIZADO,
    }),
    S.PARECER_REPROVADO: frozenset({
        S.AGUARDANDO_APROVACAO_GESTOR, S.REANALISE_COMERCIAL_SOLICITADA, S.FINALIZADO,
    }),
    S.AGUARDANDO_APROVACAO_GESTOR: frozenset({
        S.REANALISE_COMERCIAL_SOLICITADA, S.FINALIZADO,
    }),
    S.REANALISE_COMERCIAL_SOLICITADA: frozenset({
        S.REANALISADO_APROVADO, S.REANALISADO_REPROVADO,
    }),
    S.REANALISADO_APROVADO: frozenset({S.AGUARDANDO_APROVACAO_GESTOR, S.FINALIZADO}),
    S.REANALISADO_REPROVADO: frozenset({S.AGUARDANDO_APROVACAO_GESTOR, S.FINALIZADO}),
    S.FINALIZADO: frozenset(),
    S.SOLICITAR_CANCELAMENTO: frozenset(),
    S.ENCAMINHADO_ANTECIPADO: frozenset(),
}

_BASE_PRAZO: dict[S, frozenset[S]] = {
    S.PENDENTE: frozenset({S.EM_ANALISE_FINANCEIRO}),
    S.EM_ANALISE_FINANCEIRO: frozenset({S.PARECER_APROVADO, S.PARECER_REPROVADO}),
    **_CAUDA_PARECER,
}

_CLIENTE_NOVO: dict[S, frozenset[S]] = {
    S.PENDENTE: frozenset({
        S.FAZER_CONSULTAS, S.CONSULTA_PROTESTOS, S.SOLICITAR_CANCELAMENTO, S.ENCAMINHADO_ANTECIPADO,
    }),
    S.FAZER_CONSULTAS: frozenset({
        S.CONSULTA_PROTESTOS, S.SOLICITAR_CANCELAMENTO, S.ENCAMINHADO_ANTECIPADO,
    }),
    S.CONSULTA_PROTESTOS: frozenset({S.VERIFICACAO_LOJA_FISICA, S.ENCAMINHADO_ANTECIPADO}),
    S.VERIFICACAO_LOJA_FISICA: frozenset({S.CONSULTA_SCORE_RESTRICOES, S.ENCAMINHADO_ANTECIPADO}),
    S.CONSULTA_SCORE_RESTRICOES: frozenset({S.EM_ANALISE_CLIENTE_NOVO, S.ENCAMINHADO_ANTECIPADO}),
    S.EM_ANALISE_CLIENTE_NOVO: frozenset({S.PARECER_APROVADO, S.PARECER_REPROVADO}),
    **_CAUDA_PARECER,
}

TRANSICOES: Mapping[TipoWorkflow, Mapping[S, frozenset[S]]] = MappingProxyType({
    TipoWorkflow.BASE_PRAZO: MappingProxyType(_BASE_PRAZO),
    TipoWorkflow.CLIENTE_NOVO: MappingProxyType(_CLIENTE_NOVO),
})


def status_permitidos(atual: S | None, workflow: TipoWorkflow | None) -> frozenset[S]:
    """Destinos validos a partir de `atual`. Vazio para estado desconhecido ou terminal."""
    if atual is None or workflow is None:
        return frozenset()
    return TRANSICOES[workflow].get(atual, frozenset())


def transicao_valida(atual: S | None, destino: S | None, workflow: TipoWorkflow | None) -> bool:
    if destino is None or atual == destino:
        return False
    return destino in status_permitidos(atual, workflow)
