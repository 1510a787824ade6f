# credito/application/services/cliente_novo_service.py
"""Gates automaticos do workflow CLIENTE_NOVO. Funcoes puras, zero IO.

Cada gate e um predicado independente sobre o Cliente e a Configuracao.
A etapa corrente (status da analise) define quais gates rodam, o que
torna o pipeline retomavel a partir de qualquer fronteira de gate.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from types import MappingProxyType

from credito.domain.analise.value_objects import StatusWorkflow
from credito.domain.cliente.entities import Cliente
from credito.domain.configuracao.entities import Configuracao

_SITUACAO_RECEITA_ATIVA = "ATIVA"
_SINTEGRA_BLOQUEADO = frozenset({"INABILITADO", "SUSPENSO"})

MOTIVO_CONSULTA = "Consultas cadastrais pendentes"
MOTIVO_FUNDACAO = "Empresa com fundação inferior ao período mínimo"
MOTIVO_PROTESTO = "Protesto com valor acima do limite permitido"
MOTIVO_LOJA = "Loja física com abertura inferior ao período mínimo"
MOTIVO_RESTRICOES = "Restrições com valor total acima do limite permitido"


class Gate(StrEnum):
    CONSULTA = "CONSULTA"
    CADASTRAL = "CADASTRAL"
    FUNDACAO = "FUNDACAO"
    PROTESTO = "PROTESTO"
    LOJA = "LOJA"
    RESTRICOES = "RESTRICOES"


@dataclass(frozen=True)
class ResultadoGate:
    """Resultado de um gate. `status_destino` None = passou sem mudar de etapa."""
    gate: Gate
    aprovado: bool
    status_destino: StatusWorkflow | None = None
    motivo: str | None = None


@dataclass(frozen=True)
class ResultadoEtapa:
    """Resultado da cascata de gates de uma etapa."""
    status_destino: StatusWorkflow | None
    motivo: str | None
    resultados: tuple[ResultadoGate, ...]


_DESTINO_APROVADO: Mapping[Gate, StatusWorkflow | None] = MappingProxyType({
    Gate.CONSULTA: None,
    Gate.CADASTRAL: None,
    Gate.FUNDACAO: StatusWorkflow.CONSULTA_PROTESTOS,
    Gate.PROTESTO: StatusWorkflow.VERIFICACAO_LOJA_FISICA,
    Gate.LOJA: StatusWorkflow.CONSULTA_SCORE_RESTRICOES,
    Gate.RESTRICOES: StatusWorkflow.EM_ANALISE_CLIENTE_NOVO,
})

_DESTINO_REPROVADO: Mapping[Gate, StatusWorkflow] = MappingProxyType({
    Gate.CONSULTA: StatusWorkflow.FAZER_CONSULTAS,
    Gate.CADASTRAL: StatusWorkflow.SOLICITAR_CANCELAMENTO,
    Gate.FUNDACAO: StatusWorkflow.ENCAMINHADO_ANTECIPADO,
    Gate.PROTESTO: StatusWorkflow.ENCAMINHADO_ANTECIPADO,
    Gate.LOJA: StatusWorkflow.ENCAMINHADO_ANTECIPADO,
    Gate.RESTRICOES: StatusWorkflow.ENCAMINHADO_ANTECIPADO,
})

GATES_POR_ETAPA: Mapping[StatusWorkflow, tuple[Gate, ...]] = MappingProxyType({
    StatusWorkflow.PENDENTE: (Gate.CONSULTA, Gate.CADASTRAL, Gate.FUNDACAO),
    StatusWorkflow.FAZER_CONSULTAS: (Gate.CONSULTA, Gate.CADASTRAL, Gate.FUNDACAO),
    StatusWorkflow.CONSULTA_PROTESTOS: (Gate.PROTESTO,),
    StatusWorkflow.VERIFICACAO_LOJA_FISICA: (Gate.LOJA,),
    StatusWorkflow.CONSULTA_SCORE_RESTRICOES: (Gate.RESTRICOES,),
})


def meses_entre(inicio: date, fim: date) -> int:
    """Meses completos entre duas datas. Mes parcial nao conta."""
    meses = (fim.year - inicio.year) * 12 + (fim.month - inicio.month)
    if meses > 0 and fim.day < inicio.day:
        meses -= 1
    elif meses < 0 and fim.day > inicio.day:
        meses += 1
    return meses


def _recente(data: date | None, threshold: int, referencia: date) -> bool:
    """Data ausente nao e recente."""
    if data is None:
        return False
    return meses_entre(data, referencia) < threshold


def validar_cadastral(cliente: Cliente, config: Configuracao) -> str | None:
    """Motivo da primeira condicao que falha, ou None se o cadastro esta ok.

    Receita ou Sintegra ausentes nao reprovam: falta de consulta e papel do
    gate CONSULTA."""
    receita = (cliente.status_receita or "").strip()
    if receita and receita.upper() != _SITUACAO_RECEITA_ATIVA:
        return f"Receita Federal: situação {receita}"

    sintegra = (cliente.sintegra or "").strip()
    if sintegra.upper() in _SINTEGRA_BLOQUEADO:
        return f"Sintegra: {sintegra}"

    if not config.cnae_permitido(cliente.cnae):
        return f"CNAE não permitido: {cliente.cnae or ''}"

    return None


def tem_protesto_acima(cliente: Cliente, config: Configuracao) -> bool:
    return any(p.valor > config.protesto_threshold_antecipado for p in cliente.protestos)


def tem_restricao_acima(cliente: Cliente, config: Configuracao) -> bool:
    return cliente.total_valor_pefin_protesto > config.restricao_threshold_antecipado


def _motivo_falha(gate: Gate, cliente: Cliente, config: Configuracao, referencia: date) -> str | None:
    if gate == Gate.CONSULTA:
        return None if cliente.tem_dados_consulta else MOTIVO_CONSULTA
    if gate == Gate.CADASTRAL:
        return validar_cadastral(cliente, config)
    if gate == Gate.FUNDACAO:
        recente = _recente(cliente.data_fundacao, config.meses_fundacao_threshold, referencia)
        return MOTIVO_FUNDACAO if recente else None
    if gate == Gate.PROTESTO:
        return MOTIVO_PROTESTO if tem_protesto_acima(cliente, config) else None
    if gate == Gate.LOJA:
        recente = _recente(cliente.data_abertura_loja, config.meses_loja_threshold, referencia)
        return MOTIVO_LOJA if recente else None
    return MOTIVO_RESTRICOES if tem_restricao_acima(cliente, config) else None


def avaliar_gate(gate: Gate, cliente: Cliente, config: Configuracao, referencia: date) -> ResultadoGate:
    """Funcao pura. Mesma entrada = mesma saida. Zero IO."""
    motivo = _motivo_falha(gate, cliente, config, referencia)
    if motivo is None:
        return ResultadoGate(gate=gate, aprovado=True, status_destino=_DESTINO_APROVADO[gate])
    return ResultadoGate(
        gate=gate,
        aprovado=False,
        status_destino=_DESTINO_REPROVADO[gate],
        motivo=motivo,
    )


def gates_da_etapa(status: StatusWorkflow) -> tuple[Gate, ...]:
    return GATES_POR_ETAPA.get(status, ())


def avancar_etapa(
    status_atual: StatusWorkflow,
    cliente: Cliente,
    config: Configuracao,
    referencia: date,
    gates: tuple[Gate, ...] | None = None,
) -> ResultadoEtapa:
    """Roda em cascata os gates da etapa (ou o subconjunto `gates`). Primeira falha encerra.

    Se o destino coincide com o status atual (ex.: ainda sem consulta em
    FAZER_CONSULTAS), status_destino volta None: nenhuma transicao a aplicar.
    """
    resultados: list[ResultadoGate] = []
    destino: StatusWorkflow | None = None
    motivo: str | None = None
    for gate in gates if gates is not None else gates_da_etapa(status_atual):
        resultado = avaliar_gate(gate, cliente, config, referencia)
        resultados.append(resultado)
        if resultado.status_destino is not None:
            destino = resultado.status_destino
        if not resultado.aprovado:
            motivo = resultado.motivo
            break

    if destino == status_atual:
        destino = None
    return ResultadoEtapa(status_destino=destino, motivo=motivo, resultados=tuple(resultados))
