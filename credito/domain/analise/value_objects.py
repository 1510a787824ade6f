# credito/domain/analise/value_objects.py
from enum import StrEnum


class StatusWorkflow(StrEnum):
    PENDENTE = "PENDENTE"
    # BASE_PRAZO
    EM_ANALISE_FINANCEIRO = "EM_ANALISE_FINANCEIRO"
    # CLIENTE_NOVO (gates)
    FAZER_CONSULTAS = "FAZER_CONSULTAS"
    CONSULTA_PROTESTOS = "CONSULTA_PROTESTOS"
    VERIFICACAO_LOJA_FISICA = "VERIFICACAO_LOJA_FISICA"
    CONSULTA_SCORE_RESTRICOES = "CONSULTA_SCORE_RESTRICOES"
    EM_ANALISE_CLIENTE_NOVO = "EM_ANALISE_CLIENTE_NOVO"
    SOLICITAR_CANCELAMENTO = "SOLICITAR_CANCELAMENTO"
    ENCAMINHADO_ANTECIPADO = "ENCAMINHADO_ANTECIPADO"
    # Cauda comum
    PARECER_APROVADO = "PARECER_APROVADO"
    PARECER_REPROVADO = "PARECER_REPROVADO"
    AGUARDANDO_APROVACAO_GESTOR = "AGUARDANDO_APROVACAO_GESTOR"
    REANALISE_COMERCIAL_SOLICITADA = "REANALISE_COMERCIAL_SOLICITADA"
    REANALISADO_APROVADO = "REANALISADO_APROVADO"
    REANALISADO_REPROVADO = "REANALISADO_REPROVADO"
    FINALIZADO = "FINALIZADO"


class Decisao(StrEnum):
    APROVADO = "APROVADO"
    LIMITADO = "LIMITADO"
    REPROVADO = "REPROVADO"


TERMINAIS = frozenset({
    StatusWorkflow.FINALIZADO,
    StatusWorkflow.SOLICITAR_CANCELAMENTO,
    StatusWorkflow.ENCAMINHADO_ANTECIPADO,
})

INICIO_ANALISE = frozenset({
    StatusWorkflow.EM_ANALISE_FINANCEIRO,
    StatusWorkflow.EM_ANALISE_CLIENTE_NOVO,
})

# Estados de parecer: ao entrar, a necessidade de aprovacao do gestor e reavaliada.
PARECERES = frozenset({
    StatusWorkflow.PARECER_APROVADO,
    StatusWorkflow.PARECER_REPROVADO,
    StatusWorkflow.REANALISADO_APROVADO,
    StatusWorkflow.REANALISADO_REPROVADO,
})
