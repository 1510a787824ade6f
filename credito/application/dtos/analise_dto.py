# credito/application/dtos/analise_dto.py
from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel

from credito.application.services.cliente_novo_service import ResultadoEtapa
from credito.domain.analise.entities import Analise
from credito.domain.analise.value_objects import Decisao, StatusWorkflow
from credito.domain.cliente.entities import DadosConsulta


class AnaliseDTO(BaseModel):
    id: int
    pedido_id: int
    cliente_id: int
    grupo_economico_id: int
    status_workflow: str
    decisao: str | None
    limite_sugerido: str | None
    limite_aprovado: str | None
    requer_aprovacao_gestor: bool
    data_inicio: str | None
    data_fim: str | None
    analista_responsavel: str | None
    justificativa: str | None
    motivo_desvio: str | None
    parecer_crm: str | None
    score_no_momento: int | None
    finalizada: bool
    aguardando_acao: bool

    @classmethod
    def from_domain(cls, analise: Analise) -> AnaliseDTO:
        return cls(
            id=analise.id,
            pedido_id=analise.pedido_id,
            cliente_id=analise.cliente_id,
            grupo_economico_id=analise.grupo_economico_id,
            status_workflow=analise.status_workflow.value,
            decisao=analise.decisao.value if analise.decisao else None,
            limite_sugerido=str(analise.limite_sugerido) if analise.limite_sugerido is not None else None,
            limite_aprovado=str(analise.limite_aprovado) if analise.limite_aprovado is not None else None,
            requer_aprovacao_gestor=analise.requer_aprovacao_gestor,
            data_inicio=analise.data_inicio.isoformat() if analise.data_inicio else None,
            data_fim=analise.data_fim.isoformat() if analise.data_fim else None,
            analista_responsavel=analise.analista_responsavel,
            justificativa=analise.justificativa,
            motivo_desvio=analise.motivo_desvio,
            parecer_crm=analise.parecer_crm,
            score_no_momento=analise.score_no_momento,
            finalizada=analise.finalizada,
            aguardando_acao=analise.aguardando_acao,
        )


class TransicaoRequest(BaseModel):
    novo_status: StatusWorkflow
    analista: str | None = None


class ConclusaoRequest(BaseModel):
    decisao: Decisao | None = None
    justificativa: str | None = None
    analista: str | None = None
    limite_aprovado: Decimal | None = None


class PipelineRequest(BaseModel):
    analista: str | None = None
    status_receita: str | None = None
    sintegra: str | None = None
    status_simples: str | None = None
    cnae: str | None = None
    data_abertura_loja: date | None = None

    def dados_consulta(self) -> DadosConsulta:
        return DadosConsulta(
            status_receita=self.status_receita,
            sintegra=self.sintegra,
            status_simples=self.status_simples,
            cnae=self.cnae,
            data_abertura_loja=self.data_abertura_loja,
        )


class ResultadoGateDTO(BaseModel):
    gate: str
    aprovado: bool
    status_destino: str | None
    motivo: str | None


class ResultadoPipelineDTO(BaseModel):
    analise: AnaliseDTO
    status_destino: str | None
    motivo_desvio: str | None
    gates: list[ResultadoGateDTO]

    @classmethod
    def from_domain(cls, analise: Analise, etapa: ResultadoEtapa) -> ResultadoPipelineDTO:
        return cls(
            analise=AnaliseDTO.from_domain(analise),
            status_destino=etapa.status_destino.value if etapa.status_destino else None,
            motivo_desvio=etapa.motivo,
            gates=[
                ResultadoGateDTO(
                    gate=r.gate.value,
                    aprovado=r.aprovado,
                    status_destino=r.status_destino.value if r.status_destino else None,
                    motivo=r.motivo,
                )
                for r in etapa.resultados
            ],
        )


class AprovacaoGestorDTO(BaseModel):
    analise_id: int
    requer_aprovacao_gestor: bool


class ParecerDTO(BaseModel):
    analise_id: int
    parecer_crm: str | None
