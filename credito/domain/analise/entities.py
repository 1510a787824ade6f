# credito/domain/analise/entities.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from .value_objects import TERMINAIS, Decisao, StatusWorkflow


@dataclass(frozen=True)
class Analise:
    """Registro de revisao de um Pedido. Criado em PENDENTE junto com o pedido,
    fora do motor (carga do ERP).

    Imutavel: cada transicao gera um novo valor. Nunca e apagado pelo motor.
    """
    id: int
    pedido_id: int
    cliente_id: int
    grupo_economico_id: int
    status_workflow: StatusWorkflow = StatusWorkflow.PENDENTE
    decisao: Decisao | None = None
    limite_sugerido: Decimal | None = None
    limite_aprovado: Decimal | None = None
    requer_aprovacao_gestor: bool = False
    data_inicio: datetime | None = None
    data_fim: datetime | None = None
    analista_responsavel: str | None = None
    justificativa: str | None = None
    observacoes: str | None = None
    motivo_desvio: str | None = None
    parecer_crm: str | None = None
    score_no_momento: int | None = None

    @property
    def finalizada(self) -> bool:
        return self.status_workflow in TERMINAIS

    @property
    def aguardando_acao(self) -> bool:
        return self.status_workflow == StatusWorkflow.AGUARDANDO_APROVACAO_GESTOR

    def duracao_horas(self, referencia: datetime) -> int | None:
        """Horas inteiras desde o inicio; ate data_fim se encerrada."""
        if self.data_inicio is None:
            return None
        fim = self.data_fim or referencia
        return int((fim - self.data_inicio).total_seconds() // 3600)
