# credito/domain/pedido/entities.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from .value_objects import TipoWorkflow


@dataclass(frozen=True)
class Pedido:
    """Pedido de credito. O workflow e derivado do bloqueio uma unica vez, na criacao."""
    id: int
    numero: str
    cliente_id: int
    valor: Decimal
    workflow: TipoWorkflow
    bloqueio: str | None = None
    data: date | None = None
    marca: str | None = None
    colecao: int | None = None

    def __post_init__(self) -> None:
        if self.valor < Decimal("0"):
            raise ValueError("Valor do pedido nao pode ser negativo")

    @classmethod
    def novo(
        cls,
        id: int,
        numero: str,
        cliente_id: int,
        valor: Decimal,
        bloqueio: str | None = None,
        data: date | None = None,
        marca: str | None = None,
        colecao: int | None = None,
    ) -> Pedido:
        return cls(
            id=id,
            numero=numero,
            cliente_id=cliente_id,
            valor=valor,
            workflow=TipoWorkflow.por_bloqueio(bloqueio),
            bloqueio=bloqueio,
            data=data,
            marca=marca,
            colecao=colecao,
        )


@dataclass(frozen=True)
class PedidoDoGrupo:
    """Pedido visto a partir do grupo economico, com o estado da sua analise."""
    pedido: Pedido
    tem_analise: bool = False
    data_fim_analise: datetime | None = None

    @property
    def em_aberto(self) -> bool:
        """Aberto = possui analise ainda sem data de fim. Pedido sem analise nao conta."""
        return self.tem_analise and self.data_fim_analise is None
