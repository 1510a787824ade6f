# credito/domain/grupo/entities.py
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from decimal import Decimal

from credito.domain.cliente.entities import Cliente
from credito.domain.pedido.entities import PedidoDoGrupo

_MESES = ("Jan", "Fev", "Mar", "Abr", "Mai", "Jun", "Jul", "Ago", "Set", "Out", "Nov", "Dez")


@dataclass(frozen=True)
class GrupoEconomico:
    """Grupo de clientes que compartilham limite de credito.

    `versao` e o token de concorrencia otimista: toda escrita de limites
    informa a versao lida e falha se outro escritor gravou antes.
    """
    id: int
    codigo: str
    nome: str
    limite_aprovado: Decimal = Decimal("0")
    limite_disponivel: Decimal = Decimal("0")
    versao: int = 1

    def __post_init__(self) -> None:
        if self.limite_aprovado < Decimal("0") or self.limite_disponivel < Decimal("0"):
            raise ValueError("Limites do grupo nao podem ser negativos")
        if self.versao < 1:
            raise ValueError("Versao do grupo comeca em 1")

    @classmethod
    def individual(cls, id: int, cliente: Cliente) -> GrupoEconomico:
        """Grupo automatico para cliente sem grupo real (um unico membro)."""
        return cls(
            id=id,
            codigo=f"IND-{cliente.cnpj.valor}",
            nome=cliente.razao_social.valor,
        )


@dataclass(frozen=True)
class DadosBI:
    """Snapshot de BI de uma colecao (YYYYMM)."""
    colecao: int
    credito: Decimal
    score: int | None = None
    valor_vencido: Decimal | None = None
    atraso_medio: int | None = None

    def __post_init__(self) -> None:
        if self.credito < Decimal("0"):
            raise ValueError("Credito do snapshot BI nao pode ser negativo")

    @property
    def colecao_formatada(self) -> str:
        """202501 -> 'Jan/2025'. Mes invalido devolve o valor cru."""
        ano, mes = divmod(self.colecao, 100)
        if not 1 <= mes <= 12:
            return str(self.colecao)
        return f"{_MESES[mes - 1]}/{ano}"


@dataclass(frozen=True)
class CarteiraGrupo:
    """Visao somente-leitura do grupo com seus clientes e pedidos.

    Dois totais distintos, que nunca devem ser unificados:
      - total_pedidos(): todos os pedidos (alerta TOTAL > LIMITE)
      - total_pedidos_abertos(): so pedidos com analise em aberto
        (aprovacao do gestor e limite disponivel)
    """
    grupo: GrupoEconomico
    clientes: tuple[Cliente, ...] = ()
    pedidos: tuple[PedidoDoGrupo, ...] = ()

    @property
    def grupo_real(self) -> bool:
        return len(self.clientes) > 1

    def total_pedidos(self) -> Decimal:
        return sum((p.pedido.valor for p in self.pedidos), Decimal("0"))

    def total_pedidos_abertos(self, encerrados: Iterable[int] = ()) -> Decimal:
        """`encerrados`: ids de pedidos cuja analise esta sendo fechada pela operacao corrente."""
        excluir = set(encerrados)
        return sum(
            (
                p.pedido.valor
                for p in self.pedidos
                if p.em_aberto and p.pedido.id not in excluir
            ),
            Decimal("0"),
        )

    def simeis_com_pedido(self) -> tuple[Cliente, ...]:
        com_pedido = {p.pedido.cliente_id for p in self.pedidos}
        return tuple(c for c in self.clientes if c.simei and c.id in com_pedido)

    def tem_simei_com_pedido(self) -> bool:
        return bool(self.simeis_com_pedido())

    def com_limites(self, aprovado: Decimal, disponivel: Decimal) -> GrupoEconomico:
        return replace(self.grupo, limite_aprovado=aprovado, limite_disponivel=disponivel)
