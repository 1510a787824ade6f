# credito/application/services/ficha_service.py
from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from decimal import Decimal

from credito.domain.analise.repository import AnaliseRepository
from credito.domain.analise.transicoes import status_permitidos
from credito.domain.cliente.repository import ClienteRepository
from credito.domain.configuracao.repository import ConfiguracaoRepository
from credito.domain.grupo.repository import GrupoRepository
from credito.domain.pedido.repository import PedidoRepository

from ..dtos.ficha_dto import FichaAnaliseDTO
from .alerta_service import calcular_alertas
from .carregamento import CarregadorAgregados
from .parecer_service import gerar_parecer_crm
from .scoring_service import calcular_limite_sugerido
from .workflow_service import requer_aprovacao_gestor


class FichaService(CarregadorAgregados):
    """Imperative Shell somente-leitura: monta a ficha da analise a partir do Pure Core.
    Nada e persistido aqui."""

    def __init__(
        self,
        analise_repo: AnaliseRepository,
        pedido_repo: PedidoRepository,
        cliente_repo: ClienteRepository,
        grupo_repo: GrupoRepository,
        configuracao_repo: ConfiguracaoRepository,
        relogio: Callable[[], datetime] = datetime.now,
    ) -> None:
        super().__init__(analise_repo, pedido_repo, cliente_repo, grupo_repo, configuracao_repo)
        self._relogio = relogio

    def obter_ficha(self, analise_id: int) -> FichaAnaliseDTO | None:
        analise = self._analise_repo.buscar_por_id(analise_id)
        if analise is None:
            return None

        # IO: imperative shell
        config = self._config()
        pedido = self._pedido(analise.pedido_id)
        cliente = self._cliente(analise.cliente_id)
        carteira = self._carteira(analise.grupo_economico_id)
        dados_bi = self._grupo_repo.listar_dados_bi(analise.grupo_economico_id)

        # Pure core: funcoes puras, sem IO
        alertas = calcular_alertas(pedido, cliente, carteira, config)
        limite = analise.limite_sugerido
        if limite is None:
            limite = calcular_limite_sugerido(dados_bi, carteira, config)
        parecer = analise.parecer_crm or gerar_parecer_crm(
            replace(analise, limite_sugerido=limite), pedido, cliente, self._relogio().date()
        )

        return FichaAnaliseDTO.from_domain(
            analise,
            pedido,
            cliente,
            carteira,
            dados_bi,
            alertas,
            limite,
            requer_aprovacao_gestor(pedido, cliente, carteira, config),
            parecer,
            status_permitidos(analise.status_workflow, pedido.workflow),
            self._relogio(),
        )

    def calcular_limite_sugerido(self, grupo_id: int) -> Decimal:
        config = self._config()
        carteira = self._carteira(grupo_id)
        return calcular_limite_sugerido(self._grupo_repo.listar_dados_bi(grupo_id), carteira, config)

    def calcular_alertas(self, pedido_id: int) -> list[str]:
        config = self._config()
        pedido = self._pedido(pedido_id)
        cliente = self._cliente(pedido.cliente_id)
        carteira = self._carteira(cliente.grupo_economico_id)
        return calcular_alertas(pedido, cliente, carteira, config)

    def gerar_parecer(self, analise_id: int) -> str | None:
        """Parecer gravado na conclusao, ou a previa calculada agora."""
        analise = self._analise(analise_id)
        if analise.parecer_crm is not None:
            return analise.parecer_crm
        pedido = self._pedido(analise.pedido_id)
        cliente = self._cliente(analise.cliente_id)
        return gerar_parecer_crm(analise, pedido, cliente, self._relogio().date())
