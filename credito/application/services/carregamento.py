# credito/application/services/carregamento.py
from __future__ import annotations

from credito.domain.analise.entities import Analise
from credito.domain.analise.repository import AnaliseRepository
from credito.domain.cliente.entities import Cliente
from credito.domain.cliente.repository import ClienteRepository
from credito.domain.configuracao.entities import Configuracao
from credito.domain.configuracao.repository import ConfiguracaoRepository
from credito.domain.exceptions import ConfiguracaoAusente, ReferenciaNaoEncontrada
from credito.domain.grupo.entities import CarteiraGrupo
from credito.domain.grupo.repository import GrupoRepository
from credito.domain.pedido.entities import Pedido
from credito.domain.pedido.repository import PedidoRepository


class CarregadorAgregados:
    """Base dos shells: carrega agregados e converte ausencia em erro fatal da operacao."""

    def __init__(
        self,
        analise_repo: AnaliseRepository,
        pedido_repo: PedidoRepository,
        cliente_repo: ClienteRepository,
        grupo_repo: GrupoRepository,
        configuracao_repo: ConfiguracaoRepository,
    ) -> None:
        self._analise_repo = analise_repo
        self._pedido_repo = pedido_repo
        self._cliente_repo = cliente_repo
        self._grupo_repo = grupo_repo
        self._configuracao_repo = configuracao_repo

    def _config(self) -> Configuracao:
        config = self._configuracao_repo.carregar()
        if config is None:
            raise ConfiguracaoAusente()
        return config

    def _analise(self, analise_id: int) -> Analise:
        analise = self._analise_repo.buscar_por_id(analise_id)
        if analise is None:
            raise ReferenciaNaoEncontrada("Analise", analise_id)
        return analise

    def _pedido(self, pedido_id: int) -> Pedido:
        pedido = self._pedido_repo.buscar_por_id(pedido_id)
        if pedido is None:
            raise ReferenciaNaoEncontrada("Pedido", pedido_id)
        return pedido

    def _cliente(self, cliente_id: int) -> Cliente:
        cliente = self._cliente_repo.buscar_por_id(cliente_id)
        if cliente is None:
            raise ReferenciaNaoEncontrada("Cliente", cliente_id)
        return cliente

    def _carteira(self, grupo_id: int) -> CarteiraGrupo:
        carteira = self._grupo_repo.carregar_carteira(grupo_id)
        if carteira is None:
            raise ReferenciaNaoEncontrada("GrupoEconomico", grupo_id)
        return carteira
