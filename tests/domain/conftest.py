# tests/domain/conftest.py
"""Repositorios em memoria para testar os shells sem DuckDB."""
from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime

import pytest

from credito.application.services.ficha_service import FichaService
from credito.application.services.restricao_service import RestricaoService
from credito.application.services.workflow_service import WorkflowService
from credito.domain.analise.entities import Analise
from credito.domain.cliente.entities import Cliente, Restricao
from credito.domain.cliente.value_objects import TipoRestricao
from credito.domain.configuracao.entities import Configuracao
from credito.domain.exceptions import ConflitoConcorrencia
from credito.domain.grupo.entities import CarteiraGrupo, DadosBI, GrupoEconomico
from credito.domain.pedido.entities import Pedido, PedidoDoGrupo

AGORA = datetime(2026, 3, 10, 9, 0, 0)


class FakeAnaliseRepo:
    def __init__(self) -> None:
        self.analises: dict[int, Analise] = {}
        self.salvamentos = 0

    def buscar_por_id(self, analise_id: int) -> Analise | None:
        return self.analises.get(analise_id)

    def salvar(self, analise: Analise) -> None:
        self.analises[analise.id] = analise
        self.salvamentos += 1

    def por_pedido(self, pedido_id: int) -> Analise | None:
        return next((a for a in self.analises.values() if a.pedido_id == pedido_id), None)


class FakePedidoRepo:
    def __init__(self) -> None:
        self.pedidos: dict[int, Pedido] = {}

    def buscar_por_id(self, pedido_id: int) -> Pedido | None:
        return self.pedidos.get(pedido_id)


class FakeClienteRepo:
    def __init__(self) -> None:
        self.clientes: dict[int, Cliente] = {}
        self.salvamentos = 0
        self._ultimo_id = 0

    def buscar_por_id(self, cliente_id: int) -> Cliente | None:
        return self.clientes.get(cliente_id)

    def salvar(self, cliente: Cliente) -> None:
        self.clientes[cliente.id] = cliente
        self.salvamentos += 1

    def adicionar_restricao(self, cliente_id: int, registro: Restricao) -> int:
        self._ultimo_id += 1
        cliente = self.clientes[cliente_id]
        self.clientes[cliente_id] = cliente.com_restricao(replace(registro, id=self._ultimo_id))
        return self._ultimo_id

    def remover_restricao(self, cliente_id: int, tipo: TipoRestricao, restricao_id: int) -> bool:
        cliente = self.clientes[cliente_id]
        restante = cliente.sem_restricao(tipo, restricao_id)
        if restante == cliente:
            return False
        self.clientes[cliente_id] = restante
        return True


class FakeConfiguracaoRepo:
    def __init__(self, config: Configuracao | None) -> None:
        self.config = config

    def carregar(self) -> Configuracao | None:
        return self.config

    def substituir(self, config: Configuracao) -> None:
        self.config = config


class FakeGrupoRepo:
    """CAS protegido por lock, como o UPDATE ... WHERE versao = ? do DuckDB."""

    def __init__(
        self,
        analises: FakeAnaliseRepo,
        pedidos: FakePedidoRepo,
        clientes: FakeClienteRepo,
    ) -> None:
        self._analises = analises
        self._pedidos = pedidos
        self._clientes = clientes
        self._lock = threading.Lock()
        self.grupos: dict[int, GrupoEconomico] = {}
        self.dados_bi: dict[int, list[DadosBI]] = {}
        self.conflitos = 0
        self.escritas = 0

    def buscar_por_id(self, grupo_id: int) -> GrupoEconomico | None:
        return self.grupos.get(grupo_id)

    def carregar_carteira(self, grupo_id: int) -> CarteiraGrupo | None:
        grupo = self.grupos.get(grupo_id)
        if grupo is None:
            return None
        clientes = tuple(
            c for c in self._clientes.clientes.values() if c.grupo_economico_id == grupo_id
        )
        ids = {c.id for c in clientes}
        pedidos = []
        for p in self._pedidos.pedidos.values():
            if p.cliente_id not in ids:
                continue
            analise = self._analises.por_pedido(p.id)
            pedidos.append(PedidoDoGrupo(
                pedido=p,
                tem_analise=analise is not None,
                data_fim_analise=analise.data_fim if analise else None,
            ))
        return CarteiraGrupo(grupo=grupo, clientes=clientes, pedidos=tuple(pedidos))

    def listar_dados_bi(self, grupo_id: int) -> list[DadosBI]:
        return sorted(self.dados_bi.get(grupo_id, []), key=lambda d: d.colecao, reverse=True)

    def salvar(self, grupo: GrupoEconomico, versao_esperada: int) -> GrupoEconomico:
        with self._lock:
            atual = self.grupos[grupo.id]
            if atual.versao != versao_esperada:
                self.conflitos += 1
                raise ConflitoConcorrencia(
                    f"versao esperada {versao_esperada}, encontrada {atual.versao}"
                )
            novo = replace(grupo, versao=atual.versao + 1)
            self.grupos[grupo.id] = novo
            self.escritas += 1
            return novo


class Repositorios:
    def __init__(self, config: Configuracao | None = None) -> None:
        self.analises = FakeAnaliseRepo()
        self.pedidos = FakePedidoRepo()
        self.clientes = FakeClienteRepo()
        self.configuracao = FakeConfiguracaoRepo(config or Configuracao())
        self.grupos = FakeGrupoRepo(self.analises, self.pedidos, self.clientes)

    def adicionar(self, *itens: object) -> None:
        for item in itens:
            if isinstance(item, GrupoEconomico):
                self.grupos.grupos[item.id] = item
            elif isinstance(item, Cliente):
                self.clientes.clientes[item.id] = item
            elif isinstance(item, Pedido):
                self.pedidos.pedidos[item.id] = item
            elif isinstance(item, Analise):
                self.analises.analises[item.id] = item

    def adicionar_bi(self, grupo_id: int, *dados: DadosBI) -> None:
        self.grupos.dados_bi.setdefault(grupo_id, []).extend(dados)

    def workflow(self, **kwargs: object) -> WorkflowService:
        kwargs.setdefault("relogio", lambda: AGORA)
        grupo_repo = kwargs.pop("grupo_repo", self.grupos)
        return WorkflowService(
            analise_repo=self.analises,
            pedido_repo=self.pedidos,
            cliente_repo=self.clientes,
            grupo_repo=grupo_repo,  # type: ignore[arg-type]
            configuracao_repo=self.configuracao,
            **kwargs,  # type: ignore[arg-type]
        )

    def ficha(self) -> FichaService:
        return FichaService(
            analise_repo=self.analises,
            pedido_repo=self.pedidos,
            cliente_repo=self.clientes,
            grupo_repo=self.grupos,
            configuracao_repo=self.configuracao,
            relogio=lambda: AGORA,
        )

    def restricoes(self) -> RestricaoService:
        return RestricaoService(
            analise_repo=self.analises,
            pedido_repo=self.pedidos,
            cliente_repo=self.clientes,
            grupo_repo=self.grupos,
            configuracao_repo=self.configuracao,
        )


@pytest.fixture()
def repos() -> Repositorios:
    return Repositorios()
