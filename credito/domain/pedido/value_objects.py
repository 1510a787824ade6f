# credito/domain/pedido/value_objects.py
from enum import StrEnum

# Codigos de bloqueio do ERP que indicam cliente sem historico de compra a prazo.
BLOQUEIOS_CLIENTE_NOVO = frozenset({"80", "36"})


class TipoWorkflow(StrEnum):
    BASE_PRAZO = "BASE_PRAZO"
    CLIENTE_NOVO = "CLIENTE_NOVO"

    @classmethod
    def por_bloqueio(cls, bloqueio: str | None) -> "TipoWorkflow":
        if bloqueio is not None and bloqueio.strip() in BLOQUEIOS_CLIENTE_NOVO:
            return cls.CLIENTE_NOVO
        return cls.BASE_PRAZO
