# credito/domain/cliente/value_objects.py
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

_PESOS_DV = (6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)


def _digito_verificador(base: str) -> int:
    """Modulo 11 sobre os pesos finais da tabela (12 ou 13 digitos de base)."""
    pesos = _PESOS_DV[-len(base):]
    resto = sum(int(d) * p for d, p in zip(base, pesos)) % 11
    return 0 if resto < 2 else 11 - resto


@dataclass(frozen=True)
class CNPJ:
    """CNPJ do cliente, guardado como 14 digitos. Aceita entrada formatada ou nao.
    Igualdade e hash pelos digitos (dataclass)."""

    valor: str

    def __post_init__(self) -> None:
        digitos = "".join(c for c in self.valor if c.isdigit())
        if len(digitos) != 14 or len(set(digitos)) == 1:
            raise ValueError(f"CNPJ invalido: {self.valor!r}")
        dv1 = _digito_verificador(digitos[:12])
        dv2 = _digito_verificador(digitos[:12] + str(dv1))
        if digitos[12:] != f"{dv1}{dv2}":
            raise ValueError(f"CNPJ invalido: {self.valor!r} (digitos verificadores)")
        object.__setattr__(self, "valor", digitos)

    @property
    def formatado(self) -> str:
        d = self.valor
        return f"{d[:2]}.{d[2:5]}.{d[5:8]}/{d[8:12]}-{d[12:]}"

    def __str__(self) -> str:
        return self.formatado


@dataclass(frozen=True)
class RazaoSocial:
    valor: str

    def __post_init__(self) -> None:
        nome = self.valor.strip()
        if not nome:
            raise ValueError("Razao social vazia")
        object.__setattr__(self, "valor", nome)


class TipoCliente(StrEnum):
    BASE_PRAZO = "BASE_PRAZO"
    NOVO = "NOVO"
    ANTECIPADO = "ANTECIPADO"  # pagamento antecipado, fora do fluxo de credito


class TipoRestricao(StrEnum):
    PEFIN = "PEFIN"
    PROTESTO = "PROTESTO"
    ACAO_JUDICIAL = "ACAO_JUDICIAL"
    CHEQUE = "CHEQUE"
