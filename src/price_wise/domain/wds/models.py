from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from dateutil.relativedelta import relativedelta


@dataclass(frozen=True)
class PeriodQuery:
    """
    Período de referência de um mês (year, month).

    O fim do mês vem do calendário (fevereiro bissexto => dia 29),
    nunca de um dia 31 fixo.
    """
    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"month deve estar entre 1 e 12, recebido {self.month!r}")

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return self.first_day + relativedelta(months=1) - relativedelta(days=1)

    @property
    def start_ref(self) -> str:
        return self.first_day.isoformat()

    @property
    def end_ref(self) -> str:
        return self.last_day.isoformat()


@dataclass(frozen=True)
class ValuePoint:
    value: float
    # campos do payload WDS que não são usados adiante
    ref_per: Optional[str] = None
    decimals: Optional[int] = None
    scalar_factor_code: Optional[int] = None
    status_code: Optional[int] = None

    @property
    def formatted(self) -> str:
        return f"{self.value:.2f}"


@dataclass(frozen=True)
class ResultRow:
    vector_id: str
    year: int
    month: int
    value: ValuePoint
    product: str


@dataclass(frozen=True)
class FetchFailure:
    vector_id: str
    year: int
    month: int
    kind: str     # nome da classe em domain.wds.errors
    message: str


ResultSet = Dict[str, List[ResultRow]]


@dataclass
class FetchReport:
    results: ResultSet = field(default_factory=dict)
    errors: List[FetchFailure] = field(default_factory=list)
    launched: int = 0
    completed: int = 0

    @property
    def settled(self) -> bool:
        return self.completed == self.launched

    @property
    def error_message(self) -> Optional[str]:
        """Última mensagem de erro (para quem só mostra uma)."""
        if not self.errors:
            return None
        return self.errors[-1].message
