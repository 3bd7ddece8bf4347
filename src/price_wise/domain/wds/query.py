from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

PROVINCES: Tuple[str, ...] = (
    "Canada",
    "Nova Scotia",
    "Ontario",
    "Newfoundland and Labrador",
    "Prince Edward Island",
    "New Brunswick",
    "Quebec",
    "Manitoba",
    "Saskatchewan",
    "Alberta",
    "British Columbia",
)

MONTHS: Tuple[str, ...] = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

DEFAULT_YEARS: Tuple[int, ...] = tuple(range(2020, 2025))


def parse_vectors_text(text: str) -> List[str]:
    """Um vetor por linha; linhas vazias são descartadas."""
    return [line.strip() for line in text.splitlines() if line.strip()]


@dataclass(frozen=True)
class PriceQuery:
    """
    Seleção feita pelo usuário.

    - province: só é carregada adiante; a busca no WDS é por vetor
      (o vetor já identifica a geografia).
    - year: ano exibido em destaque; years é o intervalo da média.
    """
    vectors: Tuple[str, ...]
    province: str = "Canada"
    month: int = 1
    year: int = 2024
    years: Tuple[int, ...] = field(default=DEFAULT_YEARS)

    def __post_init__(self):
        if self.province not in PROVINCES:
            raise ValueError(f"province inválida: {self.province!r}")
        if not 1 <= self.month <= 12:
            raise ValueError(f"month deve estar entre 1 e 12, recebido {self.month!r}")

    @classmethod
    def from_text(cls, vectors_text: str, **kwargs) -> "PriceQuery":
        return cls(vectors=tuple(parse_vectors_text(vectors_text)), **kwargs)

    @property
    def month_label(self) -> str:
        return MONTHS[self.month - 1]
