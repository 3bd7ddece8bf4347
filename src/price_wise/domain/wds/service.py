from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Literal, Optional, Sequence

import pandas as pd

from price_wise.domain.wds.errors import TransportError, VectorFetchError
from price_wise.domain.wds.models import (
    FetchFailure,
    FetchReport,
    ResultRow,
    ResultSet,
)
from price_wise.extractors.wds_vector_raw import VectorPriceFetcher

logger = logging.getLogger(__name__)

RetentionMode = Literal["history", "latest"]

ROW_COLUMNS = ["vector_id", "year", "month", "value", "product"]
AVERAGE_COLUMNS = ["vector_id", "product", "n_years", "average"]


@dataclass(frozen=True)
class AggregatorConfig:
    """
    - retention:
        "history" => guarda uma linha por ano buscado (ordenado por ano)
        "latest"  => guarda só a linha do ano mais recente de cada vetor
    - max_workers: None => uma thread por par (vector, year), sem lotes
    """
    retention: RetentionMode = "history"
    max_workers: Optional[int] = None


class VectorPriceAggregator:
    """
    Dispara VectorPriceFetcher.fetch_one para vectors x years e junta tudo.

    A thread chamadora é a única que escreve no ResultSet: os workers
    só devolvem ResultRow ou levantam; o consumo é via as_completed.
    """

    def __init__(self, fetcher: VectorPriceFetcher, cfg: Optional[AggregatorConfig] = None):
        self.fetcher = fetcher
        self.cfg = cfg or AggregatorConfig()
        if self.cfg.retention not in ("history", "latest"):
            raise ValueError(f"retention inválido: {self.cfg.retention!r}. Use 'history' ou 'latest'.")

    def _settle(self, results: ResultSet) -> ResultSet:
        out: ResultSet = {}
        for vector, rows in results.items():
            ordered = sorted(rows, key=lambda r: r.year)
            out[vector] = ordered[-1:] if self.cfg.retention == "latest" else ordered
        return out

    def fetch_all(self, vectors: Sequence[str], years: Iterable[int], month: int) -> FetchReport:
        years = list(years)

        # valida mês e anos antes de disparar qualquer request
        if not 1 <= month <= 12:
            raise ValueError(f"month deve estar entre 1 e 12, recebido {month!r}")
        bad_years = [y for y in years if not date.min.year <= y < date.max.year]
        if bad_years:
            raise ValueError(f"anos fora do intervalo suportado: {bad_years!r}")

        # dedup preservando ordem (garante no máx. len(years) linhas por vetor)
        uniq_vectors = list(dict.fromkeys(vectors))
        uniq_years = list(dict.fromkeys(years))
        pairs = [(v, y) for v in uniq_vectors for y in uniq_years]

        report = FetchReport(launched=len(pairs))
        if not pairs:
            return report

        workers = len(pairs) if self.cfg.max_workers is None else max(1, min(self.cfg.max_workers, len(pairs)))
        logger.info(
            "Launching %d fetches (vectors=%d years=%d month=%02d workers=%d)",
            len(pairs), len(uniq_vectors), len(uniq_years), month, workers,
        )

        results: ResultSet = {}
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = {
                pool.submit(self.fetcher.fetch_one, vector, year, month): (vector, year)
                for vector, year in pairs
            }
            for fut in as_completed(futures):
                vector, year = futures[fut]
                report.completed += 1
                try:
                    row = fut.result()
                except VectorFetchError as exc:
                    report.errors.append(
                        FetchFailure(vector_id=vector, year=year, month=month, kind=exc.kind, message=str(exc))
                    )
                    continue
                except Exception as exc:
                    logger.exception("Unexpected failure: vector=%s year=%s", vector, year)
                    report.errors.append(
                        FetchFailure(
                            vector_id=vector,
                            year=year,
                            month=month,
                            kind=TransportError.kind,
                            message=f"vector {vector} ({year}-{month:02d}): {exc}",
                        )
                    )
                    continue

                results.setdefault(vector, []).append(row)

        report.results = self._settle(results)
        logger.info(
            "Fetch settled: %d/%d completed, %d vectors with data, %d errors",
            report.completed, report.launched, len(report.results), len(report.errors),
        )
        return report


def average_for_month(rows: Iterable[ResultRow], month: int) -> Optional[float]:
    """Média simples dos valores (2 casas, como exibidos) do mês; None se não houver linhas."""
    values = [float(r.value.formatted) for r in rows if r.month == month]
    if not values:
        return None
    return sum(values) / len(values)


def format_average(avg: Optional[float]) -> str:
    if avg is None:
        return "N/A"
    return f"${avg:.2f}"


def row_for(rows: Iterable[ResultRow], year: int, month: int) -> Optional[ResultRow]:
    for r in rows:
        if r.year == year and r.month == month:
            return r
    return None


def results_to_frame(results: ResultSet) -> pd.DataFrame:
    records: List[dict] = [
        {
            "vector_id": r.vector_id,
            "year": r.year,
            "month": r.month,
            "value": r.value.value,
            "product": r.product,
        }
        for rows in results.values()
        for r in rows
    ]
    if not records:
        return pd.DataFrame(columns=ROW_COLUMNS)

    df = pd.DataFrame(records, columns=ROW_COLUMNS)
    df["year"] = df["year"].astype("int64")
    df["month"] = df["month"].astype("int64")
    df["value"] = pd.to_numeric(df["value"], errors="coerce")
    return df.sort_values(["vector_id", "year"]).reset_index(drop=True)


def monthly_averages_frame(rows_df: pd.DataFrame, month: int) -> pd.DataFrame:
    """
    Uma linha por vetor: produto (do ano mais recente), nº de anos e média do mês.
    """
    df = rows_df[rows_df["month"] == month]
    if df.empty:
        return pd.DataFrame(columns=AVERAGE_COLUMNS)

    df = df.sort_values(["vector_id", "year"]).assign(value=lambda d: d["value"].round(2))
    out = (
        df.groupby("vector_id", sort=True)
          .agg(product=("product", "last"), n_years=("year", "nunique"), average=("value", "mean"))
          .reset_index()
    )
    out["average"] = out["average"].round(2)
    return out[AVERAGE_COLUMNS]
