from __future__ import annotations

import logging
from dataclasses import asdict, fields
from typing import Any, Mapping, Tuple

import pandas as pd

from price_wise.utils.io.http import HTTPConfig, RequestsTransport
from price_wise.extractors.wds_specs import WdsConfig
from price_wise.extractors.wds_vector_raw import VectorPriceFetcher
from price_wise.domain.wds.models import FetchFailure
from price_wise.domain.wds.query import DEFAULT_YEARS, PriceQuery
from price_wise.domain.wds.service import (
    AggregatorConfig,
    VectorPriceAggregator,
    monthly_averages_frame,
    results_to_frame,
)
from price_wise.domain.wds.validate import validate_price_rows

log = logging.getLogger(__name__)

FAILURE_COLUMNS = [f.name for f in fields(FetchFailure)]


def _make_query(params: Mapping[str, Any]) -> PriceQuery:
    # YAML pode trazer vetores como int; o WDS trata como string
    vectors = tuple(str(v).strip() for v in (params.get("vectors") or []) if str(v).strip())
    return PriceQuery(
        vectors=vectors,
        province=params.get("province", "Canada"),
        month=int(params.get("month", 1)),
        year=int(params.get("year", 2024)),
        years=tuple(int(y) for y in (params.get("years") or DEFAULT_YEARS)),
    )


def _make_aggregator(params: Mapping[str, Any]) -> VectorPriceAggregator:
    http_params = params.get("http", {}) or {}
    transport = RequestsTransport(HTTPConfig(**http_params))

    wds = WdsConfig(base_url=params["base_url"]) if params.get("base_url") else WdsConfig()
    cfg = AggregatorConfig(
        retention=params.get("retention", "history"),
        max_workers=params.get("max_workers"),
    )
    return VectorPriceAggregator(VectorPriceFetcher(transport, wds), cfg)


def fetch_statcan_prices(params: Mapping[str, Any]) -> Tuple[pd.DataFrame, pd.DataFrame]:
    query = _make_query(params)
    log.info(
        "StatCan prices: %d vectors, province=%s, %s %s, years=%s",
        len(query.vectors), query.province, query.month_label, query.year, list(query.years),
    )

    report = _make_aggregator(params).fetch_all(query.vectors, query.years, query.month)

    for err in report.errors:
        log.warning("Fetch failure (%s): %s", err.kind, err.message)

    failures = pd.DataFrame([asdict(e) for e in report.errors], columns=FAILURE_COLUMNS)
    return results_to_frame(report.results), failures


def validate_statcan_price_rows(df: pd.DataFrame) -> pd.DataFrame:
    validate_price_rows(df)
    return df


def build_statcan_monthly_averages(df: pd.DataFrame, params: Mapping[str, Any]) -> pd.DataFrame:
    return monthly_averages_frame(df, month=int(params.get("month", 1)))
