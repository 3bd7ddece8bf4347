# src/price_wise/pipeline_registry.py
from __future__ import annotations

from kedro.pipeline import Pipeline

from price_wise.pipelines.statcan_prices.pipeline import create_pipeline as statcan_prices


def register_pipelines() -> dict[str, Pipeline]:
    statcan_prices_pipeline = statcan_prices()

    pipelines = {
        "statcan_prices": statcan_prices_pipeline,
    }

    pipelines["__default__"] = pipelines["statcan_prices"]

    return pipelines
