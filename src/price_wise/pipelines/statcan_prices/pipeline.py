from __future__ import annotations

from kedro.pipeline import Pipeline, node

from price_wise.pipelines.statcan_prices.nodes import (
    fetch_statcan_prices,
    validate_statcan_price_rows,
    build_statcan_monthly_averages,
)


def create_pipeline(**kwargs) -> Pipeline:
    return Pipeline(
        [
            node(
                func=fetch_statcan_prices,
                inputs="params:statcan_prices",
                outputs=["statcan_price_rows__pre", "statcan_fetch_failures"],
                name="statcan_prices_fetch",
            ),
            node(
                func=validate_statcan_price_rows,
                inputs="statcan_price_rows__pre",
                outputs="statcan_price_rows",
                name="statcan_prices_validate_rows",
            ),
            node(
                func=build_statcan_monthly_averages,
                inputs=["statcan_price_rows", "params:statcan_prices"],
                outputs="statcan_monthly_averages",
                name="statcan_prices_build_averages",
            ),
        ]
    )
