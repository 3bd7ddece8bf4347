from __future__ import annotations

from dataclasses import dataclass

from price_wise.domain.wds.models import PeriodQuery


@dataclass(frozen=True)
class WdsConfig:
    """
    Endpoints do Web Data Service (WDS) da Statistics Canada.

    - base_url: raiz REST (sem barra final)
    - value_endpoint: GET por vetor e intervalo de referência
    - series_info_endpoint: POST com [{"vectorId": <int>}]
    """
    base_url: str = "https://www150.statcan.gc.ca/t1/wds/rest"
    value_endpoint: str = "getDataFromVectorByReferencePeriodRange"
    series_info_endpoint: str = "getSeriesInfoFromVector"

    def value_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.value_endpoint}"

    def series_info_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.series_info_endpoint}"

    @staticmethod
    def value_params(vector_id: str, period: PeriodQuery) -> dict:
        # o WDS usa nomes assimétricos: startRefPeriod / endReferencePeriod
        return {
            "vectorIds": vector_id,
            "startRefPeriod": period.start_ref,
            "endReferencePeriod": period.end_ref,
        }

    @staticmethod
    def series_info_body(vector_id: int) -> list:
        return [{"vectorId": vector_id}]
