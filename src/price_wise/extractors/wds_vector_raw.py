from __future__ import annotations

import logging
from typing import Optional

from price_wise.utils.io.http import HttpTransport
from price_wise.extractors.wds_specs import WdsConfig
from price_wise.domain.wds.errors import (
    DecodeError,
    ProductFetchError,
    ProductNotFound,
    TransportError,
    VectorFetchError,
    WdsError,
)
from price_wise.domain.wds.models import PeriodQuery, ResultRow, ValuePoint
from price_wise.domain.wds.parsing import (
    decode_product_name,
    decode_value_point,
    parse_vector_id,
)

logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND = "Product not found"
PRODUCT_FETCH_ERROR = "Error fetching product"


class VectorPriceFetcher:
    """
    Busca um par (vector, year) no WDS: valor do mês + nome do produto.

    Método público único:
      - fetch_one(): retorna ResultRow ou levanta VectorFetchError.

    As duas chamadas são sequenciais: a de series info só acontece
    se a de valor deu certo. Falha no produto não derruba a linha,
    vira texto sentinela em `product`.
    """

    def __init__(self, transport: HttpTransport, cfg: Optional[WdsConfig] = None):
        self.transport = transport
        self.cfg = cfg or WdsConfig()

    def _fetch_value(self, vector: str, period: PeriodQuery) -> ValuePoint:
        url = self.cfg.value_url()
        params = self.cfg.value_params(vector, period)
        logger.info(
            "Fetching value: vector=%s period=%s..%s", vector, period.start_ref, period.end_ref
        )

        try:
            r = self.transport.get(url, params=params)
            r.raise_for_status()
        except Exception as exc:
            raise TransportError(
                f"Falha ao buscar valor: vector={vector} período={period.start_ref}..{period.end_ref} url={url}"
            ) from exc

        return decode_value_point(r.content)

    def _fetch_product(self, vector: str, vector_id: int) -> str:
        url = self.cfg.series_info_url()
        logger.info("Fetching series info: vector=%s", vector)

        try:
            r = self.transport.post(url, json=self.cfg.series_info_body(vector_id))
            r.raise_for_status()
        except Exception as exc:
            raise ProductFetchError(
                f"Falha ao buscar series info: vector={vector} url={url}"
            ) from exc

        return decode_product_name(r.content)

    def _product_or_sentinel(self, vector: str, vector_id: int) -> str:
        try:
            return self._fetch_product(vector, vector_id)
        except ProductNotFound:
            logger.warning("Product name not found for vector %s", vector)
            return PRODUCT_NOT_FOUND
        except (ProductFetchError, DecodeError) as exc:
            logger.warning("Series info failed for vector %s: %s", vector, exc)
            return PRODUCT_FETCH_ERROR

    def fetch_one(self, vector: str, year: int, month: int) -> ResultRow:
        period = PeriodQuery(year=year, month=month)

        try:
            value = self._fetch_value(vector, period)
            # só valida o id depois do valor; o GET aceita a string como veio
            vector_id = parse_vector_id(vector)
        except WdsError as exc:
            logger.warning("Fetch failed: vector=%s year=%s month=%s (%s) %s", vector, year, month, exc.kind, exc)
            raise VectorFetchError(
                vector_id=vector,
                year=year,
                month=month,
                kind=exc.kind,
                message=f"vector {vector} ({year}-{month:02d}): {exc}",
            ) from exc

        product = self._product_or_sentinel(vector, vector_id)

        return ResultRow(
            vector_id=vector,
            year=year,
            month=month,
            value=value,
            product=product,
        )
