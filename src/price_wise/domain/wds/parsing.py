from __future__ import annotations

import json
from typing import Any, List, Optional

from price_wise.domain.wds.errors import (
    DecodeError,
    InvalidVectorId,
    ProductNotFound,
    ValueNotFound,
)
from price_wise.domain.wds.models import ValuePoint


# Parser JSON: bytes do WDS -> lista de objetos de resposta
def _load_response_array(content: bytes) -> List[Any]:
    try:
        payload = json.loads(content)
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"Resposta WDS não é JSON válido: {exc}") from exc

    if not isinstance(payload, list):
        raise DecodeError(f"Resposta WDS deveria ser uma lista, veio {type(payload).__name__}")
    return payload


def _first_object(payload: List[Any]) -> Optional[dict]:
    if not payload:
        return None
    first = payload[0]
    if not isinstance(first, dict):
        raise DecodeError(f"Item da resposta WDS deveria ser objeto, veio {type(first).__name__}")
    obj = first.get("object")
    return obj if isinstance(obj, dict) else None


def _opt_int(v: Any) -> Optional[int]:
    return v if isinstance(v, int) and not isinstance(v, bool) else None


def decode_value_point(content: bytes) -> ValuePoint:
    """
    getDataFromVectorByReferencePeriodRange -> primeiro vectorDataPoint.

    [{"status": "SUCCESS", "object": {"vectorDataPoint": [{"value": 4.5, ...}]}}]
    """
    obj = _first_object(_load_response_array(content))
    if obj is None:
        raise ValueNotFound("Resposta sem 'object'")

    points = obj.get("vectorDataPoint")
    if not isinstance(points, list) or not points or not isinstance(points[0], dict):
        raise ValueNotFound("Resposta sem vectorDataPoint")

    point = points[0]
    value = point.get("value")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueNotFound(f"vectorDataPoint sem 'value' numérico: {value!r}")

    ref_per = point.get("refPer")
    return ValuePoint(
        value=float(value),
        ref_per=ref_per if isinstance(ref_per, str) else None,
        decimals=_opt_int(point.get("decimals")),
        scalar_factor_code=_opt_int(point.get("scalarFactorCode")),
        status_code=_opt_int(point.get("statusCode")),
    )


def product_name_from_title(title: str) -> str:
    """
    'Some Category; Retail; Milk, 1L' -> 'Milk, 1L'
    Sem ';' o título inteiro (trim) é o produto.
    """
    return title.rsplit(";", 1)[-1].strip()


def decode_product_name(content: bytes) -> str:
    """getSeriesInfoFromVector -> nome do produto a partir de SeriesTitleEn."""
    obj = _first_object(_load_response_array(content))
    if obj is None:
        raise ProductNotFound("Resposta sem 'object'")

    title = obj.get("SeriesTitleEn")
    if not isinstance(title, str):
        raise ProductNotFound("Resposta sem SeriesTitleEn")

    return product_name_from_title(title)


def parse_vector_id(vector: str) -> int:
    # só dígitos ASCII: int() aceitaria "12_345", "+7" e dígitos unicode
    s = str(vector).strip()
    if not (s.isascii() and s.isdigit()):
        raise InvalidVectorId(f"Vector ID inválido: {vector!r}")
    return int(s)
