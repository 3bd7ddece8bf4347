from __future__ import annotations


class WdsError(RuntimeError):
    """Base para falhas ao consultar o Web Data Service (WDS) da StatCan."""

    kind = "WdsError"


class TransportError(WdsError):
    # rede, DNS, timeout ou HTTP >= 400
    kind = "TransportError"


class DecodeError(WdsError):
    kind = "DecodeError"


class ValueNotFound(WdsError):
    kind = "ValueNotFound"


class ProductNotFound(WdsError):
    kind = "ProductNotFound"


class ProductFetchError(WdsError):
    kind = "ProductFetchError"


class InvalidVectorId(WdsError):
    kind = "InvalidVectorId"


class VectorFetchError(WdsError):
    """
    Falha que aborta uma linha (vector, year).

    Guarda o contexto do par e o tipo da causa original em `kind`,
    para o agregador registrar sem precisar inspecionar __cause__.
    """

    def __init__(self, vector_id: str, year: int, month: int, kind: str, message: str):
        super().__init__(message)
        self.vector_id = vector_id
        self.year = year
        self.month = month
        self.kind = kind


class DataQualityError(RuntimeError):
    pass
