import pytest

from price_wise.domain.wds.query import DEFAULT_YEARS, PROVINCES, PriceQuery, parse_vectors_text


def test_parse_vectors_text_drops_blank_lines():
    assert parse_vectors_text("123\n\n 456 \n\n") == ["123", "456"]
    assert parse_vectors_text("") == []


def test_price_query_from_text_defaults():
    q = PriceQuery.from_text("111\n222\n")

    assert q.vectors == ("111", "222")
    assert q.province == "Canada"
    assert q.years == DEFAULT_YEARS == (2020, 2021, 2022, 2023, 2024)
    assert q.month_label == "Jan"


def test_price_query_validates_province_and_month():
    assert len(PROVINCES) == 11

    with pytest.raises(ValueError):
        PriceQuery(vectors=("1",), province="Yukon")

    with pytest.raises(ValueError):
        PriceQuery(vectors=("1",), month=0)

    q = PriceQuery(vectors=("1",), province="Ontario", month=12)
    assert q.month_label == "Dec"
