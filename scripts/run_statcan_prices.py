from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from price_wise.utils.io.http import HTTPConfig, RequestsTransport
from price_wise.extractors.wds_specs import WdsConfig
from price_wise.extractors.wds_vector_raw import VectorPriceFetcher
from price_wise.domain.wds.query import DEFAULT_YEARS, PROVINCES, PriceQuery
from price_wise.domain.wds.service import (
    AggregatorConfig,
    VectorPriceAggregator,
    average_for_month,
    format_average,
    row_for,
)


# ----------------------------
# Logging estruturado (JSON)
# ----------------------------

_RESERVED = (
    "msg", "args", "levelname", "levelno", "name", "pathname", "filename",
    "module", "exc_info", "exc_text", "stack_info", "lineno", "funcName",
    "created", "msecs", "relativeCreated", "thread", "threadName",
    "processName", "process", "taskName",
)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        # campos extras (via logger.info(..., extra={...}))
        for k, v in record.__dict__.items():
            if k in _RESERVED:
                continue
            try:
                json.dumps(v)
                base[k] = v
            except (TypeError, ValueError):
                base[k] = str(v)

        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)

        return json.dumps(base, ensure_ascii=False)


def build_logger(level: int, log_path: Optional[Path] = None) -> logging.Logger:
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(JsonFormatter())
    root.addHandler(ch)

    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setFormatter(JsonFormatter())
        root.addHandler(fh)

    return logging.getLogger("statcan_prices")


# ----------------------------
# CLI
# ----------------------------

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Busca preços StatCan por vetor e média do mês entre anos.")
    parser.add_argument("vectors", nargs="*", help="Vector IDs (ex.: 1234567). Use --vectors-file para um por linha.")
    parser.add_argument("--vectors-file", type=Path, default=None)
    parser.add_argument("--province", default="Canada", choices=PROVINCES)
    parser.add_argument("--month", type=int, default=1)
    parser.add_argument("--year", type=int, default=2024, help="Ano exibido em destaque.")
    parser.add_argument("--years", type=int, nargs="+", default=list(DEFAULT_YEARS), help="Anos usados na média.")
    parser.add_argument("--retention", choices=("history", "latest"), default="history")
    parser.add_argument("--timeout-sec", type=int, default=30)
    parser.add_argument("--log-file", type=Path, default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logger = build_logger(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    text = "\n".join(args.vectors)
    if args.vectors_file is not None:
        text += "\n" + args.vectors_file.read_text(encoding="utf-8")

    query = PriceQuery.from_text(
        text,
        province=args.province,
        month=args.month,
        year=args.year,
        years=tuple(args.years),
    )
    if not query.vectors:
        logger.error("nenhum vetor informado")
        return 2

    logger.info(
        "starting fetch",
        extra={
            "vectors": list(query.vectors),
            "province": query.province,
            "month": query.month,
            "years": list(query.years),
        },
    )

    transport = RequestsTransport(HTTPConfig(timeout_sec=args.timeout_sec))
    aggregator = VectorPriceAggregator(
        VectorPriceFetcher(transport, WdsConfig()),
        AggregatorConfig(retention=args.retention),
    )

    t0 = datetime.now(timezone.utc)
    report = aggregator.fetch_all(query.vectors, query.years, query.month)
    elapsed = (datetime.now(timezone.utc) - t0).total_seconds()

    logger.info(
        "fetch finished",
        extra={
            "elapsed_sec": elapsed,
            "launched": report.launched,
            "completed": report.completed,
            "errors": len(report.errors),
        },
    )

    since = min(query.years) if query.years else query.year
    for vector in query.vectors:
        rows = report.results.get(vector)
        if not rows:
            continue
        print(f"Vector: {vector}")
        selected = row_for(rows, query.year, query.month)
        if selected is not None:
            print(f"  {selected.product}: ${selected.value.formatted}")
        avg = format_average(average_for_month(rows, query.month))
        print(f"  Average Price for {query.month_label} Since {since}: {avg}")

    if report.errors:
        print("\nErros:")
        for err in report.errors:
            print(f"  [{err.kind}] {err.message}")

    return 0 if report.results else 1


if __name__ == "__main__":
    sys.exit(main())
