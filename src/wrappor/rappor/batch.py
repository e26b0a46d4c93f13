"""
Batch simulation harness: encode a CSV of client values into RAPPOR reports.

Input columns:  client, cohort, value
Output columns: client, cohort, bloom, prr, irr (bit strings, MSB first)

Each record is encoded by its own encoder keyed with ``secret = client``,
mirroring how a fleet of independent clients would report.

Usage:
    wrappor-sim 16 2 64 0.5 0.75 0.5 input.csv output.csv [--seed 0]
"""
# 说明：批量模拟工具，读取 client/cohort/value 记录，逐条编码并写出 bloom/PRR/IRR 比特串。
# 职责：
# - encode_records：对记录流逐条构造编码器（密钥取 client 字段）并生成输出行
# - run：串联 CSV 读写与进度日志
# - main：解析命令行参数（位置参数顺序 k h m p q f input output）
# 约定：
# - 输出中的 bloom 与 PRR 仅用于模拟分析，真实上报只应发送 IRR

from __future__ import annotations

import argparse
import csv
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from wrappor.core.utils.logging import configure_logging, get_logger
from wrappor.core.utils.param_validation import ParamValidationError
from .encoder import RapporEncoder
from .mechanisms.random_source import NoiseMaskSource, SecureMaskSource, SeededMaskSource
from .types import EncoderConfig, ReportingMode

logger = get_logger(__name__)

INPUT_FIELDS = ("client", "cohort", "value")
OUTPUT_FIELDS = ("client", "cohort", "bloom", "prr", "irr")


def encode_records(
    records: Iterable[Mapping[str, Any]],
    config: EncoderConfig,
    *,
    mode: Union[ReportingMode, str] = ReportingMode.STANDARD,
    random_source: Optional[NoiseMaskSource] = None,
    progress_every: int = 100000,
) -> Iterator[Dict[str, Any]]:
    """Yield one output row per input record."""
    # 所有客户端共享同一随机源，PRR 缓存则随每个编码器独立创建
    source = random_source if random_source is not None else SecureMaskSource()
    for num, record in enumerate(records, start=1):
        missing = [name for name in INPUT_FIELDS if name not in record]
        if missing:
            raise ParamValidationError(f"record {num} missing fields {missing}")
        client = str(record["client"])
        try:
            cohort = int(record["cohort"])
        except (TypeError, ValueError) as exc:
            raise ParamValidationError(f"record {num} has a non-integer cohort") from exc
        encoder = RapporEncoder(config, cohort, client, mode, random_source=source)
        report = encoder.encode_report(str(record["value"]))
        row: Dict[str, Any] = {"client": client, "cohort": cohort}
        row.update(report.to_bit_strings())
        if progress_every > 0 and num % progress_every == 0:
            logger.info("Total Processed: %d", num)
        yield row


def run(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    config: EncoderConfig,
    *,
    mode: Union[ReportingMode, str] = ReportingMode.STANDARD,
    random_source: Optional[NoiseMaskSource] = None,
    progress_every: int = 100000,
) -> int:
    """Encode ``input_path`` into ``output_path``; returns the number of records written."""
    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    written = 0
    with open(input_path, newline="", encoding="utf-8") as src, open(out, "w", newline="", encoding="utf-8") as dst:
        writer = csv.DictWriter(dst, fieldnames=list(OUTPUT_FIELDS))
        writer.writeheader()
        rows = encode_records(
            csv.DictReader(src),
            config,
            mode=mode,
            random_source=random_source,
            progress_every=progress_every,
        )
        for row in rows:
            writer.writerow(row)
            written += 1
    logger.info("wrote %d records to %s", written, out)
    return written


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Encode client values into RAPPOR reports")
    parser.add_argument("num_bits", type=int, help="Bloom filter width k (1-32)")
    parser.add_argument("num_hashes", type=int, help="Hashes per value h (1-16)")
    parser.add_argument("num_cohorts", type=int, help="Number of cohorts m")
    parser.add_argument("prob_p", type=float, help="IRR probability p")
    parser.add_argument("prob_q", type=float, help="IRR probability q")
    parser.add_argument("prob_f", type=float, help="PRR probability f")
    parser.add_argument("input", help="CSV with columns client,cohort,value")
    parser.add_argument("output", help="CSV to write client,cohort,bloom,prr,irr to")
    parser.add_argument(
        "--mode",
        default=ReportingMode.STANDARD.value,
        choices=[ReportingMode.STANDARD.value, ReportingMode.ONE_TIME.value],
        help="Reporting mode (default: STANDARD)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed a reproducible (non-cryptographic) noise source",
    )
    parser.add_argument(
        "--progress-every",
        type=int,
        default=100000,
        help="Log progress every N records (default: 100000, 0 disables)",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: WRAPPOR_LOG_LEVEL or INFO)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(args.log_level)
    config = EncoderConfig(
        bloom_bits=args.num_bits,
        hashes=args.num_hashes,
        total_cohorts=args.num_cohorts,
        prob_p=args.prob_p,
        prob_q=args.prob_q,
        prob_f=args.prob_f,
    )
    source: NoiseMaskSource = SeededMaskSource(args.seed) if args.seed is not None else SecureMaskSource()
    run(
        args.input,
        args.output,
        config,
        mode=args.mode,
        random_source=source,
        progress_every=args.progress_every,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
