"""
graphomotor-eval CLI Runner

Minimal CLI for evaluating a batch of drawings with the core pipeline.

Usage:
    python -m graphomotor_eval.runner --requests requests/session_demo.json
    python -m graphomotor_eval.runner --requests requests/session_demo.json --output-dir results
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from graphomotor_eval.domain.entities import EvaluationSuccess
from graphomotor_eval.infrastructure.evaluator_clients.factory import create_client
from graphomotor_eval.request_loader import load_requests
from graphomotor_eval.service_config import load_config
from graphomotor_eval.summary import format_summary
from graphomotor_eval.use_cases.evaluation import (
    evaluate_batch,
    outcomes_to_dataframe,
    summarize_outcomes,
)
from graphomotor_eval.use_cases.health_check import check_availability, get_statistics


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="graphomotor-eval: Score drawing traces with the evaluation backend",
    )
    parser.add_argument(
        "--requests",
        required=True,
        help="Path to the requests JSON file",
    )
    parser.add_argument(
        "--output-dir",
        default="results",
        help="Directory for output CSV files (default: results)",
    )
    parser.add_argument(
        "--skip-health-check",
        action="store_true",
        help="Dispatch without probing the backend status first",
    )
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> int:
    config = load_config()
    client = create_client(config)

    print(f"\n=== Loading requests: {args.requests} ===\n")
    requests = load_requests(args.requests)
    print(f"  Requests: {len(requests)}")
    print(f"  Backend:  {config.backend.base_url}")
    print(f"  Batch:    {config.batch.batch_size} per group, {config.batch.pause_seconds}s pause")
    print()

    # Step 1: Health check
    if not args.skip_health_check:
        print("=== Evaluator Health Check ===\n")
        if not await check_availability(client):
            print("  FAILED")
            print("ERROR: Evaluation backend not available. Exiting.")
            return 1
        print("  OK")
        stats = await get_statistics(client)
        if stats is not None:
            print(f"  Total evaluations: {stats.total_evaluations}")
            print(f"  Average time:      {stats.average_processing_time_ms:.0f}ms")
            print(f"  Tokens used:       {stats.tokens_used}")
            print(f"  Last evaluation:   {stats.last_evaluation_timestamp}")
        print()

    # Step 2: Evaluate
    print(f"=== Running Evaluations ({len(requests)} total) ===\n")
    outcomes = await evaluate_batch(requests, client, config)

    for i, outcome in enumerate(outcomes, start=1):
        shape = requests[i - 1].context.expected_shape.value
        print(f"[{i}/{len(outcomes)}] {shape} | {outcome.metadata.processing_time_ms}ms")
        if isinstance(outcome, EvaluationSuccess):
            print(format_summary(outcome.result))
        else:
            print(f"  ERROR: {outcome.error}\n")

    # Step 3: Aggregate and save
    df = outcomes_to_dataframe(outcomes)
    totals = summarize_outcomes(df)

    run_id = datetime.now().strftime("%Y%m%d_%H%M%S")
    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / f"outcomes_{run_id}.csv"
    df.to_csv(output_path, index=False)

    print("=== Summary ===\n")
    print(f"  Succeeded:    {totals['succeeded']}/{totals['total']}")
    print(f"  Mean score:   {totals['mean_score']:.1f}")
    print(f"  Mean latency: {totals['mean_processing_time_ms']:.0f}ms")
    print(f"  Tokens used:  {totals['total_tokens']}")
    print(f"\n  Outcomes: {output_path}\n")
    return 0


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    args = parse_args(argv)
    sys.exit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
