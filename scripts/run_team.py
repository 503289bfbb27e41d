"""Run a task through a team's workflow."""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import argparse
import asyncio
import json
from typing import Any

from dotenv import load_dotenv

from teamflow.agents import build_agent_pool, close_pool
from teamflow.config import load_team_config
from teamflow.utils.logging_config import setup_logging
from teamflow.workflow import WorkflowExecutor


def parse_args() -> argparse.Namespace:
    """Parse CLI args."""
    parser = argparse.ArgumentParser(description="Run a task through a team of agents")
    parser.add_argument("--config", type=Path, default=Path("config/team.yaml"))
    parser.add_argument("--task", required=True, help="Task text handed to the team")
    parser.add_argument("--dry-run", action="store_true", help="Use offline mock model replies")
    parser.add_argument("--timeout", type=float, default=None, help="Per-invocation deadline in seconds")
    parser.add_argument("--max-concurrent", type=int, default=None)
    parser.add_argument("--log-dir", type=Path, default=None)
    parser.add_argument("--output", type=Path, default=None, help="Write the run result as JSON")
    return parser.parse_args()


async def async_main(args: argparse.Namespace) -> dict[str, Any]:
    """Build the team, execute the task and return a JSON-ready summary."""
    logger, _ = setup_logging(log_dir=args.log_dir, name="run_team")

    team = load_team_config(args.config)
    logger.info("Team '%s' executing task with %s workflow", team.name, team.workflow.name)

    pool = build_agent_pool(team, dry_run=args.dry_run, logger=logger)
    executor = WorkflowExecutor(
        invoke_timeout=args.timeout,
        max_concurrent=args.max_concurrent,
        logger=logger,
    )
    try:
        outcome = await executor.execute(team.workflow, pool, args.task)
    finally:
        await close_pool(pool)

    status = outcome.state.status()
    return {
        "team": team.name,
        "workflow": team.workflow.name,
        "workflow_id": status.workflow_id,
        "steps": status.current_step,
        "execution_time_seconds": status.execution_time_seconds,
        "trace": outcome.trace,
        "result": outcome.result,
        "state": outcome.state.to_dict(),
    }


def main() -> None:
    """Program entry point."""
    load_dotenv()
    args = parse_args()
    summary = asyncio.run(async_main(args))

    print(summary["result"])
    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(json.dumps(summary, indent=2), encoding="utf-8")


if __name__ == "__main__":
    main()
