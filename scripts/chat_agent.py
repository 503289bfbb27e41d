"""Interactive REPL with a single agent from a team config."""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import argparse
import asyncio

from dotenv import load_dotenv

from teamflow.agents import Agent, build_agent_pool, close_pool
from teamflow.config import load_team_config
from teamflow.utils.logging_config import setup_logging


def parse_args() -> argparse.Namespace:
    """Parse CLI args."""
    parser = argparse.ArgumentParser(description="Chat with one agent")
    parser.add_argument("--config", type=Path, default=Path("config/team.yaml"))
    parser.add_argument("--agent", default=None, help="Agent name (defaults to the first declared)")
    parser.add_argument("--dry-run", action="store_true")
    return parser.parse_args()


async def repl(agent: Agent) -> None:
    """Read lines until ``exit``; ``/memory`` and ``/clear`` manage history."""
    print(f"Agent '{agent.name}' is ready. Type input or 'exit' to quit.")
    loop = asyncio.get_running_loop()
    while True:
        line = await loop.run_in_executor(None, input, "> ")
        text = line.strip()
        if text == "exit":
            print("Goodbye.")
            return
        if text == "/memory":
            for msg in await agent.memory.load():
                print(f"{msg.role}: {msg.content}")
            continue
        if text == "/clear":
            await agent.memory.clear()
            print("Memory cleared.")
            continue
        if text:
            print(await agent.invoke(text))


async def async_main(args: argparse.Namespace) -> None:
    logger, _ = setup_logging(log_dir=None, name="chat_agent")
    team = load_team_config(args.config)
    pool = build_agent_pool(team, dry_run=args.dry_run, logger=logger)

    name = args.agent or team.agents[0].name
    if name not in pool:
        raise SystemExit(f"Unknown agent '{name}'; available: {', '.join(pool)}")

    try:
        await repl(pool[name])
    except EOFError:
        print("\nGoodbye.")
    finally:
        await close_pool(pool)


def main() -> None:
    """Program entry point."""
    load_dotenv()
    asyncio.run(async_main(parse_args()))


if __name__ == "__main__":
    main()
