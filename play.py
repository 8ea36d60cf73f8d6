#!/usr/bin/env python3
"""Interactive CLI script to play the Love Calculator in a terminal.

Usage:
    python play.py

Runs the same SessionEngine as the API: enter two names, watch the score
count up, then read the message. The message needs DASHSCOPE_API_KEY (env or
.env); without it the built-in fallback message is shown.

No server needed.
"""

import asyncio
import logging

from lovecalc.config import settings
from lovecalc.core.exceptions import NameValidationError
from lovecalc.core.session_engine import SessionEngine
from lovecalc.models.session import SessionStatus
from lovecalc.schemas.session import SessionView
from lovecalc.services.llm_service import love_message_service

# --- ANSI Colors ---
PINK = "\033[95m"
RESET = "\033[0m"
DIM = "\033[90m"
BOLD = "\033[1m"
YELLOW = "\033[93m"
HEART = f"{PINK}♥{RESET}"

BAR_WIDTH = 40
DIVIDER = DIM + "─" * 50 + RESET


def render_progress(view: SessionView) -> None:
    """Redraw the progress bar line in place."""
    filled = round(BAR_WIDTH * (view.progress or 0) / 100)
    bar = PINK + "█" * filled + DIM + "░" * (BAR_WIDTH - filled) + RESET
    print(f"\r  {HEART} {bar} {BOLD}{view.progress:>3}%{RESET}", end="", flush=True)


def on_change(view: SessionView) -> None:
    if view.status is SessionStatus.CALCULATING:
        render_progress(view)
    elif view.status is SessionStatus.LOADING_MESSAGE:
        render_progress(view)
        print(f"\n\n  {DIM}Crafting your love story...{RESET}", flush=True)


def show_result(view: SessionView) -> None:
    print()
    print(DIVIDER)
    print("  Your Love Score")
    print(f"\n      {HEART} {BOLD}{view.percentage}%{RESET} {HEART}\n")
    print(f"  {YELLOW}\"{view.message}\"{RESET}")
    print(DIVIDER)


async def ask(prompt: str) -> str:
    return await asyncio.to_thread(input, prompt)


async def play_round(engine: SessionEngine) -> None:
    """Collect names until valid, then run one calculation to its result."""
    while True:
        name1 = await ask(f"  {BOLD}Your Name{RESET}: ")
        name2 = await ask(f"  {BOLD}Your Partner's Name{RESET}: ")
        try:
            engine.submit_names(name1, name2)
            break
        except NameValidationError as e:
            print(f"  {YELLOW}{e}{RESET}\n")

    print(f"\n  {BOLD}Calculating...{RESET}\n")
    view = await engine.settle()
    show_result(view)


async def main():
    engine = SessionEngine(
        love_message_service, tick_interval=settings.PROGRESS_TICK_MS / 1000
    )
    engine.subscribe(on_change)

    print()
    print(f"{BOLD}" + "=" * 50 + f"{RESET}")
    print(f"{BOLD}  Love Calculator{RESET}")
    print(f"  {DIM}What does fate say about your love?{RESET}")
    print(f"{BOLD}" + "=" * 50 + f"{RESET}")
    print()

    try:
        while True:
            await play_round(engine)
            choice = (await ask("\n  Try again? (y/n): ")).strip().lower()
            engine.reset()
            if choice not in ("y", "yes"):
                break
            print()
    finally:
        await engine.aclose()

    print(f"\n  {DIM}May your love story keep going.{RESET}\n")


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, EOFError):
        print(f"\n\n{DIM}Bye!{RESET}")
