"""Console entrypoint that replays typed text through the dispatcher."""

from __future__ import annotations

import argparse
import asyncio
from typing import Sequence

from querydispatch.config import DispatcherSettings, get_settings
from querydispatch.domain.models import SearchState
from querydispatch.logging import configure_logging, logger
from querydispatch.services.dispatcher import create_dispatcher
from querydispatch.utils.scheduling import AsyncioScheduler

# Extra wait after the last keystroke so the debounced search can land.
QUIESCENCE_GRACE_MS = 50


def _log_state(state: SearchState) -> None:
    logger.info(
        "search_state_published",
        results=list(state.results),
        message=state.message,
        busy=state.busy,
    )


async def replay_typing(
    texts: Sequence[str],
    settings: DispatcherSettings,
    *,
    clear: bool = False,
) -> SearchState:
    """Type each text one character at a time and return the settled state."""

    interval = settings.demo.keystroke_interval_ms / 1000.0
    scheduler = AsyncioScheduler(asyncio.get_running_loop())
    with create_dispatcher(settings, scheduler=scheduler, listener=_log_state) as dispatcher:
        for text in texts:
            for end in range(1, len(text) + 1):
                dispatcher.on_input_change(text[:end])
                await asyncio.sleep(interval)
        if clear:
            dispatcher.on_input_change("")
        await asyncio.sleep(
            (settings.timing.debounce_delay_ms + QUIESCENCE_GRACE_MS) / 1000.0
        )
        return dispatcher.executor.state


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="querydispatch",
        description="Replay keystrokes through the debounced/throttled search dispatcher.",
    )
    parser.add_argument("texts", nargs="+", help="text to type, one character per keystroke")
    parser.add_argument(
        "--clear",
        action="store_true",
        help="clear the input after typing",
    )
    return parser


async def main(argv: Sequence[str] | None = None) -> SearchState:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    logger.info(
        "dispatcher_starting",
        environment=settings.environment,
        debounce_delay_ms=settings.timing.debounce_delay_ms,
        throttle_limit_ms=settings.timing.throttle_limit_ms,
    )
    state = await replay_typing(args.texts, settings, clear=args.clear)
    logger.info("dispatcher_settled", results=list(state.results), message=state.message)
    return state


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
