# SPDX-License-Identifier: MIT

from typing import Callable

import pendulum
from rich.console import RenderableType
from rich.live import Live

from kioskcal.ticker import TICK_SECONDS, Ticker


def watch(
    render: Callable[[pendulum.DateTime], RenderableType],
    interval_seconds: float = TICK_SECONDS,
) -> None:
    """Re-render on every tick until interrupted with Ctrl+C."""
    with Live(auto_refresh=False) as live:
        ticker = Ticker(
            lambda now: live.update(render(now), refresh=True),
            interval_seconds=interval_seconds,
        )
        try:
            ticker.run()
        except KeyboardInterrupt:
            ticker.stop()
