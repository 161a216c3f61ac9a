from __future__ import annotations

import asyncio
import random
from typing import Awaitable, Callable, Tuple


SleepFn = Callable[[float], Awaitable[None]]


def draw_delay(rng: random.Random, window: Tuple[float, float]) -> float:
	low, high = window
	return low + rng.random() * (high - low)


async def simulate_latency(rng: random.Random, sleep: SleepFn, window: Tuple[float, float]) -> float:
	delay = draw_delay(rng, window)
	await sleep(delay)
	return delay


def default_sleep() -> SleepFn:
	return asyncio.sleep
