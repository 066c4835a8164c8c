# /*
# Copyright 2026 The Booster Harness Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# */

"""Bounded polling of control-plane conditions."""

from __future__ import annotations

import time
from collections.abc import Callable

from tenacity import RetryError, Retrying, retry_if_result, stop_after_delay, wait_fixed

from booster_harness import logger
from booster_harness.errors import ReadinessTimeoutError


def await_condition(
    condition: Callable[[], bool],
    description: str,
    timeout: float,
    interval: float,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Poll *condition* until it returns True or *timeout* seconds pass.

    Errors raised by the condition itself are not retried and propagate.

    Args:
        condition: Zero-argument callable evaluated on every poll.
        description: What is being waited for, used in the timeout message.
        timeout: Wall-clock bound in seconds.
        interval: Pause between polls in seconds.
        sleep: Sleep function, replaceable for tests.

    Raises:
        ReadinessTimeoutError: If the condition never held within the bound.
    """
    retrying = Retrying(
        stop=stop_after_delay(timeout),
        wait=wait_fixed(interval),
        retry=retry_if_result(lambda ok: not ok),
        sleep=sleep,
    )
    try:
        retrying(condition)
    except RetryError as err:
        attempts = err.last_attempt.attempt_number
        logger.error("Gave up waiting for %s after %d poll(s)", description, attempts)
        raise ReadinessTimeoutError(f"Timed out after {timeout:g}s waiting for {description}") from err
    logger.debug("Condition met: %s", description)
