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

"""Helpers for driving a full test run from pytest or scripts.

Example::

    from booster_harness.assistant import LifecycleAssistant
    from booster_harness.testing import deployed_application

    with deployed_application(LifecycleAssistant(), templates={"database": "db.yml"}) as assistant:
        requests.get(f"{assistant.base_url}/api/fruits")
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path

from booster_harness import logger
from booster_harness.assistant import LifecycleAssistant


@contextmanager
def deployed_application(
    assistant: LifecycleAssistant,
    templates: Mapping[str, str | Path] | None = None,
    replicas: int | None = None,
) -> Iterator[LifecycleAssistant]:
    """Deploy the templates and the application, yield, then clean up.

    Args:
        assistant: Assistant holding the state of this run.
        templates: Extra bundles to deploy first, keyed by logical name.
        replicas: Replica count to scale the application to once ready.

    Yields:
        The assistant, with ``base_url`` and ``application_name`` resolved.
    """
    try:
        for name, template_file in (templates or {}).items():
            assistant.deploy(name, template_file)
        application_name = assistant.deploy_application()
        assistant.await_application_readiness_or_fail()
        logger.info("%s is ready in %s", application_name, assistant.namespace)
        if replicas is not None:
            assistant.scale(replicas)
        yield assistant
    finally:
        assistant.cleanup()
