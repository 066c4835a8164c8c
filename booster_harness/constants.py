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

"""Constants for manifest paths, resource kinds, labels and timing defaults."""

from __future__ import annotations

from pathlib import Path

# -- Resolved paths --
PACKAGE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"
DATABASE_TEMPLATE = TEMPLATES_DIR / "database.yml"

# Produced by the fabric8 build step of the booster, relative to the project root.
DEFAULT_APPLICATION_MANIFEST = Path("target/classes/META-INF/fabric8/openshift.yml")

# -- Logical deployment names --
APPLICATION_DEPLOYMENT = "application"
DATABASE_DEPLOYMENT = "database"

# -- Resource kinds and labels --
KIND_DEPLOYMENT_CONFIG = "DeploymentConfig"
KIND_ROUTE = "Route"
KIND_LIST = "List"
LABEL_DEPLOYMENT_CONFIG = "deploymentconfig"
POD_PHASE_RUNNING = "running"
CONDITION_READY = "Ready"

# -- Control-plane client --
DEFAULT_KUBECTL_BINARY = "oc"
DEFAULT_NAMESPACE = "default"
DEFAULT_COMMAND_TIMEOUT_SECONDS = 60
NOT_FOUND_KEYWORDS = ("NotFound", "not found")
DELETE_PENDING_KEYWORDS = ("timed out waiting",)

# -- Waiting and retries --
DEFAULT_READINESS_TIMEOUT_SECONDS = 300.0
DEFAULT_SCALE_TIMEOUT_SECONDS = 300.0
DEFAULT_POLL_INTERVAL_SECONDS = 1.0
DEFAULT_DELETE_MAX_ATTEMPTS = 3
DEFAULT_DELETE_RETRY_WAIT_SECONDS = 0.5
DEFAULT_ROUTE_SCHEME = "http"

# -- Environment handed to test commands --
ENV_BASE_URL = "BOOSTER_BASE_URL"
ENV_APPLICATION_NAME = "BOOSTER_APPLICATION_NAME"
ENV_NAMESPACE = "BOOSTER_NAMESPACE"
