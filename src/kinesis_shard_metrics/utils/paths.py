# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Path resolution for plugin state files using platformdirs."""

import os
from pathlib import Path

from platformdirs import user_cache_dir

APP_NAME = "kinesis-shard-metrics"
ENV_VAR = "KINESIS_SHARD_METRICS_STATE_DIR"


def get_state_dir() -> Path:
    """Get writable state directory (env var or platformdirs)."""
    if custom := os.environ.get(ENV_VAR):
        return Path(custom).expanduser()
    return Path(user_cache_dir(APP_NAME))


def get_default_tempfile(prefix: str) -> Path:
    """Get default tempfile path for a metric key prefix.
    
    The directory is not created here; it is made when state is first saved.
    """
    return get_state_dir() / f"mackerel-plugin-{prefix}"
