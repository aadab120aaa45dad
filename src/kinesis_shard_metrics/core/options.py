# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Plugin options collected from the command line and an optional YAML file"""

import logging
from dataclasses import dataclass, fields
from typing import Optional

import yaml

from kinesis_shard_metrics.core.errors import ConfigurationError
from kinesis_shard_metrics.core.plugin import DEFAULT_PREFIX
from kinesis_shard_metrics.utils.yaml_handler import load_yaml

logger = logging.getLogger(__name__)


@dataclass
class PluginOptions:
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    region: Optional[str] = None
    identifier: Optional[str] = None
    tempfile: Optional[str] = None
    metric_key_prefix: str = DEFAULT_PREFIX

    @classmethod
    def from_args(cls, args):
        """Resolve options: command line first, then the --config file, then defaults

        YAML keys use the flag names, either dashed or underscored
        (e.g. 'metric-key-prefix' or 'metric_key_prefix').

        Raises:
            ConfigurationError: If the config file cannot be read or is not a mapping
        """
        file_values = {}
        config_path = getattr(args, 'config', None)
        if config_path:
            try:
                data = load_yaml(config_path)
            except (OSError, yaml.YAMLError) as e:
                raise ConfigurationError(f"Could not read config file {config_path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigurationError(f"Config file {config_path} must contain a mapping")
            file_values = {str(k).replace('-', '_'): v for k, v in data.items()}
            logger.debug(f"Loaded options from {config_path}")

        values = {}
        for field in fields(cls):
            cli_value = getattr(args, field.name, None)
            if cli_value:
                values[field.name] = cli_value
            elif file_values.get(field.name):
                values[field.name] = str(file_values[field.name])

        unknown = set(file_values) - {f.name for f in fields(cls)}
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")

        return cls(**values)
