# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Output generation in the mackerel-agent plugin format"""

import os
import re
import sys
import json
import logging
from datetime import datetime, timezone
from typing import Dict, Optional

logger = logging.getLogger(__name__)

META_ENV_VAR = 'MACKEREL_AGENT_PLUGIN_META'
META_HEADER = '# mackerel-agent-plugin'
LAST_TIME_KEY = '_lastTime'
MAX_DIFF_SECONDS = 600


def calc_diff(value: float, now: int, last_value: float, last_time: int) -> Optional[float]:
    """Per-minute rate of a counter between two runs

    Returns:
        float rate, or None if the interval is unusable or the counter was reset
    """
    elapsed = now - last_time
    if elapsed <= 0 or elapsed > MAX_DIFF_SECONDS:
        logger.debug(f"Skipping diff: {elapsed}s since last run")
        return None
    if value < last_value:
        logger.debug(f"Skipping diff: counter went from {last_value} to {value}")
        return None
    return (value - last_value) * 60 / elapsed


def key_pattern(graph_key: str, metric_name: str):
    """Regex matching stat keys of one graph metric

    A '#' or '*' segment in the graph key matches one dotted component.
    """
    parts = [r'[-a-zA-Z0-9_]+' if part in ('#', '*') else re.escape(part)
             for part in graph_key.split('.')]
    return re.compile(r'\.'.join(parts) + r'\.' + re.escape(metric_name) + '$')


class OutputGenerator:
    """Prints plugin values and graph definitions for the agent"""

    def __init__(self, plugin, tempfile=None, stream=None):
        self.plugin = plugin
        self.tempfile = str(tempfile) if tempfile else None
        self.stream = stream if stream is not None else sys.stdout

    def _load_state(self) -> Dict:
        if not self.tempfile:
            return {}
        try:
            with open(self.tempfile, 'r', encoding='utf-8') as f:
                state = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable tempfile {self.tempfile}: {e}")
            return {}
        if not isinstance(state, dict):
            logger.warning(f"Ignoring tempfile {self.tempfile}: expected a JSON object")
            return {}
        return state

    def _save_state(self, stats, now):
        if not self.tempfile:
            return
        state = dict(stats)
        state[LAST_TIME_KEY] = now
        try:
            state_dir = os.path.dirname(self.tempfile)
            if state_dir:
                os.makedirs(state_dir, exist_ok=True)
            with open(self.tempfile, 'w', encoding='utf-8') as f:
                json.dump(state, f)
        except OSError as e:
            logger.warning(f"Could not save tempfile {self.tempfile}: {e}")

    def _print_value(self, key, value, now):
        print(f"{self.plugin.metric_key_prefix()}.{key}\t{value:f}\t{now}", file=self.stream)

    def output_values(self, now: Optional[datetime] = None):
        """Fetch metrics and print one line per value

        Line format: '<prefix>.<key>\\t<value>\\t<unix time>'
        """
        epoch = int((now or datetime.now(timezone.utc)).timestamp())
        stats = self.plugin.fetch_metrics()
        graphs = self.plugin.graph_definition()

        has_diff = any(m.diff for graph in graphs.values() for m in graph.metrics)
        last_state = self._load_state() if has_diff else {}
        last_time = last_state.get(LAST_TIME_KEY)

        for graph_key, graph in graphs.items():
            for metric in graph.metrics:
                pattern = key_pattern(graph_key, metric.name)
                for key in sorted(k for k in stats if pattern.match(k)):
                    value = stats[key]
                    if metric.diff:
                        if last_time is None or key not in last_state:
                            continue
                        value = calc_diff(value, epoch, last_state[key], last_time)
                        if value is None:
                            continue
                    self._print_value(key, value, epoch)

        if has_diff:
            self._save_state(stats, epoch)

    def output_definitions(self):
        """Print graph definitions as the agent's meta JSON"""
        prefix = self.plugin.metric_key_prefix()
        graphs = {
            f"{prefix}.{key}": graph.to_dict()
            for key, graph in self.plugin.graph_definition().items()
        }
        print(META_HEADER, file=self.stream)
        print(json.dumps({'graphs': graphs}), file=self.stream)

    def run(self):
        if os.environ.get(META_ENV_VAR, ''):
            self.output_definitions()
        else:
            self.output_values()
