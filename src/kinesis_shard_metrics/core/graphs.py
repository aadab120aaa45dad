# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Graph definitions reported to the agent"""

import re
from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class GraphMetric:
    name: str
    label: str
    diff: bool = False
    stacked: bool = False

    def to_dict(self) -> Dict:
        return {'name': self.name, 'label': self.label, 'diff': self.diff, 'stacked': self.stacked}


@dataclass(frozen=True)
class GraphSpec:
    label: str
    unit: str
    metrics: Tuple[GraphMetric, ...]

    def to_dict(self) -> Dict:
        return {
            'label': self.label,
            'unit': self.unit,
            'metrics': [m.to_dict() for m in self.metrics]
        }


# (key, label suffix, unit, members)
_GRAPH_LAYOUT = (
    ('bytes.#', 'Bytes', 'integer', (
        GraphMetric('GetRecordsBytes', 'GetRecords'),
        GraphMetric('IncomingBytes', 'Total Incoming'),
    )),
    ('iteratorage.#', 'Read Delay', 'integer', (
        GraphMetric('GetRecordsDelayAverageMilliseconds', 'Average'),
        GraphMetric('GetRecordsDelayMaxMilliseconds', 'Max'),
        GraphMetric('GetRecordsDelayMinMilliseconds', 'Min'),
    )),
    ('records.#', 'Records', 'integer', (
        GraphMetric('GetRecordsRecords', 'GetRecords'),
        GraphMetric('IncomingRecords', 'Total Incoming'),
    )),
    ('pending.#', 'Pending Operations', 'integer', (
        GraphMetric('ReadThroughputExceeded', 'Read'),
        GraphMetric('WriteThroughputExceeded', 'Write'),
    )),
)


def label_prefix(prefix: str) -> str:
    """Turn a metric key prefix into a display label

    Example: 'kinesis-streams-shard' -> 'Kinesis Streams Shard'
    """
    titled = re.sub(r'(?<![A-Za-z0-9_])[a-z]', lambda m: m.group().upper(), prefix)
    return titled.replace('-', ' ')


def build_graph_definition(prefix: str) -> Dict[str, GraphSpec]:
    """Build graph definitions keyed by graph group

    Args:
        prefix: Metric key prefix (e.g., 'kinesis-streams-shard')

    Returns:
        dict: Graph key (e.g., 'bytes.#') to GraphSpec
    """
    label = label_prefix(prefix)
    return {
        key: GraphSpec(label=f"{label} {suffix}", unit=unit, metrics=members)
        for key, suffix, unit, members in _GRAPH_LAYOUT
    }
