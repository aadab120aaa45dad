# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Main orchestrator for Kinesis shard metrics collection"""

import logging
from typing import Dict, Optional, Sequence

from kinesis_shard_metrics.aws.kinesis import get_shard_ids
from kinesis_shard_metrics.core.catalog import METRIC_CATALOG, MetricDefinition
from kinesis_shard_metrics.core.errors import FetchError
from kinesis_shard_metrics.core.graphs import GraphSpec, build_graph_definition
from kinesis_shard_metrics.core.metrics_fetcher import CloudWatchMetricsFetcher

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = 'kinesis-streams-shard'


class KinesisStreamsShardPlugin:
    """Collects shard-level CloudWatch metrics for one Kinesis stream

    Exposes the three operations the agent helper needs: the metric key
    prefix, the metric values and the graph definitions.
    """

    def __init__(self, stream_name, cloudwatch_client, kinesis_client, prefix=DEFAULT_PREFIX,
                 catalog: Optional[Sequence[MetricDefinition]] = None):
        self.stream_name = stream_name
        self.prefix = prefix
        self.kinesis_client = kinesis_client
        self.catalog = tuple(catalog) if catalog is not None else METRIC_CATALOG
        self.metrics_fetcher = CloudWatchMetricsFetcher(cloudwatch_client, stream_name)

    def metric_key_prefix(self) -> str:
        return self.prefix or DEFAULT_PREFIX

    def get_shard_ids(self):
        return get_shard_ids(self.kinesis_client, self.stream_name)

    def fetch_metrics(self) -> Dict[str, float]:
        """Fetch the latest value of every catalog metric for every shard

        A metric that fails or has no data is logged and left out of the
        result. A failure listing shards aborts the run.

        Returns:
            dict: '<category>.<shard id>.<output name>' to value

        Raises:
            FetchError: If the shard list cannot be fetched
        """
        stats = {}

        shard_ids = self.get_shard_ids()
        logger.debug(f"Fetching {len(self.catalog)} metric(s) for {len(shard_ids)} shard(s) of {self.stream_name}")

        for shard_id in shard_ids:
            for metric in self.catalog:
                try:
                    value = self.metrics_fetcher.get_last_point(metric, shard_id)
                except FetchError as e:
                    logger.warning(f"{shard_id} {metric.source_name} ({metric.output_name}): {e}")
                    continue
                stats[metric.key(shard_id)] = value

        return stats

    def graph_definition(self) -> Dict[str, GraphSpec]:
        return build_graph_definition(self.metric_key_prefix())
