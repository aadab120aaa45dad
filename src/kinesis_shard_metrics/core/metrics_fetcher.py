# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""CloudWatch metrics fetching for Kinesis shards"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from botocore.exceptions import BotoCoreError, ClientError

from kinesis_shard_metrics.core.catalog import NAMESPACE, MetricDefinition
from kinesis_shard_metrics.core.errors import FetchError, NoDataError

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 180
PERIOD_SECONDS = 60


@dataclass(frozen=True)
class MetricSample:
    value: float
    timestamp: datetime


def latest_sample(samples: Iterable[MetricSample]) -> Optional[MetricSample]:
    """Pick the sample with the newest timestamp

    When several samples share the newest timestamp the one seen last wins.
    """
    latest = None
    for sample in samples:
        if latest is not None and sample.timestamp < latest.timestamp:
            continue
        latest = sample
    return latest


class CloudWatchMetricsFetcher:
    """Handles CloudWatch metrics retrieval for the shards of one stream"""

    def __init__(self, cloudwatch_client, stream_name):
        self.cloudwatch_client = cloudwatch_client
        self.stream_name = stream_name

    def _dimensions(self, shard_id):
        return [
            {'Name': 'StreamName', 'Value': self.stream_name},
            {'Name': 'ShardId', 'Value': shard_id},
        ]

    def get_last_point(self, metric: MetricDefinition, shard_id: str, now: Optional[datetime] = None) -> float:
        """Fetch the latest value of a metric for a shard

        Queries the trailing 3-minute window at 1-minute granularity.

        Args:
            metric: Metric definition to fetch
            shard_id: Kinesis shard ID
            now: End of the window (default: current UTC time)

        Returns:
            float: Value of the requested statistic at the newest datapoint

        Raises:
            NoDataError: If CloudWatch returned no datapoints
            FetchError: If the API call failed
        """
        end_time = now if now else datetime.now(timezone.utc)
        start_time = end_time - timedelta(seconds=WINDOW_SECONDS)

        try:
            response = self.cloudwatch_client.get_metric_statistics(
                Namespace=NAMESPACE,
                MetricName=metric.source_name,
                Dimensions=self._dimensions(shard_id),
                StartTime=start_time,
                EndTime=end_time,
                Period=PERIOD_SECONDS,
                Statistics=[metric.statistic.value]
            )
        except (ClientError, BotoCoreError) as e:
            raise FetchError(f"GetMetricStatistics failed for {metric.source_name}: {e}") from e

        datapoints = response.get('Datapoints', [])
        if not datapoints:
            raise NoDataError("fetched no datapoints")

        samples = (
            MetricSample(metric.statistic.extract(dp), dp['Timestamp'])
            for dp in datapoints
        )
        latest = latest_sample(samples)
        logger.debug(f"{shard_id} {metric.source_name} ({metric.statistic.value}): "
                     f"{len(datapoints)} datapoint(s), latest {latest.value} at {latest.timestamp}")
        return latest.value
