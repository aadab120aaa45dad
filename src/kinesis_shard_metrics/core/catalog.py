# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Shard-level CloudWatch metrics collected for a Kinesis stream"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

NAMESPACE = 'AWS/Kinesis'


class Statistic(Enum):
    """CloudWatch statistic requested for a metric"""

    AVERAGE = 'Average'
    MAXIMUM = 'Maximum'
    MINIMUM = 'Minimum'

    def extract(self, datapoint: Dict) -> float:
        """Read this statistic's value from a GetMetricStatistics datapoint"""
        return float(datapoint[self.value])


@dataclass(frozen=True)
class MetricDefinition:
    """One CloudWatch metric and the key it is reported under

    Attributes:
        source_name: CloudWatch metric name in the AWS/Kinesis namespace
        output_name: Name emitted to the agent
        statistic: Statistic requested from CloudWatch
        category: Graph group the metric belongs to
    """

    source_name: str
    output_name: str
    statistic: Statistic
    category: str

    def key(self, shard_id: str) -> str:
        """Build the result key for this metric on a shard"""
        return f"{self.category}.{shard_id}.{self.output_name}"


METRIC_CATALOG: Tuple[MetricDefinition, ...] = (
    MetricDefinition('OutgoingBytes', 'GetRecordsBytes', Statistic.AVERAGE, 'bytes'),
    MetricDefinition('IteratorAgeMilliseconds', 'GetRecordsDelayMaxMilliseconds', Statistic.MAXIMUM, 'iteratorage'),
    MetricDefinition('IteratorAgeMilliseconds', 'GetRecordsDelayMinMilliseconds', Statistic.MINIMUM, 'iteratorage'),
    MetricDefinition('IteratorAgeMilliseconds', 'GetRecordsDelayAverageMilliseconds', Statistic.AVERAGE, 'iteratorage'),
    MetricDefinition('OutgoingRecords', 'GetRecordsRecords', Statistic.AVERAGE, 'records'),
    MetricDefinition('IncomingBytes', 'IncomingBytes', Statistic.AVERAGE, 'bytes'),
    MetricDefinition('IncomingRecords', 'IncomingRecords', Statistic.AVERAGE, 'records'),
    MetricDefinition('ReadProvisionedThroughputExceeded', 'ReadThroughputExceeded', Statistic.AVERAGE, 'pending'),
    MetricDefinition('WriteProvisionedThroughputExceeded', 'WriteThroughputExceeded', Statistic.AVERAGE, 'pending'),
)
