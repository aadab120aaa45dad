#!/usr/bin/env python3
# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Tests for CloudWatch latest-point fetching"""

import sys
import os
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from kinesis_shard_metrics.core.catalog import MetricDefinition, Statistic
from kinesis_shard_metrics.core.errors import FetchError, NoDataError
from kinesis_shard_metrics.core.metrics_fetcher import (
    CloudWatchMetricsFetcher,
    MetricSample,
    latest_sample,
)

NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
T1 = NOW - timedelta(minutes=3)
T2 = NOW - timedelta(minutes=2)
T3 = NOW - timedelta(minutes=1)

ITERATOR_MAX = MetricDefinition('IteratorAgeMilliseconds', 'GetRecordsDelayMaxMilliseconds', Statistic.MAXIMUM, 'iteratorage')


def _fetcher(datapoints):
    client = MagicMock()
    client.get_metric_statistics.return_value = {'Label': 'IteratorAgeMilliseconds', 'Datapoints': datapoints}
    return CloudWatchMetricsFetcher(client, 'my-stream'), client


@pytest.mark.parametrize('order', [(0, 1, 2), (2, 1, 0), (1, 2, 0), (2, 0, 1)])
def test_latest_timestamp_wins_regardless_of_order(order):
    """The value at t3 is returned whatever order CloudWatch uses"""
    points = [
        {'Timestamp': T1, 'Maximum': 10.0},
        {'Timestamp': T2, 'Maximum': 20.0},
        {'Timestamp': T3, 'Maximum': 30.0},
    ]
    fetcher, _ = _fetcher([points[i] for i in order])

    assert fetcher.get_last_point(ITERATOR_MAX, 'shardId-000000000000', now=NOW) == 30.0


def test_equal_timestamps_last_seen_wins():
    """Duplicate newest timestamps resolve to the last one in iteration order"""
    samples = [MetricSample(1.0, T3), MetricSample(2.0, T1), MetricSample(3.0, T3)]
    assert latest_sample(samples).value == 3.0


def test_latest_sample_empty():
    assert latest_sample([]) is None


@pytest.mark.parametrize('statistic,expected', [
    (Statistic.AVERAGE, 5.0),
    (Statistic.MAXIMUM, 9.0),
    (Statistic.MINIMUM, 1.0),
])
def test_statistic_field_is_extracted(statistic, expected):
    metric = MetricDefinition('IteratorAgeMilliseconds', 'Delay', statistic, 'iteratorage')
    fetcher, _ = _fetcher([{'Timestamp': T3, 'Average': 5.0, 'Maximum': 9.0, 'Minimum': 1.0}])

    assert fetcher.get_last_point(metric, 'shardId-000000000000', now=NOW) == expected


def test_request_parameters():
    """Query covers the trailing 3 minutes at 60s period with both dimensions"""
    fetcher, client = _fetcher([{'Timestamp': T3, 'Maximum': 1.0}])

    fetcher.get_last_point(ITERATOR_MAX, 'shardId-000000000001', now=NOW)

    kwargs = client.get_metric_statistics.call_args.kwargs
    assert kwargs['Namespace'] == 'AWS/Kinesis'
    assert kwargs['MetricName'] == 'IteratorAgeMilliseconds'
    assert kwargs['Dimensions'] == [
        {'Name': 'StreamName', 'Value': 'my-stream'},
        {'Name': 'ShardId', 'Value': 'shardId-000000000001'},
    ]
    assert kwargs['StartTime'] == NOW - timedelta(seconds=180)
    assert kwargs['EndTime'] == NOW
    assert kwargs['Period'] == 60
    assert kwargs['Statistics'] == ['Maximum']


def test_no_datapoints_raises_no_data():
    fetcher, _ = _fetcher([])

    with pytest.raises(NoDataError):
        fetcher.get_last_point(ITERATOR_MAX, 'shardId-000000000000', now=NOW)


def test_api_error_raises_fetch_error():
    client = MagicMock()
    client.get_metric_statistics.side_effect = ClientError(
        {'Error': {'Code': 'Throttling', 'Message': 'Rate exceeded'}}, 'GetMetricStatistics'
    )
    fetcher = CloudWatchMetricsFetcher(client, 'my-stream')

    with pytest.raises(FetchError) as exc_info:
        fetcher.get_last_point(ITERATOR_MAX, 'shardId-000000000000', now=NOW)
    assert not isinstance(exc_info.value, NoDataError)
    assert client.get_metric_statistics.call_count == 1
