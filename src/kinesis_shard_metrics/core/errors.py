# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Exceptions raised by the shard metrics plugin"""


class KinesisShardMetricsError(Exception):
    """Base class for plugin errors"""


class ConfigurationError(KinesisShardMetricsError):
    """AWS session or clients could not be built"""


class FetchError(KinesisShardMetricsError):
    """A remote AWS call failed"""


class NoDataError(FetchError):
    """CloudWatch returned no datapoints for the requested window"""
