# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Kinesis Streams Shard Metrics - CloudWatch shard metrics plugin for mackerel-agent"""

from importlib.metadata import version

__version__ = version("kinesis-shard-metrics")
__all__ = ["__version__"]
