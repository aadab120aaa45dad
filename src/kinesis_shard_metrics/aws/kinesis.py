# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""AWS Kinesis stream operations"""

import logging
from typing import List

from botocore.exceptions import BotoCoreError, ClientError

from kinesis_shard_metrics.core.errors import FetchError

logger = logging.getLogger(__name__)


def get_shard_ids(kinesis_client, stream_name: str) -> List[str]:
    """List the shard IDs of a stream

    Args:
        kinesis_client: boto3 Kinesis client
        stream_name: Kinesis stream name

    Returns:
        Shard IDs in the order DescribeStream reports them (may be empty)

    Raises:
        FetchError: If DescribeStream fails
    """
    shard_ids = []
    try:
        paginator = kinesis_client.get_paginator('describe_stream')
        for page in paginator.paginate(StreamName=stream_name):
            shards = page.get('StreamDescription', {}).get('Shards', [])
            shard_ids.extend(shard['ShardId'] for shard in shards)
    except (ClientError, BotoCoreError) as e:
        raise FetchError(f"Could not describe stream {stream_name}: {e}") from e

    logger.debug(f"Stream {stream_name} has {len(shard_ids)} shard(s)")
    return shard_ids
