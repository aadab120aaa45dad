# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""AWS session and client construction"""

import logging
from typing import Optional, Tuple

import boto3
from botocore.exceptions import BotoCoreError

from kinesis_shard_metrics.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


def build_session(access_key_id: Optional[str] = None,
                  secret_access_key: Optional[str] = None,
                  region: Optional[str] = None) -> boto3.Session:
    """Create a boto3 session

    Static credentials are only used when both keys are given; otherwise the
    default credential chain (environment, shared config, instance role) applies.

    Args:
        access_key_id: AWS access key ID or None
        secret_access_key: AWS secret access key or None
        region: Region override or None for the configured default

    Returns:
        boto3.Session

    Raises:
        ConfigurationError: If the session cannot be created
    """
    kwargs = {}
    if access_key_id and secret_access_key:
        kwargs['aws_access_key_id'] = access_key_id
        kwargs['aws_secret_access_key'] = secret_access_key
        logger.debug("Using static credentials from options")
    if region:
        kwargs['region_name'] = region

    try:
        return boto3.Session(**kwargs)
    except BotoCoreError as e:
        raise ConfigurationError(f"Could not create AWS session: {e}") from e


def build_clients(access_key_id: Optional[str] = None,
                  secret_access_key: Optional[str] = None,
                  region: Optional[str] = None) -> Tuple[object, object]:
    """Create CloudWatch and Kinesis clients sharing one session

    Returns:
        tuple: (cloudwatch client, kinesis client)

    Raises:
        ConfigurationError: If the session or either client cannot be created
    """
    session = build_session(access_key_id, secret_access_key, region)
    try:
        cloudwatch = session.client('cloudwatch')
        kinesis = session.client('kinesis')
    except BotoCoreError as e:
        raise ConfigurationError(f"Could not create AWS clients: {e}") from e

    logger.debug(f"Clients created for region {session.region_name}")
    return cloudwatch, kinesis
