# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""CLI entry point for kinesis-shard-metrics."""

import sys
import logging
import argparse

from kinesis_shard_metrics.core.errors import KinesisShardMetricsError

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog='kinesis-shard-metrics',
        description='Report Kinesis Data Streams shard metrics from CloudWatch to mackerel-agent'
    )
    parser.add_argument('--access-key-id', help='AWS Access Key ID')
    parser.add_argument('--secret-access-key', help='AWS Secret Access Key')
    parser.add_argument('--region', help='AWS Region')
    parser.add_argument('--identifier', help='Stream Name')
    parser.add_argument('--tempfile', help='Temp file name')
    parser.add_argument('--metric-key-prefix',
                        help='Metric key prefix (default: kinesis-streams-shard)')
    parser.add_argument('--config', help='YAML file with default values for the options above')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    return parser


def run(args):
    """Build the plugin from parsed arguments and print its output."""
    from kinesis_shard_metrics.aws.session import build_clients
    from kinesis_shard_metrics.core.options import PluginOptions
    from kinesis_shard_metrics.core.output_generator import OutputGenerator
    from kinesis_shard_metrics.core.plugin import KinesisStreamsShardPlugin
    from kinesis_shard_metrics.utils.paths import get_default_tempfile

    options = PluginOptions.from_args(args)
    if not options.identifier:
        logger.warning("No --identifier given; DescribeStream will be called without a stream name")

    cloudwatch, kinesis = build_clients(options.access_key_id, options.secret_access_key, options.region)

    plugin = KinesisStreamsShardPlugin(
        options.identifier,
        cloudwatch,
        kinesis,
        prefix=options.metric_key_prefix
    )
    tempfile = options.tempfile or get_default_tempfile(plugin.metric_key_prefix())

    OutputGenerator(plugin, tempfile=tempfile).run()


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(message)s'
    )

    try:
        run(args)
    except KeyboardInterrupt:
        logger.info("\nOperation cancelled by user.")
        sys.exit(1)
    except KinesisShardMetricsError as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
