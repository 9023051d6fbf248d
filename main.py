#!/usr/bin/env python3
"""S3 Publisher - エントリーポイント"""
import argparse
import dataclasses
import sys

from s3_publisher import S3Publisher, Config, PublishError


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Upload files matching a glob pattern to an S3 bucket"
    )
    parser.add_argument(
        "--config",
        help="JSON configuration file (default: read PLUGIN_* environment variables)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="match and log files without uploading",
    )
    return parser.parse_args(argv)


def load_config(args) -> Config:
    """設定ファイルまたは環境変数から設定を読み込み"""
    if args.config:
        config = Config.from_file(args.config)
    else:
        config = Config.from_env()

    if args.dry_run and not config.upload.dry_run:
        config.upload = dataclasses.replace(config.upload, dry_run=True)
    return config


def main(argv=None) -> int:
    """メイン関数"""
    args = parse_args(argv)
    try:
        config = load_config(args)
        publisher = S3Publisher(config)
        successful, failed = publisher.run()
    except PublishError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        return 1

    # 終了コードを設定
    return 0 if failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
