#!/usr/bin/env python3
import sys
import logging
import argparse
from typing import Callable, Dict, List, Optional

from s3io.config import Config, log_level
from s3io.errors import ConfigError, KeyNotFound, S3IOError, UsageError
from s3io.operations import delete, download, ensure_bucket, list_keys, make_client, upload

log = logging.getLogger(__name__)

PROG = "s3"
CREATE_BUCKET_FLAG = "--create-bucket"
PACKAGE_LOGGER = "s3io"
SYNOPSIS = f"{PROG} [upload|download|delete|list] [file ...]"
USAGE = f"usage: {SYNOPSIS}"


class UsageParser(argparse.ArgumentParser):
    """ArgumentParser that reports every parse failure as the fixed usage line."""

    def error(self, message):
        raise UsageError(message)


def build_parsers() -> Dict[str, argparse.ArgumentParser]:
    def parser(command: str, description: str) -> argparse.ArgumentParser:
        return UsageParser(prog=f"{PROG} {command}", usage=SYNOPSIS, description=description,
                           add_help=False, allow_abbrev=False)

    parsers = {}
    p = parsers["upload"] = parser("upload", "Upload local files, keyed by basename.")
    p.add_argument(CREATE_BUCKET_FLAG, action="store_true",
                   help="Create AWS_BUCKET in AWS_REGION first if it does not exist.")
    p.add_argument("files", nargs="+")

    p = parsers["download"] = parser("download", "Download objects to local paths equal to their keys.")
    p.add_argument("files", nargs="+")

    p = parsers["delete"] = parser("delete", "Delete objects by key.")
    p.add_argument("files", nargs="+")

    parsers["list"] = parser("list", "Print every key in the bucket, one per line.")
    return parsers


def parse_invocation(argv: List[str]) -> argparse.Namespace:
    """
    The subcommand is split off by hand and every later argument is a file
    name, even one starting with '-'. Only upload's exact --create-bucket
    flag, ahead of the first file, is read as an option.
    """
    parsers = build_parsers()
    if not argv or argv[0] not in parsers:
        raise UsageError("unknown or missing subcommand")
    command, rest = argv[0], list(argv[1:])
    flags = []
    if command == "upload":
        while rest and rest[0] == CREATE_BUCKET_FLAG:
            flags.append(rest.pop(0))
    if rest:
        rest = ["--"] + rest
    args = parsers[command].parse_args(flags + rest)
    args.command = command
    return args


# -------- Commands --------
def run_upload(client, config: Config, args: argparse.Namespace) -> None:
    if args.create_bucket:
        ensure_bucket(client, config)
    for path in args.files:
        upload(client, config, path)


def run_download(client, config: Config, args: argparse.Namespace) -> None:
    for key in args.files:
        download(client, config, key)


def run_delete(client, config: Config, args: argparse.Namespace) -> None:
    for key in args.files:
        delete(client, config, key)


def run_list(client, config: Config, args: argparse.Namespace) -> None:
    for key in list_keys(client, config):
        print(key)


COMMANDS: Dict[str, Callable[..., None]] = {
    "upload": run_upload,
    "download": run_download,
    "delete": run_delete,
    "list": run_list,
}


def die(message: str) -> int:
    print(f"{PROG}: {message}", file=sys.stderr)
    return 1


def failure_message(command: str, err: S3IOError) -> str:
    # a missing key already names bucket/key, so it reads "download b/k: ..."
    if isinstance(err, KeyNotFound):
        return f"{command} {err}"
    return f"{command}: {err}"


def main(argv: Optional[List[str]] = None) -> int:
    try:
        args = parse_invocation(sys.argv[1:] if argv is None else argv)
    except UsageError:
        print(USAGE, file=sys.stderr)
        return 1

    # root stays at WARNING so botocore and boto3 keep quiet
    logging.basicConfig()
    logging.getLogger(PACKAGE_LOGGER).setLevel(log_level())

    try:
        config = Config.from_env()
    except ConfigError as e:
        return die(str(e))
    log.debug(f"command={args.command} bucket={config.bucket} region={config.region}")

    try:
        client = make_client(config)
        COMMANDS[args.command](client, config, args)
    except S3IOError as e:
        return die(failure_message(args.command, e))
    return 0


if __name__ == "__main__":
    sys.exit(main())
