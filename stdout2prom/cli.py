"""Command line entry point.

    some_program | stdout2prom --config metrics.yml

Reads stdin line by line, updates the configured metrics, forwards lines to
stdout according to eatAll / eatMatches and serves the metrics over HTTP.

Exit Codes:
  0   input ended normally
  2   configuration error (nothing was processed)
  130 interrupted
"""
from __future__ import annotations

import argparse
import cProfile
import io
import logging
import os
import sys
import time
from typing import BinaryIO

from prometheus_client import CollectorRegistry

from .config import load_config
from .engine.processor import LineProcessor
from .engine.stream import run_stream
from .metrics.server import setup_metrics_server
from .utils.env_flags import env_str
from .utils.exceptions import ConfigError
from .utils.logging_utils import setup_logging
from .version import get_version

logger = logging.getLogger("stdout2prom")

EXIT_OK = 0
EXIT_CONFIG = 2
EXIT_INTERRUPTED = 130


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="stdout2prom", description="Takes your stdout and puts it into Prometheus")
    p.add_argument("--config", default=env_str("CONFIG", "metrics.yml"),
                   help="Config file (default: metrics.yml, env STDOUT2PROM_CONFIG)")
    p.add_argument("--debug", action="store_true", help="Display more of the inner workings")
    p.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                   default=None, help="Logging level (default: INFO, env STDOUT2PROM_LOG_LEVEL)")
    p.add_argument("--log-file", default=None, help="Also write logs to this file")
    p.add_argument("--cpuprofile", default="", help="Write cProfile stats for the processing loop to file")
    p.add_argument("--tardy", type=int, default=0, help="Hang around for X seconds after stdin closes")
    p.add_argument("--version", action="version", version=f"stdout2prom {get_version()}")
    return p.parse_args(argv)


def _resolve_level(args: argparse.Namespace) -> str:
    if args.debug:
        return "DEBUG"
    return args.log_level or env_str("LOG_LEVEL", "INFO")


def detach_closed_output(sink: BinaryIO) -> None:
    """Point a closed output's file descriptor at devnull.

    Bytes still buffered for the dead pipe would otherwise fail again when
    the interpreter flushes stdout at exit.
    """
    try:
        fd = sink.fileno()
    except (AttributeError, io.UnsupportedOperation):
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(devnull, fd)
    finally:
        os.close(devnull)


def run(args: argparse.Namespace, stdin: BinaryIO, stdout: BinaryIO,
        registry: CollectorRegistry | None = None) -> int:
    try:
        config = load_config(args.config)
        registry = registry if registry is not None else CollectorRegistry()
        processor = LineProcessor.from_config(config, registry)
        _, shutdown = setup_metrics_server(config.listen, config.path, registry)
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        return EXIT_CONFIG

    profiler = cProfile.Profile() if args.cpuprofile else None
    try:
        if profiler is not None:
            profiler.enable()
        stats = run_stream(processor, stdin, stdout)
        if stats.downstream_closed:
            detach_closed_output(stdout)
        if profiler is not None:
            profiler.disable()
            profiler.dump_stats(args.cpuprofile)
            logger.info("CPU profile written to %s", args.cpuprofile)
        logger.debug("processed %d line(s), forwarded %d", stats.lines, stats.forwarded)
        if args.tardy > 0:
            logger.info("Stdin closed, waiting %d seconds", args.tardy)
            time.sleep(args.tardy)
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return EXIT_INTERRUPTED
    finally:
        shutdown()
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(level=_resolve_level(args), log_file=args.log_file)
    return run(args, sys.stdin.buffer, sys.stdout.buffer)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
