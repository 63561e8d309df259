import argparse
from contextlib import ExitStack
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import (
    DistributorConfig,
    EnvDefaults,
    load_env_defaults,
    resolve_output_paths,
)
from .distributor import ChunkedRoundRobinDistributor
from .errors import ConfigurationError, DistributorError
from .logging_config import configure_logging, logger
from .sinks import open_sinks
from .sources import FileLineSource
from .stats import DistributionStats

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130


def build_cli(defaults: Optional[EnvDefaults] = None) -> argparse.ArgumentParser:
    if defaults is None:
        defaults = EnvDefaults()
    p = argparse.ArgumentParser(
        prog="line-distributor",
        description="Distributes chunks of lines from an input file or stdin "
                    "to multiple output files, round-robin.")
    p.add_argument("--version", action="version",
                   version=f"%(prog)s {__version__}")
    p.add_argument(
        "--log-level",
        default=defaults.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging verbosity (default: $LOG_LEVEL or INFO)",
    )
    p.add_argument("--input", type=Path, default=None,
                   help="Path to the input file (default: stdin)")

    outs = p.add_mutually_exclusive_group()
    outs.add_argument(
        "--num-output-files", type=int, default=None,
        help=f"Number of output files to generate (default: {defaults.num_outputs})")
    outs.add_argument(
        "--outputs", nargs="+", type=Path, default=None, metavar="PATH",
        help="Explicit output paths; their count sets the number of outputs")
    p.add_argument(
        "--output-template", default=None,
        help="Template for output file names; '{}' becomes the 1-based index "
             f"(default: {defaults.output_template})")

    p.add_argument(
        "--chunk-size", type=int, default=defaults.chunk_size,
        help=f"Number of contiguous lines per chunk (default: {defaults.chunk_size})")
    p.add_argument(
        "--compress", action=argparse.BooleanOptionalAction,
        default=defaults.compress,
        help="Gzip-compress every output (default: off)")
    p.add_argument(
        "--compresslevel", type=int, default=defaults.compresslevel,
        help=f"Gzip level 0-3 (default: {defaults.compresslevel})")
    p.add_argument(
        "--status-interval", type=float, default=defaults.status_interval,
        help="Seconds between status logs (default: 0 = disabled)")
    return p


def config_from_args(
    args: argparse.Namespace,
    defaults: Optional[EnvDefaults] = None,
) -> DistributorConfig:
    if defaults is None:
        defaults = EnvDefaults()
    if args.outputs is not None:
        if args.output_template is not None:
            raise ConfigurationError(
                "--output-template cannot be combined with --outputs")
        outputs: List[Path] = resolve_output_paths(paths=args.outputs)
    else:
        outputs = resolve_output_paths(
            count=args.num_output_files
            if args.num_output_files is not None else defaults.num_outputs,
            template=args.output_template
            if args.output_template is not None else defaults.output_template,
        )
    return DistributorConfig(
        outputs=outputs,
        input=args.input,
        chunk_size=args.chunk_size,
        compress=args.compress,
        compresslevel=args.compresslevel,
        status_interval=args.status_interval,
    )


def run(config: DistributorConfig) -> DistributionStats:
    """Open the input and every sink, distribute, then release everything."""
    logger.info(
        "Distributing %s into %d output(s) (chunk_size=%d, compress=%s)",
        config.input or "<stdin>",
        config.num_outputs,
        config.chunk_size,
        config.compress,
    )
    with ExitStack() as stack:
        source = stack.enter_context(FileLineSource(config.input))
        sinks = open_sinks(
            config.outputs,
            stack,
            compress=config.compress,
            compresslevel=config.compresslevel,
        )
        distributor = ChunkedRoundRobinDistributor(
            sinks,
            chunk_size=config.chunk_size,
            status_interval=config.status_interval,
        )
        return distributor.run(source.lines())


def main(argv: Optional[List[str]] = None) -> int:
    try:
        defaults = load_env_defaults()
    except ConfigurationError as exc:
        configure_logging()
        logger.error("Configuration error: %s", exc)
        return EXIT_CONFIG_ERROR

    parser = build_cli(defaults)
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = config_from_args(args, defaults)
        stats = run(config)
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return EXIT_CONFIG_ERROR
    except DistributorError as exc:
        logger.error("%s failed: %s", type(exc).__name__, exc)
        return EXIT_IO_ERROR
    except KeyboardInterrupt:
        logger.warning("Interrupted.")
        return EXIT_INTERRUPTED

    logger.info("\n%s", stats.summary(config.outputs))
    return EXIT_OK
