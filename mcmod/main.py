"""
Main entry point for mcmod.

Handles CLI parsing, logging setup and error reporting.
"""

import argparse
import asyncio
from typing import Optional, Sequence

from .config import EulaConfig
from .errors import McmodError
from .project import Project
from .run import RunCommand, Side
from .sync import SyncCommand
from .utils import setup_logging, get_logger, Colors


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="mcmod",
        description="Sync a mod project into its Forge workspace and run it",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mcmod run                 Sync incrementally and launch the client
  mcmod run server --sync   Fully sync and launch the server
  mcmod sync --full         Only sync, recopying every file

Set MCMOD_EULA_AUTO_AGREE=true to skip the EULA prompt.
        """
    )

    parser.add_argument(
        '--project',
        default='.',
        metavar='DIR',
        help='Project directory containing mcmod.yaml (default: current directory)'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    run_parser = subparsers.add_parser('run', help='Sync and launch the client or server')
    run_parser.add_argument(
        'side',
        nargs='?',
        default=Side.CLIENT.value,
        choices=[side.value for side in Side],
        help='The side to run (default: client)'
    )
    run_parser.add_argument(
        '-s', '--sync',
        action='store_true',
        help='Whether to fully sync before running'
    )

    sync_parser = subparsers.add_parser('sync', help='Sync the project without running it')
    sync_parser.add_argument(
        '--full',
        action='store_true',
        help='Recopy every file instead of only changed ones'
    )

    return parser


async def dispatch(args: argparse.Namespace) -> None:
    """Run the selected subcommand."""
    if args.command == 'run':
        command = RunCommand(
            side=Side(args.side),
            sync=args.sync,
            eula_config=EulaConfig.from_env(),
        )
        await command.run(args.project)
    elif args.command == 'sync':
        await SyncCommand(incremental=not args.full).run(args.project)


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Load the project first so logging can go to its log file
    try:
        project = Project.new_in(args.project)
    except McmodError as e:
        print(f"[mcmod] {Colors.error('Error:')} {e}")
        return 1

    log_level = "DEBUG" if args.debug else project.config.logging.level
    setup_logging(log_file=project.config.log_file, level=log_level)

    logger = get_logger()
    logger.info(f"mcmod {args.command} starting in {project.root}")

    try:
        asyncio.run(dispatch(args))
    except (McmodError, OSError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"[mcmod] {Colors.error('Error:')} {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
        print(f"\n[mcmod] {Colors.warning('Interrupted')}")
        return 130

    logger.info(f"mcmod {args.command} finished")
    return 0
