#!/usr/bin/env python3
"""
Main entry point for the contract cloner.

This script orchestrates the clone workflow:
1. Parse command-line arguments
2. Resolve the chain and API key
3. Fetch and normalize the verified source
4. Write the Foundry project
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from contract_cloner import __version__
from contract_cloner.chains import CHAIN_ALIASES, EXPLORERS
from contract_cloner.chains.constants import API_KEY_SIGNUP_URLS
from contract_cloner.config import Settings
from contract_cloner.errors import ConfigurationError, ContractClonerError
from contract_cloner.pipeline import clone_contract

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def _epilog() -> str:
    aliases = '\n'.join(
        f"  {alias:<6} {EXPLORERS[chain_id][0]} (chain id {chain_id})"
        for alias, chain_id in sorted(CHAIN_ALIASES.items())
    )
    chain_ids = ', '.join(str(chain_id) for chain_id in sorted(EXPLORERS))
    key_urls = '\n'.join(f"  {var:<18} {url}" for var, url in API_KEY_SIGNUP_URLS.items())
    return f"""
You can specify the chain by alias or by id. Supported aliases:
{aliases}

Supported chain ids: {chain_ids}

Environment Variables (can also be set in .env file):
{key_urls}
  CLONER_TIMEOUT     Request timeout in seconds (default: 30)
  FORGE_BIN          forge executable (default: forge)

Only the API key variable of the selected chain is read.

Exit codes: 0 success, 2 configuration/input, 3 network, 4 explorer rejected,
5 unparseable response, 6 filesystem, 7 forge init failed.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='clone-contract',
        description='Clone a verified contract from Etherscan/Basescan into a new Foundry project',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=_epilog(),
    )
    parser.add_argument('chain', help='Chain id or alias, for more info see below')
    parser.add_argument('address', help='Address of the contract to clone')
    parser.add_argument('path', type=Path, help='Path to clone the contract to')
    parser.add_argument(
        '--api-key',
        default=None,
        help="Explorer API key (default: the chain's API key environment variable)"
    )
    parser.add_argument(
        '--timeout',
        type=float,
        default=None,
        help='Request timeout in seconds (env: CLONER_TIMEOUT, default: 30)'
    )
    parser.add_argument(
        '--forge-bin',
        default=None,
        help='forge executable (env: FORGE_BIN, default: forge)'
    )
    parser.add_argument(
        '--no-init',
        action='store_true',
        default=False,
        help='Only write the sources, do not run forge init'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        default=False,
        help='Enable debug logging'
    )
    parser.add_argument(
        '--quiet',
        action='store_true',
        default=False,
        help='Only log errors'
    )
    parser.add_argument(
        '--log-file',
        type=Path,
        default=None,
        help='Also write the log to this file'
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def configure_logging(debug: bool = False, quiet: bool = False, log_file: Path = None) -> None:
    if debug:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.INFO

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)


def main(argv=None) -> int:
    """Main entry point."""
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        try:
            configure_logging(args.debug, args.quiet, args.log_file)
        except OSError as e:
            raise ConfigurationError(f"cannot open log file {args.log_file}: {e}")

        settings = Settings.from_env()
        overrides = {'init_project': not args.no_init}
        if args.timeout is not None:
            overrides['timeout'] = args.timeout
        if args.forge_bin:
            overrides['forge_binary'] = args.forge_bin
        settings = settings.model_copy(update=overrides)
        if settings.timeout <= 0:
            raise ConfigurationError('timeout must be positive')

        result = clone_contract(
            args.chain,
            args.address,
            args.path,
            api_key=args.api_key,
            settings=settings,
        )
    except ContractClonerError as e:
        logger.debug("Clone failed", exc_info=True)
        print(f"error: {e.stage}: {e.kind}: {e}", file=sys.stderr)
        return e.exit_code

    logger.info(f"Wrote {len(result.files_written)} source file(s) to {result.destination}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
