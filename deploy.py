#!/usr/bin/env python3
"""
Deploy the taxable token contract to a local contracting environment.

Usage:
    python deploy.py --supply 1000000000 --reward-pool alice --development-pool bob
    python deploy.py --liquidity-pool con_pair -v
"""

import sys
import argparse
import logging
from pathlib import Path

from contracting.client import ContractingClient

logger = logging.getLogger(__name__)

CONTRACT_NAME = "con_taxable_token"
CONTRACT_PATH = Path(__file__).resolve().parent / "con_taxable_token.py"
DEFAULT_SUPPLY = 1000000000


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )


def deploy(client: ContractingClient, initial_supply: int, reward_pool: str,
           development_pool: str, signer: str = "sys", name: str = CONTRACT_NAME,
           liquidity_pool: str = None):
    """
    Submit the token contract and return a handle to it.

    The signer becomes the owner and receives the whole supply. When
    ``liquidity_pool`` is given it is configured right after deployment so
    buys and sells against it are taxed from the first transfer.
    """
    with open(CONTRACT_PATH) as f:
        code = f.read()

    client.submit(
        code,
        name=name,
        signer=signer,
        constructor_args={
            "initial_supply": initial_supply,
            "reward_pool": reward_pool,
            "development_pool": development_pool,
        },
    )
    token = client.get_contract(name)
    logger.info(f"Token deployed to: {name} (owner {token.get_owner()})")
    logger.debug(f"Total supply in base units: {token.get_total_supply()}")

    if liquidity_pool:
        token.set_liquidity_pool(address=liquidity_pool, signer=signer)
        logger.info(f"Liquidity pool set to: {liquidity_pool}")

    return token


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Deploy the taxable token contract",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')
    parser.add_argument('--supply', type=int, default=DEFAULT_SUPPLY,
                        help='Initial supply in whole tokens')
    parser.add_argument('--signer', type=str, default='sys',
                        help='Deployer account, becomes the owner')
    parser.add_argument('--reward-pool', type=str, help='Reward pool address (defaults to the signer)')
    parser.add_argument('--development-pool', type=str,
                        help='Development pool address (defaults to the signer)')
    parser.add_argument('--liquidity-pool', type=str, help='Liquidity pool address to tax against')
    parser.add_argument('--name', type=str, default=CONTRACT_NAME, help='Contract name')

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        deploy(
            ContractingClient(),
            initial_supply=args.supply,
            reward_pool=args.reward_pool or args.signer,
            development_pool=args.development_pool or args.signer,
            signer=args.signer,
            name=args.name,
            liquidity_pool=args.liquidity_pool,
        )
    except KeyboardInterrupt:
        print("\n❌ Operation cancelled")
        sys.exit(1)
    except Exception as e:
        logging.error(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
