from typing import List
import argparse
import json
import aiohttp
import asyncio
import logging

logger = logging.getLogger(__name__)

from social.graze.addr.resolve.address import AddressResolver, default_strategies
from social.graze.addr.resolve.exceptions import InvalidIdentifierException
from social.graze.addr.resolve.strategy import (
    DEFAULT_DOMAIN_REGISTRY_URL,
    DEFAULT_NAME_SERVICE_URL,
    DEFAULT_WALLET_PROFILE_ADDRESS_KEY,
    DEFAULT_WALLET_PROFILE_URL,
)


async def realMain() -> None:
    parser = argparse.ArgumentParser(
        prog="addr-resolve", description="Resolve identifiers to Solana addresses"
    )
    parser.add_argument("identifier", nargs="+", help="The identifier(s) to resolve.")
    parser.add_argument(
        "--name-service-url",
        default=DEFAULT_NAME_SERVICE_URL,
        help="URL template for resolving .sol names.",
    )
    parser.add_argument(
        "--domain-registry-url",
        default=DEFAULT_DOMAIN_REGISTRY_URL,
        help="URL template for looking up domain owners.",
    )
    parser.add_argument(
        "--wallet-profile-url",
        default=DEFAULT_WALLET_PROFILE_URL,
        help="URL template for looking up wallet profiles.",
    )
    parser.add_argument(
        "--address-key",
        default=DEFAULT_WALLET_PROFILE_ADDRESS_KEY,
        help="The wallet profile address entry to use.",
    )

    args = vars(parser.parse_args())

    identifiers: List[str] = args.get("identifier", [])

    resolver = AddressResolver(
        default_strategies(
            name_service_url=args["name_service_url"],
            domain_registry_url=args["domain_registry_url"],
            wallet_profile_url=args["wallet_profile_url"],
            wallet_profile_address_key=args["address_key"],
        )
    )

    async with aiohttp.ClientSession() as session:
        for identifier in identifiers:
            try:
                result = await resolver.resolve(session, identifier)
                print(f"{identifier} {json.dumps(result.response_body())}")
            except InvalidIdentifierException:
                logging.exception("Invalid identifier %r", identifier)


def main() -> None:
    asyncio.run(realMain())


if __name__ == "__main__":
    main()
