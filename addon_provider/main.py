import argparse
import asyncio
import json
import sys
import logging
from typing import List, Optional

import aiohttp

from addon_provider.config import load_settings, ProviderSettings
from addon_provider.application.provider import GitHubAddonProvider
from addon_provider.domain.exceptions import AddonProviderException
from addon_provider.domain.models import WowClientType
from addon_provider.infrastructure.gateway import ForgeGateway
from addon_provider.infrastructure.github_client import GitHubRestClient

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger(__name__)


def build_provider(settings: ProviderSettings) -> GitHubAddonProvider:
    client = GitHubRestClient(
        token=settings.github_token,
        product_name=settings.product_name,
        product_version=settings.product_version,
        api_url=settings.api_url,
        timeout=aiohttp.ClientTimeout(total=settings.request_timeout),
    )
    return GitHubAddonProvider(gateway=ForgeGateway(client), max_concurrency=settings.max_concurrency)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve GitHub-hosted addons to installable release assets.")
    parser.add_argument("addons", nargs="+", help="Addon ids (/owner/name) or repository URLs")
    parser.add_argument(
        "--client",
        choices=[client_type.value for client_type in WowClientType],
        default=WowClientType.RETAIL.value,
        help="Game client flavor to pick assets for",
    )
    parser.add_argument("--channels", action="store_true", help="List the latest file of every channel")
    return parser.parse_args(argv)


async def run(provider: GitHubAddonProvider, args: argparse.Namespace) -> list:
    client_type = WowClientType(args.client)
    output = []

    addon_ids = []
    for addon in args.addons:
        if provider.is_valid_addon_uri(addon):
            preview = await provider.search_by_uri(addon, client_type)
            output.append(preview.model_dump(mode="json"))
        elif args.channels:
            files = await provider.get_channel_files(addon, client_type)
            output.append({"id": addon, "files": [f.model_dump(mode="json") for f in files]})
        else:
            addon_ids.append(addon)

    results = await provider.get_all(client_type, addon_ids)
    output.extend(result.model_dump(mode="json") for result in results)
    return output


async def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    provider = build_provider(load_settings())

    try:
        output = await run(provider, args)
    except AddonProviderException as e:
        logger.error(f"Could not resolve addons: {e}")
        return 1
    except aiohttp.ClientError as e:
        logger.exception(f"Request to GitHub failed: {e}")
        return 1

    print(json.dumps(output, indent=2))
    return 0


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
