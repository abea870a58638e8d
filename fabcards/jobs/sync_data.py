"""Refresh the bundled card data snapshot from upstream.

Downloads the five JSON files published by the community card database,
checks that they decode into a complete dataset, and only then replaces the
local copies. A failed download or a file that does not decode leaves the
existing snapshot untouched.

Usage:
    python -m fabcards.jobs.sync_data --data-dir fabcards/data/english
"""

import argparse
import asyncio
import logging
from pathlib import Path

import httpx

from fabcards.config import settings
from fabcards.models.failure import FailureKind, KnownError
from fabcards.services.loader import DATA_FILES, Dataset, load_dataset

logger = logging.getLogger(__name__)


class SyncError(KnownError):
    """Raised when an upstream file cannot be fetched."""

    def __init__(self, filename: str, reason: str):
        self.filename = filename
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message=f"Failed to download {filename}: {reason}",
            detail=reason,
            suggestion="Check FABCARDS_UPSTREAM_DATA_URL and network access.",
            status_code=502,
        )


def construct_data_url(filename: str, base_url: str | None = None) -> str:
    """Build the upstream URL of one data file.

    Args:
        filename: Data file name (e.g., "card.json")
        base_url: Upstream directory; defaults to settings.upstream_data_url

    Returns:
        Full URL of the file
    """
    base = (base_url or settings.upstream_data_url).rstrip("/")
    return f"{base}/{filename}"


async def fetch_file(client: httpx.AsyncClient, filename: str, base_url: str | None) -> bytes:
    """Fetch one data file.

    Raises:
        SyncError: On an HTTP error status or a transport failure
    """
    url = construct_data_url(filename, base_url)
    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise SyncError(filename, f"HTTP {e.response.status_code}") from e
    except httpx.RequestError as e:
        raise SyncError(filename, str(e)) from e

    logger.info("Fetched %s (%d bytes)", filename, len(response.content))
    return response.content


async def sync_data(data_dir: Path | None = None, base_url: str | None = None) -> Dataset:
    """Download, validate and write the data snapshot.

    Args:
        data_dir: Target directory; defaults to settings.data_dir
        base_url: Upstream directory; defaults to settings.upstream_data_url

    Returns:
        The decoded dataset that was written.

    Raises:
        SyncError: If any file cannot be fetched
        DataLoadError: If the fetched files do not decode
    """
    if data_dir is None:
        data_dir = settings.data_dir

    raw: dict[str, bytes] = {}
    async with httpx.AsyncClient(timeout=30.0) as client:
        for filename in DATA_FILES:
            raw[filename] = await fetch_file(client, filename, base_url)

    # Nothing is written unless the whole set decodes
    dataset = load_dataset(raw)

    data_dir.mkdir(parents=True, exist_ok=True)

    # Stage every file before touching the live snapshot
    staged: list[tuple[Path, Path]] = []
    try:
        for filename, content in raw.items():
            target = data_dir / filename
            staging = target.with_suffix(target.suffix + ".tmp")
            staging.write_bytes(content)
            staged.append((staging, target))
    except OSError:
        for staging, _ in staged:
            staging.unlink(missing_ok=True)
        raise

    for staging, target in staged:
        staging.replace(target)

    logger.info("Wrote %d data files to %s", len(raw), data_dir)
    return dataset


async def run_sync(data_dir: Path | None = None, base_url: str | None = None) -> None:
    """Sync the snapshot, logging the outcome."""
    logger.info("Syncing card data from %s", base_url or settings.upstream_data_url)

    try:
        dataset = await sync_data(data_dir, base_url)
    except KnownError as e:
        logger.error("Card data sync failed: %s", e.message)
        raise

    logger.info(
        "Card data sync complete: %d cards, %d sets",
        len(dataset.cards),
        len(dataset.sets),
    )


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Refresh the card data snapshot")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory to write files to (default: configured data_dir)",
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help="Upstream directory holding the JSON files",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_sync(args.data_dir, args.base_url))


if __name__ == "__main__":
    main()
