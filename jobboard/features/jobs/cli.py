#!/usr/bin/env python3
"""Command-line interface for browsing the job board."""

import argparse
import asyncio
import sys
from typing import List, Optional

from jobboard.core.api_client import ApiClient
from jobboard.core.config import ClientConfig
from jobboard.core.logging import setup_logging
from jobboard.core.state import SINGLE_JOB, create_store
from jobboard.features.jobs.actions import fetch_single_job
from jobboard.features.jobs.page import CITIES, NICHES, JobsPage, Notifier, render_job_card

logger = setup_logging('jobs_cli')


def _client_config(api_url: Optional[str]) -> ClientConfig:
    config = ClientConfig.from_env()
    if api_url:
        config = config.model_copy(update={"base_url": api_url.rstrip("/")})
    return config


async def list_jobs(args) -> int:
    store = create_store()
    notifier = Notifier(sink=lambda message: print(f"Error: {message}", file=sys.stderr))
    async with ApiClient(_client_config(args.api_url)) as client:
        page = JobsPage(store, client, notifier)
        snapshot = await page.apply_filters(
            city=args.city or "",
            niche=args.niche or "",
            search_keyword=args.search or "",
        )
        print(page.render(), end="")
        page.unmount()
    return 1 if notifier.messages and not snapshot.data else 0


async def show_job(args) -> int:
    store = create_store()
    async with ApiClient(_client_config(args.api_url)) as client:
        snapshot = await fetch_single_job(store, client, args.job_id)
    if snapshot.error:
        print(f"Error: {snapshot.error}", file=sys.stderr)
        return 1
    job = store[SINGLE_JOB].data
    print("\n".join(render_job_card(job)))
    for label, value in (
        ("Type", job.job_type),
        ("Niche", job.job_niche),
        ("Introduction", job.introduction),
        ("Responsibilities", job.responsibilities),
        ("Qualifications", job.qualifications),
        ("Offers", job.offers),
    ):
        if value:
            print(f"  {label}: {value}")
    return 0


async def check_health(args) -> int:
    async with ApiClient(_client_config(args.api_url)) as client:
        healthy = await client.health()
    print("Server is running" if healthy else "Server is not responding")
    return 0 if healthy else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Browse jobs on the job board')
    parser.add_argument('--api-url', help='Backend base address (or set JOBBOARD_API_URL)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    jobs_parser = subparsers.add_parser('jobs', help='List jobs matching filters')
    jobs_parser.add_argument('--city', choices=CITIES, help='City filter')
    jobs_parser.add_argument('--niche', choices=NICHES, help='Niche filter')
    jobs_parser.add_argument('--search', help='Search keyword')
    jobs_parser.set_defaults(handler=list_jobs)

    job_parser = subparsers.add_parser('job', help='Show one job')
    job_parser.add_argument('job_id', help='Job identifier')
    job_parser.set_defaults(handler=show_job)

    health_parser = subparsers.add_parser('health', help='Check the backend is reachable')
    health_parser.set_defaults(handler=check_health)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    args = build_parser().parse_args(argv)
    return asyncio.run(args.handler(args))


if __name__ == '__main__':
    sys.exit(main())
