"""CLI entry point for Feedlizer."""

import argparse
import asyncio
import logging
from typing import Optional

from .api.client import FeedlizerClient
from .errors import ProviderError


async def list_articles(count: int, refresh: bool = False):
    """Print articles waiting for review."""
    async with FeedlizerClient() as client:
        try:
            articles = await client.get_articles(count=count, refresh=refresh)
        except ProviderError as e:
            print(f"Error: {e}")
            return 1

        print(f"{len(articles)} article(s):")
        print("-" * 50)
        for article in articles:
            source = article.source.title or "unknown source"
            print(f"{article.title} ({source})")
            print(f"   {article.url or '(no url)'}")
            print(f"   id: {article.id}")
            print()
        return 0


async def mark_read(article_id: str):
    async with FeedlizerClient() as client:
        try:
            result = await client.mark_read(article_id, call_id="cli")
        except ProviderError as e:
            print(f"Error: {e}")
            return 1
        print(result.message)
        return 0


async def add_bookmark(url: str, title: Optional[str] = None):
    """Save a URL to Instapaper."""
    async with FeedlizerClient() as client:
        try:
            await client.add_to_instapaper(url, title)
        except ProviderError as e:
            print(f"Error: {e}")
            return 1
        print(f"Saved to Instapaper: {title or url}")
        return 0


async def list_subscriptions():
    async with FeedlizerClient() as client:
        try:
            subscriptions = await client.list_subscriptions()
        except ProviderError as e:
            print(f"Error: {e}")
            return 1

        print("Subscriptions:")
        print("-" * 50)
        for sub in subscriptions:
            categories = ", ".join(sub.categories) or "uncategorized"
            print(f"{sub.title} [{categories}]")
            if sub.website:
                print(f"   {sub.website}")
        return 0


def main() -> int:
    """Main CLI function; returns the process exit code."""
    parser = argparse.ArgumentParser(description="Feedlizer CLI")
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    articles_parser = subparsers.add_parser('articles', help='List articles waiting for review')
    articles_parser.add_argument('--count', type=int, default=200, help='Number of articles to fetch')
    articles_parser.add_argument('--refresh', action='store_true', help='Bypass the article cache')

    mark_parser = subparsers.add_parser('mark-read', help='Mark an article as read')
    mark_parser.add_argument('article_id', help='Feed entry id')

    bookmark_parser = subparsers.add_parser('bookmark', help='Save a URL to Instapaper')
    bookmark_parser.add_argument('url', help='URL to save')
    bookmark_parser.add_argument('--title', help='Bookmark title')

    subparsers.add_parser('subscriptions', help='List feed subscriptions')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s"
    )

    commands = {
        "articles": lambda: list_articles(args.count, args.refresh),
        "mark-read": lambda: mark_read(args.article_id),
        "bookmark": lambda: add_bookmark(args.url, args.title),
        "subscriptions": list_subscriptions,
    }
    if args.command not in commands:
        parser.print_help()
        return 2

    try:
        return asyncio.run(commands[args.command]())
    except ProviderError as e:
        # Raised while building the client, before any command ran
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
