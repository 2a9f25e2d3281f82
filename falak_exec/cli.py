import asyncio
import sys
import argparse

from falak_exec.controller import run_workflow
from .workflows.fetch_news import execute_fetch_news_workflow
from .workflows.news_agent import execute_news_agent_workflow
from .workflows.publish_latest import execute_publish_workflow


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return number


def setup_argparser():
    """Set up command line argument parser."""
    parser = argparse.ArgumentParser(description="FalakTech news pipeline CLI")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    fetch_news_parser = subparsers.add_parser("fetch-news", help="Fetch, translate and save articles from all digest sources")
    fetch_landing_parser = subparsers.add_parser("fetch-landing", help="Replace the landing page articles with a fresh set")
    for sub in (fetch_news_parser, fetch_landing_parser):
        sub.add_argument("--output_dir", "--output-dir", dest="output_dir", help="Directory for generated articles")
        sub.add_argument("--article_delay", "--article-delay", dest="article_delay", type=float, help="Seconds to wait between articles")
        sub.add_argument("--skip_enrichment", "--skip-enrichment", dest="skip_enrichment", action="store_true", help="Save untranslated articles without calling the model")

    news_agent_parser = subparsers.add_parser("news-agent", help="Write full Malay article pages for the latest NASA news")
    news_agent_parser.add_argument("--output_dir", "--output-dir", dest="output_dir", help="Directory for generated articles")
    news_agent_parser.add_argument("--limit", type=non_negative_int, help="Number of feed items to process")

    post_parser = subparsers.add_parser("post-telegram", help="Post the latest article to the Telegram channel")
    post_parser.add_argument("--output_dir", "--output-dir", dest="output_dir", help="Directory of generated articles")
    post_parser.add_argument("--dry_run", "--dry-run", dest="dry_run", action="store_true", help="Log the message instead of sending it")

    return parser


def main():
    """Main CLI entry point."""
    parser = setup_argparser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command in ("fetch-news", "fetch-landing"):
        landing = args.command == "fetch-landing"
        input_data = {
            "output_dir": args.output_dir,
            "article_delay": args.article_delay,
            "skip_enrichment": args.skip_enrichment,
        }

        exit_code = asyncio.run(run_workflow(
            command_name=args.command,
            input_data=input_data,
            workflow_func=lambda: execute_fetch_news_workflow(
                variant="landing" if landing else "digest",
                output_dir=args.output_dir,
                clean_output_dir=landing,
                skip_enrichment=args.skip_enrichment,
                article_delay=args.article_delay,
            ),
        ))

    elif args.command == "news-agent":
        input_data = {"output_dir": args.output_dir, "limit": args.limit}

        exit_code = asyncio.run(run_workflow(
            command_name="news-agent",
            input_data=input_data,
            workflow_func=lambda: execute_news_agent_workflow(args.output_dir, args.limit),
        ))

    elif args.command == "post-telegram":
        input_data = {"output_dir": args.output_dir, "dry_run": args.dry_run}

        exit_code = asyncio.run(run_workflow(
            command_name="post-telegram",
            input_data=input_data,
            workflow_func=lambda: execute_publish_workflow(args.output_dir, args.dry_run),
        ))

    else:
        parser.print_help()
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
