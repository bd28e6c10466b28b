"""Main CLI entry point for reviewbot."""

import argparse
import sys
from pathlib import Path

import httpx
import trio
from rich.console import Console
from rich.table import Table

from ..config import WorkflowConfig
from ..github_client import GitHubClient
from ..repo import resolve_repo
from ..responses import ResponseType, classify, evaluate_defense, plan_reply
from ..review_config import ReviewConfig
from ..sizing import assess_size
from ..workflows import check_size, handle_response, perform_review, setup_logging

WORKFLOW_COMMANDS = ("size", "review", "respond")


async def run_workflow(command: str, config: WorkflowConfig, review_config: ReviewConfig) -> None:
    """Open a client for the configured repo and run one workflow."""
    repo = resolve_repo(config.repo)

    async with GitHubClient.from_config(config, repo) as client:
        if command == "size":
            await check_size(client, config, review_config)
        elif command == "review":
            await perform_review(client, config, review_config)
        elif command == "respond":
            await handle_response(client, config)


def print_analysis(text: str, console: Console) -> None:
    """Show how a reply would be classified and answered."""
    analysis = classify(text)
    plan = plan_reply(text, analysis)

    table = Table(title="Reply analysis", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Type", analysis.type.value)
    table.add_row("Sentiment", analysis.sentiment.value)
    table.add_row("Key points", "\n".join(analysis.key_points) or "-")
    table.add_row("Concerns", "\n".join(analysis.concerns) or "-")

    if analysis.type is ResponseType.DEFENSE:
        verdict = evaluate_defense(text)
        table.add_row("Score", f"{verdict.score:.2f}")
        table.add_row("Matched rules", ", ".join(verdict.matched_rules) or "-")
        table.add_row("Words", str(verdict.word_count))
        table.add_row("Resolve", "yes" if plan.resolve else "no")

    console.print(table)
    console.print("[bold]Reply:[/bold]")
    console.print(plan.body, markup=False)


def print_size(additions: int, deletions: int, review_config: ReviewConfig, console: Console) -> None:
    assessment = assess_size(additions, deletions, review_config.size_thresholds)

    table = Table(title="PR size", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Additions", str(additions))
    table.add_row("Deletions", str(deletions))
    table.add_row("Total changes", str(assessment.total_changes))
    table.add_row("Label", assessment.label)
    table.add_row("Comment", assessment.comment)
    console.print(table)


def main():
    """Main CLI entry point for reviewbot."""
    parser = argparse.ArgumentParser(
        prog="reviewbot",
        description="Automated pull request assistant",
        epilog="Run 'reviewbot <command> --help' for more information on a command.",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to reviewbot.yaml (default: auto-detect in current directory)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "size",
        help="Label the PR by size and post a summary comment",
        description="Reads GITHUB_TOKEN, REPOSITORY and PR_NUMBER from the environment.",
    )
    subparsers.add_parser(
        "review",
        help="Scan the PR diff and post review comments",
        description="Reads GITHUB_TOKEN, REPOSITORY and PR_NUMBER from the environment.",
    )
    subparsers.add_parser(
        "respond",
        help="Answer a committer's reply to a review comment",
        description=(
            "Reads GITHUB_TOKEN, REPOSITORY, PR_NUMBER, COMMENT_ID and optionally "
            "COMMENT_BODY and COMMENT_USER from the environment."
        ),
    )

    classify_parser = subparsers.add_parser(
        "classify",
        help="Classify a reply locally (no GitHub access)",
        description="Print the analysis and planned reply for a piece of text.",
    )
    classify_parser.add_argument(
        "text",
        type=str,
        nargs="?",
        default=None,
        help="Reply text (default: read from stdin)",
    )

    size_local_parser = subparsers.add_parser(
        "size-local",
        help="Compute a size label locally (no GitHub access)",
    )
    size_local_parser.add_argument("--additions", "-a", type=int, default=100)
    size_local_parser.add_argument("--deletions", "-d", type=int, default=50)

    args = parser.parse_args()
    console = Console()

    try:
        review_config = ReviewConfig.load(args.config)
    except (ValueError, OSError) as e:
        print(f"Error: invalid config: {e}", file=sys.stderr)
        sys.exit(1)

    if args.command in WORKFLOW_COMMANDS:
        config = WorkflowConfig.from_env()
        setup_logging(config.log_level)
        try:
            config.require("token")
            trio.run(run_workflow, args.command, config, review_config)
        except (ValueError, RuntimeError, httpx.HTTPError) as e:
            print(f"Error: {args.command} failed: {e}", file=sys.stderr)
            sys.exit(1)

    elif args.command == "classify":
        text = args.text if args.text is not None else sys.stdin.read()
        print_analysis(text, console)

    elif args.command == "size-local":
        print_size(args.additions, args.deletions, review_config, console)

    elif args.command is None:
        parser.print_help()
        sys.exit(0)

    else:
        print(f"Unknown command: {args.command}")
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
