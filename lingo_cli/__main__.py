"""CLI interface for Lingo.

Usage:
    python -m lingo_cli add "serendipity"          Generate study material and add a word
    python -m lingo_cli add "chat" -t "cat"        Add a word without calling the LLM
    python -m lingo_cli review                     Start a review session
    python -m lingo_cli due                        Show how many words are due
    python -m lingo_cli list                       List all words
    python -m lingo_cli stats                      Show your statistics
"""

import argparse
import asyncio
import logging
from collections import Counter

from agents.content_agent import ContentAgent, GenerationError
from lingo.config import utcnow
from lingo.database import async_session, init_db
from lingo.llm_client import get_llm_client
from lingo.srs.errors import InvalidRating, StorageError
from lingo.srs.queue import words_due_for_review
from lingo.srs.records import LexicalData, WordRecord
from lingo.srs.session import ReviewSession
from lingo.srs.stats import StatsAction
from lingo.storage import SqlStatsStore, SqlWordStore, StatsStore
from lingo.words import add_word, record_event

logger = logging.getLogger(__name__)

RATING_HELP = "  Ratings: 0=Forgot  3=Hard  4=Good  5=Easy  (any 0-5)   q=quit"


async def ensure_db() -> None:
    """Create tables if they don't exist."""
    await init_db()


def render_word(record: WordRecord, reveal: bool = True) -> str:
    """Format a word for the terminal."""
    header = f"  {record.word}"
    if record.pronunciation:
        header += f"  {record.pronunciation}"
    if record.part_of_speech:
        header += f"  ({record.part_of_speech})"
    if not reveal:
        return header

    lines = [header]
    for label, value in (
        ("Translation", record.translation),
        ("Definition", record.definition),
        ("Mnemonic", record.mnemonic),
        ("Example", record.example_sentence),
    ):
        if value:
            lines.append(f"    {label + ':':<13} {value}")
    return "\n".join(lines)


def parse_quality(raw: str) -> int | None:
    """Parse a typed rating; None means the input was not a number."""
    raw = raw.strip()
    if not raw.lstrip("-").isdigit():
        return None
    return int(raw)


async def cmd_add(args: argparse.Namespace) -> None:
    """Add a new word, generating its study material unless given offline."""
    await ensure_db()

    if args.translation or args.definition:
        data = LexicalData(
            word=args.word,
            translation=args.translation or "",
            definition=args.definition or "",
        )
    else:
        llm = get_llm_client()
        try:
            data = ContentAgent(llm=llm).generate(args.word)
        except GenerationError as exc:
            print(f"  Could not generate '{args.word}': {exc}")
            return
        cost = llm.get_cost_estimate()
        print(
            f"  LLM cost estimate: ${cost['estimated_cost_usd']:.4f} "
            f"({cost['input_tokens']:,} in, {cost['output_tokens']:,} out)"
        )

    async with async_session() as db:
        record, created = await add_word(SqlWordStore(db), SqlStatsStore(db), data, utcnow())

    if not created:
        print(f"  '{record.word}' is already in your collection.")
    else:
        print(f"  Added (first review {record.next_review.date().isoformat()}):")
    print(render_word(record))


async def rate_current(session: ReviewSession, stats: StatsStore) -> bool:
    """Prompt until the current word is rated. Returns False if the user quits."""
    while True:
        raw = input("\n  Rate [0-5]: ").strip()
        if raw.lower() == "q":
            return False
        quality = parse_quality(raw)
        if quality is None:
            print(RATING_HELP)
            continue
        try:
            outcome = await session.rate(quality)
        except InvalidRating as exc:
            print(f"  {exc}")
            continue
        except StorageError as exc:
            print(f"  Could not save rating ({exc}); try again.")
            continue
        try:
            await record_event(stats, StatsAction.REVIEW, utcnow())
        except StorageError:
            logger.exception("Failed to update stats after rating %r", outcome.record.word)
            print("  Warning: rating saved, but today's stats could not be updated.")
        print(
            f"  Next review in {outcome.interval_days} day(s) "
            f"[{outcome.record.confidence.value}]\n"
        )
        return True


async def cmd_review(args: argparse.Namespace) -> None:
    """Run an interactive review session."""
    await ensure_db()

    async with async_session() as db:
        words = SqlWordStore(db)
        stats = SqlStatsStore(db)
        due = words_due_for_review(await words.load(), utcnow(), limit=args.max_words or None)

        if not due:
            print("\n  No words due for review. Great job!")
            return

        session = ReviewSession(store=words, clock=utcnow)
        session.start(due)

        print("\n  Review Session")
        print(f"  {session.total} word(s) due\n")
        print(RATING_HELP + "\n")

        while session.is_active:
            record = session.current
            print(f"  [{session.index + 1}/{session.total}]")
            print(render_word(record, reveal=False))
            answer = input("\n  Press enter to reveal (q to quit) ").strip()
            if answer.lower() == "q":
                break
            print(render_word(record))
            if not await rate_current(session, stats):
                break

    s = session.stats
    if session.is_complete:
        print("\n  Review session complete!")
    else:
        print("\n  Session ended early.")
    print(f"  Reviewed: {s.rated}  Passed: {s.passed}  Accuracy: {s.accuracy:.0%}\n")


async def cmd_due(args: argparse.Namespace) -> None:
    """Show how many words are due."""
    await ensure_db()
    async with async_session() as db:
        collection = await SqlWordStore(db).load()
    due = words_due_for_review(collection, utcnow())
    print(f"  {len(due)} of {len(collection)} words due for review")


async def cmd_list(args: argparse.Namespace) -> None:
    """List every word with its confidence and next review date."""
    await ensure_db()
    async with async_session() as db:
        collection = await SqlWordStore(db).load()

    if not collection:
        print("  No words yet. Add one with: python -m lingo_cli add WORD")
        return
    for record in collection:
        print(
            f"  {record.word:<24} {record.confidence.value:<9} "
            f"next {record.next_review.date().isoformat()}  {record.translation}"
        )


async def cmd_stats(args: argparse.Namespace) -> None:
    """Show learning statistics."""
    await ensure_db()
    async with async_session() as db:
        collection = await SqlWordStore(db).load()
        stats = await SqlStatsStore(db).load()

    due = words_due_for_review(collection, utcnow())
    by_confidence = Counter(r.confidence.value for r in collection)

    print("\n  Lingo Statistics")
    print(f"  {'Total words:':<20} {stats.total_words}")
    print(f"  {'Words today:':<20} {stats.words_today}")
    print(f"  {'Reviews today:':<20} {stats.reviews_today}")
    print(f"  {'Streak:':<20} {stats.streak} day(s)")
    print(f"  {'Due now:':<20} {len(due)}")
    print(f"  {'Learning:':<20} {by_confidence['learning']}")
    print(f"  {'Familiar:':<20} {by_confidence['familiar']}")
    print(f"  {'Mastered:':<20} {by_confidence['mastered']}")
    print()


def non_negative_int(raw: str) -> int:
    value = int(raw)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lingo",
        description="Vocabulary notebook with spaced repetition",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # add
    add_parser = subparsers.add_parser("add", help="Add a new word")
    add_parser.add_argument("word", help="The word to learn")
    add_parser.add_argument("-t", "--translation", default="", help="Translation (skips the LLM)")
    add_parser.add_argument("-d", "--definition", default="", help="Definition (skips the LLM)")

    # review
    review_parser = subparsers.add_parser("review", help="Start a review session")
    review_parser.add_argument("--max-words", type=non_negative_int, default=0, help="Max words (0 = all due)")

    subparsers.add_parser("due", help="Show words due for review")
    subparsers.add_parser("list", help="List all words")
    subparsers.add_parser("stats", help="Show your statistics")
    return parser


def main() -> None:
    """Entry point for the Lingo CLI application."""
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if not args.command:
        parser.print_help()
        return

    cmd_map = {
        "add": cmd_add,
        "review": cmd_review,
        "due": cmd_due,
        "list": cmd_list,
        "stats": cmd_stats,
    }

    asyncio.run(cmd_map[args.command](args))


if __name__ == "__main__":
    main()
