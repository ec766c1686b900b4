"""
Review scheduler CLI.

Usage:
    python -m srs.cli --db review_states.jsonl add <card_id>
    python -m srs.cli --db review_states.jsonl due [--as-of YYYY-MM-DD]
    python -m srs.cli --db review_states.jsonl show <card_id>
    python -m srs.cli --db review_states.jsonl preview <card_id>
    python -m srs.cli --db review_states.jsonl review <card_id> <rating> [--at ISO]
    python -m srs.cli --db review_states.jsonl remove <card_id>

<rating> is 0-5 or one of again/hard/good/easy.
"""

import argparse
import sys
from datetime import date

from srs.display import interval_display, relative_due
from srs.ratings import InvalidRating, Rating
from srs.scheduler import preview_intervals
from srs.storage import ReviewStateStore
from srs.timeutil import parse_datetime, utc_date


def _require_state(store, card_id):
    state = store.get_state(card_id)
    if state is None:
        print(f"Card not found: {card_id}")
        sys.exit(1)
    return state


def cmd_add(args):
    """Register a card with a fresh review state."""
    store = ReviewStateStore(args.db)
    state = store.add_card(args.card_id)
    print(f"Card {args.card_id} due {state.next_review_at.isoformat()}")


def cmd_due(args):
    """Show due cards."""
    store = ReviewStateStore(args.db)
    try:
        as_of = date.fromisoformat(args.as_of) if args.as_of else None
    except ValueError as e:
        print(f"Invalid --as-of date: {e}")
        sys.exit(1)
    due = store.get_due(as_of)
    if not due:
        print("No cards due today.")
        return
    print(f"\n{len(due)} card(s) due for review:\n")
    for i, (card_id, state) in enumerate(due, 1):
        print(f"  {i}. {card_id}")
        print(f"     due={state.next_review_at}  ease={state.easiness_factor:.2f}  "
              f"reps={state.repetition_count}  lapses={state.lapse_count}")


def cmd_show(args):
    """Show the review state for a card."""
    store = ReviewStateStore(args.db)
    state = _require_state(store, args.card_id)

    print(f"\nCard: {args.card_id}")
    print(f"  Due:        {state.next_review_at} ({relative_due(state.next_review_at)})")
    print(f"  Interval:   {state.interval_days}d")
    print(f"  Ease:       {state.easiness_factor:.2f}")
    print(f"  Reps:       {state.repetition_count}")
    print(f"  Lapses:     {state.lapse_count}")
    print(f"  Reviews:    {state.review_count}")
    last = state.last_reviewed_at.isoformat() if state.last_reviewed_at else 'never'
    print(f"  Last:       {last}")


def cmd_preview(args):
    """Show what each rating would schedule."""
    store = ReviewStateStore(args.db)
    state = _require_state(store, args.card_id)
    print(f"\nPreview for {args.card_id}:\n")
    for rating, projection in preview_intervals(state).items():
        label = interval_display(projection.state.interval_days)
        print(f"  {int(rating)} {rating.name.lower():<15} {label:>5}  due {projection.due_at}")


def cmd_review(args):
    """Record a rating for a card."""
    store = ReviewStateStore(args.db)
    _require_state(store, args.card_id)
    try:
        rating = Rating.parse(args.rating)
    except InvalidRating as e:
        print(str(e))
        sys.exit(1)
    try:
        reviewed_at = parse_datetime(args.at) if args.at else None
    except ValueError as e:
        print(f"Invalid --at timestamp: {e}")
        sys.exit(1)
    state = store.record_review(args.card_id, rating, reviewed_at)
    print(f"Rated {args.card_id} {int(rating)} ({rating.name.lower()}): "
          f"next review in {state.interval_days}d on {state.next_review_at} "
          f"({relative_due(state.next_review_at, utc_date(reviewed_at))})")


def cmd_remove(args):
    """Delete a card's review state."""
    store = ReviewStateStore(args.db)
    try:
        store.remove_card(args.card_id)
    except KeyError:
        print(f"Card not found: {args.card_id}")
        sys.exit(1)
    print(f"Removed {args.card_id}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Spaced repetition scheduler (SM-2)",
        prog="python -m srs.cli",
    )
    parser.add_argument(
        '--db', default='review_states.jsonl',
        help="Path to review state JSONL file (default: review_states.jsonl)",
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    add_parser = subparsers.add_parser('add', help='Register a new card')
    add_parser.add_argument('card_id', help='Card ID')

    due_parser = subparsers.add_parser('due', help='Show cards due for review')
    due_parser.add_argument('--as-of', default=None,
                            help='UTC date to check against (default: today)')

    show_parser = subparsers.add_parser('show', help='Show card review state')
    show_parser.add_argument('card_id', help='Card ID to display')

    preview_parser = subparsers.add_parser('preview', help='Preview intervals for each rating')
    preview_parser.add_argument('card_id', help='Card ID')

    review_parser = subparsers.add_parser('review', help='Rate a card')
    review_parser.add_argument('card_id', help='Card ID')
    review_parser.add_argument('rating', help='0-5 or again/hard/good/easy')
    review_parser.add_argument('--at', default=None,
                               help='Review timestamp, ISO-8601 (default: now)')

    remove_parser = subparsers.add_parser('remove', help='Delete a card')
    remove_parser.add_argument('card_id', help='Card ID')

    args = parser.parse_args(argv)

    if args.command == 'add':
        cmd_add(args)
    elif args.command == 'due':
        cmd_due(args)
    elif args.command == 'show':
        cmd_show(args)
    elif args.command == 'preview':
        cmd_preview(args)
    elif args.command == 'review':
        cmd_review(args)
    elif args.command == 'remove':
        cmd_remove(args)
    else:
        parser.print_help()


if __name__ == '__main__':
    main()
