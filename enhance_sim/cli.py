"""Command-line interface for the gear enhancement simulator."""
import argparse
import json
import logging
import sys

from .config import (
    DEFAULT_BATCH_ATTEMPTS,
    ENHANCE_COST,
    ENHANCEMENT_RULES,
    MAX_LEVEL,
    MIN_LEVEL,
    SimConfig,
)
from .engine import EnhancementEngine, attempt_cost, reach_target_probability
from .market_config import monetary_equivalent
from .models import SECONDARY_CURRENCIES, EnhancementStats
from .session import EnhancementSession
from .simulator import run_trials
from .utils import format_gold, format_percent

logger = logging.getLogger(__name__)


def print_enhancement_table() -> None:
    """Print the per-level rule table with material costs."""
    print("\n" + "=" * 64)
    print("  Enhancement Rates & Costs")
    print("=" * 64)
    print(f"{'Level':<8} {'Success':<10} {'Damage':<9} {'Fail':<6} {'Stone/Ore/Dust on success':<26}")
    print("-" * 64)

    for level, rule in ENHANCEMENT_RULES.items():
        cost = attempt_cost(min(MAX_LEVEL, level + 1))
        penalty = str(rule.failure_penalty) if rule.failure_penalty else "-"
        materials = f"{cost.enhancement_stone}/{cost.refined_ore}/{cost.mystic_dust}"
        print(
            f"+{level:<7} {format_percent(rule.success_rate):<10} "
            f"{format_percent(rule.damage_rate):<9} {penalty:<6} {materials:<26}"
        )

    print("=" * 64)
    print(f"Every attempt costs {ENHANCE_COST} gold. Failures never drop below +{MIN_LEVEL}.")
    print()


def stats_to_dict(stats: EnhancementStats, current: int, target: int) -> dict:
    return {
        "total_attempts": stats.total_attempts,
        "successes": stats.successes,
        "success_rate": stats.success_rate,
        "damage_rate": stats.damage_rate,
        "total_gold_spent": stats.total_gold_spent,
        "materials_spent": dict(stats.materials_spent),
        "final_level": stats.final_level,
        "level_hits": {str(level): hits for level, hits in sorted(stats.level_hits.items())},
        "php_cost": monetary_equivalent(stats),
        "reach_target_chance": reach_target_probability(current, target),
    }


def print_results(stats: EnhancementStats, current: int, target: int) -> None:
    """Pretty print a batch run."""
    print("\n" + "=" * 60)
    print("  Enhancement Run Results")
    print("=" * 60)

    print(f"\nCurrent level: +{current}   Target: +{target}")

    print("\n" + "-" * 60)
    print("  ATTEMPTS")
    print("-" * 60)
    print(f"  Total:        {stats.total_attempts:,}")
    print(f"  Successes:    {stats.successes:,}")
    print(f"  Success rate: {format_percent(stats.success_rate)}")
    print(f"  Damage rate:  {format_percent(stats.damage_rate)}")

    print("\n" + "-" * 60)
    print("  COST")
    print("-" * 60)
    print(f"  Gold:         {stats.total_gold_spent:,}")
    for currency in SECONDARY_CURRENCIES:
        label = currency.value.replace("_", " ").title() + ":"
        print(f"  {label:<14}{stats.material(currency):,}")
    print(f"  PHP cost:     {monetary_equivalent(stats):,.2f} PHP")

    print("\n" + "-" * 60)
    print("  LEVEL HITS")
    print("-" * 60)
    for level in range(MIN_LEVEL, MAX_LEVEL + 1):
        print(f"  +{level:<3} {stats.level_hits.get(level, 0):>6} times")

    chance = reach_target_probability(current, target)
    print(f"\nChance to reach +{target} from +{current}: {format_percent(chance, 6)}")
    print("=" * 60)


def print_trials(summary: dict) -> None:
    """Pretty print a repeated-trial summary."""
    print("\n" + "=" * 60)
    print(f"  +{summary['start_level']} -> +{summary['target_level']} "
          f"({summary['num_trials']:,} trials, cap {summary['max_attempts']:,})")
    print("=" * 60)
    print(f"  Reached target: {format_percent(summary['reach_rate'])}")

    if not summary["attempts"]:
        print("=" * 60)
        return

    print("\n" + "-" * 60)
    print("  ATTEMPTS")
    print("-" * 60)
    print(f"  Average:    {summary['attempts']['average']:.1f}")
    print(f"  Median:     {summary['attempts']['p50']:.0f}")
    print(f"  P90:        {summary['attempts']['p90']:.0f}")
    print(f"  P99:        {summary['attempts']['p99']:.0f}")
    print(f"  Worst:      {summary['attempts']['worst']:.0f}")

    print("\n" + "-" * 60)
    print("  GOLD")
    print("-" * 60)
    print(f"  Average:    {format_gold(summary['gold']['average'])}")
    print(f"  Median:     {format_gold(summary['gold']['p50'])}")
    print(f"  P90:        {format_gold(summary['gold']['p90'])}")
    print(f"  Worst:      {format_gold(summary['gold']['worst'])}")
    print("=" * 60)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Gear Enhancement Simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --target 10                   # Enhance +1 -> +10, up to 100 attempts
  %(prog)s --start-level 7 -t 9 -n 50    # Start at +7, stop at +9 or 50 attempts
  %(prog)s --trials 10000 -t 12          # Repeat the run and summarise
  %(prog)s --show-rates                  # Show the rule table
        """,
    )

    parser.add_argument(
        "--target", "-t",
        type=int,
        default=MAX_LEVEL,
        help=f"Target level ({MIN_LEVEL}-{MAX_LEVEL}, default: {MAX_LEVEL})",
    )
    parser.add_argument(
        "--start-level",
        type=int,
        default=MIN_LEVEL,
        help=f"Starting level (default: {MIN_LEVEL})",
    )
    parser.add_argument(
        "--attempts", "-n",
        type=int,
        default=DEFAULT_BATCH_ATTEMPTS,
        help=f"Maximum attempts per run (default: {DEFAULT_BATCH_ATTEMPTS})",
    )
    parser.add_argument(
        "--trials",
        type=int,
        default=0,
        help="Repeat the run this many times and print a summary",
    )
    parser.add_argument(
        "--simple-costs",
        action="store_true",
        help="Charge gold only (no tiered materials)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results as JSON",
    )
    parser.add_argument(
        "--show-rates",
        action="store_true",
        help="Show the enhancement rule table",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every attempt",
    )
    return parser


def validate_args(args: argparse.Namespace) -> str:
    """Return an error message for out-of-range arguments, or ''."""
    if args.target < MIN_LEVEL or args.target > MAX_LEVEL:
        return f"Target must be between {MIN_LEVEL} and {MAX_LEVEL}"
    if args.start_level < MIN_LEVEL or args.start_level > MAX_LEVEL:
        return f"Start level must be between {MIN_LEVEL} and {MAX_LEVEL}"
    if args.attempts < 1:
        return "Attempts must be at least 1"
    if args.trials < 0:
        return "Trials cannot be negative"
    return ""


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.show_rates:
        print_enhancement_table()
        return 0

    error = validate_args(args)
    if error:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    config = SimConfig(
        target_level=args.target,
        start_level=args.start_level,
        batch_attempts=args.attempts,
        tiered_costs=not args.simple_costs,
        seed=args.seed,
    )
    logger.debug("Run config: %s", config)
    engine = EnhancementEngine(seed=config.seed, tiered_costs=config.tiered_costs)

    if args.trials:
        if not args.json:
            print(f"Running {args.trials:,} trials...")
        summary = run_trials(
            config.start_level,
            config.target_level,
            config.batch_attempts,
            num_trials=args.trials,
            engine=engine,
        )
        if args.json:
            print(json.dumps(summary, indent=2))
        else:
            print_trials(summary)
        return 0

    session = EnhancementSession(engine=engine, target_level=config.target_level)
    session.set_level(config.start_level)
    session.run_batch(config.batch_attempts)
    stats = session.stats

    if args.json:
        print(json.dumps(stats_to_dict(stats, session.current_level, session.target_level), indent=2))
    else:
        print_results(stats, session.current_level, session.target_level)
    return 0


if __name__ == "__main__":
    sys.exit(main())
