"""
CLI tool for filtering and ranking insurance plans from a JSON catalog.
Usage: python -m cli.rank_plans <plans.json> [options]
"""

import sys
import json
import argparse
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from briki.plans.filters import apply_filters, count_active_filters
from briki.plans.models import (
    DEFAULT_COVERAGE_RANGE,
    DEFAULT_PRICE_RANGE,
    FilterCriteria,
    InsurancePlan,
    SortOption,
)
from briki.plans.scoring import calculate_recommendation_score
from briki.plans.sorting import apply_sort


# ANSI color codes for terminal output
class Colors:
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'


def load_plans(path: Path) -> List[InsurancePlan]:
    """Read a JSON array of plans (or {"plans": [...]})."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("plans", [])
    return [InsurancePlan.model_validate(item) for item in data]


def build_criteria(args: argparse.Namespace) -> FilterCriteria:
    return FilterCriteria(
        price_range=(
            args.min_price if args.min_price is not None else DEFAULT_PRICE_RANGE[0],
            args.max_price if args.max_price is not None else DEFAULT_PRICE_RANGE[1],
        ),
        coverage_range=(
            args.min_coverage if args.min_coverage is not None else DEFAULT_COVERAGE_RANGE[0],
            args.max_coverage if args.max_coverage is not None else DEFAULT_COVERAGE_RANGE[1],
        ),
        rating=args.min_rating,
        providers=args.provider or [],
        features=args.feature or [],
        tags=args.tag or [],
    )


def print_plans(plans: List[InsurancePlan], total: int, sort: SortOption, active_filters: int):
    """Print the ranked plans as a table."""
    print(f"\n{Colors.BOLD}{Colors.BLUE}{len(plans)} of {total} plans{Colors.ENDC} "
          f"(sorted by {sort.value}, {active_filters} active filters)")
    print("-" * 86)
    print(f"{'#':>3}  {'Plan':<30} {'Provider':<18} {'Price':>10} {'Coverage':>12} {'Rating':>6}  Score")
    print("-" * 86)

    for position, plan in enumerate(plans, start=1):
        score = calculate_recommendation_score(plan)
        print(
            f"{position:>3}  {plan.name[:30]:<30} {plan.provider[:18]:<18} "
            f"{plan.base_price:>10,.0f} {plan.coverage_amount:>12,.0f} {plan.rating:>6.1f}  "
            f"{Colors.GREEN}{score:5.1f}{Colors.ENDC}"
        )
        if plan.tags:
            print(f"     {Colors.CYAN}{', '.join(plan.tags)}{Colors.ENDC}")


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Filter and rank insurance plans from a JSON catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m cli.rank_plans data/travel_plans.json
  python -m cli.rank_plans data/travel_plans.json --sort price-low --max-price 200
  python -m cli.rank_plans data/pet_plans.json --feature vacunas --tag popular --json
        """
    )

    parser.add_argument("file", help="Path to a JSON file with an array of plans")
    parser.add_argument(
        "--sort", "-s",
        choices=[option.value for option in SortOption],
        default=SortOption.RECOMMENDED.value,
        help="Sort order (default: recommended)"
    )
    parser.add_argument("--min-price", type=float)
    parser.add_argument("--max-price", type=float)
    parser.add_argument("--min-coverage", type=float)
    parser.add_argument("--max-coverage", type=float)
    parser.add_argument("--min-rating", type=float, default=0.0)
    parser.add_argument("--provider", action="append", help="Allowed provider (repeatable)")
    parser.add_argument("--feature", action="append", help="Required feature (repeatable)")
    parser.add_argument("--tag", action="append", help="Required tag (repeatable)")
    parser.add_argument("--limit", "-n", type=int, help="Show only the first N plans")
    parser.add_argument(
        "--json", "-j",
        action="store_true",
        help="Output result as JSON only"
    )

    args = parser.parse_args(argv)

    file_path = Path(args.file)
    if not file_path.exists():
        print(f"{Colors.RED}Error: File not found: {args.file}{Colors.ENDC}")
        sys.exit(1)

    try:
        plans = load_plans(file_path)
    except (json.JSONDecodeError, ValidationError) as e:
        if args.json:
            print(json.dumps({"success": False, "error": str(e)}))
        else:
            print(f"{Colors.RED}Error: invalid plan data: {e}{Colors.ENDC}")
        sys.exit(1)

    criteria = build_criteria(args)
    sort = SortOption(args.sort)
    results = apply_sort(apply_filters(plans, criteria), sort)
    if args.limit is not None:
        results = results[:args.limit]

    if args.json:
        print(json.dumps(
            {
                "success": True,
                "count": len(results),
                "results": [plan.model_dump(by_alias=True, mode="json") for plan in results],
            },
            indent=2,
            ensure_ascii=False,
        ))
    else:
        print_plans(results, len(plans), sort, count_active_filters(criteria))

    sys.exit(0)


if __name__ == "__main__":
    main()
