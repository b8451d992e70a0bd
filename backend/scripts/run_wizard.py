#!/usr/bin/env python3
"""Run the simulation wizard from a terminal.

Walks the five wizard steps, prompting for anything not given on the
command line, prints the projected figures, and optionally stores the run.

Usage:
    cd backend && python scripts/run_wizard.py
    cd backend && python scripts/run_wizard.py --region Tokyo --property-type 1LDK \\
        --monthly-rent 120000 --initial-cost 1000000 --furniture --save

--save requires DATABASE_CONN_STRING (env or .env).
"""
import argparse
import logging
import sys
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(BACKEND_DIR))

from minpaku.db.connection import db_pool  # noqa: E402
from minpaku.errors import MalformedInputError, StepValidationError, StorageError  # noqa: E402
from minpaku.services.persistence import SimulationGateway  # noqa: E402
from minpaku.simulation.reference_data import DEFAULT_REFERENCE_DATA  # noqa: E402
from minpaku.simulation.wizard import SimulationWizard, WizardStep  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)


def _choose(prompt: str, options: list[str]) -> str:
    for i, name in enumerate(options, 1):
        print(f"  {i}. {name}")
    while True:
        raw = input(f"{prompt} [1-{len(options)}]: ").strip()
        if raw.isdigit() and 1 <= int(raw) <= len(options):
            return options[int(raw) - 1]
        if raw in options:
            return raw
        print("  Not a valid choice.")


def _ask_int(prompt: str, current: int) -> int:
    while True:
        raw = input(f"{prompt} [{current:,}]: ").strip().replace(",", "")
        if not raw:
            return current
        try:
            return int(raw)
        except ValueError:
            print("  Enter a whole number.")


def _ask_bool(prompt: str, current: bool) -> bool:
    raw = input(f"{prompt} [{'Y/n' if current else 'y/N'}]: ").strip().lower()
    return current if not raw else raw.startswith("y")


def _take(args: argparse.Namespace, name: str):
    """Return a command-line value once; later visits to the step prompt instead."""
    value = getattr(args, name)
    setattr(args, name, None)
    return value


def _fill_step(wizard: SimulationWizard, args: argparse.Namespace) -> None:
    """Collect the fields belonging to the wizard's current step."""
    step = wizard.step
    print(f"\n== Step {int(step)}: {step.title}")

    if step == WizardStep.REGION:
        region_name = _take(args, "region")
        if region_name:
            wizard.select_region(region_name)
        elif wizard.region is None or not args.yes:
            for region in DEFAULT_REFERENCE_DATA.regions.values():
                print(f"     {region.name}: {region.description} "
                      f"({region.occupancy_rate}% / ¥{region.average_daily_rate:,} per night)")
            wizard.select_region(_choose("Region", DEFAULT_REFERENCE_DATA.region_names()))

    elif step == WizardStep.PROPERTY_TYPE:
        type_name = _take(args, "property_type")
        if type_name:
            wizard.select_property_type(type_name)
        elif wizard.property_type is None or not args.yes:
            wizard.select_property_type(
                _choose("Property type", DEFAULT_REFERENCE_DATA.property_type_names())
            )

    elif step == WizardStep.COSTS:
        rent = _take(args, "monthly_rent")
        if rent is not None:
            wizard.set_monthly_rent(rent)
        elif not args.yes:
            wizard.set_monthly_rent(_ask_int("Monthly rent (¥)", wizard.monthly_rent))
        initial_cost = _take(args, "initial_cost")
        if initial_cost is not None:
            wizard.set_initial_cost(initial_cost)
        elif not args.yes:
            wizard.set_initial_cost(_ask_int("Initial cost (¥)", wizard.initial_cost))

    elif step == WizardStep.OPTIONS:
        if _take(args, "furniture"):
            wizard.set_include_furniture(True)
        elif not args.yes:
            wizard.set_include_furniture(
                _ask_bool("Buy furniture and appliances (¥500,000)?", wizard.include_furniture)
            )
        renovation = _take(args, "renovation_cost")
        if renovation is not None:
            wizard.set_renovation_cost(renovation)
        elif not args.yes:
            wizard.set_renovation_cost(_ask_int("Renovation cost (¥)", wizard.renovation_cost))
        fee_rate = _take(args, "management_fee_rate")
        if fee_rate is not None:
            wizard.set_management_fee_rate(fee_rate)
        elif not args.yes:
            wizard.set_management_fee_rate(
                _ask_int("Management fee (% of revenue)", wizard.management_fee_rate)
            )


def _print_results(wizard: SimulationWizard) -> None:
    sim_input = wizard.current_input()
    result = wizard.result
    region = DEFAULT_REFERENCE_DATA.region(sim_input.region)
    payback = "never" if result.is_payback_infinite else f"{result.payback_period} years"

    print(f"\n== Step {int(WizardStep.RESULTS)}: {WizardStep.RESULTS.title}")
    print(f"  Region:            {region.name} ({region.occupancy_rate}% at ¥{region.average_daily_rate:,}/night)")
    print(f"  Property type:     {sim_input.property_type}")
    print(f"  Annual revenue:    ¥{result.annual_revenue:,}")
    print(f"  Annual cost:       ¥{result.annual_cost:,}")
    print(f"  Annual profit:     ¥{result.annual_profit:,}")
    print(f"  Annual yield:      {result.annual_yield}%")
    print(f"  Payback period:    {payback}")


def main():
    parser = argparse.ArgumentParser(description="Short-term rental revenue simulator")
    parser.add_argument("--region")
    parser.add_argument("--property-type")
    parser.add_argument("--monthly-rent", type=int)
    parser.add_argument("--initial-cost", type=int)
    parser.add_argument("--furniture", action="store_true", help="Include the furniture package")
    parser.add_argument("--renovation-cost", type=int)
    parser.add_argument("--management-fee-rate", type=int)
    parser.add_argument("--yes", "-y", action="store_true", help="Accept defaults without prompting")
    parser.add_argument("--save", action="store_true", help="Store the finished simulation")
    args = parser.parse_args()

    gateway = None
    if args.save:
        db_pool.initialize()
        gateway = SimulationGateway(db_pool.get_connection)

    wizard = SimulationWizard(DEFAULT_REFERENCE_DATA, gateway=gateway)

    while wizard.step != WizardStep.RESULTS:
        try:
            _fill_step(wizard, args)
            wizard.next()
        except (StepValidationError, MalformedInputError) as e:
            print(f"  {e}")
            if args.yes:
                return 1

    _print_results(wizard)

    if gateway is None:
        return 0
    try:
        wizard.next()
    except StorageError as e:
        logger.error("Simulation was not saved: %s", e)
        return 1
    print(f"\nSaved as simulation #{wizard.record_id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
