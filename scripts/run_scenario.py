"""CLI for replaying SweepLift scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from fleet import FleetConfig, FleetError, FleetScheduler, logging_sink, null_sink

logger = logging.getLogger("sweeplift.scenario")


def build_fleet(config: Dict, verbose: bool = False) -> FleetScheduler:
    building_cfg = config.get("building", {})
    fleet_config = FleetConfig(
        floor_count=building_cfg.get("floor_count", 10),
        car_count=building_cfg.get("car_count", 4),
    )
    return fleet_config.build(emit=logging_sink(logger) if verbose else null_sink)


def apply_step(fleet: FleetScheduler, step: Dict) -> None:
    if "tick" in step:
        fleet.tick(int(step["tick"]))
    elif "call" in step:
        call = step["call"]
        fleet.request_call(int(call["floor"]), call["direction"])
    elif "press" in step:
        press = step["press"]
        fleet.assign_floor(int(press["car_id"]), int(press["floor"]))
    else:
        raise ValueError(f"Unknown step: {step}")


def run_scenario(fleet: FleetScheduler, config: Dict) -> List[Dict]:
    history: List[Dict] = []
    fleet.on_event("status", lambda status: history.append(status.to_dict()))
    for index, step in enumerate(config.get("steps", [])):
        try:
            apply_step(fleet, step)
        except (FleetError, ValueError, KeyError) as exc:
            print(f"Step {index} rejected: {exc}", file=sys.stderr)
    return history


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="Path to a JSON scenario file")
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write the final snapshot and status history as JSON",
    )
    parser.add_argument("--verbose", action="store_true", help="Narrate every state transition")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    config = json.loads(args.config.read_text())
    fleet = build_fleet(config, verbose=args.verbose)
    history = run_scenario(fleet, config)

    status = fleet.status()
    results = {
        "scenario": config.get("name", args.config.stem),
        "description": config.get("description"),
        "final_status": status.to_dict(),
        "snapshot": fleet.current_state().to_dict(),
        "history": history,
    }
    save_results(args.output, results)

    print(f"Scenario: {results['scenario']}")
    if results["description"]:
        print(results["description"])
    print(f"Time: {status.time} ticks")
    print(f"Current status: {' '.join(status.car_labels)}")
    print(f"Pending requests: [{' '.join(status.request_labels)}]")
    if args.output:
        print(f"Saved results to {args.output}")


if __name__ == "__main__":
    main()
