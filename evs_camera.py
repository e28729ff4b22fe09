"""Command line entry point resolving the camera serving a logical function."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from evs_support import runtime
from evs_support.camera_config import describe, load_registry
from evs_support.enumerator import get_service
from evs_support.utils import REVERSE_FUNCTION, get_camera_id_for_function


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for the camera lookup."""

    parser = argparse.ArgumentParser(
        description="Print the ID of the camera currently serving a logical function"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Camera configuration JSON (defaults to EVS_CAMERA_CONFIG or the system path)",
    )
    parser.add_argument(
        "--function",
        type=str,
        default=REVERSE_FUNCTION,
        help="Function tag to resolve (default: reverse)",
    )
    parser.add_argument(
        "--service",
        type=str,
        default=runtime.DEFAULT_ENUMERATOR_SERVICE,
        help="Name of the enumeration service",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Enumeration request timeout in seconds",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List configured cameras instead of resolving a function",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Logging level (defaults to EVS_LOG_LEVEL or WARNING)",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Resolve the requested function and print the camera ID."""

    args = parse_args(argv)
    level = args.log_level or runtime.log_level()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    registry = load_registry(args.config)
    if registry is None:
        return 1

    if args.list:
        for entry in registry.entries():
            print(describe(entry))
        return 0

    enumerator = get_service(args.service, timeout_s=args.timeout)
    if enumerator is None:
        logging.getLogger(__name__).error("Service %s is not registered", args.service)
        return 1
    with enumerator:
        camera_id = get_camera_id_for_function(
            args.function, registry=registry, enumerator=enumerator
        )
    if camera_id is None:
        return 1
    print(camera_id)
    return 0


if __name__ == "__main__":  # pragma: no cover - convenience wrapper
    sys.exit(main())
