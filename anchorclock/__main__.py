"""
anchorclock: Main Entry Point

Initializes a clock (explicit time or network time), reports it,
waits, and reports it again to show the clock advancing.
"""
import sys
import time
import argparse
from datetime import datetime
from .core.clock import InternalClock
from .core.config import ClockSettings
from .core.errors import ClockError
from .core.logger import configure_logging
from .network.selector import NetworkTimeSource

TIME_FORMAT = "%m/%d/%Y %I:%M:%S.%f %p"

def main(argv=None):
    parser = argparse.ArgumentParser(
        description="anchorclock demo: an application clock independent of system time"
    )
    parser.add_argument(
        "--at",
        type=datetime.fromisoformat,
        help="Explicit starting time (ISO 8601). Uses network time if omitted"
    )
    parser.add_argument(
        "--servers",
        help="Comma-separated NTP server host names"
    )
    parser.add_argument(
        "--wait",
        type=float,
        default=3.0,
        help="Seconds to wait between the two readings"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="structlog filtering level"
    )
    parser.add_argument(
        "--pretty-logs",
        action="store_true",
        help="Human-readable log lines instead of JSON"
    )

    args = parser.parse_args(argv)
    configure_logging(args.log_level, json_output=not args.pretty_logs)

    settings = ClockSettings.from_env(servers=args.servers)
    clock = InternalClock(time_source=NetworkTimeSource(settings))

    try:
        clock.initialize(args.at)
    except ClockError as e:
        print(f"Clock initialization failed: {e}", file=sys.stderr)
        return 1

    print(f"at the tone, it is: {clock.now().strftime(TIME_FORMAT)}")
    print(f"waiting {args.wait:g} seconds...")
    time.sleep(args.wait)
    print()
    print(f"now it is:          {clock.now().strftime(TIME_FORMAT)}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
