import argparse
import json
import logging
import sys

from plot_data import chart_data
from serial_link import WasherLink
from wash_fuzzy import FALLBACK_MINUTES, SAMPLES, ConfigError, WashController


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Fuzzy wash-time controller.")
    p.add_argument("--dirt", type=float, default=0.0, help="Dirt amount (0-200).")
    p.add_argument("--grease", type=float, default=0.0, help="Grease amount (0-200).")
    p.add_argument("--samples", type=int, default=SAMPLES, help="Output domain sample count.")
    p.add_argument("--fallback", type=float, default=FALLBACK_MINUTES,
                   help="Wash time used when no rule fires.")
    p.add_argument("--curves", action="store_true", help="Print chart data as JSON.")
    p.add_argument("--port", type=str, default=None, help="Serial port to the washer controller.")
    p.add_argument("--baud", type=int, default=115200, help="Serial baud rate.")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        ctrl = WashController(samples=args.samples, fallback=args.fallback)
    except ConfigError as e:
        print(f"Bad configuration: {e}", file=sys.stderr)
        return 2

    res = ctrl.infer(args.dirt, args.grease)

    if args.curves:
        print(json.dumps(chart_data(res, ctrl, args.dirt, args.grease), indent=2))
    else:
        label = res.dominant_term.value if res.dominant_term else "-"
        print(f"dirt={args.dirt:.0f} grease={args.grease:.0f} -> {res.output:.2f} min ({label})")

    if args.port:
        with WasherLink(args.port, args.baud) as link:
            link.send_wash_time(res.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
