import argparse
import json
import logging
import sys

from modint.errors import ModIntError
from modint.mod_int import Modulus

from .constants import DEFAULT_MODULUS
from .convolution import Convolution
from .errors import ConvolutionError
from .parameters import ConvolutionParameters
from .roots import verify_prime_table

_logger = logging.getLogger("ntt")


def parse_values(text):
    text = text.strip()
    if not text:
        return []
    return [int(v) for v in text.split(",")]


def load_inputs(args):
    if args.input is not None:
        with open(args.input, "r") as f:
            data = json.load(f)
        return [int(v) for v in data["f"]], [int(v) for v in data["g"]]
    if args.f is None or args.g is None:
        raise SystemExit("error: give F and G, or --input FILE")
    return parse_values(args.f), parse_values(args.g)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="python -m ntt", description="Convolution over NTT-friendly primes"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug information to stderr",
    )
    parser.add_argument(
        "--naive-threshold",
        type=int,
        default=ConvolutionParameters.naive_threshold,
        help="Shorter input length up to which the naive product is used",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    modular = commands.add_parser("modular", help="Convolution modulo a prime")
    modular.add_argument(
        "--modulus",
        type=int,
        default=DEFAULT_MODULUS,
        help=f"Prime modulus (default: {DEFAULT_MODULUS})",
    )

    integer = commands.add_parser("integer", help="Exact integer convolution")
    integer.add_argument(
        "--small",
        action="store_true",
        help="Use the two-prime variant (|result| <= 2252081290784276480)",
    )
    integer.add_argument(
        "--strict",
        action="store_true",
        help="Reject inputs whose result may overflow instead of wrapping",
    )

    for command in (modular, integer):
        command.add_argument("f", nargs="?", help="Comma separated coefficients")
        command.add_argument("g", nargs="?", help="Comma separated coefficients")
        command.add_argument(
            "--input",
            help='JSON file with an object {"f": [...], "g": [...]}',
        )

    commands.add_parser("primes", help="Verify the table of supported primes")
    return parser


def run(args):
    if args.command == "primes":
        results = verify_prime_table()
        for mod, root, ok in results:
            print(f"{mod} {root} {'ok' if ok else 'FAILED'}")
        return 0 if all(ok for _, _, ok in results) else 1

    engine = Convolution(
        ConvolutionParameters(
            naive_threshold=args.naive_threshold,
            strict=getattr(args, "strict", False),
        )
    )
    f, g = load_inputs(args)

    if args.command == "modular":
        modulus = Modulus(args.modulus)
        values = engine.convolve_modular(modulus.array_of(f), modulus.array_of(g)).to_list()
    elif args.small:
        values = engine.convolve_integer_small(f, g).tolist()
    else:
        values = engine.convolve_integer(f, g).tolist()

    print(json.dumps(values))
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    try:
        return run(args)
    except (ConvolutionError, ModIntError, OverflowError, ValueError) as e:
        _logger.debug("convolution failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
