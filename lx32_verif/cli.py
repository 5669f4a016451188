#    Copyright 2026 Two Sigma Open Source, LLC
#
#    Licensed under the Apache License, Version 2.0 (the "License");
#    you may not use this file except in compliance with the License.
#    You may obtain a copy of the License at
#
#        http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS,
#    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#    See the License for the specific language governing permissions and
#    limitations under the License.

"""Command-line entry point: full validation and vector-file tools.

Exit status:
    0  success
    1  mismatch or invariant violation (report on stderr)
    2  reference core could not be loaded, or a vector file is malformed
"""

import argparse
import logging
import random
import sys
from collections.abc import Sequence

from lx32_verif.cores.verilator_core import VerilatorCore, load_library
from lx32_verif.exceptions import (
    ReferenceCoreError,
    VectorFormatError,
    VerificationError,
)
from lx32_verif.harness.runner import resolve_seed
from lx32_verif.harness.suite import run_validation
from lx32_verif.vectors import (
    DEFAULT_VECTOR_COUNT,
    check_vector_file,
    generate_alu_vectors,
    write_vector_file,
)

log = logging.getLogger("cocotb.lx32.cli")

EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_SETUP = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lx32-verif",
        description="LX32 golden model and lockstep differential verification",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser(
        "validate", help="Run every fuzzer family against a reference core"
    )
    validate.add_argument(
        "--library",
        help="Verilator simulator shared library (default: golden vs golden)",
    )
    validate.add_argument("--seed", type=int, help="Seed for every family")
    validate.add_argument(
        "--iterations", type=int, help="Override the per-family iteration count"
    )
    validate.add_argument(
        "--verbose", action="store_true", help="Log one line per step"
    )

    vectors = subparsers.add_parser("vectors", help="Write an ALU/branch vector file")
    vectors.add_argument("output", help="Output .tv file")
    vectors.add_argument(
        "--count",
        type=int,
        default=DEFAULT_VECTOR_COUNT,
        help=f"Number of vectors (default: {DEFAULT_VECTOR_COUNT})",
    )
    vectors.add_argument("--seed", type=int, help="Generator seed")

    check = subparsers.add_parser(
        "check-vectors", help="Re-check a vector file against the golden model"
    )
    check.add_argument("input", help="Vector file to check")
    return parser


def _validate(args: argparse.Namespace) -> int:
    reference_factory = None
    if args.library:
        try:
            library = load_library(args.library)
        except ReferenceCoreError as exc:
            log.error(str(exc))
            return EXIT_SETUP

        def reference_factory() -> VerilatorCore:
            return VerilatorCore(args.library, library=library)

    else:
        log.info("No reference library given: validating golden model against itself")

    try:
        run_validation(
            reference_factory,
            seed=args.seed,
            iterations=args.iterations,
            enable_logging=args.verbose or None,
        )
    except ReferenceCoreError as exc:
        log.error(str(exc))
        return EXIT_SETUP
    except VerificationError as exc:
        log.error(f"Validation failed (seed {exc.seed})")
        return EXIT_MISMATCH
    return EXIT_OK


def _vectors(args: argparse.Namespace) -> int:
    seed = resolve_seed(args.seed)
    vectors = generate_alu_vectors(random.Random(seed), count=args.count)
    written = write_vector_file(args.output, vectors)
    log.info(f"Wrote {written} vectors to {args.output} (seed {seed})")
    return EXIT_OK


def _check_vectors(args: argparse.Namespace) -> int:
    try:
        checked = check_vector_file(args.input)
    except VectorFormatError as exc:
        log.error(str(exc))
        return EXIT_SETUP
    except VerificationError as exc:
        log.error(str(exc))
        return EXIT_MISMATCH
    log.info(f"{checked} vectors match the golden model")
    return EXIT_OK


COMMANDS = {
    "validate": _validate,
    "vectors": _vectors,
    "check-vectors": _check_vectors,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, configure logging and dispatch to a subcommand."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)-8s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    return COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
