"""
FairMint command line tools.

Usage:
    fairmint keygen --out signer.key
    fairmint sign --key signer.key --collection <hex> --recipients list.txt --out allowances/
    fairmint verify --signer <hex> --collection <hex> allowances/<address>.json
"""

import argparse
import logging
import sys
from typing import List, Optional

from fairmint.config import LogConfig, setup_logging
from fairmint.core.types import Address, KeyPair
from fairmint.tools.allowances import (
    issue_allowances,
    load_allowance,
    load_keypair,
    read_recipients,
    save_keypair,
    verify_allowance,
    write_allowance_files,
)

logger = logging.getLogger("fairmint.cli")


def cmd_keygen(args: argparse.Namespace) -> int:
    path, address = save_keypair(args.out, KeyPair.generate())
    print(f"Signer address: {address.hex()}")
    print(f"Seed written to {path}")
    return 0


def cmd_sign(args: argparse.Namespace) -> int:
    signer = load_keypair(args.key)
    collection = Address.from_hex(args.collection)
    recipients = read_recipients(args.recipients)

    allowances = issue_allowances(signer, collection, recipients, start_index=args.start_index)
    paths = write_allowance_files(args.out, allowances)

    print(f"Wrote {len(paths)} allowance files to {args.out}")
    return 0 if len(allowances) == len(recipients) else 1


def cmd_verify(args: argparse.Namespace) -> int:
    signer = Address.from_hex(args.signer)
    collection = Address.from_hex(args.collection)

    failures = 0
    for path in args.files:
        try:
            allowance = load_allowance(path)
        except (OSError, ValueError) as e:
            logger.error(f"{path} failed: {e}")
            print(f"{path}: MALFORMED")
            failures += 1
            continue

        valid = verify_allowance(signer, collection, allowance)
        print(f"{path}: index={allowance.index} {'OK' if valid else 'INVALID'}")
        if not valid:
            failures += 1

    return 1 if failures else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fairmint", description="FairMint allowance tools")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Log level")
    sub = parser.add_subparsers(dest="command", required=True)

    keygen = sub.add_parser("keygen", help="Generate an allowlist signer key")
    keygen.add_argument("--out", "-o", required=True, help="Seed file to write")
    keygen.set_defaults(func=cmd_keygen)

    sign = sub.add_parser("sign", help="Issue allowance files for a recipient list")
    sign.add_argument("--key", "-k", required=True, help="Signer seed file")
    sign.add_argument("--collection", "-c", required=True, help="Collection address (hex)")
    sign.add_argument("--recipients", "-r", required=True, help="File with one address per line")
    sign.add_argument("--out", "-o", default="./allowances", help="Output directory")
    sign.add_argument("--start-index", type=int, default=0, help="Index of the first allowance")
    sign.set_defaults(func=cmd_sign)

    verify = sub.add_parser("verify", help="Verify allowance files")
    verify.add_argument("--signer", "-s", required=True, help="Signer address (hex)")
    verify.add_argument("--collection", "-c", required=True, help="Collection address (hex)")
    verify.add_argument("files", nargs="+", help="Allowance files")
    verify.set_defaults(func=cmd_verify)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(LogConfig(level=args.log_level))
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
