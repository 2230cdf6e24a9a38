#!/usr/bin/env python3
"""Generate an infra manifest from a Pulumi stack export.

    pulumi stack export | infra_generate.py --account prod
    infra_generate.py --input stack.json --merge --account-id aws:123456789012
"""
import argparse
import sys
from typing import List, Optional

from infradrift.core.exceptions import InfradriftException
from infradrift.manifest.generate import generate_manifest, write_manifest


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = argparse.ArgumentParser(
        description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--input", type=str, help="Stack export file, default stdin")
    parser.add_argument("--output", type=str, help="Manifest path, default infra-manifest.json")
    parser.add_argument("--stdout", default=False, action="store_true")
    parser.add_argument("--project", type=str, help="Project name, default from resource URNs")
    parser.add_argument("--account", type=str, help="Account alias")
    parser.add_argument("--account-id", type=str, help="Account key: aws:<id> or gcp:<id>")
    parser.add_argument(
        "--merge",
        default=False,
        action="store_true",
        help="Merge into the existing manifest at --output",
    )
    args_ns = parser.parse_args(argv)

    try:
        manifest = generate_manifest(
            input_path=args_ns.input,
            output=args_ns.output,
            project=args_ns.project,
            account=args_ns.account,
            account_id=args_ns.account_id,
            merge=args_ns.merge,
        )
        write_manifest(manifest, output=args_ns.output, stdout=args_ns.stdout)
    except InfradriftException as ex:
        print(f"Error: {ex}", file=sys.stderr)
        return 1
    if not args_ns.stdout:
        resource_count = sum(len(account.resources) for account in manifest.accounts.values())
        print(
            f"Wrote {resource_count} resources in {len(manifest.accounts)} accounts to "
            f"{args_ns.output or 'infra-manifest.json'}",
            file=sys.stderr,
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
