#!/usr/bin/env python3
"""Check that every resource declared in an infra manifest exists. Results are written to
stdout as JSON.

Exit codes: 0 all resources found, 1 resources missing, 2 resources which could not be
checked, 3 invalid manifest or config."""
import argparse
import json
import signal
import sys
from typing import Any, List, Optional

from infradrift.core.exceptions import InfradriftException
from infradrift.scan import EXIT_MANIFEST_ERROR, InfraScanner, get_exit_code, scan_infra


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--manifest", type=str, help="Manifest path, overrides standards.toml")
    parser.add_argument("--config", type=str, help="standards.toml path")
    parser.add_argument("--account", type=str, help="Account key (aws:<id>, gcp:<id>) or alias")
    args_ns = parser.parse_args(argv)

    scanner = InfraScanner()

    def cancel(signum: int, frame: Any) -> None:
        scanner.cancel()

    signal.signal(signal.SIGINT, cancel)
    try:
        result = scan_infra(
            manifest_path=args_ns.manifest,
            config_path=args_ns.config,
            account=args_ns.account,
            scanner=scanner,
        )
    except InfradriftException as ex:
        print(json.dumps({"error": str(ex)}, indent=2))
        return EXIT_MANIFEST_ERROR
    print(json.dumps(result.model_dump(), indent=2))
    return get_exit_code(result.summary)


if __name__ == "__main__":
    sys.exit(main())
