#!/usr/bin/env python3
# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""CLI entry point for checking YAML/JSON data files against a schema document."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .config import typedrops_config
from .exceptions import TypeDropsError
from .loader import load_schema_file
from .messages import issues
from .types.validator import validate

logger = logging.getLogger(__name__)


class CheckResult:
    """Container for the check results of a single data file."""

    def __init__(self, file_path: Path):
        self.file_path = file_path
        self.errors: List[Dict[str, Any]] = []

    def add_error(self, message: str, yaml_path: Optional[str] = None):
        error = {'message': message}
        if yaml_path is not None:
            error['yaml_path'] = yaml_path
        self.errors.append(error)


def check_file(schema_node, file_path: Path) -> CheckResult:
    """Validate one data file; unreadable files are reported as errors."""
    result = CheckResult(file_path)
    try:
        data = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        result.add_error(f"Failed to load data file: {exc}")
        return result

    for issue in issues(validate(schema_node, data)):
        result.add_error(issue.message, yaml_path=issue.yaml_path)
    return result


def _describe(error: Dict[str, Any]) -> str:
    path = error.get('yaml_path')
    return f"{path}: {error['message']}" if path else error['message']


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the check CLI."""
    parser = argparse.ArgumentParser(
        description='Validate YAML/JSON data files against a typedrops schema document',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('schema', help='Path to the schema document (YAML)')
    parser.add_argument('paths', nargs='+', help='Data files to validate')
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--atomize',
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Override the atomize setting of the schema document',
    )

    args = parser.parse_args(argv)
    typedrops_config.set_logging()

    try:
        schema = load_schema_file(args.schema, atomize=args.atomize)
    except TypeDropsError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    logger.info(f"Checking {len(args.paths)} file(s) against schema '{schema.name}'")
    results = [check_file(schema.node, Path(p)) for p in args.paths]

    if args.format == 'json':
        output = {
            'schema': schema.name,
            'files': len(results),
            'errors': sum(len(r.errors) for r in results),
            'results': [{'file': str(r.file_path), 'errors': r.errors} for r in results],
        }
        print(json.dumps(output, indent=2))
    elif args.format == 'github-actions':
        for result in results:
            for error in result.errors:
                print(f"::error file={result.file_path}::{_describe(error)}")
    else:  # human-readable
        for result in results:
            if result.errors:
                print(f"\n{result.file_path}:")
                for error in result.errors:
                    print(f"  ERROR: {_describe(error)}")

    total_errors = sum(len(r.errors) for r in results)
    if total_errors > 0:
        sys.exit(1)
    if args.format == 'human':
        print("Validation succeeded with no errors.")
    sys.exit(0)


if __name__ == '__main__':
    main()
