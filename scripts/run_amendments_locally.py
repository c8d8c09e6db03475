#!/usr/bin/env python3
"""
Run the amendments Lambda handler locally against the live Congress.gov API.
Reads CONGRESS_API_KEY (and optional overrides) from the environment or .env.
"""

import json
import logging
import os
import sys
import argparse
from pathlib import Path
from dataclasses import dataclass

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from api.lambdas.get_constitutional_amendments.handler import handler  # noqa: E402
from api.lib.amendments import ordinal  # noqa: E402


@dataclass
class LambdaContext:
    function_name: str = "local_test"
    function_version: str = "local"
    aws_request_id: str = "local-uuid"
    memory_limit_in_mb: int = 128


def main():
    parser = argparse.ArgumentParser(description="Fetch the constitutional amendments digest locally")
    parser.add_argument("--congress", type=int, help="Congress number (default: CONGRESS_NUMBER or 119)")
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds")
    parser.add_argument("--summary", action="store_true", help="Print one line per amendment instead of JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.congress:
        os.environ["CONGRESS_NUMBER"] = str(args.congress)
    if args.timeout:
        os.environ["CONGRESS_API_TIMEOUT"] = str(args.timeout)

    event = {
        "httpMethod": "GET",
        "path": "/v1/congress/amendments",
        "queryStringParameters": {},
        "pathParameters": {},
    }
    resp = handler(event, LambdaContext())
    body = json.loads(resp["body"])

    if resp["statusCode"] != 200:
        print(f"❌ Status {resp['statusCode']}: {body.get('error')}")
        sys.exit(1)

    if args.summary:
        print(f"{body['count']} proposed amendments in the {ordinal(body['congress'])} Congress")
        for amendment in body["amendments"]:
            sponsor = amendment["sponsor"]
            print(
                f"{amendment['introducedDate']}  {amendment['number']:<10} "
                f"{sponsor['name']} ({sponsor['party']}-{sponsor['state']})  "
                f"{amendment['cosponsorsCount']} cosponsors"
            )
    else:
        print(json.dumps(body, indent=2))


if __name__ == "__main__":
    main()
