#! /usr/bin/env python3
"""
Bulk delete Netskope users listed one email per line in a CSV file.

Usage: ns_userBulkDelete.py <TENANT_FQDN> <API_TOKEN> <CSV_FILE>
       ns_userBulkDelete.py <CSV_FILE>   (tenant and token from NS_TENANT_FQDN / NS_API_TOKEN)
Example: ns_userBulkDelete.py example.goskope.com abc123def456ghi789jk users.csv
"""

import argparse
import os
import sys
from dotenv import load_dotenv
from netskope_client.ns_lib import DEFAULT_TIMEOUT, NetskopeError, netskope_client, setup_logging
from netskope_client.ns_lib_bulk import run_bulk_delete


def build_parser():
    parser = argparse.ArgumentParser(description="Bulk delete Netskope users via the SCIM API")
    parser.add_argument("tenant_fqdn", nargs="?")
    parser.add_argument("api_token", nargs="?")
    parser.add_argument("csv_file", nargs="?")
    parser.add_argument("--timeout", type=float, default=os.getenv("NS_TIMEOUT", str(DEFAULT_TIMEOUT)))
    parser.add_argument("--export_dir", type=str, default=".")
    parser.add_argument("--verbose", action="store_true", default=False)
    return parser


def main(argv=None, prompt=input):
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)
    given = [value for value in (args.tenant_fqdn, args.api_token, args.csv_file) if value is not None]
    if len(given) == 1:
        args.csv_file = given[0]
        args.tenant_fqdn = os.getenv("NS_TENANT_FQDN")
        args.api_token = os.getenv("NS_API_TOKEN")
    if not (args.tenant_fqdn and args.api_token and args.csv_file):
        print(parser.format_usage().rstrip())
        return 1

    setup_logging(args.verbose)
    client = netskope_client(args.tenant_fqdn, args.api_token, args.verbose, args.timeout)
    try:
        return run_bulk_delete(client, args.csv_file, prompt=prompt, export_dir=args.export_dir)
    except NetskopeError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
