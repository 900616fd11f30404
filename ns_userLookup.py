#! /usr/bin/env python3
"""Dry run: show which emails in a CSV file resolve to Netskope users. Nothing is deleted."""

import argparse
import os
import sys
from dotenv import load_dotenv
from netskope_client.ns_lib import DEFAULT_TIMEOUT, NetskopeError, netskope_client, setup_logging
from netskope_client.ns_lib_bulk import lookup


def main(argv=None):
    load_dotenv()
    parser = argparse.ArgumentParser(description="Look up Netskope users by email")
    parser.add_argument("csv_file")
    parser.add_argument("--tenant_fqdn", type=str, default=os.getenv("NS_TENANT_FQDN"))
    parser.add_argument("--api_token", type=str, default=os.getenv("NS_API_TOKEN"))
    parser.add_argument("--timeout", type=float, default=os.getenv("NS_TIMEOUT", str(DEFAULT_TIMEOUT)))
    parser.add_argument("--verbose", action="store_true", default=False)
    args = parser.parse_args(argv)
    if not (args.tenant_fqdn and args.api_token):
        print("Error: --tenant_fqdn and --api_token (or NS_TENANT_FQDN / NS_API_TOKEN) are required")
        return 1

    setup_logging(args.verbose)
    client = netskope_client(args.tenant_fqdn, args.api_token, args.verbose, args.timeout)
    try:
        resolution = lookup(client, args.csv_file)
    except NetskopeError as e:
        print(f"Error: {e}")
        return 1

    for record in resolution.found:
        print(f"FOUND: {record.matched_identifier} ({record.record_id})")
    for email in resolution.not_found:
        print(f"NOT FOUND: {email}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
