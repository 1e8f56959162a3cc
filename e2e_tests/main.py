#!/usr/bin/env python

# e2e_tests/main.py

import argparse

from components.config import load_configuration
from components.pre_flight import verify_aws_connectivity
from components.runner import SmokeTestRunner


def main():
    """Main entry point for the smoke test runner script."""
    parser = argparse.ArgumentParser(
        description="End-to-end smoke tests for the deployed Hello Service function.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("-c", "--config", help="Path to a JSON configuration file.")
    parser.add_argument(
        "-f", "--function-name", help="Name or ARN of the deployed Lambda function."
    )
    parser.add_argument("--aws-region", help="AWS region of the deployed function.")
    parser.add_argument(
        "--read-timeout-seconds",
        type=int,
        help="Client-side read timeout for each invocation (default: 30).",
    )
    parser.add_argument("--report-file", help="Write a JSON report to this path.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=None,
        help="Print every raw response and full exception tracebacks.",
    )

    args = parser.parse_args()

    # 1. Load the configuration object first.
    try:
        config = load_configuration(args)
    except (FileNotFoundError, ValueError) as e:
        parser.error(str(e))

    # 2. Run the pre-flight check. This function will exit the script on failure.
    client = verify_aws_connectivity(config)

    # 3. If the check passes, run every scenario against the function.
    try:
        runner = SmokeTestRunner(config, client)
        exit(runner.run())
    except Exception as e:
        print(f"\nAn unexpected error occurred during the smoke run: {e}")
        if config.verbose:
            import traceback

            traceback.print_exc()
        exit(1)


if __name__ == "__main__":
    main()
