import argparse
import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class Config:
    """Configuration for the E2E smoke test runner."""

    function_name: str
    description: str = "E2E Smoke Run"
    aws_region: Optional[str] = None
    read_timeout_seconds: int = 30
    report_file: Optional[str] = None
    verbose: bool = False
    raw_config: Dict[str, Any] = field(default_factory=dict, repr=False)


def load_configuration(args: argparse.Namespace) -> Config:
    """Loads configuration from file and overrides with CLI arguments."""
    config_data = {}
    if args.config:
        if not os.path.exists(args.config):
            raise FileNotFoundError(
                f"Error: Configuration file '{args.config}' not found."
            )
        with open(args.config) as f:
            config_data = json.load(f)

    description = config_data.pop("description", "E2E Smoke Run")
    cli_args = {
        key: value
        for key, value in vars(args).items()
        if value is not None and key != "config"
    }
    config_data.update(cli_args)
    raw_config = config_data.copy()
    config_data["description"] = description

    if not config_data.get("function_name"):
        raise ValueError("The --function-name is required.")

    return Config(raw_config=raw_config, **config_data)
