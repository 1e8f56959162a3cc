#!/usr/bin/env python

# infrastructure/app.py
# Entry point for `cdk synth` / `cdk deploy` (see cdk.json).

import os

import aws_cdk as cdk

from hello_service.bindings import default_api_binding
from stack import HelloServiceStack

app = cdk.App()

binding = default_api_binding(
    environment=app.node.try_get_context("environment")
    or os.getenv("ENVIRONMENT", "production"),
    log_level=os.getenv("LOG_LEVEL", "INFO"),
)

HelloServiceStack(
    app,
    "InfrastructureStack",
    binding=binding,
    env=cdk.Environment(
        account=os.getenv("CDK_DEFAULT_ACCOUNT"),
        region=os.getenv("CDK_DEFAULT_REGION"),
    ),
)

app.synth()
