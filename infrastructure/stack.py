from aws_cdk import (
    Duration,
    RemovalPolicy,
    Stack,
    aws_apigateway as apigw,
    aws_lambda as lambda_,
    aws_logs as logs,
)
from constructs import Construct

from hello_service.bindings import ApiBinding

# Public AWS Lambda Powertools layer; it also ships pydantic for the runtime.
POWERTOOLS_LAYER_ACCOUNT = "017000801446"
POWERTOOLS_LAYER_VERSION = 7


def powertools_layer_arn(region: str, runtime: str, arch: str = "x86_64") -> str:
    runtime_tag = runtime.replace(".", "")
    return (
        f"arn:aws:lambda:{region}:{POWERTOOLS_LAYER_ACCOUNT}:layer:"
        f"AWSLambdaPowertoolsPythonV3-{runtime_tag}-{arch}:{POWERTOOLS_LAYER_VERSION}"
    )


class HelloServiceStack(Stack):
    def __init__(
        self, scope: Construct, construct_id: str, binding: ApiBinding, **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        fn = binding.function
        runtime = lambda_.Runtime(fn.runtime, lambda_.RuntimeFamily.PYTHON)

        powertools_layer = lambda_.LayerVersion.from_layer_version_arn(
            self,
            "PowertoolsLayer",
            powertools_layer_arn(self.region, fn.runtime),
        )

        log_group = logs.LogGroup(
            self,
            f"{fn.construct_id}Logs",
            retention=logs.RetentionDays.TWO_WEEKS,
            removal_policy=RemovalPolicy.DESTROY,
        )

        self.handler_function = lambda_.Function(
            self,
            fn.construct_id,
            code=lambda_.Code.from_asset(fn.code_path),
            runtime=runtime,
            handler=fn.handler,
            memory_size=fn.memory_size_mb,
            timeout=Duration.seconds(fn.timeout_seconds),
            environment=dict(fn.environment),
            layers=[powertools_layer],
            tracing=lambda_.Tracing.ACTIVE,
            log_group=log_group,
        )

        self.api = apigw.RestApi(
            self,
            binding.construct_id,
            rest_api_name=binding.rest_api_name,
            description=binding.description,
            default_cors_preflight_options=apigw.CorsOptions(
                allow_origins=list(binding.cors.allow_origins),
                allow_methods=list(binding.cors.allow_methods),
                allow_headers=list(binding.cors.allow_headers),
            ),
        )

        resource = self.api.root
        for part in binding.resource_path_parts:
            resource = resource.add_resource(part)

        integration = apigw.LambdaIntegration(self.handler_function)
        for method in binding.methods:
            resource.add_method(method, integration)
