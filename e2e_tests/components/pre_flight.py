import boto3
from botocore.config import Config as BotocoreConfig
from botocore.exceptions import NoCredentialsError, NoRegionError
from rich.console import Console
from rich.panel import Panel

from hello_service.clients import LambdaClient
from hello_service.exceptions import (
    FunctionAccessDeniedError,
    FunctionNotFoundError,
    InvocationError,
)

from .config import Config


def create_lambda_client(config: Config) -> LambdaClient:
    session = boto3.Session(region_name=config.aws_region)
    boto_client = session.client(
        "lambda",
        config=BotocoreConfig(
            read_timeout=config.read_timeout_seconds,
            connect_timeout=10,
            retries={"max_attempts": 2},
        ),
    )
    return LambdaClient(boto_client)


def verify_aws_connectivity(config: Config) -> LambdaClient:
    """
    Performs pre-flight checks before any scenario is run.
    - Initializes the Lambda client.
    - Verifies credentials and region are configured.
    - Verifies the target function exists and is reachable.
    - Exits with status 2 and a clear error message on failure.
    """
    console = Console()
    console.print("\n--- [bold blue]Pre-flight Checks[/bold blue] ---")

    try:
        client = create_lambda_client(config)
        console.log("[green]✓[/green] Boto3 Lambda client initialized successfully.")

        function_config = client.describe_function(config.function_name)
        console.log(
            f"[green]✓[/green] Access confirmed for Lambda function: "
            f"'{config.function_name}' ({function_config.get('Runtime', 'unknown runtime')})"
        )
        console.print("[bold green]✅ Pre-flight checks passed.[/bold green]")
        return client

    except NoCredentialsError:
        console.print("\n[bold red]❌ PRE-FLIGHT CHECK FAILED[/bold red]\n")
        error_message = (
            "AWS credentials not found. Please configure them using one of the following methods:\n"
            "  1. Environment variables (AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY)\n"
            "  2. A shared credentials file (~/.aws/credentials) with a profile.\n"
            "  3. An IAM role attached to the EC2 instance or ECS task."
        )
        console.print(
            Panel(error_message, title="Authentication Error", border_style="red")
        )
        exit(2)

    except NoRegionError:
        console.print("\n[bold red]❌ PRE-FLIGHT CHECK FAILED[/bold red]\n")
        error_message = (
            "An AWS region was not specified. Please configure it using one of the following methods:\n"
            "  1. The --aws-region command-line flag.\n"
            "  2. The 'aws_region' key in your JSON config file.\n"
            "  3. The AWS_REGION or AWS_DEFAULT_REGION environment variables."
        )
        console.print(
            Panel(error_message, title="Configuration Error", border_style="red")
        )
        exit(2)

    except (FunctionNotFoundError, FunctionAccessDeniedError) as e:
        console.print("\n[bold red]❌ PRE-FLIGHT CHECK FAILED[/bold red]\n")
        console.print(Panel(e.message, title="AWS API Error", border_style="red"))
        exit(2)

    except InvocationError as e:
        console.print("\n[bold red]❌ PRE-FLIGHT CHECK FAILED[/bold red]\n")
        console.print(
            Panel(
                f"An unexpected AWS API error occurred: {e}",
                title="AWS API Error",
                border_style="red",
            )
        )
        exit(2)
