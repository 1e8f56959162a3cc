# e2e_tests/components/runner.py
import json
import time
from datetime import datetime, timezone
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from hello_service.clients import LambdaClient
from hello_service.exceptions import InvocationError, is_retryable_error

from .config import Config
from .scenarios import Scenario, ScenarioResult, default_scenarios, evaluate


class SmokeTestRunner:
    """Invokes the deployed greeting function with each scenario and reports results."""

    def __init__(
        self,
        config: Config,
        client: LambdaClient,
        scenarios: Optional[List[Scenario]] = None,
        console: Optional[Console] = None,
    ):
        self.config = config
        self.client = client
        self.scenarios = scenarios if scenarios is not None else default_scenarios()
        self.console = console or Console()
        self.results: List[ScenarioResult] = []

    def _run_scenario(self, scenario: Scenario) -> ScenarioResult:
        try:
            response = self.client.invoke_json(self.config.function_name, scenario.event)
        except InvocationError as e:
            retry_hint = " (retryable)" if is_retryable_error(e) else ""
            return {
                "name": scenario.name,
                "status": "FAIL",
                "details": f"{e.error_code}: {e.message}{retry_hint}",
            }
        if self.config.verbose:
            self.console.print_json(data=response)
        return evaluate(scenario, response)

    def _write_report(self, started_at: str, elapsed: float) -> None:
        report = {
            "description": self.config.description,
            "function_name": self.config.function_name,
            "started_at": started_at,
            "elapsed_seconds": round(elapsed, 3),
            "config": self.config.raw_config,
            "results": self.results,
        }
        with open(self.config.report_file, "w") as f:
            json.dump(report, f, indent=2)
        self.console.log(f"Report written to '{self.config.report_file}'")

    def _render(self) -> None:
        table = Table(title=f"Smoke Test Results: {self.config.function_name}")
        table.add_column("Scenario", style="cyan")
        table.add_column("Status")
        table.add_column("Details", overflow="fold")
        for result in self.results:
            style = "green" if result["status"] == "PASS" else "red"
            table.add_row(
                result["name"], f"[{style}]{result['status']}[/{style}]", result["details"]
            )
        self.console.print(table)

    def run(self) -> int:
        """Runs every scenario; returns 0 when all pass, 1 otherwise."""
        self.console.print(
            Panel(self.config.description, title="E2E Smoke Run", border_style="blue")
        )
        started_at = datetime.now(timezone.utc).isoformat()
        start = time.monotonic()

        self.results = []
        for scenario in self.scenarios:
            self.console.log(f"Running scenario '{scenario.name}'...")
            self.results.append(self._run_scenario(scenario))

        elapsed = time.monotonic() - start
        self._render()
        if self.config.report_file:
            self._write_report(started_at, elapsed)

        failures = [r for r in self.results if r["status"] != "PASS"]
        if failures:
            self.console.print(
                f"[bold red]❌ {len(failures)} of {len(self.results)} scenarios failed.[/bold red]"
            )
            return 1
        self.console.print(
            f"[bold green]✅ All {len(self.results)} scenarios passed in {elapsed:.2f}s.[/bold green]"
        )
        return 0
