# traceflow_plugin/cli.py
"""
Command-Line Interface (CLI)

`traceflow-plugin serve` is what the dashboard host launches. The other
commands run the same trace request operations straight from a terminal,
which is handy when checking a cluster before wiring up the dashboard.
"""

import json
from typing import Optional

import typer

from .errors import ConfigurationError, TraceflowError
from .k8s_tools.k8s_config import load_kubeconfig
from .logging_config import setup_logging
from .manager import TraceRequestManager

app = typer.Typer(
    name="traceflow-plugin",
    help="Antrea Traceflow plugin for the Kubernetes dashboard.",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich"
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="DEBUG, INFO, WARNING or ERROR (default: TRACEFLOW_LOG_LEVEL or INFO)"
    )
):
    setup_logging(log_level)


def _connect(kubeconfig: Optional[str]) -> TraceRequestManager:
    """Build the cluster connection or exit; nothing works without it."""
    try:
        config = load_kubeconfig(kubeconfig)
    except ConfigurationError as e:
        typer.echo(f"❌ Failed to build kubeconfig: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"🔌 Kubernetes API: {config.get_api_url()}", err=True)
    return TraceRequestManager()


def _fail(e: TraceflowError):
    typer.echo(f"❌ {e}", err=True)
    raise typer.Exit(code=1)


KubeconfigOption = typer.Option(
    None,
    "--kubeconfig",
    help="kubeconfig file (default: $KUBECONFIG, then ~/.kube/config)"
)


@app.command(name="serve", help="Register with the dashboard host and serve plugin requests.")
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default: TRACEFLOW_SERVER_HOST)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default: TRACEFLOW_SERVER_PORT)"),
    kubeconfig: Optional[str] = KubeconfigOption
):
    from .plugin import TraceflowPlugin
    from .rpc.server import start_plugin_server

    manager = _connect(kubeconfig)
    typer.echo("🚀 octant-traceflow-plugin is starting")
    typer.echo("   Press Ctrl+C to stop the server")
    try:
        start_plugin_server(TraceflowPlugin(manager), host=host, port=port)
    except KeyboardInterrupt:
        typer.echo("\n🛑 Plugin server stopped")


@app.command(name="submit", help="Start a new trace from one pod to another.")
def submit(
    name: str = typer.Argument(..., help="Name of the trace"),
    source_namespace: str = typer.Argument(..., help="Namespace of the source pod"),
    source_pod: str = typer.Argument(..., help="Source pod"),
    destination_namespace: str = typer.Argument(..., help="Namespace of the destination pod"),
    destination_pod: str = typer.Argument(..., help="Destination pod"),
    kubeconfig: Optional[str] = KubeconfigOption
):
    manager = _connect(kubeconfig)
    try:
        request = manager.submit(name, source_namespace, source_pod, destination_namespace, destination_pod)
    except TraceflowError as e:
        _fail(e)
    typer.echo(f"✅ Trace {request.name} started: {request.source} -> {request.destination}")


@app.command(name="get", help="Show one trace as JSON.")
def get(
    name: str = typer.Argument(..., help="Name of the trace"),
    kubeconfig: Optional[str] = KubeconfigOption
):
    manager = _connect(kubeconfig)
    try:
        request = manager.get_by_name(name)
    except TraceflowError as e:
        _fail(e)
    typer.echo(json.dumps(request.model_dump(), indent=2))


@app.command(name="list", help="List all traces.")
def list_traces(kubeconfig: Optional[str] = KubeconfigOption):
    manager = _connect(kubeconfig)
    try:
        rows = manager.rows()
    except TraceflowError as e:
        _fail(e)

    if not rows:
        typer.echo("📜 No traces found.")
        return

    typer.echo(f"📜 Found {len(rows)} traces:")
    for row in rows:
        typer.echo(f"   • {row.name}: {row.source_namespace}/{row.source_pod} -> "
                   f"{row.destination_namespace}/{row.destination_pod}")
        typer.echo(f"     {row.detail.ref}")


@app.command(name="graph", help="Print the path graph of a trace as Graphviz DOT.")
def graph(
    name: str = typer.Argument(..., help="Name of the trace"),
    kubeconfig: Optional[str] = KubeconfigOption
):
    from .graph import render_dot

    manager = _connect(kubeconfig)
    try:
        request = manager.get_by_name(name)
    except TraceflowError as e:
        _fail(e)
    typer.echo(render_dot(request))


@app.command(name="ping", help="Check that a running plugin server answers.")
def ping(url: Optional[str] = typer.Option(None, "--url", help="Plugin server URL")):
    from .rpc.client import call_plugin

    result = call_plugin("plugin.register", url=url)
    if not result.get("success"):
        typer.echo(f"❌ {result.get('error')}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"✅ {result['name']} is up. Actions: {', '.join(result['action_names'])}")


if __name__ == "__main__":
    app()
