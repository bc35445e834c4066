"""CLI entrypoint: Typer app definition and command registration"""

import typer

from sitesearch.cli.commands import browse_cmd, build_cmd, serve_cmd, status_cmd


app = typer.Typer(name="sitesearch", no_args_is_help=True, help="Search index builder for static content sites")

app.command(name="build")(build_cmd)
app.command(name="browse")(browse_cmd)
app.command(name="status")(status_cmd)
app.command(name="serve")(serve_cmd)
