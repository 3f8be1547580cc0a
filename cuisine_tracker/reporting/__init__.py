"""
Reporting: terminal formatters and file export for CLI commands.

Modules
-------
formatters : plain-text renderers returning strings for ``typer.echo()``.
export     : JSON / CSV writers plus flatteners for recommendation rows.
"""
